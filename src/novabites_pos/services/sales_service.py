from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Sequence

from novabites_client_sdk import ApiSession, CategoryProduct, Order, Product, StoreProduct, SubcategoryProduct
from novabites_client_sdk.models_sales import OrderCreateRequest, OrderDetailInput, StatusOrder

from novabites_pos.services.errors import ServiceError, normalize_error
from novabites_pos.shared.currency import plain_amount

logger = logging.getLogger(__name__)

OTHERS_SUBCATEGORY = SubcategoryProduct(id="others", name="Otros")


@dataclass(frozen=True)
class SalesServiceError(ServiceError):
    pass


@dataclass(frozen=True)
class StockInfo:
    current_stock: int
    price: Decimal


@dataclass(frozen=True)
class CategoryInfo:
    subcategories: list[SubcategoryProduct]
    products_with_subcategory: list[Product]
    products_without_subcategory: list[Product]
    all_products: list[Product]

    @property
    def has_subcategories(self) -> bool:
        return bool(self.subcategories)


@dataclass
class SalesCatalog:
    products: list[Product] = field(default_factory=list)
    categories: list[CategoryProduct] = field(default_factory=list)
    store_products: list[StoreProduct] = field(default_factory=list)

    def stock_for(self, product_id: str) -> StockInfo:
        match = next((item for item in self.store_products if item.product_id == product_id), None)
        if match is None:
            return StockInfo(current_stock=0, price=Decimal("0"))
        return StockInfo(current_stock=match.current_stock or 0, price=match.price or Decimal("0"))

    def available_products(self) -> list[Product]:
        in_stock = {item.product_id for item in self.store_products if item.available and item.current_stock > 0}
        return [product for product in self.products if product.id in in_stock]

    def available_categories(self) -> list[CategoryProduct]:
        products = self.available_products()
        if not products:
            return []
        category_ids = {product.category_id for product in products}
        return [category for category in self.categories if category.id in category_ids]

    def category_info(self, category_id: str | None) -> CategoryInfo:
        products = self.available_products()
        if not category_id or not products:
            return CategoryInfo([], [], [], [])
        in_category = [product for product in products if product.category_id == category_id]
        category = next((item for item in self.available_categories() if item.id == category_id), None)
        subcategories = category.subcategories if category else []
        used = [sub for sub in subcategories if any(p.subcategory_id == sub.id for p in in_category)]
        return CategoryInfo(
            subcategories=used,
            products_with_subcategory=[p for p in in_category if p.subcategory_id],
            products_without_subcategory=[p for p in in_category if not p.subcategory_id],
            all_products=in_category,
        )

    def products_for(self, category_id: str | None, subcategory_id: str | None) -> list[Product]:
        if not category_id:
            return []
        info = self.category_info(category_id)
        if not info.has_subcategories or not subcategory_id:
            return info.all_products
        if subcategory_id == OTHERS_SUBCATEGORY.id:
            return info.products_without_subcategory
        return [product for product in info.all_products if product.subcategory_id == subcategory_id]


@dataclass(frozen=True)
class CartLine:
    product: Product
    quantity: int

    @property
    def line_total(self) -> Decimal:
        return self.product.base_price * self.quantity


class SalesService:
    def __init__(self, session: ApiSession) -> None:
        self.session = session

    def load_catalog(self) -> SalesCatalog:
        store_id = self.session.store_id
        try:
            catalog = self.session.catalog_client()
            products = catalog.list_products()
            categories = catalog.list_categories()
            store_products = catalog.list_store_products(store_id) if store_id else []
        except Exception as exc:
            raise normalize_error(exc, SalesServiceError) from exc
        return SalesCatalog(products=products, categories=categories, store_products=store_products)

    def create_order(
        self,
        lines: Sequence[CartLine],
        *,
        total: Decimal,
        payment_method: str,
        amount_received: str | None = None,
        change: str | None = None,
        client_id: str | None = None,
    ) -> Order:
        request = OrderCreateRequest(
            details=[
                OrderDetailInput(product_id=line.product.id, quantity=line.quantity, price=line.line_total)
                for line in lines
            ],
            total_price=plain_amount(total),
            status=StatusOrder.COMPLETED,
            client_id=client_id or None,
            store_id=self.session.store_id,
            user_id=self.session.user_id,
            payment_method=payment_method,
            amount_received=amount_received,
            change=change,
        )
        try:
            order = self.session.orders_client().create_order(request)
        except Exception as exc:
            logger.exception("order_create_failure", extra={"store_id": self.session.store_id})
            raise normalize_error(exc, SalesServiceError) from exc
        logger.info("order_created", extra={"order_id": order.id, "store_id": self.session.store_id})
        return order
