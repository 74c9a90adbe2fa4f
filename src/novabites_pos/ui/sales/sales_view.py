from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

from novabites_client_sdk import Order, Product

from novabites_pos.services.sales_service import OTHERS_SUBCATEGORY, CartLine, SalesCatalog, SalesService, SalesServiceError
from novabites_pos.shared.currency import format_cop
from novabites_pos.ui.sales.payment_dialog import PaymentDialog
from novabites_pos.ui.shared.notification_center import NotificationCenter
from novabites_pos.ui.shared.view_state import resolve_state


@dataclass
class SalesView:
    service: SalesService
    notifications: NotificationCenter
    catalog: SalesCatalog = field(default_factory=SalesCatalog)
    selected_category_id: str | None = None
    selected_subcategory_id: str | None = None
    cart: dict[str, CartLine] = field(default_factory=dict)
    payment: PaymentDialog | None = None
    last_order: Order | None = None
    is_loading: bool = False
    is_submitting: bool = False
    error_message: str | None = None

    def load(self) -> bool:
        self.is_loading = True
        try:
            self.catalog = self.service.load_catalog()
            self.error_message = None
        except SalesServiceError as exc:
            self.error_message = exc.message
            return False
        finally:
            self.is_loading = False
        categories = self.catalog.available_categories()
        self.select_category(categories[0].id if categories else None)
        return True

    def select_category(self, category_id: str | None) -> None:
        self.selected_category_id = category_id
        info = self.catalog.category_info(category_id)
        self.selected_subcategory_id = info.subcategories[0].id if info.has_subcategories else None

    def select_subcategory(self, subcategory_id: str | None) -> None:
        self.selected_subcategory_id = subcategory_id or None

    def visible_products(self) -> list[Product]:
        return self.catalog.products_for(self.selected_category_id, self.selected_subcategory_id)

    def _reject_stock(self, available: int) -> dict[str, Any]:
        self.notifications.error("Stock insuficiente", f"Solo hay {available} unidades disponibles.")
        return {"ok": False, "error": "Stock insuficiente"}

    def add(self, product: Product) -> dict[str, Any]:
        stock = self.catalog.stock_for(product.id).current_stock
        if stock <= 0:
            self.notifications.error("Producto sin stock", "Este producto no tiene stock disponible.")
            return {"ok": False, "error": "Producto sin stock"}
        line = self.cart.get(product.id)
        current = line.quantity if line else 0
        if current >= stock:
            return self._reject_stock(stock)
        self.cart[product.id] = CartLine(product=product, quantity=current + 1)
        return {"ok": True, "quantity": current + 1}

    def update_quantity(self, product_id: str, quantity: int) -> dict[str, Any]:
        if quantity <= 0:
            self.cart.pop(product_id, None)
            return {"ok": True, "quantity": 0}
        stock = self.catalog.stock_for(product_id).current_stock
        if quantity > stock:
            return self._reject_stock(stock)
        line = self.cart.get(product_id)
        if line is None:
            return {"ok": False, "error": "Producto no está en el carrito"}
        self.cart[product_id] = CartLine(product=line.product, quantity=quantity)
        return {"ok": True, "quantity": quantity}

    def clear_cart(self) -> None:
        self.cart.clear()

    @property
    def total(self) -> Decimal:
        return sum((line.line_total for line in self.cart.values()), Decimal("0"))

    def open_payment(self) -> PaymentDialog:
        self.payment = PaymentDialog(total=self.total, notifications=self.notifications)
        return self.payment

    def close_payment(self) -> None:
        self.payment = None
        self.clear_cart()

    def checkout(self, *, client_id: str | None = None) -> dict[str, Any]:
        if self.payment is None:
            return {"ok": False, "error": "No hay un pago en curso"}
        if self.is_submitting:
            return {"ok": False, "error": None}
        selection = self.payment.confirm()
        if selection is None:
            return {"ok": False, "error": "Pago inválido"}
        self.is_submitting = True
        try:
            order = self.service.create_order(
                list(self.cart.values()),
                total=self.total,
                payment_method=selection.payment_method,
                amount_received=selection.amount_received,
                change=selection.change,
                client_id=client_id,
            )
        except SalesServiceError as exc:
            self.notifications.failure("Error al crear la order", exc, action="sales.create_order")
            return {"ok": False, "error": exc.message}
        finally:
            self.is_submitting = False
        self.notifications.success("Order creada correctamente", "La order ha sido creada exitosamente.")
        self.last_order = order
        self.clear_cart()
        return {"ok": True, "order_id": order.id, "open_bill": {"order_id": order.id, "custom": False}}

    def render(self) -> dict[str, Any]:
        state = resolve_state(
            is_loading=self.is_loading,
            error=self.error_message,
            has_data=bool(self.catalog.available_products()),
            empty_message="No hay productos disponibles",
        )
        info = self.catalog.category_info(self.selected_category_id)
        subcategories = [{"id": sub.id, "name": sub.name} for sub in info.subcategories]
        if info.has_subcategories and info.products_without_subcategory:
            subcategories.append({"id": OTHERS_SUBCATEGORY.id, "name": OTHERS_SUBCATEGORY.name})
        return {
            "state": state.render(),
            "categories": [{"id": c.id, "name": c.name} for c in self.catalog.available_categories()],
            "selected_category_id": self.selected_category_id,
            "subcategories": subcategories,
            "selected_subcategory_id": self.selected_subcategory_id,
            "products": [
                {
                    "id": product.id,
                    "name": product.name,
                    "price": format_cop(product.base_price),
                    "stock": self.catalog.stock_for(product.id).current_stock,
                }
                for product in self.visible_products()
            ],
            "cart": [
                {
                    "product_id": line.product.id,
                    "name": line.product.name,
                    "quantity": line.quantity,
                    "line_total": format_cop(line.line_total),
                }
                for line in self.cart.values()
            ],
            "total": format_cop(self.total),
            "checkout_enabled": bool(self.cart) and not self.is_submitting,
        }
