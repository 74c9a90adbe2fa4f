from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from enum import Enum

from .models import ApiModel, BaseEntity, BaseEntityWithNumId, Store, TypeIdBusiness, UnitType


class StockMovementType(str, Enum):
    ALLOCATION = "ALLOCATION"
    RETURN = "RETURN"
    ADJUSTMENT = "ADJUSTMENT"
    SALE = "SALE"
    LOSS = "LOSS"


class SubcategoryProduct(ApiModel):
    id: str
    name: str
    category_id: str | None = None


class CategoryProduct(BaseEntity):
    name: str
    subcategories: list[SubcategoryProduct] = []


class Supplier(BaseEntityWithNumId):
    type_id: TypeIdBusiness | str | None = None
    doc_id: str | None = None
    name: str
    contact_name: str | None = None
    phone: str | None = None
    email: str | None = None
    address: str | None = None
    available: bool = True


class Supply(BaseEntityWithNumId):
    name: str
    price: Decimal | None = None
    unit: UnitType | str | None = None
    quantity: Decimal | None = None
    min_stock: Decimal | None = None
    supplier_id: str | None = None
    available: bool = True


class Product(BaseEntityWithNumId):
    name: str
    central_stock: int | None = None
    base_price: Decimal = Decimal("0")
    supplier_id: str | None = None
    category_id: str | None = None
    subcategory_id: str | None = None
    expiry_date: datetime | None = None
    image_url: str | None = None
    unit: UnitType | str | None = None
    min_stock: int | None = None
    available: bool = True
    category: CategoryProduct | None = None


class StoreProduct(BaseEntityWithNumId):
    store_id: str
    product_id: str
    allocated_stock: int = 0
    current_stock: int = 0
    price: Decimal | None = None
    min_stock: int | None = None
    available: bool = True
    status: str | None = None
    last_allocation: datetime | None = None
    store: Store | None = None
    product: Product | None = None


class StockMovement(BaseEntity):
    product_id: str
    store_id: str
    type: StockMovementType | str
    quantity: int
    previous_stock: int | None = None
    new_stock: int | None = None
    store_request_id: str | None = None
    order_id: str | None = None
    bill_id: str | None = None
    user_id: str | None = None
