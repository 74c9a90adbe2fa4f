from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from enum import Enum

from pydantic import field_serializer

from .models import ApiModel, BaseEntity, BaseEntityWithNumId, Store, TypeId, User
from .models_catalog import Product


class StatusOrder(str, Enum):
    PENDING = "PENDING"
    COMPLETED = "COMPLETED"
    CANCELED = "CANCELED"


class Client(BaseEntityWithNumId):
    type_id: TypeId | str | None = None
    doc_id: str | None = None
    name: str | None = None
    phone: str | None = None
    email: str | None = None


class DetailOrder(BaseEntity):
    order_id: str | None = None
    product_id: str | None = None
    quantity: int = 0
    price: Decimal = Decimal("0")
    product: Product | None = None


class Order(BaseEntityWithNumId):
    status: StatusOrder | str | None = None
    total_price: Decimal = Decimal("0")
    payment_method: str | None = None
    amount_received: str | None = None
    change: str | None = None
    client_id: str | None = None
    store_id: str | None = None
    user_id: str | None = None
    client: Client | None = None
    store: Store | None = None
    user: User | None = None
    details: list[DetailOrder] = []


class DetailCustomOrder(BaseEntity):
    custom_order_id: str | None = None
    image_url: str | None = None
    pounds: int = 0
    tiers: int = 0
    price: Decimal = Decimal("0")


class CustomOrderProduct(ApiModel):
    custom_order_id: str | None = None
    product_id: str
    quantity: int
    unit_price: Decimal = Decimal("0")
    total_price: Decimal | None = None
    product: Product | None = None


class CustomOrder(BaseEntityWithNumId):
    client_id: str | None = None
    store_id: str | None = None
    user_id: str | None = None
    deposit_amount: Decimal = Decimal("0")
    remaining_amount: Decimal = Decimal("0")
    total_price: Decimal = Decimal("0")
    status: StatusOrder | str | None = None
    available: bool = True
    deleted_at: datetime | None = None
    client: Client | None = None
    store: Store | None = None
    details: list[DetailCustomOrder] = []
    products: list[CustomOrderProduct] = []


class DetailBill(BaseEntity):
    bill_id: str | None = None
    product_id: str | None = None
    product_name: str | None = None
    quantity: int = 0
    price: Decimal = Decimal("0")
    unit_price: Decimal | None = None
    subtotal: Decimal | None = None
    product: Product | None = None

    @property
    def display_name(self) -> str:
        if self.product is not None and self.product.name:
            return self.product.name
        if self.product_name:
            return self.product_name
        return "Producto"

    @property
    def line_total(self) -> Decimal:
        if self.subtotal:
            return self.subtotal
        return self.quantity * (self.unit_price or Decimal("0"))


class Bill(BaseEntityWithNumId):
    bill_number: str | None = None
    due_date: datetime | None = None
    total_price: Decimal = Decimal("0")
    user_id: str | None = None
    store_id: str | None = None
    order_id: str | None = None
    custom_order_id: str | None = None
    client_name: str | None = None
    client_doc_type: str | None = None
    client_doc_id: str | None = None
    client_phone: str | None = None
    client_email: str | None = None
    client_address: str | None = None
    user: User | None = None
    store: Store | None = None
    order: Order | None = None
    custom_order: CustomOrder | None = None
    details: list[DetailBill] = []


class Delivery(BaseEntityWithNumId):
    date: datetime | None = None
    status: str | None = None
    address: str | None = None
    client_id: str | None = None
    order_id: str | None = None


class OrderDetailInput(ApiModel):
    product_id: str
    quantity: int
    price: Decimal

    @field_serializer("price")
    def _price_as_number(self, value: Decimal) -> float:
        return float(value)


class OrderCreateRequest(ApiModel):
    details: list[OrderDetailInput]
    total_price: str
    status: StatusOrder = StatusOrder.COMPLETED
    client_id: str | None = None
    store_id: str | None = None
    user_id: str | None = None
    payment_method: str
    amount_received: str | None = None
    change: str | None = None


class ClientInput(ApiModel):
    name: str | None = None
    phone: str | None = None
    email: str | None = None


class CustomOrderProductInput(ApiModel):
    product_id: str
    quantity: int
    unit_price: str


class CakeInput(ApiModel):
    image_url: str = ""
    pounds: int = 0
    tiers: int = 0
    price: str | None = None


class CustomOrderCreateRequest(ApiModel):
    deposit_amount: str
    remaining_amount: str
    total_price: str
    status: StatusOrder = StatusOrder.PENDING
    available: bool = True
    store_id: str | None = None
    user_id: str | None = None
    client: ClientInput | None = None
    products: list[CustomOrderProductInput] | None = None
    details: list[CakeInput] | None = None


class CustomOrderStatusUpdate(ApiModel):
    status: StatusOrder
