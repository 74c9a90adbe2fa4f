from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

from novabites_client_sdk import Product, StatusOrder
from novabites_client_sdk.models_sales import CakeInput, ClientInput, CustomOrderCreateRequest, CustomOrderProductInput

from novabites_pos.shared.currency import format_cop, plain_amount, to_decimal
from novabites_pos.ui.shared.notification_center import NotificationCenter


@dataclass
class CakeDraft:
    image_url: str = ""
    pounds: int = 0
    tiers: int = 0
    price: str = ""

    @property
    def has_pounds(self) -> bool:
        return self.pounds > 0

    @property
    def has_tiers(self) -> bool:
        return self.tiers > 0

    @property
    def has_price(self) -> bool:
        return to_decimal(self.price) > 0

    def is_touched(self) -> bool:
        return self.has_pounds or self.has_tiers or self.has_price

    def is_complete(self) -> bool:
        return self.has_pounds and self.has_tiers and self.has_price


@dataclass(frozen=True)
class ProductLine:
    product: Product
    quantity: int
    unit_price: Decimal

    @property
    def line_total(self) -> Decimal:
        return self.unit_price * self.quantity


@dataclass
class AddOrderForm:
    """New custom order: client, cakes and catalog products."""

    notifications: NotificationCenter
    client_name: str = ""
    client_phone: str = ""
    client_email: str = ""
    cakes: list[CakeDraft] = field(default_factory=lambda: [CakeDraft()])
    products: list[ProductLine] = field(default_factory=list)
    deposit_amount: str = ""

    def add_cake(self) -> None:
        self.cakes.append(CakeDraft())

    def remove_cake(self, index: int) -> bool:
        if len(self.cakes) <= 1 or not 0 <= index < len(self.cakes):
            return False
        self.cakes.pop(index)
        return True

    def add_product(self, product: Product | None, unit_price: str, quantity: str | int) -> bool:
        if product is None or not str(unit_price).strip():
            return False
        try:
            amount = int(quantity)
        except (TypeError, ValueError):
            return False
        if amount <= 0:
            return False
        self.products.append(ProductLine(product=product, quantity=amount, unit_price=to_decimal(unit_price)))
        return True

    def remove_product(self, index: int) -> None:
        if 0 <= index < len(self.products):
            self.products.pop(index)

    @property
    def total(self) -> Decimal:
        cakes = sum((to_decimal(cake.price) for cake in self.cakes), Decimal("0"))
        return cakes + sum((line.line_total for line in self.products), Decimal("0"))

    def _reject(self, title: str, message: str) -> bool:
        self.notifications.error(title, message)
        return False

    def validate(self) -> bool:
        if not self.client_name.strip():
            return self._reject("Nombre del cliente requerido", "El nombre del cliente es obligatorio.")
        if not self.client_phone.strip():
            return self._reject("Teléfono del cliente requerido", "El teléfono del cliente es obligatorio.")
        if not self.products and not any(cake.is_complete() for cake in self.cakes):
            return self._reject(
                "Pedido vacío",
                "Debe agregar al menos un producto o una torta personalizada al pedido.",
            )
        for number, cake in enumerate(self.cakes, start=1):
            if not cake.is_touched():
                continue
            if not cake.has_pounds:
                return self._reject("Torta incompleta", f"La torta {number} debe tener libras especificadas.")
            if not cake.has_tiers:
                return self._reject("Torta incompleta", f"La torta {number} debe tener niveles especificados.")
            if not cake.has_price:
                return self._reject("Torta incompleta", f"La torta {number} debe tener precio especificado.")
        return True

    def build_request(self, *, store_id: str | None, user_id: str | None) -> CustomOrderCreateRequest | None:
        if not self.validate():
            return None
        total = self.total
        deposit = to_decimal(self.deposit_amount)
        client = None
        if self.client_name.strip() or self.client_phone.strip() or self.client_email.strip():
            client = ClientInput(name=self.client_name, phone=self.client_phone, email=self.client_email)
        return CustomOrderCreateRequest(
            deposit_amount=plain_amount(deposit),
            remaining_amount=plain_amount(total - deposit),
            total_price=plain_amount(total),
            status=StatusOrder.PENDING,
            available=True,
            store_id=store_id,
            user_id=user_id,
            client=client,
            products=[
                CustomOrderProductInput(
                    product_id=line.product.id,
                    quantity=line.quantity,
                    unit_price=plain_amount(line.unit_price),
                )
                for line in self.products
            ]
            or None,
            details=[
                CakeInput(image_url=cake.image_url, pounds=cake.pounds, tiers=cake.tiers, price=cake.price or None)
                for cake in self.cakes
                if cake.is_touched()
            ]
            or None,
        )

    def render(self) -> dict[str, Any]:
        return {
            "title": "Agregar Nuevo Pedido",
            "client": {"name": self.client_name, "phone": self.client_phone, "email": self.client_email},
            "cakes": [
                {"image_url": cake.image_url, "pounds": cake.pounds, "tiers": cake.tiers, "price": cake.price}
                for cake in self.cakes
            ],
            "can_remove_cake": len(self.cakes) > 1,
            "products": [
                {
                    "name": line.product.name,
                    "quantity": line.quantity,
                    "unit_price": format_cop(line.unit_price),
                    "line_total": format_cop(line.line_total),
                }
                for line in self.products
            ],
            "deposit_amount": self.deposit_amount,
            "total": format_cop(self.total),
        }
