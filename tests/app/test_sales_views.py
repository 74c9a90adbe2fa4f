from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

import pytest

from novabites_client_sdk import CategoryProduct, Order, PaymentMethod, Product, StoreProduct, SubcategoryProduct

from novabites_pos.services.sales_service import OTHERS_SUBCATEGORY, CartLine, SalesCatalog, SalesServiceError
from novabites_pos.ui.sales.cash_keypad import CashKeypad
from novabites_pos.ui.sales.payment_dialog import PaymentDialog
from novabites_pos.ui.sales.sales_view import SalesView
from novabites_pos.ui.shared.notification_center import NotificationCenter

PAN = Product(id="p1", name="Pan de bono", base_price=Decimal("2500"), category_id="c1")
AREPA = Product(id="p2", name="Arepa", base_price=Decimal("3000"), category_id="c1")


def _catalog() -> SalesCatalog:
    return SalesCatalog(
        products=[PAN, AREPA],
        categories=[CategoryProduct(id="c1", name="Panadería")],
        store_products=[
            StoreProduct(id="sp1", store_id="s1", product_id="p1", current_stock=2),
            StoreProduct(id="sp2", store_id="s1", product_id="p2", current_stock=0),
        ],
    )


@dataclass
class FakeSalesService:
    catalog: SalesCatalog = field(default_factory=_catalog)
    load_error: SalesServiceError | None = None
    create_error: SalesServiceError | None = None
    created: list[dict[str, Any]] = field(default_factory=list)

    def load_catalog(self) -> SalesCatalog:
        if self.load_error:
            raise self.load_error
        return self.catalog

    def create_order(self, lines: list[CartLine], **kwargs: Any) -> Order:
        if self.create_error:
            raise self.create_error
        self.created.append({"lines": lines, **kwargs})
        return Order(id="o-new")


def _view(**service_kwargs: Any) -> SalesView:
    view = SalesView(service=FakeSalesService(**service_kwargs), notifications=NotificationCenter())
    view.load()
    return view


def test_keypad_builds_amount_and_change() -> None:
    keypad = CashKeypad(total=Decimal("12500"))
    for key in "20000":
        keypad.press(key)
    assert keypad.amount_received == "20000"
    assert keypad.change == "7500"
    assert keypad.render()["change_display"] == "$ 7.500"

    keypad.press("backspace")
    assert keypad.amount_received == "2000"
    assert keypad.change == "0"

    keypad.press("clear")
    assert keypad.amount_received == ""


def test_keypad_decimal_rules() -> None:
    keypad = CashKeypad(total=Decimal("1"))
    for key in ["-", ".", ".", "5", "0", "9"]:
        keypad.press(key)
    assert keypad.amount_received == "0.50"


def test_payment_dialog_cash_requires_enough_money() -> None:
    notifications = NotificationCenter()
    dialog = PaymentDialog(total=Decimal("5000"), notifications=notifications)
    dialog.keypad.press("4")

    assert dialog.confirm() is None
    assert notifications.last()["title"] == "Monto insuficiente"


def test_payment_dialog_transfer_and_card() -> None:
    dialog = PaymentDialog(total=Decimal("5000"), notifications=NotificationCenter())

    dialog.select_method(PaymentMethod.TRANSFER)
    dialog.select_transfer_option("bancolombia")
    assert dialog.confirm().payment_method == "Transferencia/Bancolombia"
    assert dialog.render()["keypad"] is None

    dialog.select_method("Card")
    selection = dialog.confirm()
    assert selection.payment_method == "Debito/Crédito"
    assert selection.amount_received is None

    with pytest.raises(ValueError):
        dialog.select_transfer_option("paypal")


def test_load_selects_first_available_category() -> None:
    view = _view()
    assert view.selected_category_id == "c1"
    assert view.visible_products() == [PAN]


def test_load_failure_sets_error_state() -> None:
    view = _view(load_error=SalesServiceError(message="Sin conexión"))
    assert view.render()["state"]["status"] == "fatal_error"


def test_add_respects_stock() -> None:
    view = _view()

    assert view.add(PAN)["quantity"] == 1
    assert view.add(PAN)["quantity"] == 2
    assert view.add(PAN) == {"ok": False, "error": "Stock insuficiente"}
    assert view.notifications.last()["message"] == "Solo hay 2 unidades disponibles."
    assert view.add(AREPA)["error"] == "Producto sin stock"
    assert view.total == Decimal("5000")


def test_update_quantity_limits_and_removal() -> None:
    view = _view()
    view.add(PAN)

    assert not view.update_quantity("p1", 3)["ok"]
    assert view.update_quantity("p1", 2)["quantity"] == 2
    view.update_quantity("p1", 0)
    assert view.cart == {}


def test_checkout_creates_order_and_clears_cart() -> None:
    view = _view()
    view.add(PAN)
    dialog = view.open_payment()
    for key in "10000":
        dialog.keypad.press(key)

    result = view.checkout()

    assert result == {"ok": True, "order_id": "o-new", "open_bill": {"order_id": "o-new", "custom": False}}
    created = view.service.created[0]
    assert created["payment_method"] == "Efectivo"
    assert created["amount_received"] == "10000"
    assert created["change"] == "7500"
    assert view.cart == {}
    assert view.notifications.last()["title"] == "Order creada correctamente"


def test_checkout_failure_keeps_cart() -> None:
    view = _view(create_error=SalesServiceError(message="Stock agotado", status_code=409))
    view.add(PAN)
    view.open_payment().select_method(PaymentMethod.CARD)

    result = view.checkout()

    assert not result["ok"]
    assert "p1" in view.cart
    toast = view.notifications.last()
    assert toast["title"] == "Error al crear la order"
    assert toast["message"] == "Stock agotado"


def test_render_lists_cart_and_totals() -> None:
    view = _view()
    view.add(PAN)

    rendered = view.render()

    assert rendered["categories"] == [{"id": "c1", "name": "Panadería"}]
    assert rendered["cart"][0]["line_total"] == "$ 2.500"
    assert rendered["total"] == "$ 2.500"
    assert rendered["checkout_enabled"] is True


ROLLO = Product(id="p3", name="Rollo de canela", base_price=Decimal("4500"), category_id="c1", subcategory_id="s-dulce")
ALMOJABANA = Product(id="p4", name="Almojábana", base_price=Decimal("2800"), category_id="c1")


def _subcategory_catalog(*products: Product) -> SalesCatalog:
    return SalesCatalog(
        products=list(products),
        categories=[
            CategoryProduct(
                id="c1",
                name="Panadería",
                subcategories=[
                    SubcategoryProduct(id="s-dulce", name="Dulce"),
                    SubcategoryProduct(id="s-hojaldre", name="Hojaldre"),
                ],
            )
        ],
        store_products=[
            StoreProduct(id=f"sp-{product.id}", store_id="s1", product_id=product.id, current_stock=5)
            for product in products
        ],
    )


def test_others_subcategory_lists_products_without_subcategory() -> None:
    catalog = _subcategory_catalog(ROLLO, ALMOJABANA)

    assert catalog.products_for("c1", OTHERS_SUBCATEGORY.id) == [ALMOJABANA]
    assert catalog.products_for("c1", "s-dulce") == [ROLLO]
    assert catalog.products_for("c1", None) == [ROLLO, ALMOJABANA]
    assert catalog.products_for(None, "s-dulce") == []


def test_render_adds_others_only_when_needed() -> None:
    view = _view(catalog=_subcategory_catalog(ROLLO, ALMOJABANA))

    rendered = view.render()

    assert rendered["subcategories"] == [
        {"id": "s-dulce", "name": "Dulce"},
        {"id": OTHERS_SUBCATEGORY.id, "name": "Otros"},
    ]
    assert rendered["selected_subcategory_id"] == "s-dulce"
    assert [product["id"] for product in rendered["products"]] == ["p3"]

    view.select_subcategory(OTHERS_SUBCATEGORY.id)
    assert [product["id"] for product in view.render()["products"]] == ["p4"]

    view.select_subcategory(None)
    assert [product["id"] for product in view.render()["products"]] == ["p3", "p4"]

    only_subcategorized = _view(catalog=_subcategory_catalog(ROLLO))
    assert only_subcategorized.render()["subcategories"] == [{"id": "s-dulce", "name": "Dulce"}]
