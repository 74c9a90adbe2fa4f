from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any

import pytest

from novabites_client_sdk import Product, RequestType, Store, StoreProduct, StoreRequest

from novabites_pos.services.inventory_service import CENTRAL_STORE_MISSING, InventoryServiceError
from novabites_pos.ui.inventory.inventory_view import InventoryView, inventory_row, stock_status
from novabites_pos.ui.inventory.modal_table import ModalTable, parse_quantity
from novabites_pos.ui.inventory.request_modal import RequestModal
from novabites_pos.ui.shared.notification_center import NotificationCenter

PAN = Product(id="p1", name="Pan de bono", base_price=Decimal("2500"), min_stock=5)
TORTA = Product(id="p2", name="Torta negra", base_price=Decimal("40000"))
STORES = [
    Store(id="central", name="Central", type="PRINCIPAL"),
    Store(id="s1", name="Norte", type="NORMAL"),
    Store(id="s2", name="Sur", type="NORMAL"),
]


@dataclass
class FakeSession:
    store_id: str = "s1"


@dataclass
class FakeInventoryService:
    store_items: list[StoreProduct] = field(default_factory=list)
    error: InventoryServiceError | None = None
    submit_error: InventoryServiceError | None = None
    session: FakeSession = field(default_factory=FakeSession)
    submitted: list[dict[str, Any]] = field(default_factory=list)

    def store_products(self) -> list[StoreProduct]:
        if self.error:
            raise self.error
        return self.store_items

    def products(self) -> list[Product]:
        if self.error:
            raise self.error
        return [PAN, TORTA]

    def stores(self) -> list[Store]:
        return STORES

    def submit(self, request_type: RequestType, rows: list[Any], **kwargs: Any) -> StoreRequest:
        if self.submit_error:
            raise self.submit_error
        self.submitted.append({"type": request_type, "rows": list(rows), **kwargs})
        return StoreRequest(id="r-new", type=request_type, status="PENDING")


def _store_product(product: Product, stock: int, **extra: Any) -> StoreProduct:
    return StoreProduct(id=f"sp-{product.id}", store_id="s1", product_id=product.id, current_stock=stock, product=product, **extra)


def test_stock_status_derivation() -> None:
    assert stock_status(_store_product(PAN, 0)) == "out of stock"
    assert stock_status(_store_product(PAN, 5)) == "low stock"
    assert stock_status(_store_product(PAN, 6)) == "in stock"
    assert stock_status(_store_product(PAN, 6, status="suspended")) == "suspended"


def test_inventory_row_shape() -> None:
    moment = datetime(2024, 3, 5, 15, 0, tzinfo=timezone.utc)
    row = inventory_row(_store_product(TORTA, 3, last_allocation=moment))
    assert row["product"] == {"name": "Torta negra", "category": {"name": ""}}
    assert row["price"] == Decimal("40000")
    assert row["lastAllocation"] == moment.isoformat()


def test_inventory_view_filters_rows() -> None:
    service = FakeInventoryService(store_items=[_store_product(PAN, 10), _store_product(TORTA, 0)])
    view = InventoryView(service=service)
    assert view.load()

    view.set_filter("status", "OUT")
    rows = view.render()["table"]["rows"]
    assert [row["product.name"] for row in rows] == ["Torta negra"]
    assert rows[0]["status"] == {"label": "Out of stock", "class": "rejected"}

    view.reset_filters()
    assert len(view.render()["table"]["rows"]) == 2
    with pytest.raises(KeyError):
        view.set_filter("price", "1")


def test_inventory_view_load_error() -> None:
    view = InventoryView(service=FakeInventoryService(error=InventoryServiceError(message="Sin conexión")))
    assert not view.load()
    assert view.render()["table"]["state"]["status"] == "fatal_error"


@pytest.mark.parametrize(("raw", "expected"), [("3", 3), ("", 1), ("abc", 1), ("0", 1), (" 7 ", 7), ("2.5", 2), ("4 panes", 4)])
def test_parse_quantity(raw: str, expected: int) -> None:
    assert parse_quantity(raw) == expected


def test_modal_table_rows() -> None:
    table = ModalTable(products=[PAN, TORTA], with_reason=True)
    table.add_row()
    assert not table.set_product(0, "missing")
    assert table.set_product(0, "p2")
    table.set_quantity(0, "4")
    assert not table.is_complete()
    table.set_reason(0, "EXPIRED")
    assert table.is_complete()

    rendered = table.render()
    assert rendered["rows"][0] == {
        "product_id": "p2",
        "product_name": "Torta negra",
        "quantity": 4,
        "unit_price": "$ 40.000",
        "return_reason": "EXPIRED",
    }
    assert "OTHER" in rendered["reason_options"]
    table.remove_row(0)
    assert not table.is_complete()


def _loaded_modal(**service_kwargs: Any) -> RequestModal:
    modal = RequestModal(service=FakeInventoryService(**service_kwargs), notifications=NotificationCenter())
    assert modal.load()
    return modal


def test_request_tab_submits_supply_request() -> None:
    modal = _loaded_modal()
    modal.table.add_row()
    modal.table.set_product(0, "p1")

    result = modal.submit()

    assert result == {"ok": True, "request_id": "r-new"}
    submitted = modal.service.submitted[0]
    assert submitted["type"] is RequestType.SUPPLY_REQUEST
    assert submitted["target_store_id"] is None
    assert modal.is_open is False
    assert modal.notifications.last()["title"] == "Pedido a tienda creado correctamente"


def test_incomplete_return_is_rejected() -> None:
    modal = _loaded_modal()
    modal.select_tab("return")
    modal.table.add_row()
    modal.table.set_product(0, "p1")

    result = modal.submit()

    assert result["error"] == "Debes rellenar todos los campos de la devolución"
    assert modal.service.submitted == []


def test_relocation_needs_target_store() -> None:
    modal = _loaded_modal()
    modal.select_tab("relocation")
    modal.table.add_row()
    modal.table.set_product(0, "p1")

    assert modal.submit()["error"] == "Debes seleccionar una tienda destino"
    assert [store["id"] for store in modal.render()["targets"]] == ["s2"]

    modal.select_target("s2")
    assert modal.submit()["ok"]
    assert modal.service.submitted[0]["target_store_id"] == "s2"


def test_submit_failure_prefixes_message() -> None:
    modal = _loaded_modal(submit_error=InventoryServiceError(message=CENTRAL_STORE_MISSING))
    modal.table.add_row()
    modal.table.set_product(0, "p1")

    assert not modal.submit()["ok"]
    assert modal.notifications.last()["title"] == f"Error al crear el pedido: {CENTRAL_STORE_MISSING}"
    assert modal.is_open is True


def test_unknown_tab() -> None:
    modal = RequestModal(service=FakeInventoryService(), notifications=NotificationCenter())
    with pytest.raises(ValueError):
        modal.select_tab("transfer")


def test_load_failure_toasts() -> None:
    modal = RequestModal(
        service=FakeInventoryService(error=InventoryServiceError(message="Sin conexión", status_code=0)),
        notifications=NotificationCenter(),
    )
    assert not modal.load()
    assert modal.notifications.last()["details"]["category"] == "transport"



def test_generate_request_opens_loaded_modal() -> None:
    notifications = NotificationCenter()
    view = InventoryView(service=FakeInventoryService(), notifications=notifications)

    modal = view.open_request()

    assert view.request_modal is modal
    assert modal.notifications is notifications
    assert [product.id for product in modal.table.products] == ["p1", "p2"]
    assert view.render()["request_modal"]["title"] == "Pedido a Central de Distribución"

    modal.table.add_row()
    modal.table.set_product(0, "p1")
    assert modal.submit()["ok"]
    assert view.render()["request_modal"] is None

    view.close_request()
    assert view.request_modal is None
