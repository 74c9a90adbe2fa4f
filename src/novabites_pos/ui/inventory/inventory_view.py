from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from novabites_client_sdk import StoreProduct

from novabites_pos.services.inventory_service import InventoryService, InventoryServiceError
from novabites_pos.ui.inventory.request_modal import RequestModal
from novabites_pos.ui.shared.data_table import Column, DataTable
from novabites_pos.ui.shared.generic_filter import FilterField, GenericFilter
from novabites_pos.ui.shared.notification_center import NotificationCenter

FILTER_FIELDS = [
    FilterField(field="product.name", label="nombre", placeholder="Nombre"),
    FilterField(field="product.category.name", label="categoria", placeholder="Categoria"),
    FilterField(field="status", label="estado", placeholder="Estado"),
]

COLUMNS = [
    Column(key="product.name", label="Producto"),
    Column(key="product.category.name", label="Categoría"),
    Column(key="currentStock", label="Stock actual", kind="decimal"),
    Column(key="minStock", label="Stock mínimo", kind="decimal"),
    Column(key="price", label="Precio", kind="money"),
    Column(key="lastAllocation", label="Última asignación", kind="date"),
    Column(key="status", label="Estado", kind="status"),
]


def stock_status(item: StoreProduct) -> str:
    if item.status:
        return item.status
    if item.current_stock <= 0:
        return "out of stock"
    minimum = item.min_stock if item.min_stock is not None else (item.product.min_stock if item.product else None)
    if minimum is not None and item.current_stock <= minimum:
        return "low stock"
    return "in stock"


def inventory_row(item: StoreProduct) -> dict[str, Any]:
    product = item.product
    category = product.category if product else None
    return {
        "id": item.id,
        "productId": item.product_id,
        "product": {
            "name": product.name if product else "",
            "category": {"name": category.name if category else ""},
        },
        "currentStock": item.current_stock,
        "minStock": item.min_stock,
        "price": item.price if item.price is not None else (product.base_price if product else None),
        "lastAllocation": item.last_allocation.isoformat() if item.last_allocation else None,
        "status": stock_status(item),
    }


@dataclass
class InventoryView:
    service: InventoryService
    notifications: NotificationCenter = field(default_factory=NotificationCenter)
    table: DataTable = field(default_factory=lambda: DataTable(columns=list(COLUMNS)))
    filter: GenericFilter = field(default_factory=lambda: GenericFilter(fields=list(FILTER_FIELDS)))
    rows: list[dict[str, Any]] = field(default_factory=list)
    request_modal: RequestModal | None = None

    def load(self) -> bool:
        self.table.is_loading = True
        try:
            self.rows = [inventory_row(item) for item in self.service.store_products()]
            self.table.error = None
        except InventoryServiceError as exc:
            self.table.error = exc.message
            return False
        finally:
            self.table.is_loading = False
        self._refresh()
        return True

    def _refresh(self) -> None:
        self.table.set_rows(self.filter.apply(self.rows))

    def set_filter(self, field_name: str, value: str) -> None:
        self.filter.set(field_name, value)
        self._refresh()

    def reset_filters(self) -> None:
        self.filter.reset()
        self._refresh()

    def open_request(self) -> RequestModal:
        self.request_modal = RequestModal(service=self.service, notifications=self.notifications)
        self.request_modal.load()
        return self.request_modal

    def close_request(self) -> None:
        self.request_modal = None

    def render(self) -> dict[str, Any]:
        return {
            "title": "Gestiona tu Inventario!",
            "filter": self.filter.render(),
            "table": self.table.render(),
            "action": "Generar Solicitud",
            "request_modal": self.request_modal.render() if self.request_modal and self.request_modal.is_open else None,
        }
