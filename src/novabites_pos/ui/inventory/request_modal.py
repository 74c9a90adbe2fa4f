from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from novabites_client_sdk import RequestType, Store

from novabites_pos.services.inventory_service import InventoryService, InventoryServiceError, target_stores
from novabites_pos.ui.inventory.modal_table import ModalTable
from novabites_pos.ui.shared.notification_center import NotificationCenter


@dataclass(frozen=True)
class TabCopy:
    label: str
    request_type: RequestType
    incomplete_title: str
    incomplete_message: str
    success_title: str
    success_message: str
    failure_prefix: str


TABS: dict[str, TabCopy] = {
    "request": TabCopy(
        label="Solicitud",
        request_type=RequestType.SUPPLY_REQUEST,
        incomplete_title="Debes rellenar todos los campos de la solicitud",
        incomplete_message="Asegúrate de que la solicitud está completa antes de enviarla.",
        success_title="Pedido a tienda creado correctamente",
        success_message="El pedido ha sido creada con éxito.",
        failure_prefix="Error al crear el pedido",
    ),
    "return": TabCopy(
        label="Devolución",
        request_type=RequestType.RETURN_REQUEST,
        incomplete_title="Debes rellenar todos los campos de la devolución",
        incomplete_message="Asegúrate de que la devolución está completa antes de enviarla.",
        success_title="Devolución a tienda creada correctamente",
        success_message="La devolución ha sido creada con éxito.",
        failure_prefix="Error al crear la devolución",
    ),
    "relocation": TabCopy(
        label="Reubicación",
        request_type=RequestType.RELOCATION_REQUEST,
        incomplete_title="Debes rellenar todos los campos de la reubicación",
        incomplete_message="Asegúrate de que los datos de la reubicación estén completos antes de enviarla.",
        success_title="Reubicación a tienda creada correctamente",
        success_message="La reubicación ha sido creada con éxito.",
        failure_prefix="Error al crear la reubicación",
    ),
}


@dataclass
class RequestModal:
    """Supply, return and relocation requests sent from the inventory screen."""

    service: InventoryService
    notifications: NotificationCenter
    active_tab: str = "request"
    tables: dict[str, ModalTable] = field(
        default_factory=lambda: {name: ModalTable(with_reason=name == "return") for name in TABS}
    )
    stores: list[Store] = field(default_factory=list)
    target_store_id: str | None = None
    is_open: bool = True
    is_submitting: bool = False

    def load(self) -> bool:
        try:
            products = self.service.products()
            self.stores = self.service.stores()
        except InventoryServiceError as exc:
            self.notifications.failure("Error al cargar los datos", exc, action="inventory.load_request_data")
            return False
        for table in self.tables.values():
            table.products = products
        return True

    @property
    def table(self) -> ModalTable:
        return self.tables[self.active_tab]

    def select_tab(self, name: str) -> None:
        if name not in TABS:
            raise ValueError(f"Unknown request tab: {name}")
        self.active_tab = name

    def relocation_targets(self) -> list[Store]:
        return target_stores(self.stores, self.service.session.store_id)

    def select_target(self, store_id: str | None) -> None:
        self.target_store_id = store_id or None

    def submit(self) -> dict[str, Any]:
        copy = TABS[self.active_tab]
        is_relocation = copy.request_type is RequestType.RELOCATION_REQUEST
        if is_relocation and not self.target_store_id:
            self.notifications.error(
                "Debes seleccionar una tienda destino",
                "Selecciona la tienda a la que deseas reubicar los productos.",
            )
            return {"ok": False, "error": "Debes seleccionar una tienda destino"}
        if not self.table.is_complete():
            self.notifications.error(copy.incomplete_title, copy.incomplete_message)
            return {"ok": False, "error": copy.incomplete_title}
        if self.is_submitting:
            return {"ok": False, "error": None}
        self.is_submitting = True
        try:
            created = self.service.submit(
                copy.request_type,
                self.table.rows,
                target_store_id=self.target_store_id if is_relocation else None,
                stores=self.stores or None,
            )
        except InventoryServiceError as exc:
            self.notifications.error(
                f"{copy.failure_prefix}: {exc.message}",
                "Por favor, inténtalo de nuevo más tarde.",
            )
            return {"ok": False, "error": exc.message}
        finally:
            self.is_submitting = False
        self.notifications.success(copy.success_title, copy.success_message)
        self.is_open = False
        return {"ok": True, "request_id": created.id}

    def render(self) -> dict[str, Any]:
        return {
            "title": "Pedido a Central de Distribución",
            "subtitle": "Revise los productos a pedir y las devoluciones antes de enviar.",
            "tabs": [
                {"name": name, "label": copy.label, "active": name == self.active_tab}
                for name, copy in TABS.items()
            ],
            "table": self.table.render(),
            "targets": (
                [{"id": store.id, "name": store.name} for store in self.relocation_targets()]
                if self.active_tab == "relocation"
                else []
            ),
            "target_store_id": self.target_store_id,
            "submit_enabled": not self.is_submitting,
        }
