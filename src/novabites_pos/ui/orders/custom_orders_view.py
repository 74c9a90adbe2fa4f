from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from novabites_client_sdk import CustomOrder, StatusOrder

from novabites_pos.services.custom_order_service import CustomOrderService, CustomOrderServiceError
from novabites_pos.shared.currency import format_cop
from novabites_pos.ui.orders.add_order_form import AddOrderForm
from novabites_pos.ui.shared.notification_center import NotificationCenter
from novabites_pos.ui.shared.view_state import resolve_state

ALL = "all"

FILTER_OPTIONS: tuple[tuple[str, str], ...] = (
    (ALL, "Todos"),
    (StatusOrder.PENDING.value, "En Progreso"),
    (StatusOrder.COMPLETED.value, "Completados"),
    (StatusOrder.CANCELED.value, "Cancelados"),
)

_STATUS_ACTIONS = {
    StatusOrder.CANCELED: ("Pedido cancelado correctamente", "Error al cancelar el pedido", "cancel"),
    StatusOrder.COMPLETED: ("Pedido completado correctamente", "Error al completar el pedido", "complete"),
}


def _status_value(order: CustomOrder) -> str:
    return str(getattr(order.status, "value", order.status or ""))


def card_status_label(order: CustomOrder) -> str:
    status = _status_value(order)
    if status == StatusOrder.COMPLETED.value:
        return "Completado"
    if status == StatusOrder.PENDING.value:
        return "Pendiente"
    return "Cancelado"


@dataclass
class CustomOrdersView:
    service: CustomOrderService
    notifications: NotificationCenter
    orders: list[CustomOrder] = field(default_factory=list)
    status_filter: str = ALL
    form: AddOrderForm | None = None
    is_loading: bool = False
    is_submitting: bool = False
    error_message: str | None = None

    def load(self) -> bool:
        self.is_loading = True
        try:
            self.orders = self.service.list_orders()
            self.error_message = None
            return True
        except CustomOrderServiceError as exc:
            self.error_message = exc.message
            return False
        finally:
            self.is_loading = False

    def set_filter(self, value: str) -> None:
        if value not in {key for key, _ in FILTER_OPTIONS}:
            raise ValueError(f"Unknown status filter: {value}")
        self.status_filter = value

    def visible_orders(self) -> list[CustomOrder]:
        if self.status_filter == ALL:
            return list(self.orders)
        return [order for order in self.orders if _status_value(order) == self.status_filter]

    def _change_status(self, order_id: str, status: StatusOrder) -> dict[str, Any]:
        success_title, error_title, action = _STATUS_ACTIONS[status]
        try:
            self.service.set_status(order_id, status)
        except CustomOrderServiceError as exc:
            self.notifications.failure(error_title, exc, action=f"custom_orders.{action}")
            return {"ok": False, "error": exc.message}
        self.notifications.success(success_title)
        self.load()
        return {"ok": True}

    def cancel(self, order_id: str) -> dict[str, Any]:
        return self._change_status(order_id, StatusOrder.CANCELED)

    def complete(self, order_id: str) -> dict[str, Any]:
        return self._change_status(order_id, StatusOrder.COMPLETED)

    def open_form(self) -> AddOrderForm:
        self.form = AddOrderForm(notifications=self.notifications)
        return self.form

    def close_form(self) -> None:
        self.form = None

    def save(self) -> dict[str, Any]:
        if self.form is None:
            return {"ok": False, "error": "No hay un pedido en edición"}
        if self.is_submitting:
            return {"ok": False, "error": None}
        request = self.form.build_request(store_id=None, user_id=None)
        if request is None:
            return {"ok": False, "error": "Formulario incompleto"}
        self.is_submitting = True
        try:
            order = self.service.create(request)
        except CustomOrderServiceError as exc:
            self.notifications.failure("Error al guardar el nuevo pedido", exc, action="custom_orders.create")
            return {"ok": False, "error": exc.message}
        finally:
            self.is_submitting = False
        self.notifications.success("Nuevo pedido creado correctamente")
        self.form = None
        self.load()
        return {"ok": True, "custom_order_id": order.id}

    def render(self) -> dict[str, Any]:
        visible = self.visible_orders()
        state = resolve_state(
            is_loading=self.is_loading,
            error=self.error_message,
            has_data=bool(visible),
            empty_message="No hay pedidos registrados",
        )
        return {
            "state": state.render(),
            "filters": [
                {"value": key, "label": label, "active": key == self.status_filter}
                for key, label in FILTER_OPTIONS
            ],
            "cards": [
                {
                    "id": order.id,
                    "index": f"{position:02d}",
                    "client_name": (order.client.name if order.client else None) or "",
                    "status": card_status_label(order),
                    "total": format_cop(order.total_price),
                    "can_change_status": _status_value(order) == StatusOrder.PENDING.value,
                }
                for position, order in enumerate(visible, start=1)
            ],
            "form": self.form.render() if self.form else None,
        }
