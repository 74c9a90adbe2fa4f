from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from novabites_pos.services.orders_service import BillItem, OrderKind, OrdersService, OrdersServiceError, counter_label
from novabites_pos.shared.currency import format_cop
from novabites_pos.shared.date_utils import format_date_time_local
from novabites_pos.ui.shared.notification_center import NotificationCenter
from novabites_pos.ui.shared.view_state import resolve_state


@dataclass
class OrdersListView:
    service: OrdersService
    notifications: NotificationCenter
    items: list[BillItem] = field(default_factory=list)
    is_loading: bool = False
    error_message: str | None = None

    def load(self) -> bool:
        self.is_loading = True
        try:
            self.items = self.service.load_bill_items()
            self.error_message = None
            return True
        except OrdersServiceError as exc:
            self.items = []
            self.error_message = exc.message
            self.notifications.failure("Error al cargar las facturas", exc, action="orders.list")
            return False
        finally:
            self.is_loading = False

    def select(self, order_id: str) -> dict[str, Any] | None:
        """Bill to open for a clicked row."""
        for item in self.items:
            if item.id == order_id:
                return {"order_id": item.id, "custom": item.kind is OrderKind.CUSTOM_ORDER}
        return None

    def render(self) -> dict[str, Any]:
        tz = self.service.session.config.tzinfo
        state = resolve_state(
            is_loading=self.is_loading,
            error=self.error_message,
            has_data=bool(self.items),
            empty_message=counter_label(0),
        )
        return {
            "title": "Facturas",
            "state": state.render(),
            "counter": counter_label(len(self.items)),
            "rows": [
                {
                    "id": item.id,
                    "bill_number": item.bill_number,
                    "type": item.kind.label,
                    "client_name": item.client_name,
                    "document": " ".join(part for part in (item.client_doc_type, item.client_doc_id) if part),
                    "phone": item.client_phone or "",
                    "total": format_cop(item.total_price),
                    "date": format_date_time_local(item.due_date, tz) if item.due_date else "",
                }
                for item in self.items
            ],
        }
