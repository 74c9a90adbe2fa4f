from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from novabites_pos.services.store_request_service import (
    RequestItem,
    StoreRequestService,
    StoreRequestServiceError,
    counter_label,
)
from novabites_pos.shared.date_utils import format_date_time_local
from novabites_pos.ui.requests.request_detail_view import RequestDetailView
from novabites_pos.ui.shared.notification_center import NotificationCenter
from novabites_pos.ui.shared.view_state import resolve_state


@dataclass
class RequestsListView:
    service: StoreRequestService
    notifications: NotificationCenter
    items: list[RequestItem] = field(default_factory=list)
    detail: RequestDetailView | None = None
    is_loading: bool = False
    error_message: str | None = None

    def load(self) -> bool:
        self.is_loading = True
        try:
            self.items = self.service.list_items()
            self.error_message = None
            return True
        except StoreRequestServiceError as exc:
            self.items = []
            self.error_message = exc.message
            self.notifications.failure("Error al cargar las solicitudes", exc, action="requests.list")
            return False
        finally:
            self.is_loading = False

    def open_detail(self, request_id: str) -> RequestDetailView:
        self.detail = RequestDetailView(service=self.service, notifications=self.notifications, request_id=request_id)
        self.detail.load()
        return self.detail

    def close_detail(self) -> None:
        self.detail = None

    def render(self) -> dict[str, Any]:
        tz = self.service.session.config.tzinfo
        state = resolve_state(
            is_loading=self.is_loading,
            error=self.error_message,
            has_data=bool(self.items),
            empty_message="No hay solicitudes registradas",
        )
        return {
            "title": "Solicitudes",
            "state": state.render(),
            "counter": counter_label(len(self.items)),
            "rows": [
                {
                    "id": item.id,
                    "request_number": item.request_number,
                    "type": item.type_label,
                    "status": item.status_label,
                    "target_store": item.target_store_name,
                    "requested_by": item.requesting_user_name,
                    "date": format_date_time_local(item.requested_date, tz) if item.requested_date else "",
                }
                for item in self.items
            ],
            "detail": self.detail.render() if self.detail else None,
        }
