from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from novabites_client_sdk import RequestType, StoreRequest

from novabites_pos.services.store_request_service import (
    StoreRequestService,
    StoreRequestServiceError,
    request_total,
    return_reason_label,
    type_label,
)
from novabites_pos.shared.currency import format_cop
from novabites_pos.ui.requests.request_stepper import stepper_for
from novabites_pos.ui.shared.notification_center import NotificationCenter

MISSING = "N/A"


def _name(entity: Any) -> str:
    return (getattr(entity, "name", None) if entity is not None else None) or MISSING


@dataclass
class RequestDetailView:
    service: StoreRequestService
    notifications: NotificationCenter
    request_id: str
    request: StoreRequest | None = None
    is_loading: bool = False

    def load(self) -> bool:
        self.is_loading = True
        try:
            self.request = self.service.detail(self.request_id)
            return True
        except StoreRequestServiceError:
            self.request = None
            self.notifications.error(
                "No se encontró la solicitud",
                "No se pudo cargar la información de la solicitud.",
            )
            return False
        finally:
            self.is_loading = False

    def render(self) -> dict[str, Any]:
        if self.is_loading or self.request is None:
            return {"title": "Detalles de la Solicitud", "loading": True, "message": "Cargando información..."}
        request = self.request
        is_return = str(getattr(request.type, "value", request.type)) == RequestType.RETURN_REQUEST.value
        info = {
            "requesting_store": _name(request.requesting_store),
            "target_store": _name(request.target_store),
            "requested_by": _name(request.requesting_user),
        }
        if request.approved_by_user is not None:
            info["approved_by"] = _name(request.approved_by_user)
        return {
            "title": "Detalles de la Solicitud",
            "loading": False,
            "type": type_label(request.type),
            "request_number": f"REQ-{request.num_id}",
            "total": format_cop(request_total(request)),
            "stepper": stepper_for(request, self.service.session.config.tzinfo),
            "info": info,
            "products": [
                {
                    "name": (detail.product.name if detail.product else None) or "Producto",
                    "quantity": detail.requested_quantity,
                    "unit_price": format_cop(detail.unit_price or 0),
                    "total": format_cop(detail.total_price or 0),
                }
                for detail in request.details
            ],
            "empty_products": "No hay productos registrados" if not request.details else None,
            "return_reasons": (
                [
                    {
                        "product": detail.product.name if detail.product else MISSING,
                        "reason": return_reason_label(detail.return_reason),
                    }
                    for detail in request.details
                    if detail.return_reason
                ]
                if is_return
                else None
            ),
        }
