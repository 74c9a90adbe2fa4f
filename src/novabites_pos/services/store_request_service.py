from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal
from typing import Iterable

from novabites_client_sdk import ApiSession, RequestStatus, RequestType, StoreRequest

from novabites_pos.services.errors import ServiceError, normalize_error

UNKNOWN_STORE = "Tienda no especificada"
UNKNOWN_USER = "Usuario desconocido"

TYPE_LABELS = {
    RequestType.SUPPLY_REQUEST.value: "Solicitud de Suministro",
    RequestType.RETURN_REQUEST.value: "Devolución",
    RequestType.RELOCATION_REQUEST.value: "Reubicación",
}

STATUS_LABELS = {
    RequestStatus.PENDING.value: "Pendiente",
    RequestStatus.APPROVED.value: "Aprobada",
    RequestStatus.REJECTED.value: "Rechazada",
    RequestStatus.IN_PROGRESS.value: "En Proceso",
    RequestStatus.COMPLETED.value: "Completada",
    RequestStatus.CANCELED.value: "Cancelada",
}


def _value(item: object) -> str:
    return str(getattr(item, "value", item))


def type_label(request_type: RequestType | str) -> str:
    value = _value(request_type)
    return TYPE_LABELS.get(value, value)


def status_label(status: RequestStatus | str) -> str:
    value = _value(status)
    return STATUS_LABELS.get(value, value)


def return_reason_label(reason: object) -> str:
    if reason is None:
        return "N/A"
    return _value(reason)


@dataclass(frozen=True)
class StoreRequestServiceError(ServiceError):
    pass


@dataclass(frozen=True)
class RequestItem:
    id: str
    request_number: str
    type: str
    status: str
    target_store_name: str
    requesting_user_name: str
    requested_date: datetime | None

    @property
    def type_label(self) -> str:
        return type_label(self.type)

    @property
    def status_label(self) -> str:
        return status_label(self.status)


def to_request_items(requests: Iterable[StoreRequest]) -> list[RequestItem]:
    items = [
        RequestItem(
            id=request.id,
            request_number=f"REQ-{request.num_id}",
            type=_value(request.type),
            status=_value(request.status),
            target_store_name=(request.target_store.name if request.target_store else None) or UNKNOWN_STORE,
            requesting_user_name=(request.requesting_user.name if request.requesting_user else None) or UNKNOWN_USER,
            requested_date=request.requested_date,
        )
        for request in requests
    ]

    def newest_first(item: RequestItem) -> datetime:
        if item.requested_date is None:
            return datetime.min.replace(tzinfo=timezone.utc)
        if item.requested_date.tzinfo is None:
            return item.requested_date.replace(tzinfo=timezone.utc)
        return item.requested_date

    return sorted(items, key=newest_first, reverse=True)


def request_total(request: StoreRequest) -> Decimal:
    return sum((detail.total_price or Decimal("0") for detail in request.details), Decimal("0"))


def counter_label(count: int) -> str:
    return f"{count} {'solicitud' if count == 1 else 'solicitudes'} registradas"


class StoreRequestService:
    def __init__(self, session: ApiSession) -> None:
        self.session = session

    def list_items(self) -> list[RequestItem]:
        store_id = self.session.store_id
        if not store_id:
            return []
        try:
            requests = self.session.store_requests_client().list_for_store(store_id)
        except Exception as exc:
            raise normalize_error(exc, StoreRequestServiceError) from exc
        return to_request_items(requests)

    def detail(self, request_id: str) -> StoreRequest:
        try:
            return self.session.store_requests_client().get_request(request_id)
        except Exception as exc:
            raise normalize_error(exc, StoreRequestServiceError) from exc
