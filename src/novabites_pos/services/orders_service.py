from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Iterable

from novabites_client_sdk import ApiSession, CustomOrder, Order

from novabites_pos.services.errors import ServiceError, normalize_error

UNNAMED_CLIENT = "Cliente sin nombre"

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class OrderKind(str, Enum):
    ORDER = "order"
    CUSTOM_ORDER = "customOrder"

    @property
    def label(self) -> str:
        return "Orden" if self is OrderKind.ORDER else "Orden Personalizado"


@dataclass(frozen=True)
class OrdersServiceError(ServiceError):
    pass


@dataclass(frozen=True)
class BillItem:
    """One row of the merged orders list; ``id`` is the order id, not a bill id."""

    id: str
    bill_number: str
    total_price: Decimal
    client_name: str
    client_doc_type: str | None
    client_doc_id: str | None
    client_phone: str | None
    due_date: datetime | None
    kind: OrderKind


def _row(order: Order | CustomOrder, kind: OrderKind) -> BillItem:
    prefix = "ORD" if kind is OrderKind.ORDER else "CUST"
    client = order.client
    doc_type = None
    if client is not None and client.type_id is not None:
        doc_type = getattr(client.type_id, "value", client.type_id)
    return BillItem(
        id=order.id,
        bill_number=f"{prefix}-{order.num_id}",
        total_price=order.total_price,
        client_name=(client.name if client else None) or UNNAMED_CLIENT,
        client_doc_type=doc_type,
        client_doc_id=client.doc_id if client else None,
        client_phone=client.phone if client else None,
        due_date=order.created_at,
        kind=kind,
    )


def _sort_key(item: BillItem) -> datetime:
    if item.due_date is None:
        return _EPOCH
    if item.due_date.tzinfo is None:
        return item.due_date.replace(tzinfo=timezone.utc)
    return item.due_date


def merge_orders(orders: Iterable[Order], custom_orders: Iterable[CustomOrder]) -> list[BillItem]:
    rows = [_row(order, OrderKind.ORDER) for order in orders]
    rows.extend(_row(order, OrderKind.CUSTOM_ORDER) for order in custom_orders)
    return sorted(rows, key=_sort_key, reverse=True)


def counter_label(count: int) -> str:
    if count == 0:
        return "No hay facturas registradas"
    return f"{count} factura(s) registradas"


class OrdersService:
    def __init__(self, session: ApiSession) -> None:
        self.session = session

    def load_bill_items(self) -> list[BillItem]:
        store_id = self.session.store_id
        try:
            orders = self.session.orders_client().list_orders(store_id=store_id)
            custom_orders = self.session.custom_orders_client().list_custom_orders(store_id=store_id)
        except Exception as exc:
            raise normalize_error(exc, OrdersServiceError) from exc
        return merge_orders(orders, custom_orders)
