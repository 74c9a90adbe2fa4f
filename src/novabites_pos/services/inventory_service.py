from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Iterable, Sequence

from novabites_client_sdk import ApiSession, Product, RequestType, ReturnReason, Store, StoreProduct, StoreRequest, TypeStore
from novabites_client_sdk.models_requests import StoreRequestCreate, StoreRequestDetailInput

from novabites_pos.services.errors import ServiceError, normalize_error

logger = logging.getLogger(__name__)

CENTRAL_STORE_MISSING = "No se encontró la tienda central"


@dataclass(frozen=True)
class InventoryServiceError(ServiceError):
    pass


@dataclass
class RequestRow:
    """Editable line of a replenishment, return or relocation request."""

    product: Product | None = None
    quantity: int = 1
    return_reason: ReturnReason | None = None

    def is_complete(self, *, needs_reason: bool = False) -> bool:
        if self.product is None or self.quantity <= 0:
            return False
        return self.return_reason is not None or not needs_reason


def rows_complete(rows: Sequence[RequestRow], *, needs_reason: bool = False) -> bool:
    return bool(rows) and all(row.is_complete(needs_reason=needs_reason) for row in rows)


def central_store(stores: Iterable[Store]) -> Store | None:
    return next((store for store in stores if store.is_principal), None)


def target_stores(stores: Iterable[Store], own_store_id: str | None) -> list[Store]:
    return [store for store in stores if store.type != TypeStore.PRINCIPAL and store.id != own_store_id]


def request_details(rows: Sequence[RequestRow], *, with_reason: bool = False) -> list[StoreRequestDetailInput]:
    details = []
    for row in rows:
        if row.product is None:
            continue
        details.append(
            StoreRequestDetailInput(
                product_id=row.product.id,
                requested_quantity=row.quantity,
                unit_price=row.product.base_price,
                total_price=row.product.base_price * row.quantity,
                return_reason=row.return_reason if with_reason else None,
            )
        )
    return details


class InventoryService:
    def __init__(self, session: ApiSession) -> None:
        self.session = session

    def store_products(self) -> list[StoreProduct]:
        store_id = self.session.store_id
        if not store_id:
            return []
        try:
            return self.session.catalog_client().list_store_products(store_id)
        except Exception as exc:
            raise normalize_error(exc, InventoryServiceError) from exc

    def products(self) -> list[Product]:
        try:
            return self.session.catalog_client().list_products()
        except Exception as exc:
            raise normalize_error(exc, InventoryServiceError) from exc

    def stores(self) -> list[Store]:
        try:
            return self.session.catalog_client().list_stores()
        except Exception as exc:
            raise normalize_error(exc, InventoryServiceError) from exc

    def submit(
        self,
        request_type: RequestType,
        rows: Sequence[RequestRow],
        *,
        target_store_id: str | None = None,
        stores: Sequence[Store] | None = None,
        now: datetime | None = None,
    ) -> StoreRequest:
        """Send a store request; supply and return requests go to the central store."""
        if request_type is not RequestType.RELOCATION_REQUEST:
            central = central_store(stores if stores is not None else self.stores())
            if central is None:
                raise InventoryServiceError(message=CENTRAL_STORE_MISSING)
            target_store_id = central.id
        request = StoreRequestCreate(
            type=request_type,
            requesting_store_id=self.session.store_id,
            requesting_user_id=self.session.user_id,
            target_store_id=target_store_id,
            requested_date=now or datetime.now(timezone.utc),
            details=request_details(rows, with_reason=request_type is RequestType.RETURN_REQUEST),
        )
        try:
            created = self.session.store_requests_client().create_request(request)
        except Exception as exc:
            logger.exception("store_request_failure", extra={"request_type": request_type.value})
            raise normalize_error(exc, InventoryServiceError) from exc
        logger.info(
            "store_request_created",
            extra={"request_type": request_type.value, "request_id": created.id, "line_count": len(rows)},
        )
        return created
