from __future__ import annotations

import logging
from dataclasses import dataclass

from novabites_client_sdk import ApiSession, CustomOrder, StatusOrder
from novabites_client_sdk.models_sales import CustomOrderCreateRequest

from novabites_pos.services.errors import ServiceError, normalize_error

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CustomOrderServiceError(ServiceError):
    pass


class CustomOrderService:
    def __init__(self, session: ApiSession) -> None:
        self.session = session

    def list_orders(self, *, store_id: str | None = None) -> list[CustomOrder]:
        try:
            return self.session.custom_orders_client().list_custom_orders(store_id=store_id)
        except Exception as exc:
            raise normalize_error(exc, CustomOrderServiceError) from exc

    def create(self, request: CustomOrderCreateRequest) -> CustomOrder:
        if request.store_id is None:
            request = request.model_copy(update={"store_id": self.session.store_id})
        if request.user_id is None:
            request = request.model_copy(update={"user_id": self.session.user_id})
        try:
            order = self.session.custom_orders_client().create_custom_order(request)
        except Exception as exc:
            logger.exception("custom_order_create_failure", extra={"store_id": request.store_id})
            raise normalize_error(exc, CustomOrderServiceError) from exc
        logger.info("custom_order_created", extra={"custom_order_id": order.id})
        return order

    def set_status(self, custom_order_id: str, status: StatusOrder) -> CustomOrder | None:
        try:
            updated = self.session.custom_orders_client().update_status(custom_order_id, status)
        except Exception as exc:
            logger.exception(
                "custom_order_status_failure",
                extra={"custom_order_id": custom_order_id, "status": status.value},
            )
            raise normalize_error(exc, CustomOrderServiceError) from exc
        logger.info("custom_order_status_changed", extra={"custom_order_id": custom_order_id, "status": status.value})
        return updated
