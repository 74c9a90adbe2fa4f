from __future__ import annotations

from typing import Any, Mapping

from ..models_sales import (
    CustomOrder,
    CustomOrderCreateRequest,
    CustomOrderStatusUpdate,
    Order,
    OrderCreateRequest,
    StatusOrder,
)
from .base import BaseClient, coerce_model, compact_params, parse_list, parse_object


class OrdersClient(BaseClient):
    def list_orders(self, *, store_id: str | None = None, date: str | None = None) -> list[Order]:
        data = self._request(
            "GET",
            "/api/order",
            params=compact_params(storeId=store_id, date=date),
            module="orders",
            operation="list_orders",
        )
        return parse_list(data, Order, "order list")

    def create_order(self, payload: OrderCreateRequest | Mapping[str, Any]) -> Order:
        request = coerce_model(payload, OrderCreateRequest)
        data = self._request(
            "POST",
            "/api/order",
            json_body=request.to_payload(),
            module="orders",
            operation="create_order",
        )
        return parse_object(data, Order, "created order")


class CustomOrdersClient(BaseClient):
    def list_custom_orders(self, *, store_id: str | None = None) -> list[CustomOrder]:
        data = self._request(
            "GET",
            "/api/custom-order",
            params=compact_params(storeId=store_id),
            module="custom_orders",
            operation="list_custom_orders",
        )
        return parse_list(data, CustomOrder, "custom order list")

    def create_custom_order(self, payload: CustomOrderCreateRequest | Mapping[str, Any]) -> CustomOrder:
        request = coerce_model(payload, CustomOrderCreateRequest)
        data = self._request(
            "POST",
            "/api/custom-order",
            json_body=request.to_payload(),
            module="custom_orders",
            operation="create_custom_order",
        )
        return parse_object(data, CustomOrder, "created custom order")

    def update_status(self, custom_order_id: str, status: StatusOrder) -> CustomOrder | None:
        body = CustomOrderStatusUpdate(status=status).to_payload()
        data = self._request(
            "PATCH",
            f"/api/custom-order/{custom_order_id}",
            json_body=body,
            module="custom_orders",
            operation="update_status",
        )
        if data is None:
            return None
        return parse_object(data, CustomOrder, "updated custom order")
