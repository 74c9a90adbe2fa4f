from __future__ import annotations

from typing import Any, Mapping

from ..exceptions import NotFoundError
from ..models_requests import StoreRequest, StoreRequestCreate
from .base import BaseClient, coerce_model, parse_list, parse_object

REQUEST_NOT_FOUND = "No se encontró la solicitud"


class StoreRequestsClient(BaseClient):
    def create_request(self, payload: StoreRequestCreate | Mapping[str, Any]) -> StoreRequest:
        request = coerce_model(payload, StoreRequestCreate)
        data = self._request(
            "POST",
            "/api/store-request",
            json_body=request.to_payload(),
            module="store_requests",
            operation="create_request",
        )
        return parse_object(data, StoreRequest, "created store request")

    def list_for_store(self, store_id: str) -> list[StoreRequest]:
        data = self._request(
            "GET",
            f"/api/store-request/store/{store_id}",
            module="store_requests",
            operation="list_for_store",
        )
        return parse_list(data, StoreRequest, "store request list")

    def get_request(self, request_id: str) -> StoreRequest:
        try:
            data = self._request(
                "GET",
                f"/api/store-request/{request_id}",
                module="store_requests",
                operation="get_request",
            )
        except NotFoundError as exc:
            raise NotFoundError(
                code="STORE_REQUEST_NOT_FOUND",
                message=REQUEST_NOT_FOUND,
                details=exc.details,
                status_code=404,
                raw_payload=exc.raw_payload,
            ) from exc
        if not data:
            raise NotFoundError(
                code="STORE_REQUEST_NOT_FOUND",
                message=REQUEST_NOT_FOUND,
                details=None,
                status_code=404,
                raw_payload=None,
            )
        return parse_object(data, StoreRequest, "store request response")
