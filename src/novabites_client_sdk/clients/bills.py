from __future__ import annotations

from ..exceptions import NotFoundError
from ..models_sales import Bill
from .base import BaseClient, parse_object

BILL_NOT_FOUND = "No se encontró la factura"


class BillsClient(BaseClient):
    def bill_for_order(self, order_id: str) -> Bill:
        return self._fetch_bill(f"/api/bill/order/{order_id}")

    def bill_for_custom_order(self, custom_order_id: str) -> Bill:
        return self._fetch_bill(f"/api/bill/custom-order/{custom_order_id}")

    def generate_pdf(self, bill_id: str) -> bytes:
        data = self._request(
            "POST",
            "/api/bill/generate",
            json_body={"billId": bill_id},
            response_type="blob",
            module="bills",
            operation="generate_pdf",
        )
        if not data:
            raise ValueError("Expected PDF bytes from bill generation")
        return data

    def _fetch_bill(self, path: str) -> Bill:
        try:
            data = self._request("GET", path, module="bills", operation="get_bill")
        except NotFoundError as exc:
            raise _not_found(exc.raw_payload) from exc
        if not data:
            raise _not_found(None)
        return parse_object(data, Bill, "bill response")


def _not_found(raw_payload: object | None) -> NotFoundError:
    return NotFoundError(
        code="BILL_NOT_FOUND",
        message=BILL_NOT_FOUND,
        details=None,
        status_code=404,
        raw_payload=raw_payload,
    )
