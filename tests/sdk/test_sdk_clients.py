from __future__ import annotations

import json
from datetime import datetime, timezone
from decimal import Decimal

import pytest
import responses
from responses import matchers

from novabites_client_sdk.clients.auth import AuthClient
from novabites_client_sdk.clients.bills import BILL_NOT_FOUND, BillsClient
from novabites_client_sdk.clients.cash import CashClosingClient
from novabites_client_sdk.clients.orders import CustomOrdersClient, OrdersClient
from novabites_client_sdk.clients.store_requests import REQUEST_NOT_FOUND, StoreRequestsClient
from novabites_client_sdk.config import ClientConfig
from novabites_client_sdk.exceptions import AuthError, NotFoundError
from novabites_client_sdk.http_client import HttpClient
from novabites_client_sdk.models_requests import ReturnReason, RequestType, StoreRequestCreate, StoreRequestDetailInput
from novabites_client_sdk.models_sales import CakeInput, ClientInput, CustomOrderCreateRequest, StatusOrder

BASE_URL = "https://api.example.com"


def _http() -> HttpClient:
    return HttpClient(ClientConfig(env_name="test", api_base_url=BASE_URL, retries=0))


@responses.activate
def test_login_returns_plain_token() -> None:
    responses.add(
        responses.POST,
        f"{BASE_URL}/api/auth/login",
        body='"eyJ.abc.def"',
        status=201,
        match=[matchers.json_params_matcher({"username": "caja1", "password": "secreto"})],
    )

    token = AuthClient(http=_http()).login("caja1", "secreto")

    assert token == "eyJ.abc.def"
    assert "Authorization" not in responses.calls[0].request.headers


@responses.activate
def test_login_error_uses_api_message() -> None:
    responses.add(
        responses.POST,
        f"{BASE_URL}/api/auth/login",
        json={"message": "Credenciales inválidas", "statusCode": 401},
        status=401,
    )

    with pytest.raises(AuthError) as exc_info:
        AuthClient(http=_http()).login("caja1", "mal")
    assert exc_info.value.message == "Credenciales inválidas"


@responses.activate
def test_login_error_without_message_uses_reason() -> None:
    responses.add(responses.POST, f"{BASE_URL}/api/auth/login", body="", status=500)

    with pytest.raises(AuthError) as exc_info:
        AuthClient(http=_http()).login("caja1", "secreto")
    assert exc_info.value.message == "Error al iniciar sesión: Internal Server Error"


@responses.activate
def test_list_orders_sends_store_and_date() -> None:
    responses.add(
        responses.GET,
        f"{BASE_URL}/api/order",
        json=[{"id": "o1", "numId": 7, "totalPrice": "12000", "status": "COMPLETED", "details": []}],
        status=200,
        match=[matchers.query_param_matcher({"storeId": "s1", "date": "2024-03-05"})],
    )
    client = OrdersClient(http=_http(), access_token="tok")

    orders = client.list_orders(store_id="s1", date="2024-03-05")

    assert orders[0].num_id == 7
    assert orders[0].total_price == Decimal("12000")
    assert responses.calls[0].request.headers["Authorization"] == "Bearer tok"


@responses.activate
def test_create_custom_order_sends_camel_case_payload() -> None:
    responses.add(responses.POST, f"{BASE_URL}/api/custom-order", json={"id": "c1", "status": "PENDING"}, status=201)
    request = CustomOrderCreateRequest(
        deposit_amount="20000",
        remaining_amount="30000",
        total_price="50000",
        store_id="s1",
        user_id="u1",
        client=ClientInput(name="Laura", phone="3001234567"),
        details=[CakeInput(pounds=2, tiers=1, price="50000")],
    )

    created = CustomOrdersClient(http=_http(), access_token="tok").create_custom_order(request)

    assert created.id == "c1"
    body = json.loads(responses.calls[0].request.body)
    assert body["depositAmount"] == "20000"
    assert body["remainingAmount"] == "30000"
    assert body["status"] == "PENDING"
    assert body["client"] == {"name": "Laura", "phone": "3001234567"}
    assert body["details"] == [{"imageUrl": "", "pounds": 2, "tiers": 1, "price": "50000"}]
    assert "products" not in body


@responses.activate
def test_update_custom_order_status() -> None:
    responses.add(
        responses.PATCH,
        f"{BASE_URL}/api/custom-order/c1",
        json={"id": "c1", "status": "CANCELED"},
        status=200,
        match=[matchers.json_params_matcher({"status": "CANCELED"})],
    )

    updated = CustomOrdersClient(http=_http(), access_token="tok").update_status("c1", StatusOrder.CANCELED)

    assert updated is not None
    assert updated.status == StatusOrder.CANCELED


@responses.activate
def test_create_store_request_payload() -> None:
    responses.add(
        responses.POST,
        f"{BASE_URL}/api/store-request",
        json={"id": "r1", "type": "RETURN_REQUEST", "status": "PENDING"},
        status=201,
    )
    payload = StoreRequestCreate(
        type=RequestType.RETURN_REQUEST,
        requesting_store_id="s1",
        requesting_user_id="u1",
        target_store_id="central",
        requested_date=datetime(2024, 3, 5, 15, 0, tzinfo=timezone.utc),
        details=[
            StoreRequestDetailInput(
                product_id="p1",
                requested_quantity=3,
                unit_price=Decimal("2500"),
                total_price=Decimal("7500"),
                return_reason=ReturnReason.EXPIRED,
            )
        ],
    )

    created = StoreRequestsClient(http=_http(), access_token="tok").create_request(payload)

    assert created.type == RequestType.RETURN_REQUEST
    body = json.loads(responses.calls[0].request.body)
    assert body["type"] == "RETURN_REQUEST"
    assert body["targetStoreId"] == "central"
    assert body["details"][0] == {
        "productId": "p1",
        "requestedQuantity": 3,
        "unitPrice": 2500.0,
        "totalPrice": 7500.0,
        "returnReason": "EXPIRED",
    }


@responses.activate
def test_missing_store_request_has_spanish_message() -> None:
    responses.add(responses.GET, f"{BASE_URL}/api/store-request/r9", json={"message": "Not Found"}, status=404)

    with pytest.raises(NotFoundError) as exc_info:
        StoreRequestsClient(http=_http(), access_token="tok").get_request("r9")
    assert exc_info.value.message == REQUEST_NOT_FOUND


@responses.activate
def test_cash_closing_count_is_never_cached() -> None:
    url = f"{BASE_URL}/api/cash-closing/count/s1/2024-03-05"
    responses.add(responses.GET, url, json={"count": 1}, status=200)
    responses.add(responses.GET, url, json={"count": 2}, status=200)
    client = CashClosingClient(http=_http(), access_token="tok")

    assert client.count_for_day("s1", "2024-03-05") == 1
    assert client.count_for_day("s1", "2024-03-05") == 2


@responses.activate
def test_last_closing_of_day_can_be_empty() -> None:
    responses.add(responses.GET, f"{BASE_URL}/api/cash-closing/last-of-day/s1/2024-03-05", body="", status=200)

    assert CashClosingClient(http=_http(), access_token="tok").last_of_day("s1", "2024-03-05") is None


@responses.activate
def test_bill_not_found_message() -> None:
    responses.add(responses.GET, f"{BASE_URL}/api/bill/order/o1", json={"message": "Not Found"}, status=404)

    with pytest.raises(NotFoundError) as exc_info:
        BillsClient(http=_http(), access_token="tok").bill_for_order("o1")
    assert exc_info.value.message == BILL_NOT_FOUND


@responses.activate
def test_bill_for_custom_order_parses_details() -> None:
    responses.add(
        responses.GET,
        f"{BASE_URL}/api/bill/custom-order/c1",
        json={
            "id": "b1",
            "billNumber": "FV-0001",
            "totalPrice": "50000",
            "details": [{"id": "d1", "productName": "Torta", "quantity": 1, "unitPrice": "50000"}],
        },
        status=200,
    )

    bill = BillsClient(http=_http(), access_token="tok").bill_for_custom_order("c1")

    assert bill.bill_number == "FV-0001"
    assert bill.details[0].display_name == "Torta"
    assert bill.details[0].line_total == Decimal("50000")
