from __future__ import annotations

import json

import pytest
import requests
import responses

from novabites_client_sdk.config import ClientConfig
from novabites_client_sdk.exceptions import NotFoundError, ServerError, SessionExpiredError, TransportError
from novabites_client_sdk.http_client import HttpClient

BASE_URL = "https://api.example.com"


def _config(**overrides) -> ClientConfig:
    values = {"env_name": "test", "api_base_url": BASE_URL, "retries": 1, "retry_backoff_seconds": 0.0}
    values.update(overrides)
    return ClientConfig(**values)


@responses.activate
def test_get_parses_json_and_sends_headers() -> None:
    responses.add(responses.GET, f"{BASE_URL}/api/product", json=[{"id": "p1"}], status=200)
    http = HttpClient(_config())

    data = http.request("GET", "/api/product", headers={"Authorization": "Bearer token"})

    assert data == [{"id": "p1"}]
    sent = responses.calls[0].request
    assert sent.headers["Authorization"] == "Bearer token"
    assert sent.headers["Accept"] == "application/json"


@responses.activate
def test_get_retries_server_errors() -> None:
    responses.add(responses.GET, f"{BASE_URL}/api/store", json={"message": "down"}, status=503)
    responses.add(responses.GET, f"{BASE_URL}/api/store", json=[], status=200)
    http = HttpClient(_config())

    assert http.request("GET", "/api/store") == []
    assert len(responses.calls) == 2


@responses.activate
def test_post_is_not_retried() -> None:
    responses.add(responses.POST, f"{BASE_URL}/api/order", json={"message": "down"}, status=503)
    http = HttpClient(_config(retries=3))

    with pytest.raises(ServerError):
        http.request("POST", "/api/order", json_body={"totalPrice": "100"})
    assert len(responses.calls) == 1


@responses.activate
def test_post_sends_json_body() -> None:
    responses.add(responses.POST, f"{BASE_URL}/api/order", json={"id": "o1"}, status=201)
    http = HttpClient(_config())

    http.request("POST", "/api/order", json_body={"totalPrice": "100"})

    assert json.loads(responses.calls[0].request.body) == {"totalPrice": "100"}


@responses.activate
def test_error_payload_is_mapped() -> None:
    responses.add(responses.GET, f"{BASE_URL}/api/user/9", json={"message": "Usuario no existe"}, status=404)
    http = HttpClient(_config())

    with pytest.raises(NotFoundError) as exc_info:
        http.request("GET", "/api/user/9")
    assert exc_info.value.message == "Usuario no existe"


@responses.activate
def test_unauthorized_with_token_triggers_hook() -> None:
    responses.add(responses.GET, f"{BASE_URL}/api/order", json={"message": "jwt expired"}, status=401)
    expired: list[bool] = []
    http = HttpClient(_config(), on_unauthorized=lambda: expired.append(True))

    with pytest.raises(SessionExpiredError):
        http.request("GET", "/api/order", headers={"Authorization": "Bearer stale"})
    assert expired == [True]


@responses.activate
def test_unauthorized_without_token_does_not_trigger_hook() -> None:
    responses.add(responses.POST, f"{BASE_URL}/api/auth/login", json={"message": "bad"}, status=401)
    expired: list[bool] = []
    http = HttpClient(_config(), on_unauthorized=lambda: expired.append(True))

    with pytest.raises(SessionExpiredError):
        http.request("POST", "/api/auth/login", json_body={"username": "a", "password": "b"})
    assert expired == []


@responses.activate
def test_transport_error_after_retries() -> None:
    responses.add(responses.GET, f"{BASE_URL}/api/product", body=requests.ConnectionError("refused"))
    responses.add(responses.GET, f"{BASE_URL}/api/product", body=requests.ConnectionError("refused"))
    http = HttpClient(_config())

    with pytest.raises(TransportError) as exc_info:
        http.request("GET", "/api/product")
    assert exc_info.value.status_code == 0
    assert len(responses.calls) == 2


@responses.activate
def test_get_cache_and_invalidation_on_write() -> None:
    responses.add(responses.GET, f"{BASE_URL}/api/custom-order", json=[{"id": "c1"}], status=200)
    responses.add(responses.PATCH, f"{BASE_URL}/api/custom-order/c1", json={"id": "c1"}, status=200)
    http = HttpClient(_config())

    http.request("GET", "/api/custom-order")
    http.request("GET", "/api/custom-order")
    assert len(responses.calls) == 1

    http.request("PATCH", "/api/custom-order/c1", json_body={"status": "COMPLETED"})
    http.request("GET", "/api/custom-order")
    assert len(responses.calls) == 3


@responses.activate
def test_blob_response_returns_bytes() -> None:
    responses.add(responses.POST, f"{BASE_URL}/api/bill/generate", body=b"%PDF-1.4", status=200)
    http = HttpClient(_config())

    data = http.request("POST", "/api/bill/generate", json_body={"billId": "b1"}, response_type="blob")

    assert data == b"%PDF-1.4"
    assert responses.calls[0].request.headers["Accept"] == "application/pdf"
