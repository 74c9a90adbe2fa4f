from __future__ import annotations

from novabites_client_sdk.error_mapper import map_error
from novabites_client_sdk.exceptions import (
    SESSION_EXPIRED_MESSAGE,
    ConflictError,
    NotFoundError,
    PermissionError,
    ServerError,
    SessionExpiredError,
    TransportError,
    ValidationError,
)
from novabites_client_sdk.ui_errors import to_user_facing_error


def test_unauthorized_maps_to_session_expired() -> None:
    error = map_error(401, {"message": "jwt expired"}, "Unauthorized")
    assert isinstance(error, SessionExpiredError)
    assert error.message == SESSION_EXPIRED_MESSAGE
    assert error.status_code == 401


def test_status_codes_map_to_error_types() -> None:
    assert isinstance(map_error(403, {}), PermissionError)
    assert isinstance(map_error(404, {}), NotFoundError)
    assert isinstance(map_error(400, {}), ValidationError)
    assert isinstance(map_error(422, {}), ValidationError)
    assert isinstance(map_error(409, {}), ConflictError)
    assert isinstance(map_error(503, {}), ServerError)


def test_message_list_is_joined() -> None:
    error = map_error(400, {"message": ["name must not be empty", "price must be positive"], "error": "Bad Request"})
    assert error.message == "name must not be empty; price must be positive"
    assert error.code == "Bad Request"


def test_missing_message_uses_status_and_reason() -> None:
    error = map_error(500, None, "Internal Server Error")
    assert error.message == "Error 500 al realizar la solicitud: Internal Server Error"
    assert error.code == "HTTP_ERROR"


def test_user_facing_error_for_transport_failure() -> None:
    error = TransportError(code="TRANSPORT_ERROR", message="boom", details=None, status_code=0)
    friendly = to_user_facing_error(error)
    assert friendly.message == "Error desconocido al realizar la solicitud"
    assert friendly.technical_details == "TRANSPORT_ERROR: boom"


def test_user_facing_error_keeps_api_message() -> None:
    error = map_error(404, {"message": "Producto no encontrado", "details": "id=7"})
    friendly = to_user_facing_error(error)
    assert friendly.message == "Producto no encontrado"
    assert friendly.details == "HTTP_ERROR (HTTP 404): id=7"
