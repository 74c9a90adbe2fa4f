from __future__ import annotations

from typing import Mapping

from .exceptions import (
    SESSION_EXPIRED_MESSAGE,
    ApiError,
    ConflictError,
    NotFoundError,
    PermissionError,
    RateLimitError,
    ServerError,
    SessionExpiredError,
    ValidationError,
)

_ERRORS_BY_STATUS: dict[int, type[ApiError]] = {
    400: ValidationError,
    401: SessionExpiredError,
    403: PermissionError,
    404: NotFoundError,
    409: ConflictError,
    422: ValidationError,
    429: RateLimitError,
}


def fallback_message(status_code: int, reason: str | None) -> str:
    return f"Error {status_code} al realizar la solicitud: {reason or ''}".rstrip()


def _payload_message(payload: Mapping[str, object]) -> str | None:
    # Validation failures come back with a list of messages.
    raw = payload.get("message")
    if isinstance(raw, list):
        raw = "; ".join(str(item) for item in raw)
    return str(raw) if raw else None


def error_type_for(status_code: int) -> type[ApiError]:
    if status_code in _ERRORS_BY_STATUS:
        return _ERRORS_BY_STATUS[status_code]
    return ServerError if status_code >= 500 else ApiError


def map_error(status_code: int, payload: Mapping[str, object] | None, reason: str | None = None) -> ApiError:
    payload = payload or {}
    error_type = error_type_for(status_code)
    if error_type is SessionExpiredError:
        message = SESSION_EXPIRED_MESSAGE
    else:
        message = _payload_message(payload) or fallback_message(status_code, reason)
    return error_type(
        code=str(payload.get("code") or payload.get("error") or "HTTP_ERROR"),
        message=message,
        details=payload.get("details"),
        status_code=status_code,
        raw_payload=dict(payload),
        reason=reason,
    )
