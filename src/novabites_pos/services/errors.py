from __future__ import annotations

from dataclasses import dataclass

from novabites_client_sdk import to_user_facing_error
from novabites_client_sdk.exceptions import ApiError
from novabites_client_sdk.http_client import UNKNOWN_REQUEST_ERROR


@dataclass(frozen=True)
class ServiceError(RuntimeError):
    message: str
    details: str | None = None
    code: str | None = None
    status_code: int | None = None

    def __str__(self) -> str:
        return self.message


def normalize_error(exc: Exception, error_type: type[ServiceError] = ServiceError) -> ServiceError:
    if isinstance(exc, ServiceError):
        if isinstance(exc, error_type):
            return exc
        return error_type(message=exc.message, details=exc.details, code=exc.code, status_code=exc.status_code)
    if isinstance(exc, ApiError):
        friendly = to_user_facing_error(exc)
        return error_type(
            message=friendly.message,
            details=friendly.technical_details,
            code=exc.code,
            status_code=exc.status_code,
        )
    return error_type(message=str(exc) or UNKNOWN_REQUEST_ERROR)
