from __future__ import annotations

from dataclasses import dataclass

from .exceptions import ApiError, TransportError
from .http_client import UNKNOWN_REQUEST_ERROR


@dataclass(frozen=True)
class UserFacingError:
    message: str
    details: str | None = None

    @property
    def technical_details(self) -> str | None:
        if self.details:
            return self.details
        return None


def to_user_facing_error(exc: ApiError) -> UserFacingError:
    if isinstance(exc, TransportError):
        return UserFacingError(message=UNKNOWN_REQUEST_ERROR, details=f"{exc.code}: {exc.message}")
    primary = exc.message.strip() or UNKNOWN_REQUEST_ERROR
    details = f"{exc.code} (HTTP {exc.status_code})"
    if exc.details:
        details = f"{details}: {exc.details}"
    return UserFacingError(message=primary, details=details)
