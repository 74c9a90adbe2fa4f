from __future__ import annotations

from dataclasses import dataclass

SESSION_EXPIRED_MESSAGE = "Sesión expirada. Por favor, inicia sesión nuevamente."


@dataclass
class ApiError(Exception):
    code: str
    message: str
    details: object | None
    status_code: int
    raw_payload: object | None = None
    reason: str | None = None

    def __str__(self) -> str:
        return f"[{self.status_code}] {self.code}: {self.message}"


class UnauthorizedError(ApiError):
    pass


class ForbiddenError(ApiError):
    pass


class NotFoundError(ApiError):
    pass


class ValidationError(ApiError):
    pass


class AuthError(UnauthorizedError):
    """Authentication failed or the token was rejected."""


class SessionExpiredError(AuthError):
    """A request carrying a token came back 401; the session must be discarded."""


class PermissionError(ForbiddenError):
    """The authenticated role is not allowed to perform the operation."""


class ConflictError(ApiError):
    """409 or conflict-style errors."""


class RateLimitError(ApiError):
    """429 throttling error."""


class ServerError(ApiError):
    """5xx server-side failures."""


class TransportError(ApiError):
    """Network/transport failure before an HTTP response was returned."""


class TokenDecodeError(ValueError):
    """The stored bearer token is not a readable JWT."""
