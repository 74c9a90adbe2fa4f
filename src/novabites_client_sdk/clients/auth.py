from __future__ import annotations

from ..exceptions import ApiError, AuthError, TransportError
from ..models import LoginRequest, PasswordResetConfirm, PasswordResetRequest
from .base import BaseClient

UNKNOWN_LOGIN_ERROR = "Error desconocido al iniciar sesión"


class AuthClient(BaseClient):
    def login(self, username: str, password: str) -> str:
        """Exchange credentials for a bearer token (the API answers with the raw token text)."""
        payload = LoginRequest(username=username, password=password).to_payload()
        try:
            token = self.http.request(
                "POST",
                "/api/auth/login",
                json_body=payload,
                response_type="text",
                module="auth",
                operation="login",
            )
        except TransportError:
            raise
        except ApiError as exc:
            raise _login_error(exc) from exc
        token = (token or "").strip().strip('"')
        if not token:
            raise AuthError(
                code="EMPTY_TOKEN",
                message=UNKNOWN_LOGIN_ERROR,
                details=None,
                status_code=200,
                raw_payload=None,
            )
        return token

    def request_password_reset(self, email: str, app_url: str) -> None:
        payload = PasswordResetRequest(email=email, app_url=app_url).to_payload()
        self.http.request(
            "POST",
            "/api/auth/request-password-reset",
            json_body=payload,
            response_type="text",
            module="auth",
            operation="request_password_reset",
        )

    def reset_password(self, token: str, new_password: str) -> None:
        payload = PasswordResetConfirm(token=token, new_password=new_password).to_payload()
        self.http.request(
            "POST",
            "/api/auth/reset-password",
            json_body=payload,
            response_type="text",
            module="auth",
            operation="reset_password",
        )


def _login_error(exc: ApiError) -> AuthError:
    raw = exc.raw_payload if isinstance(exc.raw_payload, dict) else {}
    message = raw.get("message")
    if isinstance(message, list):
        message = "; ".join(str(item) for item in message)
    if not message:
        message = f"Error al iniciar sesión: {exc.reason}" if exc.reason else UNKNOWN_LOGIN_ERROR
    return AuthError(
        code=exc.code,
        message=str(message),
        details=exc.details,
        status_code=exc.status_code,
        raw_payload=exc.raw_payload,
        reason=exc.reason,
    )
