from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime

from novabites_client_sdk import ApiSession, TokenClaims
from novabites_client_sdk.exceptions import TokenDecodeError

from novabites_pos.services.errors import ServiceError, normalize_error

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


@dataclass(frozen=True)
class AuthServiceError(ServiceError):
    pass


class AuthService:
    def __init__(self, session: ApiSession) -> None:
        self.session = session

    def has_active_session(self, now: datetime | None = None) -> bool:
        return self.session.is_valid(now)

    def login(self, username: str, password: str) -> TokenClaims:
        logger.info("login_attempt", extra={"username": username})
        try:
            token = self.session.auth_client().login(username, password)
            claims = self.session.establish(token)
        except TokenDecodeError as exc:
            logger.exception("login_failure", extra={"username": username})
            raise AuthServiceError(message="Error desconocido al iniciar sesión", details=str(exc)) from exc
        except Exception as exc:
            logger.exception("login_failure", extra={"username": username})
            raise normalize_error(exc, AuthServiceError) from exc
        logger.info("login_success", extra={"username": username, "user_id": claims.user_id})
        return claims

    def request_password_reset(self, email: str) -> None:
        logger.info("password_reset_requested")
        try:
            self.session.auth_client().request_password_reset(email, self.session.config.app_url)
        except Exception as exc:
            logger.exception("password_reset_request_failure")
            raise normalize_error(exc, AuthServiceError) from exc

    def reset_password(self, token: str, new_password: str) -> None:
        logger.info("password_reset_attempt")
        try:
            self.session.auth_client().reset_password(token, new_password)
        except Exception as exc:
            logger.exception("password_reset_failure")
            raise normalize_error(exc, AuthServiceError) from exc
        logger.info("password_reset_success")

    def logout(self) -> None:
        logger.info("logout", extra={"user_id": self.session.user_id})
        self.session.clear()
