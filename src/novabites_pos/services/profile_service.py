from __future__ import annotations

from dataclasses import dataclass

from novabites_client_sdk import ApiSession, User

from novabites_pos.services.errors import ServiceError, normalize_error


@dataclass(frozen=True)
class ProfileServiceError(ServiceError):
    pass


class ProfileService:
    def __init__(self, session: ApiSession) -> None:
        self.session = session

    def load_profile(self, user_id: str | None = None) -> User:
        target = user_id or self.session.user_id
        if not target:
            raise ProfileServiceError(message="No hay una sesión activa")
        try:
            return self.session.users_client().get_user(target)
        except Exception as exc:
            raise normalize_error(exc, ProfileServiceError) from exc
