from __future__ import annotations

from ..models import User
from .base import BaseClient, parse_object


class UsersClient(BaseClient):
    def get_user(self, user_id: str) -> User:
        data = self._request("GET", f"/api/user/{user_id}", module="users", operation="get_user")
        return parse_object(data, User, "user response")
