from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from novabites_client_sdk import TokenClaims, User


class Route(str, Enum):
    HOME = "home"
    SIGNIN = "signin"
    SIGNUP = "signup"
    FORGOT_PASSWORD = "forgot_password"
    RESET_PASSWORD = "reset_password"
    DASHBOARD = "dashboard"
    SALES = "sales"
    ORDER = "order"
    INVENTORY = "inventory"
    ORDERS_LIST = "orders_list"
    REQUESTS_LIST = "requests_list"
    EXPENSE = "expense"
    PROFILE = "profile"
    UNAUTHORIZED = "unauthorized"


@dataclass
class SessionContext:
    claims: TokenClaims | None = None
    user: User | None = None

    @property
    def user_id(self) -> str | None:
        return self.claims.user_id if self.claims else None

    @property
    def store_id(self) -> str | None:
        return self.claims.store_id if self.claims else None

    @property
    def role(self) -> str | None:
        if self.claims is None or self.claims.role is None:
            return None
        return str(getattr(self.claims.role, "value", self.claims.role))


@dataclass
class AppState:
    route: Route = Route.HOME
    error_message: str | None = None
    status_message: str = "Listo"
    session: SessionContext = field(default_factory=SessionContext)
