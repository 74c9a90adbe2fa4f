from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable

from .auth_store import AuthStore
from .clients.auth import AuthClient
from .clients.bills import BillsClient
from .clients.cash import CashClosingClient, DailyExpensesClient
from .clients.catalog import CatalogClient
from .clients.orders import CustomOrdersClient, OrdersClient
from .clients.store_requests import StoreRequestsClient
from .clients.users import UsersClient
from .config import ClientConfig
from .exceptions import TokenDecodeError
from .http_client import HttpClient
from .models import SessionData, TokenClaims
from .token_claims import decode_token

logger = logging.getLogger(__name__)


@dataclass
class ApiSession:
    config: ClientConfig
    auth_store: AuthStore | None = None
    token: str | None = None
    claims: TokenClaims | None = None
    on_expired: Callable[[], None] | None = None
    _http_client: HttpClient | None = None

    def __post_init__(self) -> None:
        self.auth_store = self.auth_store or AuthStore()
        stored = self.auth_store.load()
        if stored and not self.token:
            self.token = stored.access_token
            self.claims = stored.claims

    @property
    def user_id(self) -> str | None:
        return self.claims.user_id if self.claims else None

    @property
    def store_id(self) -> str | None:
        return self.claims.store_id if self.claims else None

    def _http(self) -> HttpClient:
        if self._http_client is None:
            self._http_client = HttpClient(config=self.config, on_unauthorized=self.expire)
        return self._http_client

    def auth_client(self) -> AuthClient:
        return AuthClient(http=self._http(), access_token=None)

    def users_client(self) -> UsersClient:
        return UsersClient(http=self._http(), access_token=self.token)

    def catalog_client(self) -> CatalogClient:
        return CatalogClient(http=self._http(), access_token=self.token)

    def orders_client(self) -> OrdersClient:
        return OrdersClient(http=self._http(), access_token=self.token)

    def custom_orders_client(self) -> CustomOrdersClient:
        return CustomOrdersClient(http=self._http(), access_token=self.token)

    def bills_client(self) -> BillsClient:
        return BillsClient(http=self._http(), access_token=self.token)

    def store_requests_client(self) -> StoreRequestsClient:
        return StoreRequestsClient(http=self._http(), access_token=self.token)

    def daily_expenses_client(self) -> DailyExpensesClient:
        return DailyExpensesClient(http=self._http(), access_token=self.token)

    def cash_closing_client(self) -> CashClosingClient:
        return CashClosingClient(http=self._http(), access_token=self.token)

    def establish(self, token: str) -> TokenClaims:
        claims = decode_token(token)
        self.token = token
        self.claims = claims
        self.auth_store.save(SessionData(access_token=token, claims=claims, env_name=self.config.env_name))
        return claims

    def is_valid(self, now: datetime | None = None) -> bool:
        """A session is valid while it has a readable, unexpired token."""
        if not self.token:
            return False
        if self.claims is None:
            try:
                self.claims = decode_token(self.token)
            except TokenDecodeError:
                logger.warning("token_unreadable")
                return False
        return not self.claims.is_expired(now or datetime.now(timezone.utc))

    def expire(self) -> None:
        logger.info("session_expired", extra={"user_id": self.user_id})
        self.clear()
        if self.on_expired:
            self.on_expired()

    def clear(self) -> None:
        self.token = None
        self.claims = None
        if self._http_client is not None:
            self._http_client.clear_cache()
        if self.auth_store:
            self.auth_store.clear()
