from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path

import pytest

from novabites_client_sdk import Bill, ClientConfig, TokenClaims
from novabites_client_sdk.exceptions import AuthError

from novabites_pos.app.bootstrap import LOGIN_FAILURE_TITLE, LOGIN_SUCCESS_TITLE, PosAppBootstrap
from novabites_pos.app.state import Route
from novabites_pos.config import PosAppConfig
from novabites_pos.main import run
from novabites_pos.shared.activity import ActivityLogger
from novabites_pos.ui.bills.bill_detail_view import BillDetailView
from novabites_pos.ui.sales.sales_view import SalesView
from novabites_pos.ui.shared.notification_center import NotificationCenter
from novabites_pos.ui.signin_view import SignInView

NOW = datetime(2024, 3, 5, 15, 0, tzinfo=timezone.utc)
CLAIMS = TokenClaims(user_id="u1", name="Ana", role="USER", store_id="s1", exp=int(NOW.timestamp()) + 3600)


@dataclass
class FakeAuthClient:
    login_error: Exception | None = None

    def login(self, username: str, password: str) -> str:
        if self.login_error:
            raise self.login_error
        return "token-123"


@dataclass
class FakeBillsClient:
    bill: Bill
    requested: list[tuple[str, str]] = field(default_factory=list)

    def bill_for_order(self, order_id: str) -> Bill:
        self.requested.append(("order", order_id))
        return self.bill

    def bill_for_custom_order(self, custom_order_id: str) -> Bill:
        self.requested.append(("custom", custom_order_id))
        return self.bill


class FakeSession:
    def __init__(self, auth: FakeAuthClient | None = None, token: str | None = None, claims: TokenClaims | None = None) -> None:
        self.config = ClientConfig(env_name="test", api_base_url="https://api.example.com")
        self.auth = auth or FakeAuthClient()
        self.token = token
        self.claims = claims
        self.on_expired = None
        self.bills = FakeBillsClient(bill=Bill(id="b1", bill_number="FV-7"))

    @property
    def user_id(self) -> str | None:
        return self.claims.user_id if self.claims else None

    @property
    def store_id(self) -> str | None:
        return self.claims.store_id if self.claims else None

    def auth_client(self) -> FakeAuthClient:
        return self.auth

    def bills_client(self) -> FakeBillsClient:
        return self.bills

    def establish(self, token: str) -> TokenClaims:
        self.token = token
        self.claims = CLAIMS
        return CLAIMS

    def is_valid(self, now: datetime | None = None) -> bool:
        if not self.token or self.claims is None:
            return False
        return not self.claims.is_expired(now or NOW)

    def expire(self) -> None:
        self.clear()
        if self.on_expired:
            self.on_expired()

    def clear(self) -> None:
        self.token = None
        self.claims = None


def _app(tmp_path: Path, session: FakeSession, *, activity: ActivityLogger | None = None, route_roles=None) -> PosAppBootstrap:
    return PosAppBootstrap(
        config=session.config,
        session=session,
        app_config=PosAppConfig(output_dir=tmp_path / "facturas"),
        notifications=NotificationCenter(),
        activity=activity or ActivityLogger(app_name="test", enabled=False),
        route_roles=route_roles,
    )


def test_start_without_session_goes_to_signin(tmp_path: Path) -> None:
    app = _app(tmp_path, FakeSession())
    assert app.start(NOW).route is Route.SIGNIN


def test_start_restores_valid_session(tmp_path: Path) -> None:
    app = _app(tmp_path, FakeSession(token="stored", claims=CLAIMS))
    result = app.start(NOW)
    assert result.route is Route.DASHBOARD
    assert app.state.session.store_id == "s1"


def test_login_success_navigates_and_toasts(tmp_path: Path) -> None:
    app = _app(tmp_path, FakeSession())

    result = app.login("caja1", "secreto")

    assert result.route is Route.DASHBOARD
    assert app.state.session.user_id == "u1"
    assert app.notifications.last()["title"] == LOGIN_SUCCESS_TITLE


def test_login_failure_keeps_signin_with_message(tmp_path: Path) -> None:
    error = AuthError(code="HTTP_ERROR", message="Credenciales inválidas", details=None, status_code=401)
    app = _app(tmp_path, FakeSession(FakeAuthClient(login_error=error)))

    result = app.login("caja1", "mal")

    assert result.route is Route.SIGNIN
    assert result.error_message == "Credenciales inválidas"
    toast = app.notifications.last()
    assert toast["level"] == "error"
    assert toast["title"] == LOGIN_FAILURE_TITLE


def test_login_ignores_blank_credentials(tmp_path: Path) -> None:
    app = _app(tmp_path, FakeSession())
    assert app.login("", "secreto").route is Route.HOME
    assert app.notifications.messages == []


def test_guards_require_session_and_role(tmp_path: Path) -> None:
    session = FakeSession()
    app = _app(tmp_path, session, route_roles={Route.EXPENSE: ("MANAGER",)})

    assert app.navigate(Route.SALES).route is Route.SIGNIN
    app.login("caja1", "secreto")
    assert app.navigate(Route.SALES).route is Route.SALES
    assert app.navigate(Route.EXPENSE).route is Route.UNAUTHORIZED
    assert app.navigate(Route.FORGOT_PASSWORD).route is Route.FORGOT_PASSWORD


def test_tick_logs_out_expired_session(tmp_path: Path) -> None:
    session = FakeSession()
    app = _app(tmp_path, session)
    app.login("caja1", "secreto")

    later = datetime(2024, 3, 6, tzinfo=timezone.utc)
    result = app.tick(later)

    assert result.route is Route.HOME
    assert session.token is None
    assert app.state.session.claims is None


def test_session_check_interval(tmp_path: Path) -> None:
    app = _app(tmp_path, FakeSession())

    assert not app.session_check_due(100.0, 120.0)
    assert app.session_check_due(100.0, 130.0)


def test_unauthorized_response_returns_home(tmp_path: Path) -> None:
    session = FakeSession()
    app = _app(tmp_path, session)
    app.login("caja1", "secreto")

    session.expire()

    assert app.state.route is Route.HOME
    assert app.state.session.claims is None


def test_logout_clears_session(tmp_path: Path) -> None:
    session = FakeSession()
    app = _app(tmp_path, session)
    app.login("caja1", "secreto")

    assert app.logout().route is Route.HOME
    assert session.token is None


def test_open_builds_screen_for_guarded_route(tmp_path: Path) -> None:
    app = _app(tmp_path, FakeSession())

    assert isinstance(app.open(Route.SALES), SignInView)
    app.login("caja1", "secreto")
    assert isinstance(app.open(Route.SALES), SalesView)
    assert app.open(Route.HOME) is None


def test_open_bill_needs_session(tmp_path: Path) -> None:
    session = FakeSession()
    app = _app(tmp_path, session)

    assert isinstance(app.open_bill("o1"), SignInView)
    assert app.state.route is Route.SIGNIN
    assert session.bills.requested == []


def test_open_bill_from_checkout_and_orders_list(tmp_path: Path) -> None:
    session = FakeSession()
    app = _app(tmp_path, session)
    app.login("caja1", "secreto")

    sale = app.open_bill(**{"order_id": "o1", "custom": False})
    custom = app.open_bill(**{"order_id": "c1", "custom": True})

    assert isinstance(sale, BillDetailView)
    assert sale.bill.bill_number == "FV-7"
    assert sale.output_dir == tmp_path / "facturas"
    assert custom.custom is True
    assert session.bills.requested == [("order", "o1"), ("custom", "c1")]


def test_dashboard_options_follow_roles(tmp_path: Path) -> None:
    app = _app(tmp_path, FakeSession(), route_roles={Route.INVENTORY: ("MANAGER",)})
    app.login("caja1", "secreto")

    titles = [option["title"] for option in app.dashboard_options()]

    assert titles == ["Ventas", "Pedidos"]


def test_activity_entries_written_when_enabled(tmp_path: Path) -> None:
    log_file = tmp_path / "activity.jsonl"
    app = _app(tmp_path, FakeSession(), activity=ActivityLogger(app_name="test", enabled=True, log_file=log_file))

    app.login("caja1", "secreto")
    app.logout()

    entries = [json.loads(line) for line in log_file.read_text(encoding="utf-8").splitlines()]
    assert [entry["name"] for entry in entries] == ["auth_login_result", "auth_logout"]
    assert entries[0]["success"] is True
    assert entries[0]["store_id"] == "s1"
    assert "username" not in entries[0]


@pytest.mark.parametrize("route", [Route.ORDER, Route.INVENTORY, Route.ORDERS_LIST, Route.REQUESTS_LIST, Route.PROFILE])
def test_every_menu_route_has_a_screen(tmp_path: Path, route: Route) -> None:
    app = _app(tmp_path, FakeSession())
    app.login("caja1", "secreto")
    assert app.open(route) is not None


def test_run_reports_invalid_configuration(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.setenv("NOVABITES_SESSION_CHECK_SECONDS", "nunca")

    assert run([]) == 2
    assert "Configuración inválida" in capsys.readouterr().err
