from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from time import perf_counter
from typing import Any, Mapping

from novabites_client_sdk import ApiSession, ClientConfig, load_config
from novabites_client_sdk.models import ActionType, LogContext, LogLevel

from novabites_pos.app.navigation import DASHBOARD_OPTIONS, ROUTE_ROLES, requires_session, role_allowed
from novabites_pos.app.state import AppState, Route
from novabites_pos.config import PosAppConfig, load_pos_app_config
from novabites_pos.services.auth_service import AuthService
from novabites_pos.services.errors import ServiceError
from novabites_pos.shared.activity import ActivityLogger, build_entry
from novabites_pos.ui.shared.notification_center import NotificationCenter

logger = logging.getLogger(__name__)

LOGIN_SUCCESS_TITLE = "Inicio de Sesión exitoso!"
LOGIN_SUCCESS_MESSAGE = "Bienvenido de nuevo!"
LOGIN_FAILURE_TITLE = "Error al iniciar sesión. Revisa tus credenciales."


@dataclass
class BootstrapResult:
    route: Route
    error_message: str | None = None


class PosAppBootstrap:
    """Owns the session, the current route and the toast queue for one running app."""

    def __init__(
        self,
        config: ClientConfig | None = None,
        session: ApiSession | None = None,
        *,
        app_config: PosAppConfig | None = None,
        notifications: NotificationCenter | None = None,
        activity: ActivityLogger | None = None,
        route_roles: Mapping[Route, tuple[str, ...]] | None = None,
    ) -> None:
        self.config = config or load_config()
        self.app_config = app_config or load_pos_app_config()
        self.session = session or ApiSession(self.config)
        self.session.on_expired = self._on_session_expired
        self.state = AppState()
        self.notifications = notifications or NotificationCenter()
        self.auth_service = AuthService(self.session)
        self.activity = activity or ActivityLogger(app_name="novabites_pos", enabled=self.app_config.activity_enabled)
        self.route_roles = ROUTE_ROLES if route_roles is None else route_roles

    def start(self, now: datetime | None = None) -> BootstrapResult:
        if not self.auth_service.has_active_session(now):
            self.session.clear()
            self.state.session.claims = None
            self._navigate(Route.SIGNIN, "Sin sesión activa")
            return BootstrapResult(route=self.state.route)
        self.state.session.claims = self.session.claims
        self._navigate(Route.DASHBOARD, "Sesión restaurada")
        return BootstrapResult(route=self.state.route)

    def login(self, username: str, password: str) -> BootstrapResult:
        if not username or not password:
            return BootstrapResult(route=self.state.route)
        started = perf_counter()
        try:
            claims = self.auth_service.login(username, password)
        except ServiceError as exc:
            self.state.error_message = exc.message
            self._emit_auth_result(False, duration_ms=_elapsed_ms(started), error_code=exc.code)
            self.notifications.error(LOGIN_FAILURE_TITLE, exc.message)
            self._navigate(Route.SIGNIN, "Autenticación fallida")
            return BootstrapResult(route=self.state.route, error_message=exc.message)

        self.state.session.claims = claims
        self.state.error_message = None
        self._emit_auth_result(True, duration_ms=_elapsed_ms(started), user_id=claims.user_id)
        self.notifications.success(LOGIN_SUCCESS_TITLE, LOGIN_SUCCESS_MESSAGE)
        self._navigate(Route.DASHBOARD, "Autenticado")
        return BootstrapResult(route=self.state.route)

    def logout(self) -> BootstrapResult:
        user_id = self.state.session.user_id
        self.auth_service.logout()
        self.state.session.claims = None
        self.state.session.user = None
        self._emit(LogContext.AUTH, ActionType.LOGOUT, "auth_logout", user_id=user_id, success=True)
        self._navigate(Route.HOME, "Sesión cerrada")
        return BootstrapResult(route=self.state.route)

    def session_check_due(self, last_checked: float, now: float) -> bool:
        return now - last_checked >= self.app_config.session_check_seconds

    def tick(self, now: datetime | None = None) -> BootstrapResult:
        """Periodic session check; a missing or expired token ends the session."""
        if self.state.session.claims is None:
            return BootstrapResult(route=self.state.route)
        if not self.auth_service.has_active_session(now):
            logger.warning("session_check_failed", extra={"user_id": self.state.session.user_id})
            return self.logout()
        return BootstrapResult(route=self.state.route)

    def navigate(self, route: Route) -> BootstrapResult:
        if requires_session(route):
            if not self.session.token or self.state.session.claims is None:
                self._navigate(Route.SIGNIN, "Inicia sesión para continuar")
                return BootstrapResult(route=self.state.route)
            if not role_allowed(route, self.state.session.role, self.route_roles):
                self._navigate(Route.UNAUTHORIZED, "Acceso denegado")
                return BootstrapResult(route=self.state.route)
        self._navigate(route, "Listo")
        return BootstrapResult(route=self.state.route)

    def open(self, route: Route) -> Any | None:
        """Navigate, then build the screen of whatever route the guards settled on."""
        from novabites_pos.app.screens import build_screen

        self.navigate(route)
        return build_screen(self, self.state.route)

    def open_bill(self, order_id: str, *, custom: bool = False) -> Any | None:
        """Bill detail for a sale or custom order, loaded; without a session the sign-in screen instead."""
        from novabites_pos.app.screens import build_bill_view, build_screen

        if not self.session.token or self.state.session.claims is None:
            self._navigate(Route.SIGNIN, "Inicia sesión para continuar")
            return build_screen(self, self.state.route)
        view = build_bill_view(self, order_id, custom=custom)
        view.load()
        return view

    def dashboard_options(self) -> list[dict[str, str]]:
        return [
            {"route": option.route.value, "title": option.title, "tagline": option.tagline}
            for option in DASHBOARD_OPTIONS
            if role_allowed(option.route, self.state.session.role, self.route_roles)
        ]

    def _on_session_expired(self) -> None:
        self.state.session.claims = None
        self.state.session.user = None
        self._navigate(Route.HOME, "Sesión expirada")

    def _emit_auth_result(
        self,
        success: bool,
        *,
        duration_ms: int,
        user_id: str | None = None,
        error_code: str | None = None,
    ) -> None:
        self._emit(
            LogContext.AUTH,
            ActionType.LOGIN,
            "auth_login_result",
            level=LogLevel.INFO if success else LogLevel.WARN,
            user_id=user_id,
            duration_ms=duration_ms,
            success=success,
            error_code=error_code,
        )

    def _emit(
        self,
        context: LogContext,
        action: ActionType,
        name: str,
        *,
        level: LogLevel = LogLevel.INFO,
        user_id: str | None = None,
        duration_ms: int | None = None,
        success: bool | None = None,
        error_code: str | None = None,
    ) -> None:
        if not self.activity.enabled:
            return
        self.activity.emit(
            build_entry(
                context=context,
                action=action,
                name=name,
                level=level,
                user_id=user_id,
                store_id=self.state.session.store_id,
                duration_ms=duration_ms,
                success=success,
                error_code=error_code,
            )
        )

    def _navigate(self, route: Route, status_message: str) -> None:
        logger.info("navigation", extra={"route": route.value})
        self.state.route = route
        self.state.status_message = status_message


def _elapsed_ms(started: float) -> int:
    return int((perf_counter() - started) * 1000)
