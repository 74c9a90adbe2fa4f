from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

from novabites_client_sdk import Role

from novabites_pos.app.state import Route

PUBLIC_ROUTES: frozenset[Route] = frozenset(
    {Route.HOME, Route.SIGNIN, Route.SIGNUP, Route.FORGOT_PASSWORD, Route.RESET_PASSWORD, Route.UNAUTHORIZED}
)

ROLE_LABELS = {
    Role.ADMIN.value: "Administrador",
    Role.MANAGER.value: "Gerente",
    Role.USER.value: "Usuario",
}


@dataclass(frozen=True)
class DashboardOption:
    route: Route
    title: str
    tagline: str


DASHBOARD_OPTIONS: tuple[DashboardOption, ...] = (
    DashboardOption(Route.SALES, "Ventas", "¡El éxito te espera!"),
    DashboardOption(Route.ORDER, "Pedidos", "¡Clientes felices!"),
    DashboardOption(Route.INVENTORY, "Inventario", "¡Control total!"),
)


@dataclass(frozen=True)
class MenuLink:
    route: Route | None
    label: str


USER_MENU: tuple[MenuLink, ...] = (
    MenuLink(Route.PROFILE, "Perfil"),
    MenuLink(Route.ORDERS_LIST, "Facturas"),
    MenuLink(Route.REQUESTS_LIST, "Solicitudes"),
    MenuLink(Route.EXPENSE, "Reporte diario"),
    MenuLink(None, "Cerrar sesión"),
)

# Empty tuple means any signed-in role.
ROUTE_ROLES: dict[Route, tuple[str, ...]] = {}


def role_label(role: Role | str | None) -> str:
    if role is None:
        return ""
    value = str(getattr(role, "value", role))
    return ROLE_LABELS.get(value, value)


def requires_session(route: Route) -> bool:
    return route not in PUBLIC_ROUTES


def role_allowed(route: Route, role: str | None, route_roles: Mapping[Route, tuple[str, ...]] | None = None) -> bool:
    allowed = (ROUTE_ROLES if route_roles is None else route_roles).get(route, ())
    return not allowed or role in allowed
