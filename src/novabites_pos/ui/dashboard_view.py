from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from novabites_pos.app.navigation import DASHBOARD_OPTIONS, USER_MENU, role_label
from novabites_pos.app.state import SessionContext


@dataclass
class UserDropdown:
    session: SessionContext
    is_open: bool = False

    def toggle(self) -> bool:
        self.is_open = not self.is_open
        return self.is_open

    def render(self) -> dict[str, Any]:
        claims = self.session.claims
        return {
            "name": (claims.name if claims else None) or "",
            "role": role_label(self.session.role),
            "is_open": self.is_open,
            "links": [
                {"route": link.route.value if link.route else "logout", "label": link.label}
                for link in USER_MENU
            ],
        }


@dataclass
class DashboardView:
    session: SessionContext
    title: str = "¿Qué quieres hacer hoy?"

    def render(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "options": [
                {"route": option.route.value, "title": option.title, "tagline": option.tagline}
                for option in DASHBOARD_OPTIONS
            ],
            "user": UserDropdown(self.session).render(),
        }
