from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

from novabites_pos.app.bootstrap import BootstrapResult
from novabites_pos.app.state import Route


@dataclass
class SignInView:
    login: Callable[[str, str], BootstrapResult]
    username: str = ""
    password: str = ""
    error_message: str | None = None
    is_submitting: bool = False
    title: str = "Iniciar Sesión"

    def submit(self) -> dict[str, Any]:
        if self.is_submitting:
            return {"ok": False, "error": None}
        self.is_submitting = True
        try:
            result = self.login(self.username.strip(), self.password)
        finally:
            self.is_submitting = False
        self.error_message = result.error_message
        if result.route is Route.DASHBOARD:
            self.password = ""
        return {"ok": result.route is Route.DASHBOARD, "route": result.route.value, "error": result.error_message}

    def render(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "username": self.username,
            "submit_enabled": bool(self.username and self.password) and not self.is_submitting,
            "error": self.error_message,
        }
