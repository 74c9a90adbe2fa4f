from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from novabites_pos.app.state import Route
from novabites_pos.services.auth_service import MIN_PASSWORD_LENGTH, AuthService, AuthServiceError
from novabites_pos.ui.shared.notification_center import NotificationCenter


@dataclass
class ResetPasswordView:
    service: AuthService
    notifications: NotificationCenter
    token: str | None = None
    new_password: str = ""
    confirm_password: str = ""
    is_submitting: bool = False

    def _reject(self, title: str, message: str) -> dict[str, Any]:
        self.notifications.error(title, message)
        return {"ok": False, "error": title}

    def validate(self) -> dict[str, Any] | None:
        if not self.token:
            return self._reject("Token inválido", "El enlace de recuperación no es válido.")
        if not self.new_password or not self.confirm_password:
            return self._reject("Todos los campos son requeridos", "Por favor completa todos los campos.")
        if len(self.new_password) < MIN_PASSWORD_LENGTH:
            return self._reject("Contraseña muy corta", "La contraseña debe tener al menos 6 caracteres.")
        if self.new_password != self.confirm_password:
            return self._reject("Las contraseñas no coinciden", "Por favor verifica que ambas contraseñas sean iguales.")
        return None

    def submit(self) -> dict[str, Any]:
        rejected = self.validate()
        if rejected is not None:
            return rejected
        if self.is_submitting:
            return {"ok": False, "error": None}
        self.is_submitting = True
        try:
            self.service.reset_password(self.token, self.new_password)
        except AuthServiceError as exc:
            self.notifications.error(
                "Error al restablecer contraseña",
                exc.message or "Por favor intenta de nuevo más tarde.",
            )
            return {"ok": False, "error": exc.message}
        finally:
            self.is_submitting = False
        self.notifications.success(
            "Contraseña restablecida exitosamente!",
            "Ya puedes iniciar sesión con tu nueva contraseña.",
        )
        self.new_password = ""
        self.confirm_password = ""
        return {"ok": True, "route": Route.SIGNIN.value}

    def render(self) -> dict[str, Any]:
        return {"title": "Restablecer Contraseña", "has_token": bool(self.token), "is_submitting": self.is_submitting}
