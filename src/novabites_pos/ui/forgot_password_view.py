from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from novabites_pos.services.auth_service import AuthService, AuthServiceError
from novabites_pos.ui.shared.notification_center import NotificationCenter


@dataclass
class ForgotPasswordView:
    service: AuthService
    notifications: NotificationCenter
    email: str = ""
    is_submitting: bool = False

    def submit(self) -> dict[str, Any]:
        if not self.email:
            self.notifications.error("El correo electrónico es requerido", "Por favor ingresa tu correo.")
            return {"ok": False, "error": "El correo electrónico es requerido"}
        if self.is_submitting:
            return {"ok": False, "error": None}
        self.is_submitting = True
        try:
            self.service.request_password_reset(self.email)
        except AuthServiceError as exc:
            self.notifications.error(
                "Error al enviar el correo",
                "Ocurrió un error al procesar tu solicitud. Inténtalo de nuevo.",
            )
            return {"ok": False, "error": exc.message}
        finally:
            self.is_submitting = False
        self.notifications.success(
            "¡Correo enviado!",
            "Revisa tu bandeja de entrada para restablecer tu contraseña.",
            duration_ms=4000,
        )
        self.email = ""
        return {"ok": True}

    def render(self) -> dict[str, Any]:
        return {"title": "Recuperar Contraseña", "email": self.email, "is_submitting": self.is_submitting}
