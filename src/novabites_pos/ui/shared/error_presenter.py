from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any


@dataclass(frozen=True)
class PresentedError:
    category: str
    user_message: str
    safe_to_retry: bool
    code: str
    details: dict[str, Any]


class ErrorPresenter:
    """Maps service failures to a toast title, a category and retry advice."""

    _CATEGORY_MESSAGES = {
        "session": "Sesión expirada. Por favor, inicia sesión nuevamente.",
        "validation": "Revisa los campos marcados e inténtalo de nuevo.",
        "permission_denied": "No tienes permiso para realizar esta acción.",
        "not_found": "El registro solicitado no existe.",
        "transport": "Problema de conexión temporal. Inténtalo de nuevo.",
        "server": "Error del servidor. Inténtalo de nuevo más tarde.",
        "unknown": "Error desconocido al realizar la solicitud",
    }

    def present(
        self,
        *,
        message: str,
        details: Any = None,
        action: str,
        code: str | None = None,
        status_code: int | None = None,
        allow_retry: bool = False,
    ) -> PresentedError:
        normalized_code = (code or self._extract_code(details) or "UNKNOWN").upper()
        category = self._categorize(message=message, details=details, code=normalized_code, status_code=status_code)
        safe_to_retry = allow_retry and category in {"transport", "server"}
        technical = {
            "code": normalized_code,
            "action": action,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "raw_details": details,
        }
        user_message = message.strip() if message and message.strip() else self._CATEGORY_MESSAGES[category]
        return PresentedError(
            category=category,
            user_message=user_message,
            safe_to_retry=safe_to_retry,
            code=normalized_code,
            details=technical,
        )

    def _categorize(self, *, message: str, details: Any, code: str, status_code: int | None) -> str:
        if status_code == 401:
            return "session"
        if status_code == 403:
            return "permission_denied"
        if status_code == 404:
            return "not_found"
        if status_code in {400, 422}:
            return "validation"
        if status_code == 0 or code == "TRANSPORT_ERROR":
            return "transport"
        if status_code is not None and status_code >= 500:
            return "server"
        haystack = f"{message} {details} {code}".lower()
        if any(token in haystack for token in {"sesión expirada", "session"}):
            return "session"
        if any(token in haystack for token in {"requerid", "inválid", "invalid", "validation"}):
            return "validation"
        if any(token in haystack for token in {"permiso", "forbidden", "denied"}):
            return "permission_denied"
        if any(token in haystack for token in {"no se encontró", "not found"}):
            return "not_found"
        return "unknown"

    @staticmethod
    def _extract_code(details: Any) -> str | None:
        if isinstance(details, dict):
            raw = details.get("code")
            return str(raw) if raw else None
        return None
