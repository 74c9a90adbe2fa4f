from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any
from zoneinfo import ZoneInfo

from novabites_client_sdk import User

from novabites_pos.app.navigation import role_label
from novabites_pos.services.profile_service import ProfileService, ProfileServiceError
from novabites_pos.shared.date_utils import APP_TIMEZONE, format_date_local, parse_timestamp
from novabites_pos.ui.shared.notification_center import NotificationCenter
from novabites_pos.ui.shared.view_state import resolve_state

MISSING = "N/A"

CONTRACT_LABELS = {
    "INDEFINITE": "Termino Indefinido",
    "FIXED_TERM": "Termino Fijo",
    "INTERNSHIP": "Prácticas",
    "TEMPORARY": "Temporal",
    "PART_TIME": "Medio Tiempo",
}


def _text(value: Any) -> str:
    if value is None or value == "":
        return MISSING
    return str(getattr(value, "value", value))


def capitalize(text: str | None) -> str:
    if not text:
        return MISSING
    return text[:1].upper() + text[1:].lower()


def long_date(value: date | datetime | str | None, tz: ZoneInfo | str = APP_TIMEZONE) -> str:
    if value is None or value == "":
        return MISSING
    if isinstance(value, datetime) or isinstance(value, str):
        zone = tz if isinstance(tz, ZoneInfo) else ZoneInfo(tz)
        value = parse_timestamp(value).astimezone(zone).date()
    return format_date_local(value.isoformat())


def profile_fields(user: User, tz: ZoneInfo | str = APP_TIMEZONE) -> dict[str, str]:
    details = user.user_details
    contract = _text(details.type_contract if details else None)
    role = role_label(user.role) if user.role else MISSING
    return {
        "name": user.name or MISSING,
        "email": _text(user.email),
        "phone": _text(user.phone),
        "document": f"{user.type_id or ''} {user.doc_id or ''}".strip() or MISSING,
        "birth_date": long_date(details.birth_date if details else None, tz),
        "role": role,
        "store": user.store.name if user.store and user.store.name else MISSING,
        "status": _text(user.status),
        "position": capitalize(details.position if details else None),
        "contract": CONTRACT_LABELS.get(contract, contract),
        "city": _text(details.city if details else None),
        "address": _text(details.address if details else None),
        "created_at": long_date(user.created_at, tz),
        "updated_at": long_date(user.updated_at, tz),
    }


@dataclass
class ProfileView:
    service: ProfileService
    notifications: NotificationCenter
    user: User | None = None
    is_loading: bool = False
    error_message: str | None = None
    show_options: bool = False

    def load(self) -> bool:
        self.is_loading = True
        try:
            self.user = self.service.load_profile()
            self.error_message = None
            return True
        except ProfileServiceError as exc:
            self.error_message = exc.message
            self.notifications.error(f"Error al cargar los datos: {exc.message}")
            return False
        finally:
            self.is_loading = False

    def request_password_change(self) -> dict[str, Any]:
        self.notifications.info(
            "Solicitud de cambio de contraseña",
            "Se ha enviado una solicitud al administrador para cambiar tu contraseña.",
        )
        self.show_options = False
        return {"ok": True}

    def render(self) -> dict[str, Any]:
        state = resolve_state(is_loading=self.is_loading, error=self.error_message, has_data=self.user is not None)
        tz = self.service.session.config.tzinfo
        return {
            "state": state.status.value,
            "message": state.message,
            "fields": profile_fields(self.user, tz) if self.user else {},
        }
