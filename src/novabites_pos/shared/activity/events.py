from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from typing import Any

from novabites_client_sdk.models import ActionType, LogContext, LogLevel

_FORBIDDEN_CONTEXT_KEYS = {
    "email",
    "password",
    "newpassword",
    "phone",
    "name",
    "address",
    "token",
    "authorization",
    "docid",
    "doc_id",
}


@dataclass(frozen=True)
class ActivityEntry:
    level: str
    context: str
    action: str
    name: str
    timestamp_utc: str
    entity_id: str | None = None
    user_id: str | None = None
    store_id: str | None = None
    duration_ms: int | None = None
    success: bool | None = None
    error_code: str | None = None
    details: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        payload = asdict(self)
        return {key: value for key, value in payload.items() if value is not None}


def _validate_details(details: dict[str, Any] | None) -> None:
    if not details:
        return
    illegal = sorted(key for key in details if key.lower() in _FORBIDDEN_CONTEXT_KEYS)
    if illegal:
        raise ValueError(f"PII-like keys are forbidden in activity details: {illegal}")


def build_entry(
    *,
    context: LogContext | str,
    action: ActionType | str,
    name: str,
    level: LogLevel | str = LogLevel.INFO,
    entity_id: str | None = None,
    user_id: str | None = None,
    store_id: str | None = None,
    duration_ms: int | None = None,
    success: bool | None = None,
    error_code: str | None = None,
    details: dict[str, Any] | None = None,
    now: datetime | None = None,
) -> ActivityEntry:
    # Enum construction rejects unknown values with ValueError.
    resolved_context = LogContext(context)
    resolved_action = ActionType(action)
    resolved_level = LogLevel(level)
    _validate_details(details)
    stamp = (now or datetime.now(timezone.utc)).isoformat()
    return ActivityEntry(
        level=resolved_level.value,
        context=resolved_context.value,
        action=resolved_action.value,
        name=name,
        timestamp_utc=stamp,
        entity_id=entity_id,
        user_id=user_id,
        store_id=store_id,
        duration_ms=duration_ms,
        success=success,
        error_code=error_code,
        details=details,
    )
