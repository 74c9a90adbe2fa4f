from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from novabites_pos.ui.shared.error_presenter import ErrorPresenter

DEFAULT_DURATION_MS = 3000


@dataclass
class NotificationCenter:
    """Toast queue shared by every screen of the session."""

    messages: list[dict[str, Any]] = field(default_factory=list)

    def push(
        self,
        *,
        level: str,
        title: str,
        message: str | None = None,
        details: dict[str, Any] | None = None,
        duration_ms: int = DEFAULT_DURATION_MS,
    ) -> dict[str, Any]:
        payload = {
            "level": level,
            "title": title,
            "message": message,
            "details": details or {},
            "duration_ms": duration_ms,
        }
        self.messages.append(payload)
        return payload

    def success(self, title: str, message: str | None = None, *, duration_ms: int = DEFAULT_DURATION_MS) -> dict[str, Any]:
        return self.push(level="success", title=title, message=message, duration_ms=duration_ms)

    def error(self, title: str, message: str | None = None, *, details: dict[str, Any] | None = None) -> dict[str, Any]:
        return self.push(level="error", title=title, message=message, details=details)

    def failure(self, title: str, error: Exception, *, action: str, allow_retry: bool = False) -> dict[str, Any]:
        """Error toast for a failed service call; the description is the user-facing message."""
        presented = ErrorPresenter().present(
            message=str(error),
            details=getattr(error, "details", None),
            action=action,
            code=getattr(error, "code", None),
            status_code=getattr(error, "status_code", None),
            allow_retry=allow_retry,
        )
        return self.error(
            title,
            presented.user_message,
            details={
                "category": presented.category,
                "code": presented.code,
                "safe_to_retry": presented.safe_to_retry,
            },
        )

    def info(self, title: str, message: str | None = None) -> dict[str, Any]:
        return self.push(level="info", title=title, message=message)

    def last(self) -> dict[str, Any] | None:
        return self.messages[-1] if self.messages else None

    def clear(self) -> None:
        self.messages.clear()

    def render(self) -> dict[str, Any]:
        return {"count": len(self.messages), "messages": list(self.messages)}
