from __future__ import annotations

import json
import logging
import os
import sys
from pathlib import Path
from typing import Any, TextIO

from .events import ActivityEntry

logger = logging.getLogger(__name__)

ENABLED_VALUES = {"1", "true", "yes", "on"}


def activity_enabled_from_env() -> bool:
    return os.getenv("NOVABITES_ACTIVITY_ENABLED", "0").strip().lower() in ENABLED_VALUES


def default_log_file(app_name: str) -> Path:
    return Path("artifacts") / "activity" / f"{app_name}.jsonl"


class ActivityLogger:
    """Appends one JSON line per user action to a local activity file."""

    def __init__(
        self,
        *,
        app_name: str,
        enabled: bool | None = None,
        log_file: str | Path | None = None,
        stdout_sink: bool = False,
        stdout_stream: TextIO | None = None,
    ) -> None:
        self.app_name = app_name
        self.enabled = activity_enabled_from_env() if enabled is None else enabled
        self.log_file = Path(log_file) if log_file else default_log_file(app_name)
        self.stdout_sink = stdout_sink
        self.stdout_stream = stdout_stream

    def _line(self, entry: ActivityEntry) -> str:
        payload = {**entry.to_dict(), "app_name": self.app_name}
        return json.dumps(payload, sort_keys=True, ensure_ascii=False)

    def emit(self, entry: ActivityEntry) -> bool:
        if not self.enabled:
            return False
        line = self._line(entry)
        self.log_file.parent.mkdir(parents=True, exist_ok=True)
        with self.log_file.open("a", encoding="utf-8") as fp:
            fp.write(line + "\n")
        if self.stdout_sink:
            stream = self.stdout_stream or sys.stdout
            stream.write(line + "\n")
            stream.flush()
        logger.debug("activity_recorded", extra={"activity_name": entry.name, "activity_context": entry.context})
        return True

    def recent(self, limit: int = 20) -> list[dict[str, Any]]:
        """Last ``limit`` entries of the activity file, oldest first."""
        if limit <= 0 or not self.log_file.exists():
            return []
        lines = [line for line in self.log_file.read_text(encoding="utf-8").splitlines() if line.strip()]
        return [json.loads(line) for line in lines[-limit:]]
