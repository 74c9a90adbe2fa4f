from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv


class PosAppConfigError(ValueError):
    """Raised when a POS app setting cannot be parsed."""


@dataclass(frozen=True)
class PosAppConfig:
    output_dir: Path
    session_check_seconds: float = 30.0
    activity_enabled: bool = False


def load_pos_app_config(env_file: str | None = None) -> PosAppConfig:
    load_dotenv(env_file)

    output_dir = Path(os.getenv("NOVABITES_OUTPUT_DIR", "facturas")).expanduser()
    raw_interval = os.getenv("NOVABITES_SESSION_CHECK_SECONDS", "30")
    try:
        interval = float(raw_interval)
    except ValueError as exc:
        raise PosAppConfigError(f"NOVABITES_SESSION_CHECK_SECONDS must be a number, got {raw_interval!r}.") from exc
    if interval <= 0:
        raise PosAppConfigError("NOVABITES_SESSION_CHECK_SECONDS must be greater than zero.")

    activity = os.getenv("NOVABITES_ACTIVITY_ENABLED", "0").strip().lower() in {"1", "true", "yes", "on"}
    return PosAppConfig(output_dir=output_dir, session_check_seconds=interval, activity_enabled=activity)
