from __future__ import annotations

import sys
from pathlib import Path

import pytest

BASE_DIR = Path(__file__).resolve().parents[1]
SRC_DIR = BASE_DIR / "src"

sys.path.insert(0, str(SRC_DIR))

NOVABITES_ENV_VARS = (
    "NOVABITES_ENV",
    "NOVABITES_API_BASE_URL",
    "NOVABITES_TIMEOUT_SECONDS",
    "NOVABITES_CONNECT_TIMEOUT_SECONDS",
    "NOVABITES_READ_TIMEOUT_SECONDS",
    "NOVABITES_RETRIES",
    "NOVABITES_RETRY_BACKOFF_SECONDS",
    "NOVABITES_MAX_CONNECTIONS",
    "NOVABITES_VERIFY_SSL",
    "NOVABITES_TIMEZONE",
    "NOVABITES_APP_URL",
    "NOVABITES_OUTPUT_DIR",
    "NOVABITES_SESSION_CHECK_SECONDS",
    "NOVABITES_ACTIVITY_ENABLED",
)


@pytest.fixture(autouse=True)
def _clean_novabites_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    for name in NOVABITES_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
