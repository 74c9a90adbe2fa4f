from __future__ import annotations

import logging
import sys
from typing import Sequence

from novabites_client_sdk import load_config
from novabites_client_sdk.config import ConfigError

from novabites_pos.app.bootstrap import PosAppBootstrap
from novabites_pos.app.state import Route
from novabites_pos.config import PosAppConfigError, load_pos_app_config

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

logger = logging.getLogger(__name__)


def run(argv: Sequence[str] | None = None) -> int:
    """Start the POS shell; an optional first argument names the .env file to read."""
    logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
    args = list(sys.argv[1:] if argv is None else argv)
    env_file = args[0] if args else None
    try:
        config = load_config(env_file)
        app_config = load_pos_app_config(env_file)
    except (ConfigError, PosAppConfigError) as exc:
        logger.error("startup_config_invalid", extra={"error": str(exc)})
        print(f"Configuración inválida: {exc}", file=sys.stderr)
        return 2

    bootstrap = PosAppBootstrap(config, app_config=app_config)
    result = bootstrap.start()
    if result.route is Route.SIGNIN:
        print("NovaBites POS listo: inicia sesión para continuar.")
    else:
        options = ", ".join(option["title"] for option in bootstrap.dashboard_options())
        print(f"NovaBites POS listo: {options}.")
    return 0


if __name__ == "__main__":
    raise SystemExit(run())
