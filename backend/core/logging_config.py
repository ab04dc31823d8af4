"""Logging setup, called once from the application lifespan."""

import logging
import sys

from core.config import settings


def setup_logging() -> None:
    root = logging.getLogger()
    root.setLevel(_parse_level(settings.log_level))

    # uvicorn usually installs a handler, scripts and tests may not
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("%(levelname)-8s %(name)s: %(message)s"))
        root.addHandler(handler)

    if not settings.database_echo:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


def _parse_level(value: str) -> int:
    level = logging.getLevelName(value.strip().upper())
    return level if isinstance(level, int) else logging.INFO
