from __future__ import annotations

import logging
import os
from typing import Optional

from pythonjsonlogger import jsonlogger

LOG_FORMAT_ENV = "SHEET_BROWSER_LOG_FORMAT"
LOG_LEVEL_ENV = "SHEET_BROWSER_LOG_LEVEL"

_PLAIN_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
_JSON_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def _level_from_env(default: int) -> int:
    raw = os.getenv(LOG_LEVEL_ENV)
    if not raw:
        return default
    level = logging.getLevelName(raw.upper())
    return level if isinstance(level, int) else default


def configure_logging(
        level: int = logging.INFO,
        force_format: Optional[str] = None,
) -> None:
    """
    Configure the root logger for the app.

    Modes:
    - JSON (default), one object per record with `extra` fields merged in
    - plain text (local development)

    Format selection order:
        1) force_format argument ("json" or "plain") if provided
        2) env var SHEET_BROWSER_LOG_FORMAT
        3) default = "json"

    SHEET_BROWSER_LOG_LEVEL (e.g. "DEBUG") overrides `level`.
    """

    if force_format is not None:
        format_mode = force_format.lower()
    else:
        format_mode = os.getenv(LOG_FORMAT_ENV, "json").lower()

    logger = logging.getLogger()
    logger.setLevel(_level_from_env(level))

    handler = logging.StreamHandler()

    if format_mode == "plain":
        formatter = logging.Formatter(_PLAIN_FORMAT)
    else:
        formatter = jsonlogger.JsonFormatter(_JSON_FORMAT)

    handler.setFormatter(formatter)

    # Replace any existing handlers to avoid duplicate logs
    logger.handlers.clear()
    logger.addHandler(handler)

    # Dash's dev server logs every callback POST at INFO
    logging.getLogger("werkzeug").setLevel(logging.WARNING)
