"""Console logging for the SQL console process.

One stream handler on the root logger, a terse format suited to a terminal
running ``sqlconsole-web``, and two environment overrides:

  - ``SQLCONSOLE_LOG_LEVEL``: level name (``debug``, ``WARNING``) or number
  - ``SQLCONSOLE_DEBUG``: truthy -> DEBUG

An explicit level wins over the debug flag; either wins over the browser's
"debug logging" preference.
"""

from __future__ import annotations

import logging
import os
from typing import Optional

LOG_LEVEL_ENV = "SQLCONSOLE_LOG_LEVEL"
DEBUG_ENV = "SQLCONSOLE_DEBUG"

CONSOLE_FORMAT = "%(asctime)s %(levelname)-7s [%(name)s] %(message)s"
CONSOLE_DATEFMT = "%H:%M:%S"

# Loggers whose level tracks the console level (query URLs, dispatch outcomes).
CONSOLE_LOGGERS = (
    "sqlconsole.adapters.query_rest",
    "sqlconsole.usecases.dispatch_query",
)
# Third-party loggers that stay at WARNING unless DEBUG is requested.
QUIET_LOGGERS = ("urllib3", "requests")


def _coerce_level(value: int | str | None, fallback: int) -> int:
    if isinstance(value, int):
        return value
    text = (value or "").strip()
    if not text:
        return fallback
    try:
        return int(text)
    except ValueError:
        pass
    named = logging.getLevelName(text.upper())
    return named if isinstance(named, int) else fallback


def _env_level() -> Optional[int]:
    explicit = os.getenv(LOG_LEVEL_ENV, "").strip()
    if explicit:
        return _coerce_level(explicit, logging.INFO)
    if os.getenv(DEBUG_ENV, "").strip().lower() in {"1", "true", "yes", "on"}:
        return logging.DEBUG
    return None


def _set_levels(level: int) -> None:
    logging.getLogger().setLevel(level)
    for name in CONSOLE_LOGGERS:
        logging.getLogger(name).setLevel(level)
    quiet = level if level <= logging.DEBUG else logging.WARNING
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(quiet)


def configure_root(default_level: int | str = logging.INFO) -> int:
    """Install the console handler once and return the effective level."""
    env_level = _env_level()
    level = env_level if env_level is not None else _coerce_level(default_level, logging.INFO)
    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(CONSOLE_FORMAT, CONSOLE_DATEFMT))
        root.addHandler(handler)
    _set_levels(level)
    return level


def apply_ui_preferences(debug_enabled: bool) -> int:
    """Apply the browser's debug toggle unless the environment pins a level."""
    env_level = _env_level()
    if env_level is None:
        env_level = logging.DEBUG if debug_enabled else logging.INFO
    _set_levels(env_level)
    return env_level


def env_requests_debug() -> bool:
    """True when the environment forces DEBUG (or finer) logging."""
    env_level = _env_level()
    return env_level is not None and env_level <= logging.DEBUG


__all__ = [
    "CONSOLE_LOGGERS",
    "DEBUG_ENV",
    "LOG_LEVEL_ENV",
    "QUIET_LOGGERS",
    "apply_ui_preferences",
    "configure_root",
    "env_requests_debug",
]
