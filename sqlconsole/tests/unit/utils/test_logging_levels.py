from __future__ import annotations

import logging
from typing import Iterator

import pytest

from sqlconsole.utils import logging as console_logging


@pytest.fixture(autouse=True)
def _restore_loggers(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    monkeypatch.delenv(console_logging.LOG_LEVEL_ENV, raising=False)
    monkeypatch.delenv(console_logging.DEBUG_ENV, raising=False)
    names = ("",) + console_logging.CONSOLE_LOGGERS + console_logging.QUIET_LOGGERS
    saved = {name: logging.getLogger(name).level for name in names}
    root = logging.getLogger()
    handlers = list(root.handlers)
    yield
    root.handlers[:] = handlers
    for name, level in saved.items():
        logging.getLogger(name).setLevel(level)


@pytest.mark.parametrize("raw", ["²", "١٢", "verbose", "  "])
def test_unparseable_env_level_falls_back_to_info(monkeypatch: pytest.MonkeyPatch, raw: str) -> None:
    monkeypatch.setenv(console_logging.LOG_LEVEL_ENV, raw)

    assert console_logging.configure_root() == logging.INFO
    assert logging.getLogger().level == logging.INFO


def test_env_level_accepts_names_and_numbers(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(console_logging.LOG_LEVEL_ENV, "warning")
    assert console_logging.configure_root() == logging.WARNING

    monkeypatch.setenv(console_logging.LOG_LEVEL_ENV, "15")
    assert console_logging.configure_root() == 15


def test_debug_flag_forces_debug(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(console_logging.DEBUG_ENV, "yes")

    assert console_logging.configure_root() == logging.DEBUG
    assert console_logging.env_requests_debug() is True
    assert console_logging.apply_ui_preferences(False) == logging.DEBUG


def test_console_loggers_follow_ui_toggle_and_http_stays_quiet() -> None:
    console_logging.configure_root()

    console_logging.apply_ui_preferences(True)
    assert logging.getLogger("sqlconsole.adapters.query_rest").level == logging.DEBUG
    assert logging.getLogger("urllib3").level == logging.DEBUG

    console_logging.apply_ui_preferences(False)
    assert logging.getLogger("sqlconsole.usecases.dispatch_query").level == logging.INFO
    assert logging.getLogger("urllib3").level == logging.WARNING
    assert console_logging.env_requests_debug() is False
