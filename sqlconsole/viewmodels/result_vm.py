"""Result projection from operation outcomes to renderable view objects.

Call context:
    ``DispatchQuery`` calls :class:`ResultPresenter` for every state
    transition and forwards the returned view object to the render target.
    The NiceGUI page paints these objects; nothing here knows about widgets.

All text placed in a view is HTML-escaped, so a renderer may insert it as
markup without risking injection.
"""

from __future__ import annotations

import html
import json
from dataclasses import dataclass
from typing import Any, Optional, Tuple

from sqlconsole.domain.models import (
    Failure,
    OperationKind,
    OperationOutcome,
    RejectionReason,
    Success,
    as_tabular,
)
from sqlconsole.domain.strings import MessageKey, Messages, load_messages


@dataclass(frozen=True)
class TableView:
    """Tabular success view: one header row and string-only body cells."""
    title: str
    banner: str
    headers: Tuple[str, ...]
    rows: Tuple[Tuple[str, ...], ...]


@dataclass(frozen=True)
class DumpView:
    """Opaque success view carrying the pretty-printed JSON payload."""
    title: str
    banner: str
    text: str


@dataclass(frozen=True)
class ErrorView:
    title: str
    message: str


@dataclass(frozen=True)
class LoadingView:
    title: str
    message: str


def escape(text: Any) -> str:
    return html.escape(str(text), quote=True)


def cell_text(value: Any) -> str:
    """Convert one JSON scalar to its display string (unescaped)."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False)
    return str(value)


class ResultPresenter:
    """Map outcomes, rejections, and loading into view objects."""

    def __init__(self, messages: Optional[Messages] = None) -> None:
        self.messages = messages or load_messages()

    def present(self, outcome: OperationOutcome) -> object:
        if isinstance(outcome, Failure):
            return self.error(outcome.message)
        if isinstance(outcome, Success):
            return self._success(outcome)
        raise TypeError(f"Unsupported outcome type: {type(outcome).__name__}")

    def rejection(self, reason: RejectionReason) -> ErrorView:
        key = MessageKey.EMPTY_QUERY if reason is RejectionReason.EMPTY else MessageKey.DISALLOWED_TYPE
        return self.error(self.messages[key])

    def loading(self) -> LoadingView:
        return LoadingView(
            title=escape(self.messages[MessageKey.LOADING_TITLE]),
            message=escape(self.messages[MessageKey.LOADING_MESSAGE]),
        )

    def error(self, message: str) -> ErrorView:
        return ErrorView(title=escape(self.messages[MessageKey.ERROR_TITLE]), message=escape(message))

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _label(self, operation: OperationKind) -> str:
        key = MessageKey.LABEL_INSERT if operation is OperationKind.INSERT else MessageKey.LABEL_QUERY
        return self.messages[key]

    def _success(self, outcome: Success) -> object:
        label = self._label(outcome.operation)
        title = escape(f"{label} {self.messages[MessageKey.RESULTS_TITLE]}")
        banner = escape(f"{label} {self.messages[MessageKey.SUCCESS_MESSAGE]}")
        table = as_tabular(outcome.payload)
        if table is None:
            return DumpView(title=title, banner=banner, text=escape(self._dump(outcome.payload)))
        rows = tuple(
            tuple(escape(cell_text(row[column])) for column in table.columns)
            for row in table.rows
        )
        return TableView(
            title=title,
            banner=banner,
            headers=tuple(escape(column) for column in table.columns),
            rows=rows,
        )

    @staticmethod
    def _dump(payload: Any) -> str:
        try:
            return json.dumps(payload, indent=2, ensure_ascii=False)
        except (TypeError, ValueError):
            return repr(payload)


__all__ = [
    "DumpView",
    "ErrorView",
    "LoadingView",
    "ResultPresenter",
    "TableView",
    "cell_text",
    "escape",
]
