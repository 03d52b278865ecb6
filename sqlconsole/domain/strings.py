"""Display string tables keyed by :class:`MessageKey`.

Call context:
    ``load_messages`` is called once by the runtime composition and the
    resulting table is injected into the REST adapter (fallback failure
    messages), the result presenter (titles and fixed rejection messages), and
    the NiceGUI page (button captions). Core logic never embeds these texts.
"""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Dict, Mapping, Optional


class MessageKey(Enum):
    EMPTY_QUERY = "msgEmptyQuery"
    DISALLOWED_TYPE = "msgDisallowedType"
    GENERIC_QUERY_FAILURE = "msgGenericQueryFailure"
    GENERIC_INSERT_FAILURE = "msgGenericInsertFailure"
    LABEL_QUERY = "labelQuery"
    LABEL_INSERT = "labelInsert"

    PAGE_TITLE = "pageTitle"
    INPUT_LABEL = "inputLabel"
    INPUT_PLACEHOLDER = "inputPlaceholder"
    BTN_SUBMIT = "btnSubmit"
    BTN_EXECUTING = "btnExecuting"
    BTN_INSERT = "btnInsert"
    BTN_INSERTING = "btnInserting"
    RESULTS_TITLE = "resultsTitle"
    ERROR_TITLE = "errorTitle"
    ERROR_PREFIX = "errorPrefix"
    LOADING_TITLE = "loadingTitle"
    LOADING_MESSAGE = "loadingMessage"
    SUCCESS_LABEL = "labelSuccess"
    SUCCESS_MESSAGE = "successMessage"


Messages = Mapping[MessageKey, str]

_EN: Dict[MessageKey, str] = {
    MessageKey.EMPTY_QUERY: "Please enter a SQL query",
    MessageKey.DISALLOWED_TYPE: "Only SELECT or INSERT queries are allowed",
    MessageKey.GENERIC_QUERY_FAILURE: "Query execution failed",
    MessageKey.GENERIC_INSERT_FAILURE: "Insert operation failed",
    MessageKey.LABEL_QUERY: "Query",
    MessageKey.LABEL_INSERT: "Insert",
    MessageKey.PAGE_TITLE: "SQL Query Interface",
    MessageKey.INPUT_LABEL: "Enter SQL Query:",
    MessageKey.INPUT_PLACEHOLDER: "Enter your SQL query here...\nExample: SELECT * FROM patient;",
    MessageKey.BTN_SUBMIT: "Submit Query",
    MessageKey.BTN_EXECUTING: "Executing...",
    MessageKey.BTN_INSERT: "Insert Mock data",
    MessageKey.BTN_INSERTING: "Inserting...",
    MessageKey.RESULTS_TITLE: "Results",
    MessageKey.ERROR_TITLE: "Error",
    MessageKey.ERROR_PREFIX: "Error:",
    MessageKey.LOADING_TITLE: "Executing Query...",
    MessageKey.LOADING_MESSAGE: "Please wait while your query is being processed.",
    MessageKey.SUCCESS_LABEL: "Success!",
    MessageKey.SUCCESS_MESSAGE: "executed successfully.",
}

_TABLES: Dict[str, Dict[MessageKey, str]] = {"en": _EN}

DEFAULT_LANGUAGE = "en"


def available_languages() -> tuple[str, ...]:
    return tuple(sorted(_TABLES))


def load_messages(
    language: str = DEFAULT_LANGUAGE,
    *,
    overrides: Optional[Mapping[str, str]] = None,
) -> Messages:
    """Return a read-only message table for ``language``.

    Args:
        language: Table identifier such as ``"en"``.
        overrides: Optional mapping of ``MessageKey`` values (``"msgEmptyQuery"``
            style) to replacement text, applied on top of the base table.

    Raises:
        ValueError: If the language or an override key is unknown.
    """
    key = (language or DEFAULT_LANGUAGE).strip().lower()
    if key not in _TABLES:
        raise ValueError(f"Unsupported language '{language}'.")
    table = dict(_TABLES[key])
    for raw_key, text in (overrides or {}).items():
        try:
            table[MessageKey(raw_key)] = str(text)
        except ValueError as exc:
            raise ValueError(f"Unknown message key '{raw_key}'.") from exc
    return MappingProxyType(table)


__all__ = [
    "DEFAULT_LANGUAGE",
    "MessageKey",
    "Messages",
    "available_languages",
    "load_messages",
]
