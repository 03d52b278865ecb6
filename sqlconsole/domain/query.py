"""Prefix-based statement classification for raw query text.

Only the leading keyword is inspected. ``"select 1"`` and
``"SELECTED garbage"`` both classify as ``SELECT``; nothing past the prefix is
parsed or validated.
"""

from __future__ import annotations

from typing import Any, Tuple

from .models import QueryClassification

_ALLOWED_PREFIXES: Tuple[QueryClassification, ...] = (
    QueryClassification.SELECT,
    QueryClassification.INSERT,
)


def _normalize(text: Any) -> str:
    if not isinstance(text, str):
        return ""
    return text.strip()


def is_non_empty(text: Any) -> bool:
    """Return True when ``text`` has content after trimming whitespace."""
    return len(_normalize(text)) > 0


def classify(text: Any) -> QueryClassification:
    """Classify ``text`` by its case-insensitive leading keyword."""
    upper = _normalize(text).upper()
    for kind in _ALLOWED_PREFIXES:
        if upper.startswith(kind.value):
            return kind
    return QueryClassification.REJECTED


def is_allowed(text: Any) -> bool:
    return classify(text) is not QueryClassification.REJECTED


class QueryValidator:
    """Stateless ``ValidatorPort`` implementation over the module functions."""

    def is_non_empty(self, text: str) -> bool:
        return is_non_empty(text)

    def classify(self, text: str) -> QueryClassification:
        return classify(text)

    def is_allowed(self, text: str) -> bool:
        return is_allowed(text)


__all__ = ["QueryValidator", "classify", "is_allowed", "is_non_empty"]
