"""Translate faults escaping a query port into ``Failure`` outcomes."""

from __future__ import annotations

from typing import Optional

from sqlconsole.adapters.api_errors import QueryTimeoutError
from sqlconsole.domain.models import Failure
from sqlconsole.domain.ports import UseCaseError


def map_transport_error(exc: BaseException, *, fallback: Optional[str] = None) -> Failure:
    """Map an exception raised during a transport call to a display-ready Failure.

    Args:
        exc: Exception raised by a ``QueryPort`` implementation or the offload
            runner.
        fallback: Message used when the exception carries no text.

    Returns:
        Failure: Outcome rendered in place of the missing response.
    """
    if isinstance(exc, UseCaseError):
        return Failure(exc.message or fallback or "Unexpected error.")
    if isinstance(exc, QueryTimeoutError):
        return Failure("Request timed out. Check connection.")
    return Failure(_compose_error_message(str(exc), fallback))


def _compose_error_message(text: str, fallback: Optional[str]) -> str:
    cleaned = (text or "").strip()
    if cleaned:
        return cleaned
    return fallback or "Unexpected error."


__all__ = ["map_transport_error"]
