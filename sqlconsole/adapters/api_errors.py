from __future__ import annotations

from typing import Any, Optional


class QueryApiError(RuntimeError):
    """Base class for query endpoint failures."""

    def __init__(
        self,
        message: str,
        *,
        status: Optional[int] = None,
        payload: Any = None,
        context: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.status = status
        self.payload = payload
        self.context = context


class QueryClientError(QueryApiError):
    """HTTP 4xx from the query endpoint."""

    def __init__(
        self,
        message: str,
        *,
        status: int,
        payload: Any = None,
        context: Optional[str] = None,
    ) -> None:
        super().__init__(message, status=status, payload=payload, context=context)


class QueryServerError(QueryApiError):
    """HTTP 5xx from the query endpoint."""

    def __init__(
        self,
        message: str,
        *,
        status: int,
        payload: Any = None,
        context: Optional[str] = None,
    ) -> None:
        super().__init__(message, status=status, payload=payload, context=context)


class QueryTimeoutError(QueryApiError):
    """Connect or read timeout."""

    def __init__(
        self,
        message: str,
        *,
        context: Optional[str] = None,
    ) -> None:
        super().__init__(message, context=context)


class QueryConnectionError(QueryApiError):
    """Endpoint unreachable: DNS failure, refused or reset connection."""

    def __init__(
        self,
        message: str,
        *,
        context: Optional[str] = None,
    ) -> None:
        super().__init__(message, context=context)


class QueryDecodeError(QueryApiError):
    """Response body could not be decoded as JSON."""


def parse_json_body(resp: Any, *, context: str) -> Any:
    """Decode ``resp`` as JSON or raise :class:`QueryDecodeError`."""
    status = getattr(resp, "status_code", None)
    try:
        return resp.json()
    except ValueError as exc:
        raise QueryDecodeError(
            f"Invalid JSON response: {exc}",
            status=status,
            payload=snippet(resp),
            context=context,
        ) from exc


def snippet(resp: Any, *, limit: int = 400) -> Optional[str]:
    text = getattr(resp, "text", "")
    if not text:
        return None
    return text[:limit]


def extract_error_message(payload: Any) -> Optional[str]:
    """Return the server-supplied ``error`` text, if any.

    Strings are used verbatim (trimmed); nested objects contribute their
    ``message`` field; other scalars are stringified.
    """
    if not isinstance(payload, dict) or "error" not in payload:
        return None
    value = payload.get("error")
    if value is None:
        return None
    if isinstance(value, str):
        return value.strip() or None
    if isinstance(value, dict):
        message = value.get("message")
        if isinstance(message, str) and message.strip():
            return message.strip()
    return stringify(value)


def stringify(data: Any, *, limit: int = 200) -> Optional[str]:
    if data is None:
        return None
    if isinstance(data, str):
        cleaned = data.strip()
        return cleaned[:limit] if cleaned else None
    if isinstance(data, list):
        parts = []
        for item in data:
            text = stringify(item, limit=limit)
            if text:
                parts.append(text)
            if len(parts) >= 3:
                break
        if not parts:
            return None
        joined = "; ".join(parts)
        return joined[:limit]
    if isinstance(data, dict):
        pairs = []
        for key, value in list(data.items())[:4]:
            value_text = stringify(value, limit=limit)
            if value_text:
                pairs.append(f"{key}={value_text}")
        if not pairs:
            return None
        joined = ", ".join(pairs)
        return joined[:limit]
    text = str(data).strip()
    return text[:limit] if text else None


def raise_for_status(resp: Any, payload: Any, *, context: str, fallback: str) -> None:
    """Raise the typed error for a non-2xx ``resp``; no-op on success.

    The error message is the body's ``error`` field when present, otherwise
    ``fallback``.
    """
    status = int(getattr(resp, "status_code", 0) or 0)
    if 200 <= status < 300:
        return
    message = extract_error_message(payload) or fallback
    if 400 <= status < 500:
        raise QueryClientError(message, status=status, payload=payload, context=context)
    if status >= 500:
        raise QueryServerError(message, status=status, payload=payload, context=context)
    raise QueryApiError(message, status=status, payload=payload, context=context)


__all__ = [
    "QueryApiError",
    "QueryClientError",
    "QueryConnectionError",
    "QueryDecodeError",
    "QueryServerError",
    "QueryTimeoutError",
    "extract_error_message",
    "parse_json_body",
    "raise_for_status",
    "snippet",
    "stringify",
]
