"""REST adapter for the remote SQL execution endpoint.

Reads are ``GET <base>/<percent-encoded query>``; writes are ``POST <base>``
with ``{"query": ...}``. Every failure mode (connectivity, timeout, non-2xx,
undecodable body) is returned as :class:`Failure`; nothing is raised to the
caller.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional
from urllib.parse import quote

from sqlconsole.domain.models import Failure, OperationKind, OperationOutcome, Success
from sqlconsole.domain.ports import QueryPort
from sqlconsole.domain.strings import MessageKey, Messages, load_messages

from .api_errors import QueryApiError, parse_json_body, raise_for_status
from .http_client import HttpConfig, JsonSession

LOGGER = logging.getLogger(__name__)


class QueryRestAdapter(QueryPort):
    """Execute SELECT/INSERT statements against one configured endpoint."""

    def __init__(
        self,
        base_url: str,
        *,
        request_timeout_s: int = 10,
        messages: Optional[Messages] = None,
    ) -> None:
        if not base_url or not str(base_url).strip():
            raise ValueError("QueryRestAdapter requires a base URL")
        self.base_url = str(base_url).strip().rstrip("/")
        self.session = JsonSession(HttpConfig(request_timeout_s=request_timeout_s))
        self.messages = messages or load_messages()

    # ---------- QueryPort ----------

    def execute_read(self, query: str) -> OperationOutcome:
        return self._execute(
            lambda: self.session.get(self._make_url(quote(query, safe=""))),
            context=f"GET {self.base_url}/<query>",
            operation=OperationKind.QUERY,
            fallback=self.messages[MessageKey.GENERIC_QUERY_FAILURE],
        )

    def execute_write(self, query: str) -> OperationOutcome:
        url = self.base_url
        return self._execute(
            lambda: self.session.post(url, json_body={"query": query}),
            context=f"POST {url}",
            operation=OperationKind.INSERT,
            fallback=self.messages[MessageKey.GENERIC_INSERT_FAILURE],
        )

    # ---------- Helpers ----------

    def _make_url(self, path: str) -> str:
        return f"{self.base_url}/{path}"

    def _execute(
        self,
        send: Callable[[], Any],
        *,
        context: str,
        operation: OperationKind,
        fallback: str,
    ) -> OperationOutcome:
        LOGGER.debug("%s", context)
        try:
            resp = send()
            payload = parse_json_body(resp, context=context)
            raise_for_status(resp, payload, context=context, fallback=fallback)
        except QueryApiError as exc:
            LOGGER.warning("%s failed (HTTP %s): %s", context, exc.status, exc)
            return Failure(str(exc) or fallback)
        except Exception as exc:
            LOGGER.exception("%s failed unexpectedly", context)
            return Failure(str(exc) or fallback)
        LOGGER.debug("%s -> HTTP %s", context, getattr(resp, "status_code", "?"))
        return Success(payload=payload, operation=operation)


__all__ = ["QueryRestAdapter"]
