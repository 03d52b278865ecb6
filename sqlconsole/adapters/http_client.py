"""Shared HTTP transport utilities for the query adapter.

This module provides a thin wrapper around ``requests.Session`` so the
adapter has one place for timeout policy and header construction.

Dependencies:
    - ``requests`` for network I/O.
    - ``sqlconsole.adapters.api_errors`` for typed transport failures.

Call context:
    - Constructed by ``sqlconsole.adapters.query_rest.QueryRestAdapter``.
    - Used only inside adapter methods; use cases interact through ports.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests
from requests import exceptions as req_exc

from sqlconsole.adapters.api_errors import (
    QueryApiError,
    QueryConnectionError,
    QueryTimeoutError,
)


@dataclass
class HttpConfig:
    """Timeout configuration for adapter HTTP calls.

    Attributes:
        request_timeout_s: Timeout in seconds for each request.
    """
    request_timeout_s: int = 10


class JsonSession:
    """Single-attempt requests wrapper for JSON endpoints.

    Failed attempts are never retried; a fault is terminal for the dispatch
    cycle that issued it.
    """

    def __init__(self, cfg: HttpConfig) -> None:
        """Create the session.

        Args:
            cfg: Shared timeout settings.

        Side Effects:
            Creates a persistent ``requests.Session`` object.
        """
        self.session = requests.Session()
        self.cfg = cfg

    def _headers(self, json_body: bool = False) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if json_body:
            headers["Content-Type"] = "application/json"
        return headers

    def get(self, url: str, *, timeout: Optional[int] = None) -> requests.Response:
        """Send a GET request.

        Raises:
            QueryTimeoutError: On connect or read timeout.
            QueryConnectionError: When the endpoint is unreachable or refuses.
            QueryApiError: On any other ``requests`` failure.
        """
        context = f"GET {url}"
        try:
            return self.session.get(
                url,
                headers=self._headers(),
                timeout=timeout or self.cfg.request_timeout_s,
            )
        except req_exc.Timeout as exc:
            raise QueryTimeoutError(f"Timeout contacting {url}", context=context) from exc
        except req_exc.ConnectionError as exc:
            raise QueryConnectionError(f"Could not connect to {url}: {exc}", context=context) from exc
        except req_exc.RequestException as exc:
            raise QueryApiError(str(exc), context=context) from exc

    def post(
        self,
        url: str,
        *,
        json_body: Optional[Dict[str, Any]] = None,
        timeout: Optional[int] = None,
    ) -> requests.Response:
        """Send a JSON POST request.

        Raises:
            QueryTimeoutError: On connect or read timeout.
            QueryConnectionError: When the endpoint is unreachable or refuses.
            QueryApiError: On any other ``requests`` failure.

        Side Effects:
            Serializes ``json_body`` with ``json.dumps`` before sending.
        """
        context = f"POST {url}"
        data = None if json_body is None else json.dumps(json_body)
        try:
            return self.session.post(
                url,
                data=data,
                headers=self._headers(json_body=json_body is not None),
                timeout=timeout or self.cfg.request_timeout_s,
            )
        except req_exc.Timeout as exc:
            raise QueryTimeoutError(f"Timeout contacting {url}", context=context) from exc
        except req_exc.ConnectionError as exc:
            raise QueryConnectionError(f"Could not connect to {url}: {exc}", context=context) from exc
        except req_exc.RequestException as exc:
            raise QueryApiError(str(exc), context=context) from exc


__all__ = ["HttpConfig", "JsonSession"]
