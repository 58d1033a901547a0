"""
Connection - HTTP transport to the database server.

Every server call in settee goes through ``Connection.request()``: one
HTTP request, JSON in and out, outcome returned as a ``Result`` and
delivered to an optional ``callback(error, result)`` exactly once.

Manifesto:
    - **One call, one completion:** no retries, no hidden second request
    - **Never raises for I/O:** transport and HTTP failures become typed
      ``SetteeError`` values
    - **Injectable transport:** pass an ``httpx`` transport (for example
      ``httpx.MockTransport``) to run without a server

Architecture:
    ::

        request(method, path, body, params, callback)
            │
            ├── httpx.TimeoutException   → Err(TimeoutError)
            ├── other httpx.HTTPError    → Err(NetworkError)
            ├── status >= 400            → Err(NotFoundError | ConflictError | ...)
            └── 2xx                      → Ok(decoded JSON)

Examples:
    >>> with Connection(SetteeSettings(url="http://localhost:5984")) as conn:
    ...     db = conn.database("recipes")
    ...     db.info().unwrap()["doc_count"]

Tags:
    http, transport, httpx, connection, settee

Doc-Types:
    - API Reference
"""

from __future__ import annotations

import json
from typing import Any

import httpx

from settee.client.database import Database
from settee.core.errors import (
    NetworkError,
    SetteeError,
    TimeoutError,
    categorize_error,
    error_for_status,
    is_retryable,
)
from settee.core.logging import get_logger
from settee.core.result import Callback, Err, Ok, Result, notify
from settee.core.settings import SetteeSettings

logger = get_logger(__name__)


def _decode(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except json.JSONDecodeError:
        return response.text


class Connection:
    """Client for one server, shared by its databases and documents."""

    def __init__(
        self,
        settings: SetteeSettings | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        self.settings = settings or SetteeSettings()
        self._client = httpx.Client(
            base_url=self.settings.base_url,
            auth=self.settings.auth,
            timeout=self.settings.timeout,
            headers={"Accept": "application/json"},
            transport=transport,
        )

    def request(
        self,
        method: str,
        path: str,
        body: Any = None,
        params: dict[str, Any] | None = None,
        callback: Callback | None = None,
    ) -> Result[Any]:
        """Issue one request and complete ``callback(error, result)`` once."""
        return notify(self._send(method.upper(), path.lstrip("/"), body, params), callback)

    def _send(
        self,
        method: str,
        path: str,
        body: Any,
        params: dict[str, Any] | None,
    ) -> Result[Any]:
        error: SetteeError
        try:
            response = self._client.request(
                method,
                path,
                json=body if body is not None else None,
                params=params or None,
            )
        except httpx.TimeoutException as exc:
            error = TimeoutError(f"{method} {path} timed out", cause=exc)
        except httpx.HTTPError as exc:
            error = NetworkError(f"{method} {path} failed: {exc}", cause=exc)
        else:
            payload = _decode(response)
            if response.status_code < 400:
                logger.debug("request_completed", method=method, path=path, status=response.status_code)
                return Ok(payload)
            fields = payload if isinstance(payload, dict) else {}
            error = error_for_status(
                response.status_code,
                error=fields.get("error"),
                reason=fields.get("reason"),
            )

        error.with_context(method=method, path=path)
        logger.warning(
            "request_failed",
            method=method,
            path=path,
            error_type=type(error).__name__,
            category=categorize_error(error).value,
            retryable=is_retryable(error),
            message=str(error),
        )
        return Err(error)

    def info(self, callback: Callback | None = None) -> Result[dict[str, Any]]:
        """Server welcome document (version, vendor)."""
        return self.request("GET", "", callback=callback)

    def database(self, name: str) -> Database:
        return Database(name, self)

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> Connection:
        return self

    def __exit__(self, *args) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"Connection({self.settings.url!r})"
