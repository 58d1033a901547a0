"""
Shared pytest fixtures for settee tests.

This module provides:
- A recording ``httpx.MockTransport`` and a ``Connection`` built on it
- Mock collaborators (connection, database) for accessor tests
- Fresh design documents bound to those mocks

Usage:
    def test_something(design, mock_database):
        design.compact()
        mock_database.compact.assert_called_once()
"""

import json
import sys
from pathlib import Path
from typing import Any, Callable
from unittest.mock import MagicMock

import httpx
import pytest

# Ensure settee package is importable
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from settee.client import Connection, DesignDocument
from settee.core.result import Ok
from settee.core.settings import SetteeSettings


# =============================================================================
# HTTP fakes
# =============================================================================


class RecordingServer:
    """
    Programmable stand-in for the database server.

    Routes are keyed by ``(method, path)``; each value is either a
    ``(status, json_body)`` tuple or a callable taking the request.
    Every request is recorded for later assertions.
    """

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], Any] = {}
        self.requests: list[httpx.Request] = []

    def on(self, method: str, path: str, status: int = 200, body: Any = None) -> None:
        self.routes[(method, path)] = (status, body)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"error": "not_found", "reason": "missing"})
        if callable(route):
            return route(request)
        status, body = route
        if body is None:
            return httpx.Response(status)
        return httpx.Response(status, json=body)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Any:
        return json.loads(self.last.content)


@pytest.fixture
def server() -> RecordingServer:
    return RecordingServer()


@pytest.fixture
def connection(server: RecordingServer) -> Connection:
    conn = Connection(
        SetteeSettings(url="http://couch.test:5984"),
        transport=httpx.MockTransport(server.handler),
    )
    yield conn
    conn.close()


# =============================================================================
# Collaborator mocks
# =============================================================================


@pytest.fixture
def mock_connection() -> MagicMock:
    conn = MagicMock()
    conn.request.return_value = Ok({"ok": True})
    return conn


@pytest.fixture
def mock_database() -> MagicMock:
    db = MagicMock()
    db.name.return_value = "recipes"
    db.compact.return_value = Ok(True)
    return db


@pytest.fixture
def design(mock_connection: MagicMock, mock_database: MagicMock) -> DesignDocument:
    """Fresh ``_design/app`` document with an empty body."""
    return DesignDocument("_design/app", connection=mock_connection, database=mock_database)


@pytest.fixture
def callback_log() -> tuple[list[tuple[Any, Any]], Callable[[Any, Any], None]]:
    """A callback that records ``(error, result)`` pairs."""
    calls: list[tuple[Any, Any]] = []

    def callback(error: Any, result: Any) -> None:
        calls.append((error, result))

    return calls, callback
