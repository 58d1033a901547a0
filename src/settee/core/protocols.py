"""
Protocol definitions for the collaborators a document talks to.

Documents and design documents only depend on these shapes, so tests (and
alternative transports) can hand in any object that matches.

Architecture:
    ::

        protocols.py
        ├── ConnectionProtocol  — request(method, path, ...) -> Result
        └── DatabaseProtocol    — name(), compact(design_name, callback)

    Consumers:
        client/document.py, client/design.py, client/database.py

Tags:
    protocol, connection, database, settee, contracts
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from settee.core.result import Callback, Result


@runtime_checkable
class ConnectionProtocol(Protocol):
    """
    One HTTP-style call per ``request``.

    ``callback(error, result)`` is invoked exactly once when supplied; the
    same outcome is returned as a ``Result``. Transport and server failures
    never raise.
    """

    def request(
        self,
        method: str,
        path: str,
        body: Any = None,
        params: dict[str, Any] | None = None,
        callback: Callback | None = None,
    ) -> Result[Any]:
        ...


@runtime_checkable
class DatabaseProtocol(Protocol):
    """The parts of a database handle that documents call into."""

    def name(self) -> str:
        """Path segment of the database."""
        ...

    def compact(
        self,
        design_name: str | None = None,
        callback: Callback | None = None,
    ) -> Result[Any]:
        """Compact the database, or one design document's view indexes."""
        ...


__all__ = ["ConnectionProtocol", "DatabaseProtocol"]
