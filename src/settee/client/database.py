"""
Database - handle for one database on the server.

Wraps the database-level endpoints (info, create/destroy, compaction, view
cleanup, view queries) and hands out ``Document`` and ``DesignDocument``
objects bound to the same connection.

Examples:
    >>> db = Database("recipes", connection)
    >>> db.compact("app", callback=lambda error, started: print(error, started))
    >>> design = db.design("app").view("by_title", "function(doc){emit(doc.title)}")
    >>> design.save()

Tags:
    database, compaction, views, settee
"""

from __future__ import annotations

import json
from typing import Any
from urllib.parse import quote

from settee.client.design import DesignDocument
from settee.client.document import DESIGN_PREFIX, Document
from settee.core.errors import InvalidDocumentIdError, NotFoundError
from settee.core.logging import get_logger
from settee.core.protocols import ConnectionProtocol
from settee.core.result import Callback, Err, Ok, Result, notify

logger = get_logger(__name__)

# View query parameters whose values the server expects as JSON
_JSON_PARAMS = frozenset({"key", "keys", "startkey", "endkey", "start_key", "end_key"})


def encode_view_params(params: dict[str, Any]) -> dict[str, str]:
    """Encode view query options the way the server reads them."""
    encoded = {}
    for key, value in params.items():
        if key in _JSON_PARAMS:
            encoded[key] = json.dumps(value)
        elif isinstance(value, bool):
            encoded[key] = "true" if value else "false"
        else:
            encoded[key] = str(value)
    return encoded


class Database:
    """One database, addressed by name through a connection."""

    def __init__(self, name: str, connection: ConnectionProtocol):
        self._name = name
        self._connection = connection

    def name(self) -> str:
        """Path segment of this database."""
        return quote(self._name, safe="")

    # -------------------------------------------------------------------------
    # Database lifecycle
    # -------------------------------------------------------------------------

    def info(self, callback: Callback | None = None) -> Result[dict[str, Any]]:
        return self._connection.request("GET", self.name(), callback=callback)

    def exists(self, callback: Callback | None = None) -> Result[bool]:
        """Check for the database; a 404 answer is ``Ok(False)``."""
        result = self._connection.request("HEAD", self.name())
        if result.is_err() and isinstance(result.error, NotFoundError):
            result = Ok(False)
        else:
            result = result.map(lambda _: True)
        return notify(result, callback)

    def create(self, callback: Callback | None = None) -> Result[dict[str, Any]]:
        return self._connection.request("PUT", self.name(), callback=callback)

    def destroy(self, callback: Callback | None = None) -> Result[dict[str, Any]]:
        return self._connection.request("DELETE", self.name(), callback=callback)

    # -------------------------------------------------------------------------
    # Maintenance
    # -------------------------------------------------------------------------

    def compact(
        self,
        design_name: str | None = None,
        callback: Callback | None = None,
    ) -> Result[Any]:
        """Compact the database, or the view indexes of one design document.

        ``design_name`` is the bare name (no ``_design/`` prefix). An empty
        or slash-containing name fails without a request.
        """
        if design_name is None:
            path = f"{self.name()}/_compact"
        elif not design_name or "/" in design_name:
            error = InvalidDocumentIdError(
                DESIGN_PREFIX + design_name,
                f"Cannot compact design {design_name!r}: invalid design name",
            ).with_context(database=self._name)
            logger.warning("compact_rejected", database=self._name, design=design_name)
            return notify(Err(error), callback)
        else:
            path = f"{self.name()}/_compact/{quote(design_name, safe='')}"

        logger.info("compact_requested", database=self._name, design=design_name)
        result = self._connection.request("POST", path, body={}).map(
            lambda data: bool(data.get("ok", False)) if isinstance(data, dict) else bool(data)
        )
        return notify(result, callback)

    def view_cleanup(self, callback: Callback | None = None) -> Result[Any]:
        """Remove index files no longer referenced by any design document."""
        return self._connection.request(
            "POST", f"{self.name()}/_view_cleanup", body={}, callback=callback
        )

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def view(
        self,
        design: str,
        view: str,
        callback: Callback | None = None,
        **params: Any,
    ) -> Result[dict[str, Any]]:
        """Query ``_design/<design>/_view/<view>`` with view options."""
        if design.startswith(DESIGN_PREFIX):
            design = design[len(DESIGN_PREFIX):]
        path = f"{self.name()}/{DESIGN_PREFIX}{quote(design, safe='')}/_view/{quote(view, safe='')}"
        return self._connection.request(
            "GET", path, params=encode_view_params(params), callback=callback
        )

    # -------------------------------------------------------------------------
    # Document factories
    # -------------------------------------------------------------------------

    def document(self, doc_id: str | None = None, revision: str | None = None) -> Document:
        return Document(doc_id, revision, connection=self._connection, database=self)

    def design(self, name: str, revision: str | None = None) -> DesignDocument:
        """Design document for a bare or prefixed name."""
        if not name.startswith(DESIGN_PREFIX):
            name = DESIGN_PREFIX + name
        return DesignDocument(name, revision, connection=self._connection, database=self)

    def __repr__(self) -> str:
        return f"Database({self._name!r})"
