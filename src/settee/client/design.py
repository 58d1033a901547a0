"""
DesignDocument - accessors for the query code stored in a design document.

A design document keeps executable artifacts as named fields of its body:

==========================  ==============================================
Section                     Shape
==========================  ==============================================
``views``                   ``{name: {"map": str, "reduce"?: str}}``
``lists``                   ``{name: str}``
``shows``                   ``{name: str}``
``rewrites``                ``[{"from", "to", "method"?, "query"?}, ...]``
``validate_doc_update``     ``str`` or absent
==========================  ==============================================

Every field has explicit ``get_*``/``set_*``/``delete_*`` operations, and a
dual-mode accessor (``view()``, ``list()``, ``show()``, ``rewrites()``,
``validate_handler()``) that reads when the value argument is omitted and
writes when it is given. Writing ``None`` deletes the entry. Writes return
the document so calls chain, and mark it dirty; nothing is sent until
``save()``.

Manifesto:
    - **Presence decides mode:** an omitted argument reads, an explicit
      ``None`` deletes
    - **No schema validation:** caller-supplied shapes are stored as given
    - **Rewrites are a list:** reads never return ``None``

Examples:
    >>> design = DesignDocument("_design/people")
    >>> design.view("by_name", "function(doc){emit(doc.name,doc)}").view("by_name")
    {'map': 'function(doc){emit(doc.name,doc)}'}
    >>> design.view("by_name", None).view("by_name") is None
    True
    >>> design.rewrites()
    []
    >>> design.name
    'people'

Tags:
    design-document, views, map-reduce, accessors, settee

Doc-Types:
    - API Reference
"""

from __future__ import annotations

from typing import Any

from settee.client.body import UNSET
from settee.client.document import DESIGN_PREFIX, Document, document_path
from settee.core.errors import ConfigError, InvalidDocumentIdError
from settee.core.logging import get_logger
from settee.core.protocols import ConnectionProtocol, DatabaseProtocol
from settee.core.result import Callback, Err, Result, notify

logger = get_logger(__name__)

VIEWS = "views"
LISTS = "lists"
SHOWS = "shows"
REWRITES = "rewrites"
VALIDATE_DOC_UPDATE = "validate_doc_update"


class DesignDocument(Document):
    """A ``_design/`` document with typed accessors for its sections."""

    @classmethod
    def for_name(
        cls,
        name: str,
        connection: ConnectionProtocol | None = None,
        database: DatabaseProtocol | None = None,
    ) -> DesignDocument:
        """Build a design document from a bare name (``"app"`` -> ``_design/app``)."""
        if not name.startswith(DESIGN_PREFIX):
            name = DESIGN_PREFIX + name
        return cls(name, connection=connection, database=database)

    @property
    def name(self) -> str | None:
        """Design name without the ``_design/`` prefix."""
        if not self._id or not self._id.startswith(DESIGN_PREFIX):
            return None
        return self._id[len(DESIGN_PREFIX):] or None

    # -------------------------------------------------------------------------
    # Named string entries (lists, shows)
    # -------------------------------------------------------------------------

    def _set_entry(self, section: str, name: str, value: Any) -> DesignDocument:
        self._body.set(section, name, value)
        self._touch()
        return self

    def get_list(self, name: str) -> str | None:
        return self._body.get(LISTS, name)

    def set_list(self, name: str, content: str | None) -> DesignDocument:
        return self._set_entry(LISTS, name, content)

    def delete_list(self, name: str) -> DesignDocument:
        return self._set_entry(LISTS, name, None)

    def get_show(self, name: str) -> str | None:
        return self._body.get(SHOWS, name)

    def set_show(self, name: str, content: str | None) -> DesignDocument:
        return self._set_entry(SHOWS, name, content)

    def delete_show(self, name: str) -> DesignDocument:
        return self._set_entry(SHOWS, name, None)

    def list(self, name: str, content: Any = UNSET) -> Any:
        """Get (``content`` omitted), set, or delete (``None``) a list function."""
        if content is UNSET:
            return self.get_list(name)
        return self.set_list(name, content)

    def show(self, name: str, content: Any = UNSET) -> Any:
        """Get (``content`` omitted), set, or delete (``None``) a show function."""
        if content is UNSET:
            return self.get_show(name)
        return self.set_show(name, content)

    # -------------------------------------------------------------------------
    # Views
    # -------------------------------------------------------------------------

    def get_view(self, name: str) -> dict[str, str] | None:
        return self._body.get(VIEWS, name)

    def set_view(self, name: str, map: str | None, reduce: str | None = None) -> DesignDocument:
        """Store ``{"map": map, "reduce": reduce}``, or delete when ``map`` is None.

        The stored object is rebuilt on every call, so omitting ``reduce``
        drops a previously stored one.
        """
        if map is None:
            return self.delete_view(name)
        view = {"map": map}
        if reduce:
            view["reduce"] = reduce
        return self._set_entry(VIEWS, name, view)

    def delete_view(self, name: str) -> DesignDocument:
        return self._set_entry(VIEWS, name, None)

    def view(self, name: str, map: Any = UNSET, reduce: str | None = None) -> Any:
        """Get (``map`` omitted), set, or delete (``map=None``) a view.

        ``reduce`` is ignored unless ``map`` is a string.
        """
        if map is UNSET:
            return self.get_view(name)
        return self.set_view(name, map, reduce)

    # -------------------------------------------------------------------------
    # Rewrites
    # -------------------------------------------------------------------------

    def get_rewrites(self) -> list[dict[str, Any]]:
        return self._body.get(REWRITES) or []

    def set_rewrites(self, rules: list[dict[str, Any]]) -> DesignDocument:
        """Replace the whole rewrite list. There is no per-rule delete."""
        self._body.set(REWRITES, list(rules))
        self._touch()
        return self

    def rewrites(self, rules: list[dict[str, Any]] | None = None) -> Any:
        """Return the rewrite rules, or replace them when ``rules`` is non-empty."""
        if not rules:
            return self.get_rewrites()
        return self.set_rewrites(rules)

    # -------------------------------------------------------------------------
    # Validation handler
    # -------------------------------------------------------------------------

    def get_validate_handler(self) -> str | None:
        return self._body.get(VALIDATE_DOC_UPDATE)

    def set_validate_handler(self, source: str | None) -> DesignDocument:
        self._body.set(VALIDATE_DOC_UPDATE, source)
        self._touch()
        return self

    def delete_validate_handler(self) -> DesignDocument:
        return self.set_validate_handler(None)

    def validate_handler(self, handler: Any = UNSET) -> Any:
        """Get the handler source, or set it when an argument is passed.

        The mode depends on whether ``handler`` was passed at all, so
        ``validate_handler(None)`` deletes the handler.
        """
        if handler is UNSET:
            return self.get_validate_handler()
        return self.set_validate_handler(handler)

    # -------------------------------------------------------------------------
    # Server-side operations
    # -------------------------------------------------------------------------

    def compact(self, callback: Callback | None = None) -> Result[Any]:
        """Start compaction of this design document's view indexes.

        An id without the ``_design/`` prefix hands the database an empty
        name, and the database reports the failure through ``callback``.
        """
        if self._database is None:
            return notify(Err(ConfigError("Design document is not bound to a database")), callback)
        design_name = ""
        if self._id and self._id.startswith(DESIGN_PREFIX):
            design_name = self._id[len(DESIGN_PREFIX):]
        logger.debug("design_compact", doc_id=self._id, design=design_name)
        return self._database.compact(design_name, callback)

    def view_info(self, callback: Callback | None = None) -> Result[Any]:
        """Fetch ``<db>/<id>/_info`` (view index size, update sequence, ...)."""
        result = self._collaborators()
        if result.is_err():
            return notify(result, callback)
        connection, database = result.value
        if not self._id:
            return notify(Err(InvalidDocumentIdError(self._id)), callback)
        path = f"{document_path(database.name(), self._id)}/_info"
        return connection.request("GET", path, callback=callback)
