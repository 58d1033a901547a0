"""
Document - identity, revision and body of one database document.

A ``Document`` owns a ``DocumentBody`` and the collaborators needed to
persist it: a connection (for requests) and a database (for the path
segment). In-memory writes mark the document dirty; ``save()`` sends it and
marks it clean again.

Manifesto:
    - **Body primitive:** ``body()`` is the single path read/write/delete
      entry point that typed accessors build on
    - **Delete via absence:** writing ``None`` removes the key
    - **No raising on I/O:** ``load``/``save``/``destroy`` return a
      ``Result`` and complete an optional ``callback(error, document)``

Examples:
    >>> doc = Document("recipe-1")
    >>> doc.body("title", "Soup")
    Document('recipe-1', rev=None, dirty=True)
    >>> doc.body("title")
    'Soup'
    >>> doc.body("title", None).body("title") is None
    True

Tags:
    document, persistence, dirty-tracking, settee
"""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

from settee.client.body import UNSET, DocumentBody
from settee.core.errors import ConfigError, InvalidDocumentIdError
from settee.core.logging import get_logger
from settee.core.protocols import ConnectionProtocol, DatabaseProtocol
from settee.core.result import Callback, Err, Ok, Result, notify

logger = get_logger(__name__)

DESIGN_PREFIX = "_design/"


def document_path(database: str, doc_id: str) -> str:
    """Request path for a document; design ids keep their literal slash."""
    if doc_id.startswith(DESIGN_PREFIX):
        return f"{database}/{DESIGN_PREFIX}{quote(doc_id[len(DESIGN_PREFIX):], safe='')}"
    return f"{database}/{quote(doc_id, safe='')}"


class Document:
    """A database document held in memory."""

    def __init__(
        self,
        doc_id: str | None = None,
        revision: str | None = None,
        connection: ConnectionProtocol | None = None,
        database: DatabaseProtocol | None = None,
        body: dict[str, Any] | None = None,
    ):
        self._id = doc_id
        self._rev = revision
        self._connection = connection
        self._database = database
        self._body = DocumentBody(body)
        self._dirty = False

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    @property
    def id(self) -> str | None:
        return self._id

    @property
    def revision(self) -> str | None:
        return self._rev

    @property
    def is_dirty(self) -> bool:
        """True after an in-memory change that has not been saved."""
        return self._dirty

    def _touch(self) -> None:
        self._dirty = True

    # -------------------------------------------------------------------------
    # Body primitive
    # -------------------------------------------------------------------------

    def body(self, section: Any = UNSET, name: Any = UNSET, value: Any = UNSET) -> Any:
        """Read or write the document body.

        - ``body()`` returns the whole body mapping
        - ``body(section)`` returns one section (``None`` if absent)
        - ``body(section, value)`` replaces a section
        - ``body(section, name, value)`` writes one named entry

        Writes return the document; a ``None`` value deletes the target.
        Use ``self._body.get(section, name)`` to read a single entry.
        """
        if section is UNSET:
            return self._body.get()
        if name is UNSET:
            return self._body.get(section)
        if value is UNSET:
            self._body.set(section, name)
        else:
            self._body.set(section, name, value)
        self._touch()
        return self

    def to_dict(self) -> dict[str, Any]:
        """Body plus ``_id``/``_rev`` as sent to the server."""
        data = self._body.to_dict()
        if self._id is not None:
            data["_id"] = self._id
        if self._rev is not None:
            data["_rev"] = self._rev
        return data

    # -------------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------------

    def _collaborators(self) -> Result[tuple[ConnectionProtocol, DatabaseProtocol]]:
        if self._connection is None or self._database is None:
            return Err(ConfigError("Document is not bound to a connection and database"))
        return Ok((self._connection, self._database))

    def load(self, callback: Callback | None = None) -> Result[Document]:
        """Fetch the document from the server, replacing the body."""
        result = self._collaborators().and_then(self._load)
        return notify(result, callback)

    def _load(self, collaborators: tuple[ConnectionProtocol, DatabaseProtocol]) -> Result[Document]:
        connection, database = collaborators
        if not self._id:
            return Err(InvalidDocumentIdError(self._id, "Cannot load a document without an id"))

        def apply(data: dict[str, Any]) -> Document:
            self._body = DocumentBody.from_dict(data)
            self._rev = data.get("_rev")
            self._dirty = False
            logger.debug("document_loaded", doc_id=self._id, rev=self._rev)
            return self

        return connection.request("GET", document_path(database.name(), self._id)).map(apply)

    def save(self, callback: Callback | None = None) -> Result[Document]:
        """Send the document; PUT with an id, POST to the database without."""
        result = self._collaborators().and_then(self._save)
        return notify(result, callback)

    def _save(self, collaborators: tuple[ConnectionProtocol, DatabaseProtocol]) -> Result[Document]:
        connection, database = collaborators
        if self._id:
            result = connection.request(
                "PUT", document_path(database.name(), self._id), body=self.to_dict()
            )
        else:
            result = connection.request("POST", database.name(), body=self.to_dict())

        def apply(data: dict[str, Any]) -> Document:
            self._id = data.get("id", self._id)
            self._rev = data.get("rev", self._rev)
            self._dirty = False
            logger.info("document_saved", doc_id=self._id, rev=self._rev)
            return self

        return result.map(apply)

    def destroy(self, callback: Callback | None = None) -> Result[Document]:
        """Delete the stored revision of this document."""
        result = self._collaborators().and_then(self._destroy)
        return notify(result, callback)

    def _destroy(self, collaborators: tuple[ConnectionProtocol, DatabaseProtocol]) -> Result[Document]:
        connection, database = collaborators
        if not self._id or not self._rev:
            return Err(
                InvalidDocumentIdError(self._id, "Deleting requires both an id and a revision")
            )

        def apply(data: dict[str, Any]) -> Document:
            self._rev = data.get("rev", self._rev)
            logger.info("document_deleted", doc_id=self._id, rev=self._rev)
            return self

        return connection.request(
            "DELETE", document_path(database.name(), self._id), params={"rev": self._rev}
        ).map(apply)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._id!r}, rev={self._rev!r}, dirty={self._dirty})"
