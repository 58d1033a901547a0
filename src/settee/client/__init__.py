"""Settee client -- connection, database and document handles.

Architecture::

    body.py        DocumentBody (section/name path read, write, delete)
    document.py    Document (identity, revision, dirty state, load/save/destroy)
    design.py      DesignDocument (views, lists, shows, rewrites, validation)
    database.py    Database (info, compaction, view queries, factories)
    connection.py  Connection (httpx transport)
"""

from settee.client.body import UNSET, DocumentBody
from settee.client.connection import Connection
from settee.client.database import Database
from settee.client.design import DesignDocument
from settee.client.document import DESIGN_PREFIX, Document

__all__ = [
    "DESIGN_PREFIX",
    "UNSET",
    "Connection",
    "Database",
    "DesignDocument",
    "Document",
    "DocumentBody",
]
