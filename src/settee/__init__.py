"""
Settee - client library for CouchDB-style document databases.

Exposes the connection, database and document handles, plus the design
document accessors used to manage views, list/show functions, rewrites and
the validation handler.
"""

__version__ = "0.1.0"

from settee.client import (  # noqa: E402
    DESIGN_PREFIX,
    Connection,
    Database,
    DesignDocument,
    Document,
    DocumentBody,
)
from settee.core.settings import SetteeSettings  # noqa: E402

__all__ = [
    "DESIGN_PREFIX",
    "Connection",
    "Database",
    "DesignDocument",
    "Document",
    "DocumentBody",
    "SetteeSettings",
    "__version__",
]
