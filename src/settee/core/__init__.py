"""Settee Core -- errors, results, logging, settings and protocols.

Architecture::

    errors.py      Structured error hierarchy (SetteeError, RequestError)
    result.py      Result[T] envelope (Ok / Err) and callback completion
    logging.py     Structured logging (structlog)
    settings.py    SetteeSettings (pydantic-settings)
    protocols.py   ConnectionProtocol, DatabaseProtocol
"""

from settee.core.errors import (
    AuthenticationError,
    ConfigError,
    ConflictError,
    ErrorCategory,
    ErrorContext,
    InvalidDocumentIdError,
    NetworkError,
    NotFoundError,
    PreconditionFailedError,
    RequestError,
    SetteeError,
    TimeoutError,
    TransientError,
    ValidationError,
)
from settee.core.logging import configure_from_settings, configure_logging, get_logger
from settee.core.protocols import ConnectionProtocol, DatabaseProtocol
from settee.core.result import Callback, Err, Ok, Result, notify

__all__ = [
    "AuthenticationError",
    "Callback",
    "ConfigError",
    "ConflictError",
    "ConnectionProtocol",
    "DatabaseProtocol",
    "Err",
    "ErrorCategory",
    "ErrorContext",
    "InvalidDocumentIdError",
    "NetworkError",
    "NotFoundError",
    "Ok",
    "PreconditionFailedError",
    "RequestError",
    "Result",
    "SetteeError",
    "TimeoutError",
    "TransientError",
    "ValidationError",
    "configure_from_settings",
    "configure_logging",
    "get_logger",
    "notify",
]
