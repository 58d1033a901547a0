"""
Structured error types for settee.

Every failure that crosses the library boundary is a ``SetteeError``
subclass carrying a category, a retry flag and structured context, so
callers can route, retry or log failures without parsing messages.

Manifesto:
    - **Typed Error Hierarchy:** Transport, server and client-side failures
      are distinct classes
    - **Explicit Retry Semantics:** Each error knows if it's retryable
    - **Rich Context:** Errors carry the request path, HTTP status and the
      server's ``error``/``reason`` pair
    - **Error Chaining:** The underlying httpx exception is kept as ``cause``

Architecture:
    ::

        ┌─────────────────────────────────────────────────────────────────┐
        │                        SetteeError                              │
        │  (category, retryable, context, cause)                          │
        ├─────────────────────────────────────────────────────────────────┤
        │                                                                 │
        │  TransientError    RequestError          ValidationError        │
        │  (retryable=True)  (status)              (VALIDATION)           │
        │       │                │                      │                 │
        │  NetworkError      NotFoundError         InvalidDocumentIdError │
        │  TimeoutError      ConflictError                                │
        │                    PreconditionFailedError                      │
        │                    AuthenticationError   ConfigError (CONFIG)   │
        └─────────────────────────────────────────────────────────────────┘

Examples:
    >>> error = NotFoundError("missing", status=404)
    >>> error.retryable
    False
    >>> error.with_context(path="db/doc").context.path
    'db/doc'

Tags:
    error-handling, exception-hierarchy, retry-logic, error-context, settee

Doc-Types:
    - API Reference
    - Error Handling Guide
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """
    Standard error categories for classification and routing.

    Attributes:
        NETWORK: Connection, timeout, DNS errors
        SERVER: The database answered with an error status
        VALIDATION: Client-side argument or identifier problems
        CONFIG: Missing or invalid settings
        AUTH: Authentication, authorization
        INTERNAL: Bugs, unexpected state
        UNKNOWN: Uncategorized errors
    """

    NETWORK = "NETWORK"
    SERVER = "SERVER"
    VALIDATION = "VALIDATION"
    CONFIG = "CONFIG"
    AUTH = "AUTH"
    INTERNAL = "INTERNAL"
    UNKNOWN = "UNKNOWN"


@dataclass
class ErrorContext:
    """
    Structured metadata attached to an error.

    Attributes:
        method: HTTP method of the failed request
        path: Request path relative to the server root
        database: Database name, when known
        document_id: Document identifier, when known
        http_status: HTTP status code if the server answered
        reason: The server's ``reason`` field
        metadata: Additional key-value pairs
    """

    method: str | None = None
    path: str | None = None
    database: str | None = None
    document_id: str | None = None
    http_status: int | None = None
    reason: str | None = None

    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result = {}
        for key in ["method", "path", "database", "document_id", "http_status", "reason"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class SetteeError(Exception):
    """
    Base exception for all settee errors.

    Subclasses set ``default_category`` and ``default_retryable`` so that
    the common case needs nothing but a message.

    Examples:
        >>> error = SetteeError("Something went wrong")
        >>> error.category
        <ErrorCategory.INTERNAL: 'INTERNAL'>
        >>> error.to_dict()["retryable"]
        False
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL
    default_retryable: bool = False

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        retryable: bool | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.retryable = retryable if retryable is not None else self.default_retryable
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> SetteeError:
        """
        Add context to this error (fluent API).

        Usage:
            return Err(NotFoundError("missing").with_context(path="db/doc"))
        """
        for key, value in kwargs.items():
            if hasattr(self.context, key) and key != "metadata":
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result: dict[str, Any] = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
            "retryable": self.retryable,
        }
        context_dict = self.context.to_dict()
        if context_dict:
            result["context"] = context_dict
        if self.cause is not None:
            result["cause"] = repr(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r})"


# =============================================================================
# TRANSIENT ERRORS
# =============================================================================


class TransientError(SetteeError):
    """Temporary failure that may succeed on retry."""

    default_category = ErrorCategory.NETWORK
    default_retryable = True


class NetworkError(TransientError):
    """The server could not be reached."""


class TimeoutError(TransientError):
    """The request did not complete in time."""


# =============================================================================
# SERVER ERRORS
# =============================================================================


class RequestError(SetteeError):
    """
    The database answered with an error status.

    ``status`` is the HTTP status code; ``error`` and ``reason`` are the
    fields of the JSON error body when the server sent one. 5xx answers are
    retryable, everything else is not.
    """

    default_category = ErrorCategory.SERVER

    def __init__(
        self,
        message: str,
        *,
        status: int,
        error: str | None = None,
        reason: str | None = None,
        **kwargs: Any,
    ):
        kwargs.setdefault("retryable", status >= 500)
        super().__init__(message, **kwargs)
        self.status = status
        self.error = error
        self.reason = reason
        self.context.http_status = status
        if reason is not None:
            self.context.reason = reason

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["status"] = self.status
        if self.error is not None:
            result["error"] = self.error
        return result


class NotFoundError(RequestError):
    """Database or document does not exist (404)."""


class ConflictError(RequestError):
    """Document update conflict (409)."""


class PreconditionFailedError(RequestError):
    """Database already exists, or a precondition failed (412)."""


class AuthenticationError(RequestError):
    """Credentials missing or rejected (401/403)."""

    default_category = ErrorCategory.AUTH


# =============================================================================
# CLIENT-SIDE ERRORS
# =============================================================================


class ValidationError(SetteeError):
    """A call was rejected before any request was issued."""

    default_category = ErrorCategory.VALIDATION
    default_retryable = False


class InvalidDocumentIdError(ValidationError):
    """Document or design identifier is absent or malformed."""

    def __init__(self, document_id: str | None, message: str | None = None):
        super().__init__(message or f"Invalid document id: {document_id!r}")
        self.context.document_id = document_id


class ConfigError(SetteeError):
    """Missing or invalid configuration."""

    default_category = ErrorCategory.CONFIG
    default_retryable = False


# =============================================================================
# UTILITY FUNCTIONS
# =============================================================================


_STATUS_ERRORS: dict[int, type[RequestError]] = {
    401: AuthenticationError,
    403: AuthenticationError,
    404: NotFoundError,
    409: ConflictError,
    412: PreconditionFailedError,
}


def error_for_status(
    status: int,
    error: str | None = None,
    reason: str | None = None,
) -> RequestError:
    """Build the ``RequestError`` subclass matching an HTTP status."""
    cls = _STATUS_ERRORS.get(status, RequestError)
    message = f"{status} {error or 'error'}"
    if reason:
        message = f"{message}: {reason}"
    return cls(message, status=status, error=error, reason=reason)


def is_retryable(error: Exception) -> bool:
    """Check if an error is retryable."""
    if isinstance(error, SetteeError):
        return error.retryable
    return isinstance(error, (ConnectionError, OSError))


def categorize_error(error: Exception) -> ErrorCategory:
    """Get the category of an error."""
    if isinstance(error, SetteeError):
        return error.category
    if isinstance(error, (ConnectionError, OSError)):
        return ErrorCategory.NETWORK
    if isinstance(error, ValueError):
        return ErrorCategory.VALIDATION
    return ErrorCategory.UNKNOWN


__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "SetteeError",
    "TransientError",
    "NetworkError",
    "TimeoutError",
    "RequestError",
    "NotFoundError",
    "ConflictError",
    "PreconditionFailedError",
    "AuthenticationError",
    "ValidationError",
    "InvalidDocumentIdError",
    "ConfigError",
    "error_for_status",
    "is_retryable",
    "categorize_error",
]
