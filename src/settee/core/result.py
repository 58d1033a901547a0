"""
Result envelope for request operations.

Operations that talk to the server never raise for transport or server
failures. They return ``Ok(value)`` or ``Err(error)`` and, when the caller
supplied one, complete a ``callback(error, value)`` exactly once.

Manifesto:
    - **Explicit over Implicit:** Failures are values, not hidden exceptions
    - **Callback bridge:** ``notify()`` turns a Result into the
      ``(error, value)`` completion convention in one place
    - **Composable:** ``map``/``and_then`` chain follow-up work on success

Examples:
    >>> Ok(3).map(lambda x: x + 1).unwrap()
    4
    >>> Err(ValueError("bad")).unwrap_or(0)
    0

    Completing a callback:

    >>> seen = []
    >>> notify(Ok("done"), lambda error, value: seen.append((error, value)))
    Ok('done')
    >>> seen
    [(None, 'done')]

Tags:
    result-pattern, callbacks, error-handling, settee

Doc-Types:
    - API Reference
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar

from settee.core.errors import SetteeError

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Successful result containing a value."""

    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    @property
    def error(self) -> None:
        return None

    def unwrap(self) -> T:
        """Get the value. Safe for Ok."""
        return self.value

    def unwrap_or(self, default: T) -> T:
        return self.value

    def map(self, f: Callable[[T], U]) -> Result[U]:
        """Transform the value if Ok."""
        return Ok(f(self.value))

    def and_then(self, f: Callable[[T], Result[U]]) -> Result[U]:
        """Chain to another Result-returning function."""
        return f(self.value)

    def map_err(self, f: Callable[[Exception], Exception]) -> Result[T]:
        return self

    def to_dict(self) -> dict[str, Any]:
        return {"ok": True, "value": self.value}

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err(Generic[T]):
    """Failed result carrying the exception that caused it."""

    error: Exception

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    @property
    def value(self) -> None:
        return None

    def unwrap(self) -> T:
        """Raise the error. Use only when you're sure it's Ok."""
        raise self.error

    def unwrap_or(self, default: T) -> T:
        return default

    def map(self, f: Callable[[T], U]) -> Result[U]:
        return Err(self.error)

    def and_then(self, f: Callable[[T], Result[U]]) -> Result[U]:
        return Err(self.error)

    def map_err(self, f: Callable[[Exception], Exception]) -> Result[T]:
        """Transform the error."""
        return Err(f(self.error))

    def to_dict(self) -> dict[str, Any]:
        if isinstance(self.error, SetteeError):
            return {"ok": False, "error": self.error.to_dict()}
        return {
            "ok": False,
            "error": {
                "error_type": type(self.error).__name__,
                "message": str(self.error),
            },
        }

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


Result = Ok[T] | Err[T]

Callback = Callable[[Exception | None, Any], None]


def notify(result: Result[T], callback: Callback | None) -> Result[T]:
    """Complete ``callback(error, value)`` from ``result`` and return it.

    The callback receives ``(None, value)`` on success and ``(error, None)``
    on failure. Exceptions raised by the callback propagate to the caller.
    """
    if callback is not None:
        if result.is_ok():
            callback(None, result.value)
        else:
            callback(result.error, None)
    return result


__all__ = ["Ok", "Err", "Result", "Callback", "notify"]
