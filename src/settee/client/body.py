"""
DocumentBody - the nested JSON mapping behind a document.

A body maps section names to section content. Sections are either scalar
values (``validate_doc_update``), lists (``rewrites``) or mappings of named
entries (``views``, ``lists``, ``shows``). ``DocumentBody`` gives them a
small path interface: read, write or delete one section or one named entry
inside a section.

Absence is the only way to say "not defined": deleting removes the key,
and nothing ever stores a ``None`` entry through ``set``.

Examples:
    >>> body = DocumentBody()
    >>> body.set("lists", "recent", "function(head, req) {}")
    >>> body.get("lists", "recent")
    'function(head, req) {}'
    >>> body.delete("lists", "recent")
    >>> body.get("lists", "recent") is None
    True
    >>> body.get("lists")
    {}

Tags:
    document, body, json, path-access, settee
"""

from __future__ import annotations

import copy
from typing import Any


class _Unset:
    """Marker for an argument the caller did not pass."""

    _instance: _Unset | None = None

    def __new__(cls) -> _Unset:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Any = _Unset()


class DocumentBody:
    """Mutable nested mapping with section/name path access."""

    def __init__(self, data: dict[str, Any] | None = None):
        self._data: dict[str, Any] = copy.deepcopy(data) if data else {}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DocumentBody:
        """Build a body from a server document, dropping ``_id``/``_rev``."""
        return cls({k: v for k, v in data.items() if k not in ("_id", "_rev")})

    def get(self, section: Any = UNSET, name: Any = UNSET) -> Any:
        """Read the whole body, one section, or one named entry.

        Values are deep copies; change the body through ``set``. Returns
        ``None`` when the section or entry is absent, and when ``name`` is
        given but the section is not a mapping.
        """
        if section is UNSET:
            return copy.deepcopy(self._data)
        value = self._data.get(section)
        if name is not UNSET:
            value = value.get(name) if isinstance(value, dict) else None
        return copy.deepcopy(value)

    def set(self, section: str, name: Any, value: Any = UNSET) -> None:
        """Write a section (``set(section, value)``) or an entry
        (``set(section, name, value)``). A ``None`` value deletes."""
        if value is UNSET:
            name, value = UNSET, name
        if value is None:
            self.delete(section, name)
            return
        if name is UNSET:
            self._data[section] = copy.deepcopy(value)
            return
        entries = self._data.get(section)
        if not isinstance(entries, dict):
            entries = self._data[section] = {}
        entries[name] = copy.deepcopy(value)

    def delete(self, section: str, name: Any = UNSET) -> None:
        """Remove a section or one entry of it. Absent paths are a no-op."""
        if name is UNSET:
            self._data.pop(section, None)
            return
        entries = self._data.get(section)
        if isinstance(entries, dict):
            entries.pop(name, None)

    def has(self, section: str, name: Any = UNSET) -> bool:
        if name is UNSET:
            return section in self._data
        entries = self._data.get(section)
        return isinstance(entries, dict) and name in entries

    def to_dict(self) -> dict[str, Any]:
        """Deep copy of the body, safe to serialize or mutate."""
        return copy.deepcopy(self._data)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, DocumentBody):
            return self._data == other._data
        if isinstance(other, dict):
            return self._data == other
        return NotImplemented

    def __repr__(self) -> str:
        return f"DocumentBody({self._data!r})"
