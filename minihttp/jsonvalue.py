"""Minimal JSON rendering for response bodies.

Values are plain Python objects: ``dict`` for objects, ``list``/``tuple`` for
arrays, ``str`` for strings and ``int`` for numbers, plus :class:`JsonObj` and
:class:`JsonArr`. Strings are written verbatim between quotes, without escaping.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any


def dumps(value: Any) -> str:
    """Render ``value`` as compact JSON text."""
    if isinstance(value, JsonObj):
        return _render_object(value.fields)
    if isinstance(value, JsonArr):
        return _render_array(value.items)
    if isinstance(value, Mapping):
        return _render_object(value)
    if isinstance(value, (list, tuple)):
        return _render_array(value)
    if isinstance(value, str):
        return f'"{value}"'
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    raise TypeError(f"cannot render {type(value).__name__} as JSON")


def _render_object(fields: Mapping[str, Any]) -> str:
    body = ",".join(f'"{key}":{dumps(value)}' for key, value in fields.items())
    return "{" + body + "}"


def _render_array(items: Iterable[Any]) -> str:
    return "[" + ",".join(dumps(item) for item in items) + "]"


class JsonObj:
    """A JSON object built up field by field."""

    def __init__(self, fields: Mapping[str, Any] | None = None) -> None:
        self.fields: dict[str, Any] = dict(fields or {})

    def push(self, key: str, value: Any) -> None:
        """Set ``key`` to ``value``, replacing any earlier value."""
        self.fields[key] = value

    def __eq__(self, other: object) -> bool:
        if isinstance(other, JsonObj):
            return self.fields == other.fields
        return NotImplemented

    def __repr__(self) -> str:
        return f"JsonObj({self.fields!r})"

    def __str__(self) -> str:
        return dumps(self)

    def __bytes__(self) -> bytes:
        return str(self).encode("utf-8")


class JsonArr:
    """A JSON array of :class:`JsonObj` items."""

    def __init__(self, items: Iterable[JsonObj] | None = None) -> None:
        self.items: list[JsonObj] = list(items or [])

    def __iter__(self):
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, JsonArr):
            return self.items == other.items
        return NotImplemented

    def __repr__(self) -> str:
        return f"JsonArr({self.items!r})"

    def __str__(self) -> str:
        return dumps(self)

    def __bytes__(self) -> bytes:
        return str(self).encode("utf-8")