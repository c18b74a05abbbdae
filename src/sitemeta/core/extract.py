"""Dotted-path lookups in page data."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from sitemeta.core.exceptions import NotAnObjectError, NotFoundError


def extract(data: Any, path: Sequence[str]) -> Any:
    """Follow ``path`` through ``data`` and return the value it points at.

    Mappings are indexed by key and lists by integer segments. Absence is
    always an error: a missing key or a ``None`` value raises
    ``NotFoundError``, and stepping into a scalar raises ``NotAnObjectError``.
    """
    current = data
    for segment in path:
        if not _is_container(current):
            raise NotAnObjectError(path, segment)

        current = _lookup(current, segment)

        if current is None:
            raise NotFoundError(path)
    return current


def _is_container(value: Any) -> bool:
    if isinstance(value, Mapping):
        return True
    return isinstance(value, Sequence) and not isinstance(value, str | bytes)


def _lookup(container: Mapping[str, Any] | Sequence[Any], segment: str) -> Any:
    if isinstance(container, Mapping):
        return container.get(segment)
    if not segment.isdecimal():
        return None
    index = int(segment)
    if index >= len(container):
        return None
    return container[index]
