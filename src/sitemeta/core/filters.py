"""Named post-processing filters for data references."""

from __future__ import annotations

import math
from collections.abc import Callable, Iterable, Iterator, Mapping
from types import MappingProxyType
from typing import Any

from sitemeta.core.exceptions import FilterTypeError, UnknownFilterError

Filter = Callable[[Any], Any]


def iso8601_minutes(value: Any) -> str:
    """Format a number of minutes as an ISO 8601 duration.

    Examples:
        >>> iso8601_minutes(5)
        'PT5M'
        >>> iso8601_minutes(2.5)
        'PT2.5M'

    """
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise FilterTypeError("iso8601minutes", "a number", value)
    if isinstance(value, float):
        if not math.isfinite(value):
            raise FilterTypeError("iso8601minutes", "a finite number", value)
        if value.is_integer():
            value = int(value)
    return f"PT{value}M"


class FilterRegistry(Mapping[str, Filter]):
    """Immutable table of filters available to data references.

    Registries are never mutated in place; ``extend`` returns a new one so
    independent resolvers cannot observe each other's filters.
    """

    def __init__(self, filters: Mapping[str, Filter] | None = None) -> None:
        self._filters = MappingProxyType(dict(filters or {}))

    def __getitem__(self, name: str) -> Filter:
        return self._filters[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._filters)

    def __len__(self) -> int:
        return len(self._filters)

    def __repr__(self) -> str:
        return f"FilterRegistry({sorted(self._filters)!r})"

    def extend(self, **filters: Filter) -> FilterRegistry:
        return FilterRegistry({**self._filters, **filters})

    def apply(self, value: Any, names: Iterable[str]) -> Any:
        """Run ``value`` through the named filters, left to right."""
        result = value
        for name in names:
            try:
                func = self._filters[name]
            except KeyError:
                raise UnknownFilterError(name, sorted(self._filters)) from None
            result = func(result)
        return result


DEFAULT_FILTERS = FilterRegistry({"iso8601minutes": iso8601_minutes})


def apply_filters(value: Any, names: Iterable[str], registry: FilterRegistry = DEFAULT_FILTERS) -> Any:
    """Apply ``names`` to ``value`` using ``registry``."""
    return registry.apply(value, names)
