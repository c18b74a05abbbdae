"""Resolution of reference strings inside structured data trees.

A metadata tree is any nesting of mappings, lists, strings, numbers,
booleans and dates. ``Resolver.resolve`` returns a new tree in which every
reference string has been replaced by its value and every date has been
rendered as an ISO 8601 timestamp, so the result can be encoded as JSON-LD.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import UTC, date, datetime
from types import MappingProxyType
from typing import Any

from sitemeta.core.exceptions import CyclicReferenceError, UnsupportedValueError
from sitemeta.core.extract import extract
from sitemeta.core.filters import DEFAULT_FILTERS, FilterRegistry
from sitemeta.core.references import DataRef, PlainString, SelfURLRef, SiteURLRef, classify
from sitemeta.core.urls import UrlNormalizer

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 32


@dataclass(frozen=True)
class PageContext:
    """Read-only view of one page used as the root for data references.

    Attributes:
        url: Site path of the page, resolved by ``site-url:self``
        data: The page data, including site-wide data merged by the host
        normalize_url: Site URL builder shared by every page

    """

    url: str
    data: Mapping[str, Any]
    normalize_url: UrlNormalizer

    def __post_init__(self) -> None:
        if not isinstance(self.data, MappingProxyType):
            object.__setattr__(self, "data", MappingProxyType(dict(self.data)))


def format_timestamp(value: date) -> str:
    """Render a date as a UTC timestamp with millisecond precision.

    Naive datetimes are taken as UTC and plain dates as midnight UTC.
    """
    if not isinstance(value, datetime):
        value = datetime(value.year, value.month, value.day, tzinfo=UTC)
    elif value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class Resolver:
    """Replaces reference strings with concrete values.

    Resolution is a pure function of the tree and the page context. The
    resolver only holds its filter table and the nesting limit for data
    references, so one instance can serve every page of a build.
    """

    def __init__(self, filters: FilterRegistry = DEFAULT_FILTERS, max_depth: int = DEFAULT_MAX_DEPTH) -> None:
        if max_depth < 1:
            msg = f"max_depth must be positive, got {max_depth}"
            raise ValueError(msg)
        self.filters = filters
        self.max_depth = max_depth

    def resolve(self, value: Any, context: PageContext) -> Any:
        """Return ``value`` with every reference resolved against ``context``.

        Raises:
            StructuredDataError: If a reference cannot be resolved. No partial
                result is returned.

        """
        return self._resolve(value, context, ())

    def _resolve(self, value: Any, context: PageContext, chain: tuple[DataRef, ...]) -> Any:
        match value:
            case str():
                return self._resolve_string(value, context, chain)
            case bool() | int() | None:
                return value
            case float():
                if not math.isfinite(value):
                    raise UnsupportedValueError(value)
                return value
            case date():
                return format_timestamp(value)
            case Mapping():
                return self._resolve_mapping(value, context, chain)
            case list() | tuple():
                return [self._resolve(item, context, chain) for item in value]
            case _:
                raise UnsupportedValueError(value)

    def _resolve_mapping(
        self, value: Mapping[Any, Any], context: PageContext, chain: tuple[DataRef, ...]
    ) -> dict[str, Any]:
        resolved: dict[str, Any] = {}
        for key, item in value.items():
            if not isinstance(key, str):
                raise UnsupportedValueError(key)
            resolved[key] = self._resolve(item, context, chain)
        return resolved

    def _resolve_string(self, value: str, context: PageContext, chain: tuple[DataRef, ...]) -> Any:
        match classify(value):
            case PlainString(text):
                return text
            case SelfURLRef():
                return context.normalize_url(context.url, absolute=True)
            case SiteURLRef(path):
                return context.normalize_url(path, absolute=True)
            case DataRef() as ref:
                return self._resolve_data_ref(ref, context, chain)

    def _resolve_data_ref(self, ref: DataRef, context: PageContext, chain: tuple[DataRef, ...]) -> Any:
        if ref in chain or len(chain) >= self.max_depth:
            raise CyclicReferenceError([_describe(r) for r in (*chain, ref)], self.max_depth)

        value = extract(context.data, ref.path)
        value = self.filters.apply(value, ref.filters)
        logger.debug("Resolved %s on %s", _describe(ref), context.url)
        # The extracted value may itself contain further references.
        return self._resolve(value, context, (*chain, ref))


def _describe(ref: DataRef) -> str:
    return " | ".join((ref.dotted, *ref.filters))


def resolve(value: Any, context: PageContext) -> Any:
    """Resolve ``value`` with the default filters."""
    return Resolver().resolve(value, context)
