"""Core structured data engine: references, lookups, filters and resolution."""

from sitemeta.core.exceptions import (
    CyclicReferenceError,
    FilterTypeError,
    NotAnObjectError,
    NotFoundError,
    StructuredDataError,
    UnknownFilterError,
    UnsupportedValueError,
)
from sitemeta.core.extract import extract
from sitemeta.core.filters import DEFAULT_FILTERS, FilterRegistry, apply_filters
from sitemeta.core.references import DataRef, PlainString, SelfURLRef, SiteURLRef, classify
from sitemeta.core.resolver import PageContext, Resolver, resolve
from sitemeta.core.serialize import DEFAULT_CONTEXT, render_structured_data, serialize, wrap

__all__ = [
    "DEFAULT_CONTEXT",
    "DEFAULT_FILTERS",
    "CyclicReferenceError",
    "DataRef",
    "FilterRegistry",
    "FilterTypeError",
    "NotAnObjectError",
    "NotFoundError",
    "PageContext",
    "PlainString",
    "Resolver",
    "SelfURLRef",
    "SiteURLRef",
    "StructuredDataError",
    "UnknownFilterError",
    "UnsupportedValueError",
    "apply_filters",
    "classify",
    "extract",
    "render_structured_data",
    "resolve",
    "serialize",
    "wrap",
]
