"""Custom exceptions for structured data resolution."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any


class SitemetaError(Exception):
    """Base exception for all sitemeta errors."""


class ConfigError(SitemetaError):
    """Raised when settings cannot be loaded or validated."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load configuration at '{path}': {reason}")


class StructuredDataError(SitemetaError):
    """Base class for errors raised while resolving a metadata tree."""


class UnknownFilterError(StructuredDataError):
    """Raised when a data reference names a filter that is not registered."""

    def __init__(self, name: str, available: Sequence[str] = ()) -> None:
        self.name = name
        self.available = tuple(available)
        known = ", ".join(self.available) or "none"
        super().__init__(f"Unknown filter: '{name}' (available: {known})")


class FilterTypeError(StructuredDataError):
    """Raised when a filter receives a value of the wrong type."""

    def __init__(self, name: str, expected: str, value: Any) -> None:
        self.name = name
        self.expected = expected
        self.value = value
        super().__init__(
            f"Filter '{name}' expected {expected}, but got {type(value).__name__}: {value!r}"
        )


class NotFoundError(StructuredDataError):
    """Raised when a dotted path does not lead to a value."""

    def __init__(self, path: Sequence[str]) -> None:
        self.path = tuple(path)
        self.dotted = ".".join(self.path)
        super().__init__(f"Value not found: {self.dotted}")


class NotAnObjectError(StructuredDataError):
    """Raised when a dotted path steps into a scalar value."""

    def __init__(self, path: Sequence[str], segment: str) -> None:
        self.path = tuple(path)
        self.dotted = ".".join(self.path)
        self.segment = segment
        super().__init__(
            f"Cannot extract value from object: {self.dotted} ('{segment}' is applied to a non-container)"
        )


class CyclicReferenceError(StructuredDataError):
    """Raised when data references keep resolving to further references."""

    def __init__(self, chain: Sequence[str], max_depth: int) -> None:
        self.chain = tuple(chain)
        self.max_depth = max_depth
        super().__init__(
            f"Cyclic or too deeply nested data reference (limit {max_depth}): {' -> '.join(self.chain)}"
        )


class UnsupportedValueError(StructuredDataError):
    """Raised when a metadata tree holds a value that has no JSON-LD form."""

    def __init__(self, value: Any) -> None:
        self.value = value
        super().__init__(f"Unsupported structured data value of type {type(value).__name__}: {value!r}")


class PageMetadataError(SitemetaError):
    """Raised when the structured data of a page cannot be resolved."""

    def __init__(self, page_url: str, cause: StructuredDataError) -> None:
        self.page_url = page_url
        self.cause = cause
        super().__init__(f"Invalid structured data in page '{page_url}': {cause}")


class DataFileError(SitemetaError):
    """Raised when a page or site data file cannot be read."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to read data file '{path}': {reason}")
