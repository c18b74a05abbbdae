"""sitemeta: build-time resolution of JSON-LD structured data for static sites."""

from sitemeta.core import (
    DEFAULT_CONTEXT,
    DEFAULT_FILTERS,
    FilterRegistry,
    PageContext,
    Resolver,
    render_structured_data,
    resolve,
)
from sitemeta.infra import Page, inject_metadata, resolve_page_metadata

__version__ = "0.1.0"
__all__ = [
    "DEFAULT_CONTEXT",
    "DEFAULT_FILTERS",
    "FilterRegistry",
    "Page",
    "PageContext",
    "Resolver",
    "inject_metadata",
    "render_structured_data",
    "resolve",
    "resolve_page_metadata",
]
