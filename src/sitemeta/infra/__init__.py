"""Integration of the structured data engine with a site build."""

from sitemeta.infra.page import (
    STRUCTURED_DATA_KEY,
    Page,
    inject_metadata,
    preprocess_pages,
    process_documents,
    resolve_page_metadata,
)

__all__ = [
    "STRUCTURED_DATA_KEY",
    "Page",
    "inject_metadata",
    "preprocess_pages",
    "process_documents",
    "resolve_page_metadata",
]
