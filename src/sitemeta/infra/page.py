"""Hooks connecting the resolver to a site build.

A build calls ``resolve_page_metadata`` for every page before its document
is rendered, and ``inject_metadata`` once the document exists. The two
phases only share the resolved tree stored back into the page data.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any, Final

from lxml.html import HtmlElement

from sitemeta.core.exceptions import PageMetadataError, StructuredDataError
from sitemeta.core.resolver import PageContext, Resolver
from sitemeta.core.serialize import DEFAULT_CONTEXT, render_structured_data, wrap
from sitemeta.core.urls import UrlNormalizer

logger = logging.getLogger(__name__)

STRUCTURED_DATA_KEY: Final[str] = "structured_data"
LD_JSON_TYPE: Final[str] = "application/ld+json"


@dataclass
class Page:
    """A page as seen by the structured data hooks.

    Attributes:
        url: Site path of the page (e.g. "/posts/hello/")
        data: Page data; the declared tree lives under ``STRUCTURED_DATA_KEY``
        document: Parsed HTML document, available after rendering

    """

    url: str
    data: dict[str, Any] = field(default_factory=dict)
    document: HtmlElement | None = None

    @property
    def structured_data(self) -> Any:
        return self.data.get(STRUCTURED_DATA_KEY)

    @property
    def has_structured_data(self) -> bool:
        return self.structured_data is not None


def resolve_page_metadata(page: Page, resolver: Resolver, normalize_url: UrlNormalizer) -> bool:
    """Replace the declared metadata of ``page`` with its resolved form.

    Empty objects and lists count as declared metadata.

    Returns:
        True if the page declared structured data

    Raises:
        PageMetadataError: If any reference of the page cannot be resolved,
            or the tree does not resolve to an object or a list of objects

    """
    if not page.has_structured_data:
        return False

    context = PageContext(url=page.url, data=page.data, normalize_url=normalize_url)
    try:
        resolved = resolver.resolve(page.structured_data, context)
        # Fails early on roots that cannot carry an @context.
        wrap(resolved)
    except StructuredDataError as exc:
        raise PageMetadataError(page.url, exc) from exc

    page.data[STRUCTURED_DATA_KEY] = resolved
    logger.debug("Resolved structured data for %s", page.url)
    return True


def inject_metadata(page: Page, document: HtmlElement, context: str = DEFAULT_CONTEXT) -> bool:
    """Insert the resolved metadata of ``page`` into ``document`` as JSON-LD.

    The script element goes right after ``<title>`` when the head has one,
    otherwise it is appended to the head. A JSON-LD script already in the
    document is replaced, so the document always carries exactly one.

    Returns:
        True if an element was inserted

    Raises:
        PageMetadataError: If the stored tree cannot be serialized

    """
    if not page.has_structured_data:
        return False

    try:
        text = render_structured_data(page.structured_data, context)
    except StructuredDataError as exc:
        raise PageMetadataError(page.url, exc) from exc

    script = document.makeelement("script", {"type": LD_JSON_TYPE})
    script.text = text

    head = _ensure_head(document)
    for previous in document.getroottree().getroot().xpath(f'//script[@type="{LD_JSON_TYPE}"]'):
        previous.drop_tree()

    title = head.find(".//title")
    if title is not None:
        title.addnext(script)
    else:
        head.append(script)

    logger.debug("Injected structured data into %s", page.url)
    return True


def _ensure_head(document: HtmlElement) -> HtmlElement:
    root = document.getroottree().getroot()
    heads = root.xpath("//head")
    if heads:
        return heads[0]
    head = root.makeelement("head", {})
    root.insert(0, head)
    return head


def preprocess_pages(pages: Iterable[Page], resolver: Resolver, normalize_url: UrlNormalizer) -> int:
    """Resolve the structured data of every page; returns how many declared some."""
    return sum(resolve_page_metadata(page, resolver, normalize_url) for page in pages)


def process_documents(pages: Iterable[Page], context: str = DEFAULT_CONTEXT) -> int:
    """Inject structured data into every rendered page; returns how many were changed."""
    count = 0
    for page in pages:
        if page.document is None:
            continue
        count += inject_metadata(page, page.document, context)
    return count
