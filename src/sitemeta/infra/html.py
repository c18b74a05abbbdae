"""HTML document helpers built on lxml."""

from __future__ import annotations

import lxml.html
from lxml.html import HtmlElement

from sitemeta.core.serialize import DEFAULT_CONTEXT
from sitemeta.infra.page import Page, inject_metadata

DOCTYPE = "<!DOCTYPE html>"


def parse_document(text: str) -> HtmlElement:
    return lxml.html.document_fromstring(text)


def render_document(document: HtmlElement) -> str:
    return lxml.html.tostring(document, doctype=DOCTYPE, encoding="unicode")


def inject_into_html(page: Page, text: str, context: str = DEFAULT_CONTEXT) -> str:
    """Parse ``text``, inject the structured data of ``page`` and render it back.

    The markup is returned untouched when the page has no structured data.
    """
    if not page.has_structured_data:
        return text
    document = parse_document(text)
    inject_metadata(page, document, context)
    page.document = document
    return render_document(document)
