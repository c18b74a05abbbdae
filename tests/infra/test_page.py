import json
from datetime import UTC, datetime

import lxml.html
import pytest

from sitemeta.core.exceptions import NotFoundError, PageMetadataError, UnknownFilterError, UnsupportedValueError
from sitemeta.core.resolver import Resolver
from sitemeta.infra.page import (
    STRUCTURED_DATA_KEY,
    Page,
    inject_metadata,
    preprocess_pages,
    process_documents,
    resolve_page_metadata,
)

HTML = """<!DOCTYPE html>
<html>
  <head>
    <meta charset="utf-8">
    <title>Hello World</title>
    <link rel="stylesheet" href="/style.css">
  </head>
  <body><h1>Hello World</h1></body>
</html>
"""


def _post(**extra) -> Page:
    data = {
        "title": "X",
        "date": datetime(2024, 1, 1, tzinfo=UTC),
        STRUCTURED_DATA_KEY: {
            "@type": "BlogPosting",
            "headline": "lume-data:title",
            "datePublished": "lume-data:date",
        },
    }
    data.update(extra)
    return Page(url="/posts/x/", data=data)


def _ld_json(document) -> list:
    return document.xpath('//script[@type="application/ld+json"]')


def test_resolve_page_metadata_overwrites_declared_tree(url_builder):
    page = _post()

    assert resolve_page_metadata(page, Resolver(), url_builder)
    assert page.structured_data == {
        "@type": "BlogPosting",
        "headline": "X",
        "datePublished": "2024-01-01T00:00:00.000Z",
    }


def test_pages_without_metadata_are_untouched(url_builder):
    page = Page(url="/about/", data={"title": "About"})

    assert not resolve_page_metadata(page, Resolver(), url_builder)
    assert page.data == {"title": "About"}


def test_self_url_uses_page_url(url_builder):
    page = Page(url="/about/", data={STRUCTURED_DATA_KEY: {"@type": "WebPage", "url": "site-url:self"}})
    resolve_page_metadata(page, Resolver(), url_builder)
    assert page.structured_data["url"] == "https://example.com/about/"


def test_resolution_errors_name_the_page(url_builder):
    page = _post(**{STRUCTURED_DATA_KEY: {"@type": "BlogPosting", "author": "lume-data:config.data.author"}})

    with pytest.raises(PageMetadataError) as exc_info:
        resolve_page_metadata(page, Resolver(), url_builder)

    error = exc_info.value
    assert error.page_url == "/posts/x/"
    assert isinstance(error.cause, NotFoundError)
    assert "/posts/x/" in str(error)
    assert "config.data.author" in str(error)
    # The declared tree is left as it was.
    assert page.structured_data == {"@type": "BlogPosting", "author": "lume-data:config.data.author"}


def test_unknown_filter_error_names_filter(url_builder):
    page = _post(**{STRUCTURED_DATA_KEY: {"timeRequired": "lume-data:title | minutes"}})
    with pytest.raises(PageMetadataError, match="minutes") as exc_info:
        resolve_page_metadata(page, Resolver(), url_builder)
    assert isinstance(exc_info.value.cause, UnknownFilterError)


def test_inject_after_title(url_builder):
    page = _post()
    resolve_page_metadata(page, Resolver(), url_builder)
    document = lxml.html.document_fromstring(HTML)

    assert inject_metadata(page, document)

    scripts = _ld_json(document)
    assert len(scripts) == 1
    assert scripts[0].getprevious().tag == "title"
    assert scripts[0].getnext().tag == "link"
    assert json.loads(scripts[0].text) == {
        "@context": "https://schema.org",
        "@type": "BlogPosting",
        "headline": "X",
        "datePublished": "2024-01-01T00:00:00.000Z",
    }


def test_inject_without_title_appends_to_head():
    page = Page(url="/", data={STRUCTURED_DATA_KEY: {"@type": "WebSite"}})
    document = lxml.html.document_fromstring(
        "<html><head><meta charset='utf-8'><link rel='icon' href='/favicon.ico'></head><body></body></html>"
    )

    inject_metadata(page, document)

    head = document.xpath("//head")[0]
    assert head[-1].get("type") == "application/ld+json"


def test_inject_creates_missing_head():
    page = Page(url="/", data={STRUCTURED_DATA_KEY: {"@type": "WebSite"}})
    document = lxml.html.document_fromstring("<html><body><p>hi</p></body></html>")

    inject_metadata(page, document)

    scripts = _ld_json(document)
    assert len(scripts) == 1
    assert scripts[0].getparent().tag == "head"


def test_inject_array_metadata():
    page = Page(url="/", data={STRUCTURED_DATA_KEY: [{"@type": "WebPage"}, {"@type": "BreadcrumbList"}]})
    document = lxml.html.document_fromstring(HTML)

    inject_metadata(page, document, context="https://example.org/")

    assert json.loads(_ld_json(document)[0].text) == [
        {"@context": "https://example.org/", "@type": "WebPage"},
        {"@context": "https://example.org/", "@type": "BreadcrumbList"},
    ]


def test_inject_without_metadata_is_noop():
    document = lxml.html.document_fromstring(HTML)
    assert not inject_metadata(Page(url="/"), document)
    assert _ld_json(document) == []


def test_two_phase_batch(url_builder):
    pages = [
        _post(),
        Page(url="/about/", data={"title": "About"}),
        Page(url="/", data={STRUCTURED_DATA_KEY: {"@type": "WebSite", "url": "site-url:self"}}),
    ]

    assert preprocess_pages(pages, Resolver(), url_builder) == 2

    for page in pages:
        page.document = lxml.html.document_fromstring(HTML)
    pages.append(Page(url="/feed.xml", data={STRUCTURED_DATA_KEY: {"@type": "DataFeed"}}))

    assert process_documents(pages) == 2
    assert len(_ld_json(pages[0].document)) == 1
    assert _ld_json(pages[1].document) == []
    assert json.loads(_ld_json(pages[2].document)[0].text)["url"] == "https://example.com/"


@pytest.mark.parametrize(("declared", "expected"), [({}, {"@context": "https://schema.org"}), ([], [])])
def test_empty_declared_tree_is_still_injected(url_builder, declared, expected):
    page = Page(url="/", data={STRUCTURED_DATA_KEY: declared})

    assert resolve_page_metadata(page, Resolver(), url_builder)
    document = lxml.html.document_fromstring(HTML)
    assert inject_metadata(page, document)

    assert json.loads(_ld_json(document)[0].text) == expected


def test_null_declared_tree_is_skipped(url_builder):
    page = Page(url="/", data={STRUCTURED_DATA_KEY: None})
    assert not resolve_page_metadata(page, Resolver(), url_builder)
    assert not inject_metadata(page, lxml.html.document_fromstring(HTML))


@pytest.mark.parametrize("declared", ["lume-data:title", 42, ["lume-data:title"]])
def test_scalar_root_is_rejected_with_page_url(url_builder, declared):
    page = Page(url="/posts/x/", data={"title": "X", STRUCTURED_DATA_KEY: declared})

    with pytest.raises(PageMetadataError, match="/posts/x/") as exc_info:
        resolve_page_metadata(page, Resolver(), url_builder)

    assert isinstance(exc_info.value.cause, UnsupportedValueError)
    assert page.structured_data == declared


def test_reference_root_resolving_to_object_is_accepted(url_builder):
    page = Page(url="/", data={"site": {"@type": "WebSite"}, STRUCTURED_DATA_KEY: "lume-data:site"})
    assert resolve_page_metadata(page, Resolver(), url_builder)
    assert page.structured_data == {"@type": "WebSite"}


def test_inject_of_unresolvable_root_names_page():
    page = Page(url="/about/", data={STRUCTURED_DATA_KEY: "plain text"})
    with pytest.raises(PageMetadataError, match="/about/") as exc_info:
        inject_metadata(page, lxml.html.document_fromstring(HTML))
    assert isinstance(exc_info.value.cause, UnsupportedValueError)


def test_injecting_twice_keeps_a_single_script():
    page = Page(url="/", data={STRUCTURED_DATA_KEY: {"@type": "WebSite", "name": "first"}})
    document = lxml.html.document_fromstring(HTML)

    inject_metadata(page, document)
    page.data[STRUCTURED_DATA_KEY] = {"@type": "WebSite", "name": "second"}
    inject_metadata(page, document)

    scripts = _ld_json(document)
    assert len(scripts) == 1
    assert scripts[0].getprevious().tag == "title"
    assert json.loads(scripts[0].text)["name"] == "second"


def test_existing_json_ld_in_body_is_replaced():
    page = Page(url="/", data={STRUCTURED_DATA_KEY: {"@type": "WebSite"}})
    document = lxml.html.document_fromstring(
        '<html><head><title>T</title></head><body><p>a</p>'
        '<script type="application/ld+json">{"@type":"Old"}</script><p>b</p></body></html>'
    )

    inject_metadata(page, document)

    scripts = _ld_json(document)
    assert len(scripts) == 1
    assert json.loads(scripts[0].text)["@type"] == "WebSite"
    assert [p.text for p in document.xpath("//p")] == ["a", "b"]
