"""Shared fixtures for sitemeta tests."""

from datetime import UTC, datetime

import pytest

from sitemeta.core.resolver import PageContext
from sitemeta.core.urls import SiteUrlBuilder

SITE_LOCATION = "https://example.com/"


@pytest.fixture
def url_builder() -> SiteUrlBuilder:
    return SiteUrlBuilder(SITE_LOCATION)


@pytest.fixture
def post_data() -> dict:
    """Page data of a blog post, with site-wide data merged in."""
    return {
        "url": "/posts/hello-world/",
        "title": "Hello World",
        "description": "First post",
        "date": datetime(2024, 1, 1, tzinfo=UTC),
        "tags": ["python", "json-ld"],
        "readingInfo": {"minutes": 5, "words": 1200},
        "config": {
            "site": {"name": "garciat", "description": "Personal site"},
            "data": {
                "author": {
                    "@type": "Person",
                    "name": "Gabriel",
                    "url": "site-url:/",
                },
            },
        },
    }


@pytest.fixture
def make_context(url_builder):
    def _make(data: dict, url: str = "/posts/hello-world/") -> PageContext:
        return PageContext(url=url, data=data, normalize_url=url_builder)

    return _make
