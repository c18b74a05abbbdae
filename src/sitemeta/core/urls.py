"""Site URL normalization used to resolve ``site-url:`` references."""

from __future__ import annotations

import posixpath
import re
from typing import Protocol, runtime_checkable
from urllib.parse import urlsplit

_SCHEME_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*:")
_PASSTHROUGH_PREFIXES = ("./", "../", "?", "#", "//")


@runtime_checkable
class UrlNormalizer(Protocol):
    """Turns a site path into a public URL."""

    def __call__(self, path: str, absolute: bool = False) -> str: ...


class SiteUrlBuilder:
    """Builds public URLs for paths of a site deployed at ``location``.

    Example:
        >>> url = SiteUrlBuilder("https://example.com/blog/")
        >>> url("/about/", absolute=True)
        'https://example.com/blog/about/'

    """

    def __init__(self, location: str) -> None:
        parts = urlsplit(location)
        if not parts.scheme or not parts.netloc:
            msg = f"Site location must be an absolute URL, got {location!r}"
            raise ValueError(msg)
        self.location = location
        self.origin = f"{parts.scheme}://{parts.netloc}"
        self.base_path = parts.path or "/"

    def __repr__(self) -> str:
        return f"SiteUrlBuilder({self.location!r})"

    def __call__(self, path: str, absolute: bool = False) -> str:
        if path.startswith(_PASSTHROUGH_PREFIXES) or _SCHEME_PATTERN.match(path):
            return path

        path, suffix = _split_suffix(path)
        normalized = normalize_path(path)
        if self.base_path != "/":
            normalized = self.base_path.rstrip("/") + normalized

        url = normalized + suffix
        return self.origin + url if absolute else url


def normalize_path(path: str) -> str:
    """Collapse ``.``/``..`` segments and duplicate slashes, keeping a trailing slash."""
    if not path:
        return "/"
    normalized = posixpath.normpath("/" + path.lstrip("/"))
    if path.endswith("/") and normalized != "/":
        normalized += "/"
    return normalized


def _split_suffix(path: str) -> tuple[str, str]:
    """Separate the query string and fragment from ``path``."""
    cut = min((i for i in (path.find("?"), path.find("#")) if i >= 0), default=len(path))
    return path[:cut], path[cut:]
