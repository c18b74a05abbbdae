"""Classification of reference strings embedded in metadata trees.

Three reserved forms are recognised, checked in this order:

- ``site-url:self``: the canonical URL of the page being rendered.
- ``site-url:<path>``: the canonical URL of another path of the site.
- ``lume-data:<dotted.path> | filter | ...``: a lookup in the page data,
  followed by an optional chain of filters.

Any other string is ordinary author text.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

SITE_URL_PREFIX: Final[str] = "site-url:"
SELF_URL: Final[str] = f"{SITE_URL_PREFIX}self"
DATA_REF_PREFIX: Final[str] = "lume-data:"


@dataclass(frozen=True, slots=True)
class PlainString:
    value: str


@dataclass(frozen=True, slots=True)
class SelfURLRef:
    pass


@dataclass(frozen=True, slots=True)
class SiteURLRef:
    path: str


@dataclass(frozen=True, slots=True)
class DataRef:
    path: tuple[str, ...]
    filters: tuple[str, ...] = ()

    @property
    def dotted(self) -> str:
        return ".".join(self.path)


Reference = SelfURLRef | SiteURLRef | DataRef


def classify(value: str) -> Reference | PlainString:
    """Return the reference encoded by ``value``, or ``PlainString`` for literal text."""
    if value == SELF_URL:
        return SelfURLRef()
    if value.startswith(SITE_URL_PREFIX):
        return SiteURLRef(value[len(SITE_URL_PREFIX) :])
    if value.startswith(DATA_REF_PREFIX):
        return _parse_data_ref(value)
    return PlainString(value)


def _parse_data_ref(value: str) -> DataRef:
    head, *filters = (part.strip() for part in value.split("|"))
    keys = head[len(DATA_REF_PREFIX) :].split(".")
    return DataRef(path=tuple(keys), filters=tuple(filters))
