"""JSON-LD context wrapping and serialization."""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any, Final

from sitemeta.core.exceptions import UnsupportedValueError

DEFAULT_CONTEXT: Final[str] = "https://schema.org"

# Keeps the encoded text inert inside an HTML <script> element.
_SCRIPT_ESCAPES: Final[dict[int, str]] = {
    ord("<"): "\\u003c",
    ord(">"): "\\u003e",
    ord("&"): "\\u0026",
}


def wrap(tree: Any, context: str = DEFAULT_CONTEXT) -> dict[str, Any] | list[dict[str, Any]]:
    """Attach ``@context`` to a resolved object, or to each object of a list."""
    if isinstance(tree, Mapping):
        return {"@context": context, **tree}
    if isinstance(tree, list | tuple):
        return [_wrap_item(item, context) for item in tree]
    raise UnsupportedValueError(tree)


def _wrap_item(item: Any, context: str) -> dict[str, Any]:
    if not isinstance(item, Mapping):
        raise UnsupportedValueError(item)
    return {"@context": context, **item}


def serialize(tree: Any) -> str:
    """Encode a resolved tree as compact JSON, preserving key order."""
    text = json.dumps(tree, ensure_ascii=False, separators=(",", ":"), allow_nan=False)
    return text.translate(_SCRIPT_ESCAPES)


def render_structured_data(tree: Any, context: str = DEFAULT_CONTEXT) -> str:
    """Return the embeddable JSON-LD text for a resolved tree."""
    return serialize(wrap(tree, context))
