"""Jinja2 integration for templates that place JSON-LD themselves."""

from __future__ import annotations

from functools import partial
from typing import Any

from jinja2 import Environment
from markupsafe import Markup

from sitemeta.core.serialize import DEFAULT_CONTEXT, render_structured_data
from sitemeta.infra.page import LD_JSON_TYPE


def structured_data_script(tree: Any, context: str = DEFAULT_CONTEXT) -> Markup:
    """Render a resolved tree as a complete JSON-LD script element."""
    # The serialized text escapes <, > and &, so it needs no HTML escaping.
    text = render_structured_data(tree, context)
    return Markup(f'<script type="{LD_JSON_TYPE}">{text}</script>')


def register_filters(env: Environment, context: str = DEFAULT_CONTEXT) -> None:
    """Register the ``structured_data`` filter on ``env``."""
    env.filters["structured_data"] = partial(structured_data_script, context=context)
