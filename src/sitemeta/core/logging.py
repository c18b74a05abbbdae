"""Centralized logging configuration for sitemeta."""

from __future__ import annotations

import logging
import os
from typing import Final

from rich.console import Console
from rich.logging import RichHandler

__all__ = ["configure_logging", "console"]

_LOG_LEVEL_ENV: Final[str] = "SITEMETA_LOG_LEVEL"
_DEFAULT_LEVEL_NAME: Final[str] = "INFO"

console = Console(stderr=True)


def _resolve_level(level_name: str | None) -> int:
    """Return the logging level from the argument or the environment."""
    name = (level_name or os.getenv(_LOG_LEVEL_ENV, _DEFAULT_LEVEL_NAME)).upper()
    return getattr(logging, name, logging.INFO)


def configure_logging(level_name: str | None = None) -> None:
    """Configure logging once with a Rich handler."""
    root_logger = logging.getLogger()

    managed = [h for h in root_logger.handlers if getattr(h, "_sitemeta_managed", False)]
    if not managed:
        handler = RichHandler(
            console=console,
            rich_tracebacks=True,
            show_path=False,
            markup=False,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        handler._sitemeta_managed = True  # type: ignore[attr-defined]
        root_logger.addHandler(handler)

    root_logger.setLevel(_resolve_level(level_name))
    logging.captureWarnings(True)
