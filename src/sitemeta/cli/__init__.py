"""Command line interface for sitemeta."""

from sitemeta.cli.app import app

__all__ = ["app"]
