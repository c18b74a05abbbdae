"""CLI error handling utilities."""

from collections.abc import Generator
from contextlib import contextmanager

import typer
from rich.markup import escape

from sitemeta.core.exceptions import ConfigError, DataFileError, PageMetadataError, SitemetaError
from sitemeta.core.logging import console


@contextmanager
def handle_cli_errors(*, debug: bool = False) -> Generator[None, None, None]:
    """Context manager to handle CLI errors gracefully.

    Args:
        debug: If True, re-raise with the full traceback. If False, print a
            user-friendly error and exit with status 1.

    """
    try:
        yield
    except (KeyboardInterrupt, SystemExit):
        raise
    except PageMetadataError as e:
        if debug:
            raise
        console.print(f"[bold red]Structured data error:[/bold red] {escape(str(e))}", soft_wrap=True)
        raise typer.Exit(1) from e
    except ConfigError as e:
        if debug:
            raise
        console.print(f"[bold red]Configuration error:[/bold red] {escape(str(e))}", soft_wrap=True)
        raise typer.Exit(1) from e
    except DataFileError as e:
        if debug:
            raise
        console.print(f"[bold red]Data file error:[/bold red] {escape(str(e))}", soft_wrap=True)
        raise typer.Exit(1) from e
    except SitemetaError as e:
        if debug:
            raise
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}", soft_wrap=True)
        raise typer.Exit(1) from e
