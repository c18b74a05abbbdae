"""Command line tools for checking the structured data of a page."""

import logging
from pathlib import Path
from typing import Annotated, Any

import typer
import yaml

from sitemeta.cli.errorhandler import handle_cli_errors
from sitemeta.core.config import SitemetaSettings, build_resolver
from sitemeta.core.exceptions import DataFileError
from sitemeta.core.logging import configure_logging, console
from sitemeta.core.serialize import render_structured_data, serialize
from sitemeta.infra.html import inject_into_html
from sitemeta.infra.page import Page, resolve_page_metadata

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="sitemeta",
    help="Resolve and embed JSON-LD structured data for static site pages",
    add_completion=False,
)

PageFile = Annotated[Path, typer.Argument(help="YAML or JSON file with the page data.", exists=True, dir_okay=False)]
UrlOption = Annotated[str | None, typer.Option("--url", help="Site path of the page (defaults to its 'url' key).")]
ConfigOption = Annotated[
    Path | None, typer.Option("--config", help="Directory holding .sitemeta.toml.", file_okay=False)
]
SiteDataOption = Annotated[
    Path | None, typer.Option("--site-data", help="YAML or JSON file with site-wide data.", dir_okay=False)
]
DebugOption = Annotated[bool, typer.Option("--debug", help="Show full tracebacks and debug logs.")]


def _load_mapping(path: Path) -> dict[str, Any]:
    """Read a YAML (or JSON) mapping from ``path``."""
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as exc:
        raise DataFileError(str(path), str(exc)) from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise DataFileError(str(path), f"expected a mapping, got {type(data).__name__}")
    return data


def _load_page(page_file: Path, url: str | None, site_data: Path | None) -> Page:
    data: dict[str, Any] = {}
    if site_data is not None:
        data.update(_load_mapping(site_data))
    data.update(_load_mapping(page_file))
    return Page(url=url or str(data.get("url") or "/"), data=data)


def _prepare(config: Path | None, debug: bool) -> SitemetaSettings:
    settings = SitemetaSettings.load(config)
    configure_logging("DEBUG" if debug else settings.log_level)
    return settings


@app.command()
def resolve(
    page_file: PageFile,
    url: UrlOption = None,
    config: ConfigOption = None,
    site_data: SiteDataOption = None,
    wrap: Annotated[bool, typer.Option("--wrap/--no-wrap", help="Add the JSON-LD @context key.")] = True,
    debug: DebugOption = False,
) -> None:
    """Print the resolved structured data of a page."""
    with handle_cli_errors(debug=debug):
        settings = _prepare(config, debug)
        page = _load_page(page_file, url, site_data)

        if not resolve_page_metadata(page, build_resolver(settings), settings.url_builder()):
            console.print(f"[yellow]No structured data declared in {page_file}[/yellow]")
            return

        tree = page.structured_data
        typer.echo(render_structured_data(tree, settings.context) if wrap else serialize(tree))


@app.command()
def inject(
    page_file: PageFile,
    html_file: Annotated[Path, typer.Argument(help="Rendered HTML of the page.", exists=True, dir_okay=False)],
    url: UrlOption = None,
    output: Annotated[Path | None, typer.Option("--output", "-o", help="Write the result here.")] = None,
    config: ConfigOption = None,
    site_data: SiteDataOption = None,
    debug: DebugOption = False,
) -> None:
    """Embed the resolved structured data of a page into its HTML."""
    with handle_cli_errors(debug=debug):
        settings = _prepare(config, debug)
        page = _load_page(page_file, url, site_data)

        if not resolve_page_metadata(page, build_resolver(settings), settings.url_builder()):
            console.print(f"[yellow]No structured data declared in {page_file}[/yellow]")

        try:
            html = html_file.read_text(encoding="utf-8")
        except OSError as exc:
            raise DataFileError(str(html_file), str(exc)) from exc

        result = inject_into_html(page, html, settings.context)

        if output is None:
            typer.echo(result)
        else:
            output.write_text(result, encoding="utf-8")
            logger.info("Wrote %s", output)
