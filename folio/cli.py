"""Command-line interface for Folio.

This module is a thin driver over the library, built with Click. It reads
folio.yaml from the current directory, and command-line options override it.

Commands:
- list: Print the listing as text or JSON.
- render: Render the listing to HTML and optionally an RSS feed.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import click

from . import __version__
from .config import listing_options_from_config, load_config
from .documents import DocumentLoader
from .errors import DirectoryUnreadableError
from .feeds import RSSGenerator
from .listing import Listing, SortOrder, build_listing
from .rendering import ListingRenderer


@click.group()
@click.version_option(version=__version__, prog_name="folio")
@click.option("-v", "--verbose", is_flag=True, help="Show debug logging")
def cli(verbose: bool):
    """Folio document indexer."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _listing_options(func):
    func = click.option("--drafts", is_flag=True, help="Include draft documents")(func)
    func = click.option(
        "--limit", type=click.IntRange(min=1), help="Maximum number of entries"
    )(func)
    func = click.option(
        "--order",
        type=click.Choice([o.value for o in SortOrder]),
        help="Sort order (overrides folio.yaml)",
    )(func)
    func = click.argument(
        "source", required=False, type=click.Path(path_type=Path)
    )(func)
    return func


def _build(
    source: Path | None, order: str | None, limit: int | None, drafts: bool
) -> tuple[Listing, dict[str, Any]]:
    """Load documents and build the listing, applying CLI overrides."""
    config = load_config(Path.cwd())
    if order is not None:
        config["sort_order"] = order
    if limit is not None:
        config["limit"] = limit
    if drafts:
        config["include_drafts"] = True
    source_dir = source or Path(config["source_dir"])

    try:
        options = listing_options_from_config(config)
    except ValueError as exc:
        raise click.ClickException(f"Invalid configuration: {exc}") from exc

    try:
        result = DocumentLoader(source_dir).load(
            include_drafts=bool(config.get("include_drafts"))
        )
    except DirectoryUnreadableError as exc:
        click.echo(click.style("Load failed:", fg="red", bold=True), err=True)
        click.echo(click.style(f"  Error: {exc}", fg="white"), err=True)
        raise SystemExit(1) from None
    for problem in result.skipped:
        click.echo(click.style(f"Skipped: {problem}", fg="yellow"), err=True)

    return build_listing(result.documents, options), config


@cli.command(name="list")
@_listing_options
@click.option("--json", "as_json", is_flag=True, help="Print entries as JSON")
def list_(source, order, limit, drafts, as_json: bool):
    """Print the listing."""
    listing, _ = _build(source, order, limit, drafts)
    if as_json:
        payload = [
            {
                "id": entry.id,
                "title": entry.title,
                "url": entry.url,
                "date": entry.published_at.isoformat(),
                "formatted_date": entry.formatted_date,
                "excerpt": entry.excerpt,
            }
            for entry in listing
        ]
        click.echo(json.dumps(payload, indent=2, ensure_ascii=False))
        return
    for entry in listing:
        click.echo(f"{entry.formatted_date}  {entry.title}  {entry.url}")


@cli.command()
@_listing_options
@click.option(
    "--template",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Jinja2 template file (overrides folio.yaml)",
)
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write HTML here instead of stdout",
)
@click.option(
    "--feed",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Also write an RSS feed here (needs url in folio.yaml)",
)
def render(source, order, limit, drafts, template, output, feed):
    """Render the listing to HTML."""
    listing, config = _build(source, order, limit, drafts)
    if template is None and config.get("template"):
        template = Path(config["template"])
    site = {"title": config.get("title") or "", "url": config.get("url") or ""}
    html = ListingRenderer(template, site=site, root_url=site["url"]).render(listing)
    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(html, encoding="utf-8")
        click.echo(f"Rendered {len(listing)} entries into {output}", err=True)
    else:
        click.echo(html)

    if feed:
        if RSSGenerator().write(feed, listing, site):
            click.echo(f"Wrote feed {feed}", err=True)
        else:
            message = "Feed skipped: set url in folio.yaml"
            click.echo(click.style(message, fg="yellow"), err=True)


def main():
    """Entry point for the CLI application."""
    cli()
