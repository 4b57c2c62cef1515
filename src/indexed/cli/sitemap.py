"""Sitemap and siteindex generation commands."""

from pathlib import Path

import click

from indexed.cli._common import (
    app,
    debug_option,
    fail,
    load_manifest,
    manifest_argument,
    output_option,
    write_output,
)
from indexed.exceptions import IndexedError
from indexed.models import SiteindexManifest, SitemapManifest
from indexed.siteindex import Siteindex
from indexed.sitemap import Sitemap


def build_sitemap(manifest: SitemapManifest, debug: bool | None = None) -> Sitemap:
    """
    Build a sitemap from a manifest.

    Args:
        manifest: Validated sitemap manifest.
        debug: Pretty-print override.

    Returns:
        Populated sitemap.
    """
    sitemap = Sitemap(manifest.base, debug=debug)

    for page in manifest.pages:
        sitemap.page(page.url, **page.model_dump(exclude={"url", "images"}, exclude_none=True))
        for image in page.images:
            sitemap.image(image.url, page.url, **image.model_dump(exclude={"url"}, exclude_none=True))

    return sitemap


def build_siteindex(manifest: SiteindexManifest, debug: bool | None = None) -> Siteindex:
    """
    Build a siteindex from a manifest.

    Args:
        manifest: Validated siteindex manifest.
        debug: Pretty-print override.

    Returns:
        Populated siteindex.
    """
    index = Siteindex(manifest.base, debug=debug)

    for ref in manifest.sitemaps:
        index.sitemap(ref.url, **ref.model_dump(exclude={"url"}, exclude_none=True))

    return index


@app.command("sitemap", help="Generate a sitemap from a JSON manifest.")
@manifest_argument
@output_option
@debug_option
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["xml", "txt"], case_sensitive=False),
    default="xml",
    show_default=True,
    help="Output format: xml (sitemaps.org urlset) or txt (deprecated, URLs only).",
)
def sitemap_cmd(manifest: Path, output: Path | None, debug: bool | None, output_format: str) -> None:
    """Generate a sitemap.

    Examples:
        indexed sitemap pages.json
        indexed sitemap pages.json --debug --output public/sitemap.xml
    """
    try:
        spec = load_manifest(manifest, SitemapManifest)
        content = build_sitemap(spec, debug=debug).generate(output_format.lower())
    except IndexedError as e:
        fail(e)

    write_output(content, output, "sitemap")


@app.command("siteindex", help="Generate a siteindex from a JSON manifest.")
@manifest_argument
@output_option
@debug_option
def siteindex_cmd(manifest: Path, output: Path | None, debug: bool | None) -> None:
    """Generate a siteindex.

    Examples:
        indexed siteindex sitemaps.json --output public/sitemap-index.xml
    """
    try:
        spec = load_manifest(manifest, SiteindexManifest)
        content = build_siteindex(spec, debug=debug).generate()
    except IndexedError as e:
        fail(e)

    write_output(content, output, "siteindex")
