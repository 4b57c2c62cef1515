"""Common CLI utilities and the main app group."""

import logging
from pathlib import Path
from typing import NoReturn, TypeVar

import click
from pydantic import BaseModel, ValidationError
from rich.console import Console
from rich.logging import RichHandler

from indexed import __version__
from indexed.config import get_settings
from indexed.exceptions import ConfigurationError, IndexedError

console = Console(stderr=True)
_configured = False

LOGGER = logging.getLogger(__name__)

ManifestT = TypeVar("ManifestT", bound=BaseModel)


def configure_logging(*, verbose: bool = False) -> None:
    """Configure logging with Rich handler. Call once at startup."""
    global _configured
    if _configured:
        return

    level = logging.DEBUG if verbose else get_settings().log_level

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[
            RichHandler(
                console=console,
                rich_tracebacks=True,
                tracebacks_show_locals=verbose,
            )
        ],
        force=True,
    )

    _configured = True


def load_manifest(path: Path, model: type[ManifestT]) -> ManifestT:
    """
    Load and validate a JSON manifest.

    Args:
        path: Manifest file.
        model: Manifest model to validate against.

    Returns:
        Validated manifest.

    Raises:
        ConfigurationError: If the file is not valid JSON or does not match the model.
    """
    try:
        manifest = model.model_validate_json(path.read_text(encoding="utf-8"))
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid manifest: {e.error_count()} error(s)\n{e}",
            config_path=str(path),
        ) from e

    LOGGER.debug("Loaded %s from %s", model.__name__, path)
    return manifest


def write_output(content: str, output: Path | None, what: str) -> None:
    """Write generated content to a file or stdout."""
    if output:
        with open(output, "w", encoding="utf-8") as f:
            f.write(content)
        click.echo(f"Wrote {what} to {output}")
    else:
        click.echo(content, nl=False)


def fail(error: IndexedError) -> NoReturn:
    """Report a library error and exit with status 1."""
    LOGGER.debug("Command failed with context %s [correlation_id=%s]", error.context, error.correlation_id)
    click.echo(f"Error: {error.message}", err=True)
    raise SystemExit(1)


manifest_argument = click.argument(
    "manifest",
    type=click.Path(exists=True, file_okay=True, dir_okay=False, path_type=Path),
)

output_option = click.option(
    "--output",
    "-o",
    type=click.Path(file_okay=True, dir_okay=False, path_type=Path),
    default=None,
    help="Output file path. If omitted, prints to stdout.",
)

debug_option = click.option(
    "--debug/--no-debug",
    default=None,
    help="Pretty-print XML output. Also reads INDEXED_DEBUG env.",
)


@click.group(help="Generate robots.txt, sitemap and siteindex files.")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging.")
@click.version_option(__version__, prog_name="indexed")
def app(verbose: bool) -> None:
    """
    Entry point for the indexed CLI.

    Builds crawler artifacts from JSON manifests.
    """
    try:
        configure_logging(verbose=verbose)
    except ConfigurationError as e:
        fail(e)
