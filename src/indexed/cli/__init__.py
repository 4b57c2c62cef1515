"""Command-line interface for indexed.

This package provides the CLI commands for indexed. Commands are organized
into modules by functionality:

- robots: robots.txt generation
- sitemap: sitemap and siteindex generation
"""

# Import all command modules to register them with the app
# The order doesn't matter - Click handles command registration
from indexed.cli import (
    robots,  # noqa: F401
    sitemap,  # noqa: F401
)
from indexed.cli._common import app

__all__ = ["app"]
