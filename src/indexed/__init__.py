"""Generators for robots.txt, sitemap and siteindex files."""

__version__ = "1.0.0"

from indexed.exceptions import (  # noqa: E402
    AlreadyExistsError,
    ConfigurationError,
    IndexedError,
    InvalidArgumentError,
    LimitExceededError,
    NotFoundError,
    UnsupportedFormatError,
)
from indexed.models import ChangeFrequency, Directive, ImageEntry, PageEntry, SitemapRefEntry  # noqa: E402
from indexed.robots import DirectiveStore, RobotsTxt, render_robots  # noqa: E402
from indexed.siteindex import Siteindex  # noqa: E402
from indexed.sitemap import Sitemap  # noqa: E402

__all__ = [
    "__version__",
    # Robots
    "Directive",
    "DirectiveStore",
    "RobotsTxt",
    "render_robots",
    # Sitemaps
    "ChangeFrequency",
    "ImageEntry",
    "PageEntry",
    "SitemapRefEntry",
    "Sitemap",
    "Siteindex",
    # Errors
    "IndexedError",
    "InvalidArgumentError",
    "AlreadyExistsError",
    "NotFoundError",
    "LimitExceededError",
    "UnsupportedFormatError",
    "ConfigurationError",
]
