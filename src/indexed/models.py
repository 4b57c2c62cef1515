"""Data models for indexed."""

from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

# =============================================================================
# Robots Models
# =============================================================================


class Directive(str, Enum):
    """robots.txt directives, declared in canonical output order."""

    USER_AGENT = "User-agent"  # 1.0
    ALLOW = "Allow"  # 2.0
    DISALLOW = "Disallow"  # 1.0
    SITEMAP = "Sitemap"  # nonstandard
    CRAWL_DELAY = "Crawl-delay"  # nonstandard
    VISIT_TIME = "Visit-time"  # 2.0
    REQUEST_RATE = "Request-rate"  # 2.0
    COMMENT = "Comment"  # 2.0


# Enum iteration order is definition order
DIRECTIVE_ORDER: tuple[Directive, ...] = tuple(Directive)


# =============================================================================
# Sitemap Models
# =============================================================================


class ChangeFrequency(str, Enum):
    """Allowed values of the sitemap ``changefreq`` element."""

    ALWAYS = "always"
    HOURLY = "hourly"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"
    NEVER = "never"


# Fallback formats tried after ISO 8601
_MODIFIED_FORMATS = [
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d %H:%M",
    "%Y/%m/%d",
    "%d %B %Y",
    "%d %b %Y",
    "%B %d, %Y",
    "%b %d, %Y",
    "%a, %d %b %Y %H:%M:%S %z",  # RFC 2822
]


def parse_modified(value: Any) -> datetime | None:
    """
    Parse a last-modification value into an aware datetime.

    Naive values are taken as UTC.

    Args:
        value: A ``datetime``, ``date``, or date string.

    Returns:
        Timezone-aware datetime, or None when value is empty.

    Raises:
        ValueError: If the value cannot be interpreted as a date.
    """
    if value is None or value == "":
        return None

    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        parsed = _parse_modified_string(value.strip())
    else:
        raise ValueError(f"Unsupported modified value: {value!r}")

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _parse_modified_string(text: str) -> datetime:
    """Parse date string in various formats."""
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        pass

    for fmt in _MODIFIED_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue

    raise ValueError(f"Could not parse date: {text!r}")


def format_lastmod(value: datetime) -> str:
    """Format a datetime as W3C datetime, e.g. ``2020-01-01T00:00:00+00:00``."""
    return value.replace(microsecond=0).isoformat()


def format_priority(value: float) -> str:
    """Format priority as the shortest fixed-point decimal, e.g. ``0.4`` or ``1``."""
    return format(Decimal(str(value)).normalize(), "f")


class ImageEntry(BaseModel):
    """An image attached to a page (Google image sitemap extension)."""

    model_config = ConfigDict(extra="ignore")

    url: str
    title: str | None = None
    license: str | None = None
    caption: str | None = None
    location: str | None = None


class PageEntry(BaseModel):
    """A page listed in a sitemap ``urlset``."""

    model_config = ConfigDict(extra="ignore")

    url: str
    modified: datetime | None = None
    changes: ChangeFrequency | None = None
    priority: float | None = Field(default=None, ge=0.0, le=1.0)
    title: str | None = None

    # Keyed by fully qualified image URL, insertion ordered
    images: dict[str, ImageEntry] = Field(default_factory=dict)

    @field_validator("modified", mode="before")
    @classmethod
    def validate_modified(cls, v: Any) -> datetime | None:
        """Accept dates, datetimes and date strings."""
        return parse_modified(v)

    @field_validator("changes", mode="before")
    @classmethod
    def validate_changes(cls, v: Any) -> Any:
        """Normalise change frequency case."""
        if isinstance(v, str):
            return v.strip().lower() or None
        return v


class SitemapRefEntry(BaseModel):
    """A sitemap listed in a siteindex ``sitemapindex``."""

    model_config = ConfigDict(extra="ignore")

    url: str
    modified: datetime | None = None
    title: str | None = None

    @field_validator("modified", mode="before")
    @classmethod
    def validate_modified(cls, v: Any) -> datetime | None:
        """Accept dates, datetimes and date strings."""
        return parse_modified(v)


# =============================================================================
# Manifest Models
# =============================================================================


class TimeWindow(BaseModel):
    """A time-of-day range, e.g. ``13:00`` to ``20:00``."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    start: str = Field(alias="from")
    end: str = Field(alias="until")


class RequestRateRule(BaseModel):
    """Documents per minute, optionally restricted to a time window."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    documents: int = Field(ge=1)
    start: str | None = Field(default=None, alias="from")
    end: str | None = Field(default=None, alias="until")


class AgentRules(BaseModel):
    """All directives for a single user agent in a robots manifest."""

    model_config = ConfigDict(extra="forbid")

    agent: str = "*"
    allow: list[str] = Field(default_factory=list)
    disallow: list[str] = Field(default_factory=list)
    sitemaps: list[str] = Field(default_factory=list)
    crawl_delay: int | None = Field(default=None, ge=0)
    visit_times: list[TimeWindow] = Field(default_factory=list)
    request_rates: list[RequestRateRule] = Field(default_factory=list)
    comments: list[str] = Field(default_factory=list)

    @field_validator("agent")
    @classmethod
    def validate_agent(cls, v: str) -> str:
        """Agent identifiers must not be blank."""
        if not v.strip():
            raise ValueError("agent must not be blank")
        return v.strip()


class RobotsManifest(BaseModel):
    """Input document for the ``robots`` command."""

    model_config = ConfigDict(extra="forbid")

    agents: list[AgentRules] = Field(default_factory=list)


class ImageSpec(BaseModel):
    """Image declaration in a sitemap manifest."""

    model_config = ConfigDict(extra="forbid")

    url: str
    title: str | None = None
    license: str | None = None
    caption: str | None = None
    location: str | None = None


class PageSpec(BaseModel):
    """Page declaration in a sitemap manifest."""

    model_config = ConfigDict(extra="forbid")

    url: str
    modified: str | None = None
    changes: str | None = None
    priority: float | None = None
    title: str | None = None
    images: list[ImageSpec] = Field(default_factory=list)


class SitemapManifest(BaseModel):
    """Input document for the ``sitemap`` command."""

    model_config = ConfigDict(extra="forbid")

    base: str
    pages: list[PageSpec] = Field(default_factory=list)


class SitemapRefSpec(BaseModel):
    """Sitemap declaration in a siteindex manifest."""

    model_config = ConfigDict(extra="forbid")

    url: str
    modified: str | None = None
    title: str | None = None


class SiteindexManifest(BaseModel):
    """Input document for the ``siteindex`` command."""

    model_config = ConfigDict(extra="forbid")

    base: str
    sitemaps: list[SitemapRefSpec] = Field(default_factory=list)
