"""Tests for data models and value formatting."""

from datetime import date, datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from indexed.models import (
    DIRECTIVE_ORDER,
    ChangeFrequency,
    Directive,
    PageEntry,
    RobotsManifest,
    SitemapManifest,
    format_lastmod,
    format_priority,
    parse_modified,
)


class TestDirective:
    """Tests for the directive enum."""

    def test_canonical_order(self) -> None:
        """Directive order is fixed by definition order."""
        assert [d.value for d in DIRECTIVE_ORDER] == [
            "User-agent",
            "Allow",
            "Disallow",
            "Sitemap",
            "Crawl-delay",
            "Visit-time",
            "Request-rate",
            "Comment",
        ]
        assert DIRECTIVE_ORDER[0] is Directive.USER_AGENT


class TestParseModified:
    """Tests for parse_modified."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("2020-01-01", datetime(2020, 1, 1, tzinfo=timezone.utc)),
            ("2020-01-01T10:20:30Z", datetime(2020, 1, 1, 10, 20, 30, tzinfo=timezone.utc)),
            ("2020-01-01 10:20:30", datetime(2020, 1, 1, 10, 20, 30, tzinfo=timezone.utc)),
            ("2020/01/01", datetime(2020, 1, 1, tzinfo=timezone.utc)),
            ("1 March 2020", datetime(2020, 3, 1, tzinfo=timezone.utc)),
            ("March 1, 2020", datetime(2020, 3, 1, tzinfo=timezone.utc)),
            (date(2020, 1, 1), datetime(2020, 1, 1, tzinfo=timezone.utc)),
        ],
    )
    def test_parses_common_formats(self, value: object, expected: datetime) -> None:
        """Common date spellings parse to aware datetimes, UTC when naive."""
        assert parse_modified(value) == expected

    def test_aware_datetime_kept(self) -> None:
        """Offsets on aware datetimes are preserved."""
        value = datetime(2020, 1, 1, 12, tzinfo=timezone(timedelta(hours=2)))

        assert parse_modified(value) is value

    @pytest.mark.parametrize("value", [None, ""])
    def test_empty_is_none(self, value: object) -> None:
        """Empty values mean no modification date."""
        assert parse_modified(value) is None

    @pytest.mark.parametrize("value", ["monthly", "yesterday-ish", 12345])
    def test_rejects_unparseable(self, value: object) -> None:
        """Non-dates raise ValueError."""
        with pytest.raises(ValueError):
            parse_modified(value)


class TestFormatting:
    """Tests for lastmod and priority formatting."""

    def test_format_lastmod(self) -> None:
        """Microseconds are dropped and the offset kept."""
        value = datetime(2020, 1, 1, 8, 5, 3, 123456, tzinfo=timezone.utc)

        assert format_lastmod(value) == "2020-01-01T08:05:03+00:00"

    @pytest.mark.parametrize(
        ("value", "expected"),
        [(0.4, "0.4"), (1.0, "1"), (0.0, "0"), (0.85, "0.85"), (0.00001, "0.00001"), (1, "1")],
    )
    def test_format_priority(self, value: float, expected: str) -> None:
        """Priorities use their shortest representation."""
        assert format_priority(value) == expected


class TestPageEntry:
    """Tests for the page model."""

    def test_defaults(self) -> None:
        """Only the URL is required."""
        entry = PageEntry(url="http://example.org/")

        assert entry.modified is None
        assert entry.changes is None
        assert entry.priority is None
        assert entry.images == {}

    def test_changes_case_insensitive(self) -> None:
        """Change frequencies are matched case-insensitively."""
        assert PageEntry(url="http://example.org/", changes="WEEKLY").changes is ChangeFrequency.WEEKLY

    def test_priority_bounds(self) -> None:
        """Priority must lie in [0.0, 1.0]."""
        with pytest.raises(ValidationError):
            PageEntry(url="http://example.org/", priority=2)


class TestManifests:
    """Tests for CLI manifest models."""

    def test_robots_manifest_aliases(self) -> None:
        """Time windows accept from/until keys."""
        manifest = RobotsManifest.model_validate(
            {
                "agents": [
                    {
                        "agent": "Googlebot",
                        "visit_times": [{"from": "01:00", "until": "05:00"}],
                        "request_rates": [{"documents": 10, "from": "01:00", "until": "05:00"}],
                    }
                ]
            }
        )

        rules = manifest.agents[0]
        assert rules.visit_times[0].start == "01:00"
        assert rules.request_rates[0].end == "05:00"

    def test_robots_manifest_rejects_unknown_keys(self) -> None:
        """Typos in manifests are errors."""
        with pytest.raises(ValidationError):
            RobotsManifest.model_validate({"agents": [{"dissallow": ["/x"]}]})

    def test_sitemap_manifest_requires_base(self) -> None:
        """Sitemap manifests need a base URL."""
        with pytest.raises(ValidationError):
            SitemapManifest.model_validate({"pages": []})
