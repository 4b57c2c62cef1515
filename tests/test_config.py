"""Tests for settings loading."""

import pytest

from indexed.config import MAX_IMAGES_PER_PAGE, MAX_ITEMS, MAX_SIZE, IndexedSettings, get_settings
from indexed.exceptions import ConfigurationError
from indexed.siteindex import Siteindex
from indexed.sitemap import Sitemap


class TestIndexedSettings:
    """Tests for IndexedSettings defaults and overrides."""

    def test_defaults_match_protocol_limits(self) -> None:
        """Defaults are the sitemaps.org ceilings."""
        settings = get_settings()

        assert settings.max_items == MAX_ITEMS == 50000
        assert settings.max_size == MAX_SIZE == 10485760
        assert settings.max_images_per_page == MAX_IMAGES_PER_PAGE == 1000
        assert settings.debug is False
        assert settings.log_level == "INFO"

    def test_env_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """INDEXED_* variables override defaults."""
        monkeypatch.setenv("INDEXED_MAX_ITEMS", "10")
        monkeypatch.setenv("INDEXED_LOG_LEVEL", "debug")

        settings = get_settings()

        assert settings.max_items == 10
        assert settings.log_level == "DEBUG"

    def test_settings_are_cached(self) -> None:
        """get_settings returns the same instance until cleared."""
        assert get_settings() is get_settings()

    def test_limits_cannot_exceed_protocol(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Ceilings can be lowered but not raised."""
        monkeypatch.setenv("INDEXED_MAX_ITEMS", "50001")

        with pytest.raises(ConfigurationError):
            get_settings()

    def test_invalid_log_level(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Unknown log levels are rejected."""
        monkeypatch.setenv("INDEXED_LOG_LEVEL", "chatty")

        with pytest.raises(ConfigurationError):
            get_settings()

    def test_stores_read_limits_at_construction(self, base: str) -> None:
        """Stores copy limits from the given settings."""
        settings = IndexedSettings(max_items=5, max_size=2048, max_images_per_page=3, debug=True)

        sitemap = Sitemap(base, settings=settings)
        index = Siteindex(base, settings=settings)

        assert (sitemap.max_items, sitemap.max_size, sitemap.max_images_per_page) == (5, 2048, 3)
        assert (index.max_items, index.max_size) == (5, 2048)
        assert sitemap.debug is True and index.debug is True

    def test_explicit_debug_wins(self, base: str) -> None:
        """A debug argument overrides the setting."""
        settings = IndexedSettings(debug=True)

        assert Sitemap(base, debug=False, settings=settings).debug is False
