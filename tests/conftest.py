"""Pytest configuration and shared fixtures for indexed tests."""

import json
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import pytest

from indexed.config import IndexedSettings, get_settings

SETTINGS_ENV_VARS = (
    "INDEXED_DEBUG",
    "INDEXED_LOG_LEVEL",
    "INDEXED_MAX_ITEMS",
    "INDEXED_MAX_SIZE",
    "INDEXED_MAX_IMAGES_PER_PAGE",
)


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Pure logic tests with no I/O")
    config.addinivalue_line("markers", "integration: CLI and filesystem tests")


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """
    Apply default markers to tests without explicit markers.

    Unmarked tests default to unit.
    """
    for item in items:
        marker_names = [m.name for m in item.iter_markers()]
        if any(m in marker_names for m in ("unit", "integration")):
            continue
        item.add_marker(pytest.mark.unit)


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Isolate tests from INDEXED_* variables and the settings cache."""
    for name in SETTINGS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def base() -> str:
    """Site base used to qualify relative URLs."""
    return "http://example.org"


@pytest.fixture
def small_settings() -> IndexedSettings:
    """Settings with tiny limits for ceiling tests."""
    return IndexedSettings(max_items=2, max_size=1024, max_images_per_page=2)


@pytest.fixture
def write_manifest(tmp_path: Path):
    """Write a JSON manifest to a temporary file.

    Returns:
        Callable taking the manifest data and returning its path.
    """

    def _write(data: dict[str, Any], name: str = "manifest.json") -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write
