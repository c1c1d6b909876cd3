"""
This module contains shared fixtures for testing.
"""

from pathlib import Path

import pytest

from metaloom import MetadataService, OverlayStore
from metaloom._utils import config


@pytest.fixture(autouse=True)
def restore_options():
    """Restore the package options changed by a test."""
    saved = dict(config._settings)
    yield
    config._settings.clear()
    config._settings.update(saved)


@pytest.fixture
def test_data_path() -> Path:
    """Path to the test data directory."""
    return Path(__file__).parent / "data"


@pytest.fixture
def overlay_dirs(test_data_path) -> list[Path]:
    """Overlay directories, in merge order."""
    return [test_data_path / "overlays", test_data_path / "overlays_extra"]


@pytest.fixture
def cache_dir(tmp_path) -> Path:
    """An empty cache directory."""
    return tmp_path / "cache"


@pytest.fixture
def service(cache_dir) -> MetadataService:
    """A service without overlay metadata."""
    return MetadataService(cache_dir, overlays=OverlayStore(), debug=False)
