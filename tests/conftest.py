"""Pytest configuration and shared fixtures for geo_image_index tests."""

import tempfile
from pathlib import Path
from unittest.mock import Mock

import pytest
from exif import Image as ExifImage
from PIL import Image

from geo_image_index.types import (
    ApplicationConfig,
    DirectoryConfig,
    GeoCoordinates,
    OutputConfig,
    ProcessingConfig,
    ThumbnailConfig,
)


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests of a single component")
    config.addinivalue_line("markers", "integration: tests that run the whole pipeline")


# =============================================================================
# Test Configuration
# =============================================================================

@pytest.fixture
def temp_dir():
    """Temporary directory for test outputs."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        yield Path(tmp_dir).resolve()


@pytest.fixture
def photos_dir(temp_dir):
    """Empty input directory."""
    path = temp_dir / "photos"
    path.mkdir()
    return path


@pytest.fixture
def output_dir(temp_dir):
    """Empty output directory next to (not inside) the input directory."""
    path = temp_dir / "out"
    path.mkdir()
    return path


@pytest.fixture
def isolated_home(temp_dir, monkeypatch):
    """Run with an empty home and working directory so no user config file is picked up."""
    home = temp_dir / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(home)
    return home


# =============================================================================
# Configuration Fixtures
# =============================================================================

@pytest.fixture
def make_app_config(photos_dir, output_dir):
    """Factory for an ApplicationConfig pointing at the photos and output fixtures."""
    def _make(width=500, height=500, workers=2, queue_depth=2, filename="data.json"):
        return ApplicationConfig(
            directory=DirectoryConfig(
                input_directory=str(photos_dir),
                output_directory=str(output_dir),
            ),
            thumbnails=ThumbnailConfig(width=width, height=height),
            processing=ProcessingConfig(workers=workers, queue_depth=queue_depth),
            output=OutputConfig(filename=filename),
        )
    return _make


# =============================================================================
# Mock Fixtures
# =============================================================================

@pytest.fixture
def mock_logger():
    """Mock logger for testing."""
    logger = Mock()
    logger.info = Mock()
    logger.warning = Mock()
    logger.error = Mock()
    logger.debug = Mock()
    logger.log = Mock()
    return logger


class FakeMetadataReader:
    """
    Metadata reader keyed by file name.

    Values may be GeoCoordinates, None (no GPS data) or an exception
    instance to raise. Unknown names have no GPS data.
    """

    def __init__(self, locations: dict | None = None):
        self.locations = locations or {}
        self.calls: list[str] = []

    def read_coordinates(self, path):
        self.calls.append(str(path))
        value = self.locations.get(Path(path).name)
        if isinstance(value, Exception):
            raise value
        return value


@pytest.fixture
def fake_reader():
    """Reader that knows a.jpg is in Berlin."""
    return FakeMetadataReader({"a.jpg": GeoCoordinates(52.5, 13.4)})


# =============================================================================
# File System Fixtures
# =============================================================================

class TestUtils:
    """Utility functions for tests."""

    @staticmethod
    def create_image(path: Path, size=(1000, 800), mode="RGB", color="red") -> Path:
        """Write a real image file; the format follows the file extension."""
        path.parent.mkdir(parents=True, exist_ok=True)
        Image.new(mode, size, color).save(path)
        return path

    @staticmethod
    def create_geotagged_image(path: Path, latitude, longitude, latitude_ref="N",
                               longitude_ref="E", size=(400, 300)) -> Path:
        """Write a real JPEG carrying EXIF GPS tags; positions are (deg, min, sec)."""
        TestUtils.create_image(path, size=size)
        with open(path, "rb") as f:
            image = ExifImage(f)
        image.gps_latitude = latitude
        image.gps_latitude_ref = latitude_ref
        image.gps_longitude = longitude
        image.gps_longitude_ref = longitude_ref
        path.write_bytes(image.get_file())
        return path


@pytest.fixture
def test_utils():
    """Test utilities fixture."""
    return TestUtils()
