"""Tests for the utils module.

These tests verify logging setup and path handling helpers.
"""

import logging
from unittest.mock import patch

import pytest

from geo_image_index.utils import LoggingSetup, PathNormalizer


class TestLoggingSetup:
    """Test suite for LoggingSetup utility."""

    @pytest.mark.unit
    def test_basic_logging_setup(self):
        logger = LoggingSetup().setup_logging()

        assert isinstance(logger, logging.Logger)
        assert logger.name == "geo_image_index"

    @pytest.mark.unit
    def test_logging_setup_passes_level(self):
        with patch("geo_image_index.utils.logging.basicConfig") as mock_config:
            LoggingSetup.setup_logging(logging.DEBUG)

        assert mock_config.call_args.kwargs["level"] == logging.DEBUG

    @pytest.mark.unit
    def test_set_level(self):
        logger = logging.getLogger("geo_image_index.test_set_level")
        root = logging.getLogger()
        previous = root.level
        try:
            LoggingSetup.set_level(logger, logging.DEBUG)
            assert logger.level == logging.DEBUG
            assert root.level == logging.DEBUG
        finally:
            root.setLevel(previous)


class TestPathNormalizer:
    """Test suite for PathNormalizer."""

    @pytest.mark.unit
    def test_normalize_path_is_absolute(self, temp_dir, monkeypatch):
        monkeypatch.chdir(temp_dir)
        assert PathNormalizer.normalize_path("photos/../photos") == temp_dir / "photos"

    @pytest.mark.unit
    def test_same_directory(self, photos_dir):
        assert PathNormalizer.is_same_or_nested(photos_dir, photos_dir)

    @pytest.mark.unit
    def test_nested_directory(self, photos_dir):
        assert PathNormalizer.is_same_or_nested(photos_dir / "a" / "b", photos_dir)

    @pytest.mark.unit
    def test_sibling_with_common_prefix_is_not_nested(self, temp_dir):
        """'/x/photos2' is not inside '/x/photos' even though the strings share a prefix."""
        assert not PathNormalizer.is_same_or_nested(temp_dir / "photos2", temp_dir / "photos")

    @pytest.mark.unit
    def test_parent_is_not_nested_in_child(self, photos_dir, temp_dir):
        assert not PathNormalizer.is_same_or_nested(temp_dir, photos_dir)

    @pytest.mark.unit
    def test_symlink_into_input_is_nested(self, photos_dir, temp_dir):
        (photos_dir / "thumbs").mkdir()
        link = temp_dir / "out-link"
        link.symlink_to(photos_dir / "thumbs", target_is_directory=True)

        assert PathNormalizer.is_same_or_nested(link, photos_dir)
