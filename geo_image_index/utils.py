"""Utility classes for the geo image index application."""

import logging
from pathlib import Path


class LoggingSetup:
    """Handles logging configuration."""

    @staticmethod
    def setup_logging(level: int = logging.INFO) -> logging.Logger:
        """Set up logging configuration."""
        logging.basicConfig(
            level=level,
            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        return logging.getLogger("geo_image_index")

    @staticmethod
    def set_level(logger: logging.Logger, level: int) -> None:
        """Change the level of the application logger and the root handlers."""
        logger.setLevel(level)
        logging.getLogger().setLevel(level)


class PathNormalizer:
    """Handles path normalization across different platforms."""

    @staticmethod
    def normalize_path(path: str | Path) -> Path:
        """Resolve a path to an absolute path, following symlinks where possible."""
        return Path(path).expanduser().resolve()

    @staticmethod
    def is_same_or_nested(candidate: str | Path, parent: str | Path) -> bool:
        """
        Check whether candidate is parent itself or lies anywhere below it.

        Both paths are resolved first so symlinks and relative segments
        cannot hide the relationship.
        """
        resolved_candidate = PathNormalizer.normalize_path(candidate)
        resolved_parent = PathNormalizer.normalize_path(parent)
        return resolved_candidate == resolved_parent or resolved_candidate.is_relative_to(
            resolved_parent
        )
