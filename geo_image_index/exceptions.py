"""Custom exceptions for the geo image index application."""


class GeoImageIndexError(Exception):
    """Base exception for geo image index operations."""
    pass


class ConfigurationError(GeoImageIndexError):
    """Raised when there are configuration-related errors."""
    pass


class DirectoryValidationError(GeoImageIndexError):
    """Raised when the input/output directory pair fails pre-flight validation."""
    pass


class InputDirectoryError(DirectoryValidationError):
    """Raised when the input directory is missing, not a directory or unreadable."""
    pass


class OutputDirectoryError(DirectoryValidationError):
    """Raised when the output directory is missing or not a directory."""
    pass


class NestedOutputDirectoryError(DirectoryValidationError):
    """Raised when the output directory is the input directory or lies inside it."""
    pass


class FileOperationError(GeoImageIndexError):
    """Raised when file operations fail."""
    pass


class MetadataReadError(GeoImageIndexError):
    """Raised when a file's metadata cannot be read."""
    pass


class ThumbnailNamingError(GeoImageIndexError):
    """Raised when no thumbnail filename can be derived from a source path."""
    pass


class ThumbnailError(GeoImageIndexError):
    """Raised when a thumbnail cannot be generated or written."""
    pass
