"""Type definitions for the geo image index application."""

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from geopy.point import Point

from .constants import Constants


class EntryType(Enum):
    """Kind of filesystem node discovered during traversal."""
    FILE = "file"
    DIRECTORY = "directory"
    SYMLINK = "symlink"
    OTHER = "other"
    UNREADABLE = "unreadable"


@dataclass(frozen=True)
class DirectoryEntry:
    """A filesystem node discovered during traversal."""
    path: Path
    entry_type: EntryType
    error: str | None = None


@dataclass(frozen=True)
class GeoCoordinates:
    """Latitude/longitude pair in decimal degrees."""
    latitude: float
    longitude: float

    def __post_init__(self):
        if not (math.isfinite(self.latitude) and math.isfinite(self.longitude)):
            raise ValueError(f"Coordinates must be finite: {self.latitude}, {self.longitude}")
        if not -90.0 <= self.latitude <= 90.0:
            raise ValueError(f"Latitude out of range [-90, 90]: {self.latitude}")
        if not -180.0 <= self.longitude <= 180.0:
            raise ValueError(f"Longitude out of range [-180, 180]: {self.longitude}")

    @classmethod
    def from_degrees(cls, latitude: float, longitude: float) -> "GeoCoordinates":
        """
        Build coordinates from raw decimal degrees.

        Longitudes outside [-180, 180] are wrapped; latitudes outside
        [-90, 90] raise ValueError.
        """
        point = Point(latitude, longitude)
        return cls(latitude=float(point.latitude), longitude=float(point.longitude))


@dataclass(frozen=True)
class MediaRecord:
    """A successfully indexed file: source, thumbnail name and location."""
    source_path: str
    thumbnail_filename: str
    coordinates: GeoCoordinates


class OutcomeKind(Enum):
    """Result category of processing a single file."""
    SUCCESS = "success"
    NO_GEO_DATA = "no_geo_data"
    EXTRACTION_ERROR = "extraction_error"
    NAMING_ERROR = "naming_error"
    THUMBNAIL_ERROR = "thumbnail_error"


@dataclass(frozen=True)
class Outcome:
    """
    Result of running the per-file pipeline on one path.

    Use the named constructors; each one fixes the logging severity of
    the outcome so callers never have to infer it from the kind.
    """
    kind: OutcomeKind
    path: str
    severity: int
    detail: str | None = None
    record: MediaRecord | None = None

    @classmethod
    def success(cls, record: MediaRecord) -> "Outcome":
        return cls(OutcomeKind.SUCCESS, record.source_path, logging.DEBUG, record=record)

    @classmethod
    def no_geo_data(cls, path: str) -> "Outcome":
        return cls(OutcomeKind.NO_GEO_DATA, path, logging.INFO)

    @classmethod
    def extraction_error(cls, path: str, detail: str) -> "Outcome":
        return cls(OutcomeKind.EXTRACTION_ERROR, path, logging.ERROR, detail=detail)

    @classmethod
    def naming_error(cls, path: str, detail: str) -> "Outcome":
        return cls(OutcomeKind.NAMING_ERROR, path, logging.ERROR, detail=detail)

    @classmethod
    def thumbnail_error(cls, path: str, detail: str) -> "Outcome":
        return cls(OutcomeKind.THUMBNAIL_ERROR, path, logging.ERROR, detail=detail)

    @property
    def message(self) -> str:
        """Human readable log line for this outcome."""
        if self.kind is OutcomeKind.SUCCESS:
            assert self.record is not None
            return f"Indexed {self.path} -> {self.record.thumbnail_filename}"
        if self.kind is OutcomeKind.NO_GEO_DATA:
            return f"No GPS info in {self.path}"
        if self.kind is OutcomeKind.EXTRACTION_ERROR:
            return f"Could not read metadata from {self.path}: {self.detail}"
        if self.kind is OutcomeKind.NAMING_ERROR:
            return f"Could not derive thumbnail name for {self.path}: {self.detail}"
        return f"Could not create thumbnail for {self.path}: {self.detail}"


@dataclass
class RunSummary:
    """Counters collected by the pipeline over one run."""
    counts: dict[OutcomeKind, int] = field(
        default_factory=lambda: {kind: 0 for kind in OutcomeKind}
    )
    excluded_entries: int = 0
    unreadable_entries: int = 0
    output_path: Path | None = None

    def add(self, outcome: Outcome) -> None:
        self.counts[outcome.kind] += 1

    @property
    def thumbnails_written(self) -> int:
        return self.counts[OutcomeKind.SUCCESS]

    @property
    def files_processed(self) -> int:
        return sum(self.counts.values())


@dataclass
class DirectoryConfig:
    """Directory configuration parameters."""
    input_directory: str | None = None
    output_directory: str | None = None


@dataclass
class ThumbnailConfig:
    """Thumbnail bounding box in pixels."""
    width: int = Constants.DEFAULT_THUMBNAIL_WIDTH
    height: int = Constants.DEFAULT_THUMBNAIL_HEIGHT


@dataclass
class ProcessingConfig:
    """Worker pool configuration parameters."""
    workers: int = Constants.DEFAULT_WORKERS
    queue_depth: int = Constants.DEFAULT_QUEUE_DEPTH


@dataclass
class OutputConfig:
    """Output configuration parameters."""
    filename: str = Constants.DEFAULT_OUTPUT_FILENAME
    verbose: bool = False


@dataclass
class ApplicationConfig:
    """Complete application configuration."""
    directory: DirectoryConfig
    thumbnails: ThumbnailConfig = field(default_factory=ThumbnailConfig)
    processing: ProcessingConfig = field(default_factory=ProcessingConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
