"""Per-file processing and the concurrent indexing pipeline."""

import logging
import os
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, as_completed, wait
from pathlib import Path

from .exceptions import (
    ConfigurationError,
    InputDirectoryError,
    NestedOutputDirectoryError,
    OutputDirectoryError,
    ThumbnailError,
    ThumbnailNamingError,
)
from .gps import MetadataExtractor, MetadataReader
from .thumbnails import ImageResizer, ThumbnailGenerator, initialize_imaging, thumbnail_filename
from .traversal import is_processable, walk_entries
from .types import (
    ApplicationConfig,
    DirectoryConfig,
    DirectoryEntry,
    EntryType,
    GeoCoordinates,
    MediaRecord,
    Outcome,
    OutcomeKind,
    ProcessingConfig,
    RunSummary,
)
from .utils import PathNormalizer


def build_record(path: str, coordinates: GeoCoordinates, thumbnail_name: str) -> MediaRecord:
    """Combine a processed file's path, location and thumbnail name into a record."""
    return MediaRecord(
        source_path=path,
        thumbnail_filename=thumbnail_name,
        coordinates=coordinates,
    )


class MediaProcessor:
    """
    Runs the per-file pipeline: extract, name, generate thumbnail, build record.

    process() never logs and never raises for expected failures; every
    path ends in exactly one Outcome.
    """

    def __init__(self, extractor: MetadataExtractor, generator: ThumbnailGenerator):
        self.extractor = extractor
        self.generator = generator

    def process(self, path: str) -> Outcome:
        extracted = self.extractor.extract(path)
        if isinstance(extracted, Outcome):
            return extracted

        try:
            thumbnail_name = thumbnail_filename(path)
        except ThumbnailNamingError as e:
            return Outcome.naming_error(path, str(e))

        try:
            self.generator.generate(path, thumbnail_name)
        except ThumbnailError as e:
            return Outcome.thumbnail_error(path, str(e))

        return Outcome.success(build_record(path, extracted, thumbnail_name))


class IndexPipeline:
    """Validates directories, fans files out to workers and collects records."""

    def __init__(
        self,
        logger: logging.Logger,
        reader: MetadataReader | None = None,
        resizer: ImageResizer | None = None,
    ):
        self.logger = logger
        self.reader = reader
        self.resizer = resizer

    def validate_directories(self, directory_config: DirectoryConfig) -> tuple[Path, Path]:
        """
        Check the input/output pair before any file is touched.

        Returns:
            The resolved (input, output) directories

        Raises:
            NestedOutputDirectoryError: Output is the input directory or inside it.
            OutputDirectoryError: Output is missing or not a directory.
            InputDirectoryError: Input is missing, not a directory or unreadable.
        """
        if not directory_config.input_directory or not directory_config.output_directory:
            raise ConfigurationError("Both input and output directories are required")

        input_root = PathNormalizer.normalize_path(directory_config.input_directory)
        output_root = PathNormalizer.normalize_path(directory_config.output_directory)

        if PathNormalizer.is_same_or_nested(output_root, input_root):
            raise NestedOutputDirectoryError(
                f"Output directory {output_root} must not be inside input directory {input_root}"
            )
        if not output_root.is_dir():
            raise OutputDirectoryError(
                f"Output directory does not exist or is not a directory: {output_root}"
            )
        if not input_root.is_dir():
            raise InputDirectoryError(
                f"Input directory does not exist or is not a directory: {input_root}"
            )
        try:
            with os.scandir(input_root):
                pass
        except OSError as e:
            raise InputDirectoryError(f"Cannot read input directory {input_root}: {e}") from e

        return input_root, output_root

    def run(self, app_config: ApplicationConfig) -> tuple[list[MediaRecord], RunSummary]:
        """
        Index every file below the input directory.

        Returns:
            Records sorted by source path, and the run summary
        """
        input_root, output_root = self.validate_directories(app_config.directory)

        initialize_imaging()

        processor = MediaProcessor(
            MetadataExtractor(self.reader),
            ThumbnailGenerator(output_root, app_config.thumbnails, self.resizer),
        )
        summary = RunSummary()

        self.logger.info(f"Scanning directory: {input_root}")
        self.logger.info(
            f"Writing {app_config.thumbnails.width}x{app_config.thumbnails.height} "
            f"thumbnails to: {output_root}"
        )

        records = self._process_entries(input_root, processor, app_config.processing, summary)
        records.sort(key=lambda record: record.source_path)

        self._log_summary(summary)
        return records, summary

    def _process_entries(
        self,
        input_root: Path,
        processor: MediaProcessor,
        processing_config: ProcessingConfig,
        summary: RunSummary,
    ) -> list[MediaRecord]:
        """Walk input_root and process regular files on a bounded thread pool."""
        records: list[MediaRecord] = []
        pending: dict[Future, str] = {}
        max_pending = processing_config.workers * processing_config.queue_depth

        with ThreadPoolExecutor(
            max_workers=processing_config.workers, thread_name_prefix="geo-index"
        ) as executor:
            try:
                for entry in walk_entries(input_root):
                    if not is_processable(entry):
                        self._handle_excluded(entry, summary)
                        continue

                    path = str(entry.path)
                    pending[executor.submit(processor.process, path)] = path

                    # Traversal waits here until a worker frees a slot
                    if len(pending) >= max_pending:
                        done, _ = wait(pending, return_when=FIRST_COMPLETED)
                        for future in done:
                            self._collect(future, pending.pop(future), records, summary)

                for future in as_completed(pending):
                    self._collect(future, pending[future], records, summary)
            except KeyboardInterrupt:
                for future in pending:
                    future.cancel()
                raise

        return records

    def _handle_excluded(self, entry: DirectoryEntry, summary: RunSummary) -> None:
        if entry.entry_type is EntryType.UNREADABLE:
            summary.unreadable_entries += 1
            self.logger.error(f"Cannot read {entry.path}: {entry.error}")
        elif entry.entry_type is not EntryType.DIRECTORY:
            summary.excluded_entries += 1
            self.logger.debug(f"Skipping {entry.entry_type.value} {entry.path}")

    def _collect(
        self,
        future: Future,
        path: str,
        records: list[MediaRecord],
        summary: RunSummary,
    ) -> None:
        """Record and log the outcome of one finished file."""
        try:
            outcome = future.result()
        except Exception as e:  # pylint: disable=broad-exception-caught
            outcome = Outcome.extraction_error(path, f"Unexpected error: {e}")

        summary.add(outcome)
        self.logger.log(outcome.severity, outcome.message)
        if outcome.record is not None:
            records.append(outcome.record)

    def _log_summary(self, summary: RunSummary) -> None:
        counts = summary.counts
        self.logger.info(
            f"Processed {summary.files_processed} files: "
            f"{counts[OutcomeKind.SUCCESS]} indexed, "
            f"{counts[OutcomeKind.NO_GEO_DATA]} without GPS data, "
            f"{counts[OutcomeKind.EXTRACTION_ERROR]} unreadable, "
            f"{counts[OutcomeKind.NAMING_ERROR]} unnameable, "
            f"{counts[OutcomeKind.THUMBNAIL_ERROR]} thumbnail failures"
        )
        if summary.unreadable_entries:
            self.logger.warning(
                f"{summary.unreadable_entries} entries could not be read during traversal"
            )
