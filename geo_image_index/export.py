"""GeoJSON export of indexed media records."""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Iterable

from pygeoif.feature import Feature
from pygeoif.geometry import Point

from .constants import Constants
from .exceptions import FileOperationError
from .types import MediaRecord


class GeoJSONExporter:
    """Handles GeoJSON feature collection export."""

    def __init__(self, logger: logging.Logger):
        self.logger = logger

    @staticmethod
    def build_feature(record: MediaRecord) -> Feature:
        """Build a point feature (lon, lat) carrying the source and thumbnail names."""
        return Feature(
            Point(record.coordinates.longitude, record.coordinates.latitude),
            {
                "filename": record.source_path,
                "thumbnail_filename": record.thumbnail_filename,
            },
        )

    def build_feature_collection(self, records: Iterable[MediaRecord]) -> dict[str, Any]:
        """
        Build a GeoJSON FeatureCollection mapping from records.

        Args:
            records: Records in the order they should appear

        Returns:
            A JSON-serializable dict
        """
        return {
            "type": "FeatureCollection",
            "features": [self.build_feature(record).__geo_interface__ for record in records],
        }

    def write_document(
        self,
        records: list[MediaRecord],
        output_directory: str | Path,
        filename: str = Constants.DEFAULT_OUTPUT_FILENAME,
    ) -> Path:
        """
        Serialize records to output_directory/filename.

        The document is written to a temporary file first and moved into
        place, so a failed write never leaves a truncated index.

        Raises:
            FileOperationError: If the document cannot be written.
        """
        output_path = Path(output_directory) / filename
        document = self.build_feature_collection(records)

        tmp_name = None
        try:
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=output_path.parent,
                prefix=f".{filename}.",
                suffix=".tmp",
                delete=False,
            ) as f:
                tmp_name = f.name
                json.dump(document, f, indent=2)
                f.write("\n")
            os.replace(tmp_name, output_path)
        except (OSError, TypeError, ValueError) as e:
            if tmp_name is not None:
                Path(tmp_name).unlink(missing_ok=True)
            self.logger.error(f"Error writing GeoJSON file: {e}")
            raise FileOperationError(f"Could not write {output_path}: {e}") from e

        self.logger.info(f"Exported {len(records)} features to {output_path}")
        return output_path
