"""GPS metadata extraction from media files."""

from pathlib import Path
from typing import Protocol

from exif import Image

from .exceptions import MetadataReadError
from .types import GeoCoordinates, Outcome


class MetadataReader(Protocol):
    """Anything that can pull coordinates out of a media file."""

    def read_coordinates(self, path: str | Path) -> GeoCoordinates | None:
        """Return the embedded coordinates, None when absent; raise when unreadable."""
        ...


class ExifMetadataReader:
    """Reads GPS coordinates from EXIF metadata using the exif library."""

    # JPEG, little-endian TIFF, big-endian TIFF
    SUPPORTED_SIGNATURES = (b"\xff\xd8", b"II*\x00", b"MM\x00*")
    SIGNATURE_LENGTH = 4

    def read_coordinates(self, path: str | Path) -> GeoCoordinates | None:
        """
        Extract GPS coordinates from a single image file.

        Args:
            path: Full path to the image file

        Returns:
            GeoCoordinates, or None if the file carries no GPS position

        Raises:
            MetadataReadError: If the file is not a JPEG or TIFF image, cannot be
                opened or parsed, or if the stored position is not a valid coordinate.
        """
        try:
            with open(path, "rb") as img_file:
                # Reject other formats before exif reads the whole file
                if not self._is_supported_file(img_file.read(self.SIGNATURE_LENGTH)):
                    raise MetadataReadError("Unsupported file format")
                img_file.seek(0)
                image = Image(img_file)
        except MetadataReadError:
            raise
        except OSError as e:
            raise MetadataReadError(f"Cannot open file: {e}") from e
        except Exception as e:  # pylint: disable=broad-exception-caught
            raise MetadataReadError(f"Unsupported or corrupt file: {e}") from e

        try:
            if not image.has_exif:
                return None
            latitude_dms = self._get_tag(image, "gps_latitude")
            longitude_dms = self._get_tag(image, "gps_longitude")
            if latitude_dms is None or longitude_dms is None:
                return None

            latitude = self._convert_dhms_to_decimal(latitude_dms)
            longitude = self._convert_dhms_to_decimal(longitude_dms)

            # Missing references are read as north/east
            if self._get_tag(image, "gps_latitude_ref") == "S":
                latitude = -latitude
            if self._get_tag(image, "gps_longitude_ref") == "W":
                longitude = -longitude

            return GeoCoordinates.from_degrees(latitude, longitude)
        except MetadataReadError:
            raise
        except Exception as e:  # pylint: disable=broad-exception-caught
            raise MetadataReadError(f"Invalid GPS metadata: {e}") from e

    def _is_supported_file(self, header: bytes) -> bool:
        """Check a file's leading bytes for a JPEG or TIFF signature."""
        return header.startswith(self.SUPPORTED_SIGNATURES)

    @staticmethod
    def _get_tag(image, name: str):
        """Return an EXIF attribute, or None if the image does not carry it."""
        try:
            return getattr(image, name)
        except (AttributeError, KeyError):
            return None

    @staticmethod
    def _convert_dhms_to_decimal(dhms) -> float:
        """
        Convert degrees, minutes, seconds (DMS) format to decimal degrees.

        Args:
            dhms: A sequence containing [degrees, minutes, seconds] values

        Returns:
            The decimal degree equivalent of the DMS values

        Raises:
            MetadataReadError: If the value does not hold three components
        """
        if dhms is None or len(dhms) < 3:
            raise MetadataReadError(f"Malformed GPS coordinate: {dhms!r}")

        degrees = float(dhms[0])
        minutes = float(dhms[1]) / 60
        seconds = float(dhms[2]) / 3600
        return degrees + minutes + seconds


class MetadataExtractor:
    """Turns metadata reader results into pipeline outcomes."""

    def __init__(self, reader: MetadataReader | None = None):
        self.reader = reader if reader is not None else ExifMetadataReader()

    def extract(self, path: str) -> GeoCoordinates | Outcome:
        """
        Read coordinates for one file.

        Returns the coordinates when present. Otherwise returns a NO_GEO_DATA
        outcome, or an EXTRACTION_ERROR outcome when the reader fails.
        """
        try:
            coordinates = self.reader.read_coordinates(path)
        except Exception as e:  # pylint: disable=broad-exception-caught
            return Outcome.extraction_error(path, str(e))

        if coordinates is None:
            return Outcome.no_geo_data(path)
        return coordinates
