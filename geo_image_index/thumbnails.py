"""Thumbnail naming and generation."""

import io
import threading
from pathlib import Path
from typing import Protocol

from PIL import Image, ImageOps

from .constants import Constants
from .exceptions import ThumbnailError, ThumbnailNamingError
from .types import ThumbnailConfig

_imaging_lock = threading.Lock()
_imaging_initialized = False


def initialize_imaging() -> None:
    """
    Load all Pillow format plugins once per process.

    Must run before worker threads start opening images. Safe to call
    repeatedly; only the first call does any work.
    """
    global _imaging_initialized
    with _imaging_lock:
        if _imaging_initialized:
            return
        Image.init()
        _imaging_initialized = True


def thumbnail_filename(source_path: str | Path) -> str:
    """
    Derive the thumbnail file name for a source file.

    "/photos/a.jpg" becomes "a_thumb.jpg". Only the final extension is
    treated as the extension, so "x.tar.gz" becomes "x.tar_thumb.gz".

    Raises:
        ThumbnailNamingError: If the path has no stem, no extension, or a
            name that cannot be represented as text.
    """
    path = Path(source_path)
    if not path.name or path.name in (".", ".."):
        raise ThumbnailNamingError(f"No file name stem in {source_path}")

    stem = path.stem
    suffix = path.suffix
    if not suffix:
        raise ThumbnailNamingError(f"No file extension in {source_path}")

    name = f"{stem}{Constants.THUMBNAIL_SUFFIX}{suffix}"
    try:
        name.encode("utf-8")
    except UnicodeEncodeError as e:
        raise ThumbnailNamingError(
            f"File name is not valid text, no lossless processing possible: {e}"
        ) from e
    return name


class ImageResizer(Protocol):
    """Anything that can write a resized copy of an image."""

    def resize(self, source: Path, destination: Path, width: int, height: int) -> None:
        """Write source, fitted into width x height, to a new file at destination."""
        ...


class PillowImageResizer:
    """Resizes images with Pillow and writes them without overwriting."""

    def resize(self, source: Path, destination: Path, width: int, height: int) -> None:
        """
        Fit source into a width x height box and write it to destination.

        The aspect ratio is preserved and images are never enlarged or
        cropped. The encoded image is held in memory and the destination is
        created exclusively, so either the complete thumbnail is written or
        no file is left behind.

        Raises:
            ThumbnailError: If the source cannot be decoded, the destination
                format is unknown, the destination already exists or the
                write fails.
        """
        image_format = Image.registered_extensions().get(destination.suffix.lower())
        if image_format is None:
            raise ThumbnailError(f"Unsupported thumbnail format: {destination.suffix}")

        try:
            with Image.open(source) as original:
                image = ImageOps.exif_transpose(original)
                image.thumbnail((width, height))
                if image_format == "JPEG" and image.mode not in Constants.JPEG_COMPATIBLE_MODES:
                    image = image.convert("RGB")
                buffer = io.BytesIO()
                save_options = {"quality": Constants.JPEG_QUALITY} if image_format == "JPEG" else {}
                image.save(buffer, format=image_format, **save_options)
        except (OSError, ValueError, Image.DecompressionBombError) as e:
            raise ThumbnailError(f"Cannot resize {source}: {e}") from e

        self._write_exclusive(destination, buffer.getvalue())

    @staticmethod
    def _write_exclusive(destination: Path, data: bytes) -> None:
        """Create destination with data; fail instead of replacing an existing file."""
        created = False
        try:
            with open(destination, "xb") as f:
                created = True
                f.write(data)
        except FileExistsError as e:
            raise ThumbnailError(f"Thumbnail already exists: {destination}") from e
        except OSError as e:
            if created:
                destination.unlink(missing_ok=True)
            raise ThumbnailError(f"Cannot write thumbnail {destination}: {e}") from e


class ThumbnailGenerator:
    """Writes thumbnails into the output directory, never overwriting files."""

    def __init__(
        self,
        output_directory: str | Path,
        thumbnail_config: ThumbnailConfig,
        resizer: ImageResizer | None = None,
    ):
        if thumbnail_config.width <= 0 or thumbnail_config.height <= 0:
            raise ValueError(
                f"Thumbnail size must be positive: "
                f"{thumbnail_config.width}x{thumbnail_config.height}"
            )
        self.output_directory = Path(output_directory)
        self.thumbnail_config = thumbnail_config
        self.resizer = resizer if resizer is not None else PillowImageResizer()

    def destination_for(self, thumbnail_name: str) -> Path:
        return self.output_directory / thumbnail_name

    def generate(self, source_path: str | Path, thumbnail_name: str) -> Path:
        """
        Create the thumbnail for source_path under thumbnail_name.

        Returns:
            Path of the written thumbnail

        Raises:
            ThumbnailError: On a name collision or any read/resize/write failure.
        """
        destination = self.destination_for(thumbnail_name)
        # Fail fast on a re-run; the resizer's exclusive create still guards races
        if destination.exists():
            raise ThumbnailError(f"Thumbnail already exists: {destination}")

        try:
            self.resizer.resize(
                Path(source_path),
                destination,
                self.thumbnail_config.width,
                self.thumbnail_config.height,
            )
        except ThumbnailError:
            raise
        except Exception as e:  # pylint: disable=broad-exception-caught
            raise ThumbnailError(f"Cannot resize {source_path}: {e}") from e
        return destination
