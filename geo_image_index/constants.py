"""Constants and error codes for the geo image index application."""

import os


class Constants:
    """
    Constants used throughout the geo_image_index application.

    Attributes:
        DEFAULT_THUMBNAIL_WIDTH (int): Default thumbnail bounding box width in pixels.
        DEFAULT_THUMBNAIL_HEIGHT (int): Default thumbnail bounding box height in pixels.
        THUMBNAIL_SUFFIX (str): Suffix appended to the source stem to name a thumbnail.
        DEFAULT_OUTPUT_FILENAME (str): Name of the GeoJSON document written to the
                                       output directory.
        DEFAULT_WORKERS (int): Default size of the worker thread pool.
        DEFAULT_QUEUE_DEPTH (int): Pending files allowed per worker before traversal
                                   waits for results.
        CONFIG_FILENAME (str): File name searched for in the working directory.
        JPEG_QUALITY (int): Quality used when thumbnails are encoded as JPEG.

    Classes:
        ErrorCodes: Application exit codes indicating various error and success states.
    """

    DEFAULT_THUMBNAIL_WIDTH = 500
    DEFAULT_THUMBNAIL_HEIGHT = 500
    THUMBNAIL_SUFFIX = "_thumb"
    DEFAULT_OUTPUT_FILENAME = "data.json"

    DEFAULT_WORKERS = min(32, (os.cpu_count() or 1) + 4)
    DEFAULT_QUEUE_DEPTH = 4

    CONFIG_FILENAME = "geo_image_index.toml"

    # Encoder settings
    JPEG_QUALITY = 85
    JPEG_COMPATIBLE_MODES = {"RGB", "L", "CMYK"}

    class ErrorCodes:
        """
        ErrorCodes

        Integer exit codes returned by the geo-image-index command.

        Attributes:
            SUCCESS (int): Run completed; individual files may have been skipped.
            INTERRUPTED (int): Run was interrupted by the user.
            INPUT_DIRECTORY_ERROR (int): Input directory missing, not a directory or unreadable.
            OUTPUT_DIRECTORY_ERROR (int): Output directory missing or not a directory.
            NESTED_OUTPUT_DIRECTORY (int): Output directory equals or lies inside the
                                           input directory.
            CONFIGURATION_ERROR (int): Invalid command-line or configuration file values.
            FILE_OPERATION_ERROR (int): The index document could not be written.
            GENERAL_ERROR (int): General or unspecified error.
        """

        SUCCESS = 0
        INTERRUPTED = 1
        INPUT_DIRECTORY_ERROR = 3
        OUTPUT_DIRECTORY_ERROR = 4
        NESTED_OUTPUT_DIRECTORY = 5
        CONFIGURATION_ERROR = 19
        FILE_OPERATION_ERROR = 17
        GENERAL_ERROR = 20
