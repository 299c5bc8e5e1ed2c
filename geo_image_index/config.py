"""Configuration management for the geo image index application."""

import argparse
import logging
import sys
import tomllib
from pathlib import Path

from .constants import Constants
from .exceptions import ConfigurationError, FileOperationError
from .types import (
    ApplicationConfig,
    DirectoryConfig,
    OutputConfig,
    ProcessingConfig,
    ThumbnailConfig,
)


class ConfigurationManager:
    """Manages application configuration by parsing command-line arguments and TOML
        configuration files, merging their values, validating the resulting configuration,
        and providing configuration objects for use throughout the application.
    Responsibilities:
        - Parse command-line arguments using argparse.
        - Load configuration from TOML files, supporting multiple standard locations.
        - Merge configuration file values with command-line arguments, prioritizing
            explicit arguments.
        - Validate configuration for required fields and value ranges.
        - Handle sample config creation.
    Methods:
        __init__(logger: logging.Logger)
            Initializes the ConfigurationManager with a logger.
        parse_arguments_and_config(argv: list[str] | None = None) -> ApplicationConfig
            Parses command-line arguments and configuration files, merges them, validates,
                and returns an ApplicationConfig object containing all configuration sections.
        _create_argument_parser() -> argparse.ArgumentParser
            Creates and configures the argument parser for command-line options.
        _load_config_file(config_path: str | Path | None = None) -> dict
            Loads the first TOML configuration file found.
        _merge_config_with_args(config_data: dict, args: argparse.Namespace) -> None
            Fills arguments not given on the command line from the configuration file.
        _create_sample_config(output_path: str | Path | None = None) -> None
            Creates a sample TOML configuration file with documentation.
        _validate_configuration(app_config: ApplicationConfig) -> None
            Validates the complete configuration.
    Exceptions:
        Raises ConfigurationError for invalid or missing configuration.
        Raises FileOperationError for file creation errors.
    """

    def __init__(self, logger: logging.Logger):
        self.logger = logger

    def parse_arguments_and_config(self, argv: list[str] | None = None) -> ApplicationConfig:
        """
        Parses command line arguments and configuration file, merges them, and constructs the
            application configuration.

        Args:
            argv: Arguments to parse; defaults to sys.argv[1:].

        Raises:
            ConfigurationError: If required arguments are missing or configuration is invalid.

        Returns:
            ApplicationConfig: The fully constructed application configuration object.
        """
        args = self._create_argument_parser().parse_args(argv)

        # Handle early exits
        if args.create_config:
            self._create_sample_config(args.create_config)
            sys.exit(Constants.ErrorCodes.SUCCESS)

        config_data = self._load_config_file(args.config)
        self._merge_config_with_args(config_data, args)

        if not args.input_directory:
            raise ConfigurationError("Input directory is required")
        if not args.output_directory:
            raise ConfigurationError("Output directory is required")

        app_config = ApplicationConfig(
            directory=DirectoryConfig(
                input_directory=args.input_directory,
                output_directory=args.output_directory,
            ),
            thumbnails=ThumbnailConfig(width=args.width, height=args.height),
            processing=ProcessingConfig(workers=args.workers, queue_depth=args.queue_depth),
            output=OutputConfig(filename=args.output_filename, verbose=args.verbose),
        )

        self._validate_configuration(app_config)
        return app_config

    def _create_argument_parser(self) -> argparse.ArgumentParser:
        """
        Creates and configures an argparse.ArgumentParser for the geo_image_index application.

        Returns:
            argparse.ArgumentParser: Configured argument parser with all supported options.
        """
        parser = argparse.ArgumentParser(
            prog="geo-image-index",
            description=(
                "Scans a directory tree for geotagged images, writes thumbnails and a "
                "GeoJSON index of their locations."
            ),
            epilog="Examples:\n"
            "  %(prog)s /photos /srv/map/output\n"
            "  %(prog)s /photos out --width 320 --height 240 --workers 8\n"
            "  %(prog)s --create-config  # Create sample config file\n\n"
            "Configuration files (TOML format) are searched in this order:\n"
            "  1. Path specified with --config\n"
            f"  2. ./{Constants.CONFIG_FILENAME}\n"
            "  3. ~/.config/geo_image_index/config.toml\n"
            "  4. ~/.geo_image_index.toml",
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )

        parser.add_argument(
            "input_directory",
            nargs="?",
            help="directory tree to scan for images",
        )
        parser.add_argument(
            "output_directory",
            nargs="?",
            help="existing directory, outside the input tree, to write thumbnails and index to",
        )
        parser.add_argument(
            "--width",
            type=int,
            help=f"maximum thumbnail width in pixels (default {Constants.DEFAULT_THUMBNAIL_WIDTH})",
        )
        parser.add_argument(
            "--height",
            type=int,
            help=(
                f"maximum thumbnail height in pixels (default {Constants.DEFAULT_THUMBNAIL_HEIGHT})"
            ),
        )
        parser.add_argument(
            "--workers",
            type=int,
            help=f"number of worker threads (default {Constants.DEFAULT_WORKERS})",
        )
        parser.add_argument(
            "--queue-depth",
            type=int,
            help=(
                "files queued per worker before traversal pauses "
                f"(default {Constants.DEFAULT_QUEUE_DEPTH})"
            ),
        )
        parser.add_argument(
            "--output-filename",
            help=f"name of the GeoJSON index file (default {Constants.DEFAULT_OUTPUT_FILENAME})",
        )
        parser.add_argument(
            "-v", "--verbose", action="store_true", help="print additional information"
        )
        parser.add_argument(
            "--config",
            type=str,
            help="Path to TOML configuration file (optional)",
        )
        parser.add_argument(
            "--create-config",
            type=str,
            nargs="?",
            const=Constants.CONFIG_FILENAME,
            help="Create a sample configuration file and exit (optionally specify path)",
        )

        return parser

    def _load_config_file(self, config_path: str | Path | None = None) -> dict:
        """
        Loads configuration data from a TOML file.

        Args:
            config_path (str | Path | None): Optional path to a configuration file. If not provided,
                standard locations are checked.

        Returns:
            dict: The loaded configuration, or an empty dictionary if no configuration file is
                found.

        Raises:
            ConfigurationError: If an explicitly requested file is missing or invalid.
        """
        if config_path:
            explicit = Path(config_path)
            if not explicit.is_file():
                raise ConfigurationError(f"Config file not found: {explicit}")
            return self._read_toml(explicit)

        config_locations = [
            Path.cwd() / Constants.CONFIG_FILENAME,
            Path.home() / ".config" / "geo_image_index" / "config.toml",
            Path.home() / ".geo_image_index.toml",
        ]

        for config_file in config_locations:
            if config_file.exists():
                try:
                    return self._read_toml(config_file)
                except ConfigurationError as e:
                    self.logger.warning(str(e))
                    continue

        return {}

    def _read_toml(self, config_file: Path) -> dict:
        try:
            with open(config_file, "rb") as f:
                config_data = tomllib.load(f)
        except OSError as e:
            raise ConfigurationError(f"Could not load config file {config_file}: {e}") from e
        except tomllib.TOMLDecodeError as e:
            raise ConfigurationError(f"Could not parse config file {config_file}: {e}") from e
        self.logger.info(f"Loaded configuration from: {config_file}")
        return config_data

    def _merge_config_with_args(self, config_data: dict, args: argparse.Namespace) -> None:
        """
        Merges configuration data from a dictionary (typically loaded from a TOML file) with
            command-line arguments. Explicit command-line values always win.

        Args:
            config_data (dict): The configuration data loaded from a TOML file,
                                organized by sections.
            args (argparse.Namespace): The namespace containing command-line
                                        arguments to be updated.
        """
        field_mappings = [
            # (toml_section, arg_name, toml_field, merge_strategy[, default])
            ("directories", "input_directory", "input_directory", "string_not_empty"),
            ("directories", "output_directory", "output_directory", "string_not_empty"),
            ("thumbnails", "width", "width", "default_value", Constants.DEFAULT_THUMBNAIL_WIDTH),
            ("thumbnails", "height", "height", "default_value", Constants.DEFAULT_THUMBNAIL_HEIGHT),
            ("processing", "workers", "workers", "default_value", Constants.DEFAULT_WORKERS),
            (
                "processing",
                "queue_depth",
                "queue_depth",
                "default_value",
                Constants.DEFAULT_QUEUE_DEPTH,
            ),
            (
                "output",
                "output_filename",
                "filename",
                "default_value",
                Constants.DEFAULT_OUTPUT_FILENAME,
            ),
            ("output", "verbose", "verbose", "boolean_false_to_true"),
        ]

        for mapping in field_mappings:
            self._apply_field_mapping(config_data, args, mapping)

    def _apply_field_mapping(
        self, config_data: dict, args: argparse.Namespace, mapping: tuple
    ) -> None:
        """
        Applies a single field mapping from a configuration dictionary to an argparse.
            Namespace object based on a specified merge strategy.

        Merge Strategies:
            - "string_not_empty": Sets the argument if it is empty/falsy and config value exists.
            - "default_value": Sets an argument not given on the command line from the config
                                value, or from the built-in default when the config
                                file has none.
            - "boolean_false_to_true": Sets the argument if it is False and config value is True.
        """
        toml_section, arg_name, toml_field, merge_strategy = mapping[:4]
        section_data = config_data.get(toml_section, {})

        if merge_strategy == "string_not_empty":
            if not getattr(args, arg_name, None) and toml_field in section_data:
                setattr(args, arg_name, section_data[toml_field])

        elif merge_strategy == "default_value":
            if getattr(args, arg_name) is None:
                setattr(args, arg_name, section_data.get(toml_field, mapping[4]))

        elif merge_strategy == "boolean_false_to_true":
            if not getattr(args, arg_name, False) and section_data.get(toml_field, False):
                setattr(args, arg_name, section_data[toml_field])

    def _create_sample_config(self, output_path: str | Path | None = None) -> None:
        """Creates a sample configuration file for Geo Image Index in TOML format.

        Parameters:
            output_path (str | Path | None): Optional path to save the sample configuration file.
                                                If None, defaults to 'geo_image_index.toml' in
                                                the current working directory.

        Raises:
            FileOperationError: If the configuration file cannot be created due to an OS error.
        """
        if not output_path:
            output_path = Path.cwd() / Constants.CONFIG_FILENAME
        else:
            output_path = Path(output_path)

        sample_config = f"""# Geo Image Index Configuration File
# Save this as {Constants.CONFIG_FILENAME} in your working directory,
# ~/.config/geo_image_index/config.toml, or ~/.geo_image_index.toml
# Command-line arguments always take precedence over these values.

[directories]
# input_directory = "/path/to/photos"   # Directory tree to scan
# output_directory = "/srv/map/output"  # Must exist and lie outside input_directory

[thumbnails]
width = {Constants.DEFAULT_THUMBNAIL_WIDTH}    # Maximum thumbnail width in pixels
height = {Constants.DEFAULT_THUMBNAIL_HEIGHT}   # Maximum thumbnail height in pixels

[processing]
# workers = 8        # Worker threads (defaults to CPU count + 4, at most 32)
queue_depth = {Constants.DEFAULT_QUEUE_DEPTH}    # Files queued per worker before traversal pauses

[output]
filename = "{Constants.DEFAULT_OUTPUT_FILENAME}"   # GeoJSON index written to the output directory
verbose = false           # Enable debug logging
"""

        try:
            with open(output_path, "w", encoding="utf-8") as f:
                f.write(sample_config)
            self.logger.info(f"Sample configuration file created: {output_path}")
            self.logger.info("Edit this file with your preferred settings.")
        except OSError as e:
            self.logger.error(f"Error creating sample config file: {e}")
            raise FileOperationError(f"Could not create config file: {e}") from e

    def _validate_configuration(self, app_config: ApplicationConfig) -> None:
        """
        Validates the application configuration for value ranges.

        Raises:
            ConfigurationError: If any configuration requirement is not met.
        """
        for name, value in (
            ("width", app_config.thumbnails.width),
            ("height", app_config.thumbnails.height),
            ("workers", app_config.processing.workers),
            ("queue_depth", app_config.processing.queue_depth),
        ):
            if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
                raise ConfigurationError(f"{name} must be a positive integer, got {value!r}")

        filename = app_config.output.filename
        if (
            not isinstance(filename, str)
            or filename in ("", "..")
            or Path(filename).name != filename
        ):
            raise ConfigurationError(
                f"Output filename must be a plain file name, got {filename!r}"
            )
