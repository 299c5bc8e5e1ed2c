"""Main application module for geo image index."""

import logging
import sys
from pathlib import Path

from .config import ConfigurationManager
from .constants import Constants
from .exceptions import (
    ConfigurationError,
    FileOperationError,
    InputDirectoryError,
    NestedOutputDirectoryError,
    OutputDirectoryError,
)
from .export import GeoJSONExporter
from .pipeline import IndexPipeline
from .types import ApplicationConfig, RunSummary
from .utils import LoggingSetup


class IndexWorkflow:
    """Orchestrates the indexing workflow: pipeline, then GeoJSON export."""

    def __init__(self, logger: logging.Logger, pipeline: IndexPipeline | None = None):
        self.logger = logger
        self.pipeline = pipeline if pipeline is not None else IndexPipeline(logger)
        self.exporter = GeoJSONExporter(logger)

    def run(self, app_config: ApplicationConfig) -> RunSummary:
        """Run the pipeline and write the index document."""
        records, summary = self.pipeline.run(app_config)

        assert app_config.directory.output_directory is not None
        summary.output_path = self.exporter.write_document(
            records,
            Path(app_config.directory.output_directory).resolve(),
            app_config.output.filename,
        )

        self.logger.info(
            f"Wrote {summary.thumbnails_written} thumbnails and index to {summary.output_path}"
        )
        return summary


def main(argv: list[str] | None = None) -> None:
    """Main execution function."""
    logging_setup = LoggingSetup()
    logger = logging_setup.setup_logging()

    try:
        config_manager = ConfigurationManager(logger)
        app_config = config_manager.parse_arguments_and_config(argv)

        if app_config.output.verbose:
            logging_setup.set_level(logger, logging.DEBUG)

        workflow = IndexWorkflow(logger)
        workflow.run(app_config)

    except KeyboardInterrupt:
        logger.info("Indexing interrupted by user")
        sys.exit(Constants.ErrorCodes.INTERRUPTED)
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        sys.exit(Constants.ErrorCodes.CONFIGURATION_ERROR)
    except NestedOutputDirectoryError as e:
        logger.error(f"Invalid output directory: {e}")
        sys.exit(Constants.ErrorCodes.NESTED_OUTPUT_DIRECTORY)
    except OutputDirectoryError as e:
        logger.error(f"Invalid output directory: {e}")
        sys.exit(Constants.ErrorCodes.OUTPUT_DIRECTORY_ERROR)
    except InputDirectoryError as e:
        logger.error(f"Invalid input directory: {e}")
        sys.exit(Constants.ErrorCodes.INPUT_DIRECTORY_ERROR)
    except FileOperationError as e:
        logger.error(f"File operation error: {e}")
        sys.exit(Constants.ErrorCodes.FILE_OPERATION_ERROR)
    except Exception as e:  # pylint: disable=broad-exception-caught
        logger.error(f"Unexpected error: {e}")
        sys.exit(Constants.ErrorCodes.GENERAL_ERROR)

    sys.exit(Constants.ErrorCodes.SUCCESS)


if __name__ == "__main__":
    main()
