"""Tests for the main module.

These tests verify the main() entry point and how fatal errors map to
exit codes.
"""

import json
from unittest.mock import Mock, patch

import pytest

from conftest import FakeMetadataReader
from geo_image_index.constants import Constants
from geo_image_index.exceptions import FileOperationError
from geo_image_index.main import IndexWorkflow, main
from geo_image_index.pipeline import IndexPipeline
from geo_image_index.types import GeoCoordinates


def run_main(argv):
    with pytest.raises(SystemExit) as exc_info:
        main(argv)
    return exc_info.value.code


@pytest.mark.usefixtures("isolated_home")
class TestMainFunction:
    """Test suite for main() function."""

    @pytest.mark.integration
    def test_success_exit_code(self, photos_dir, output_dir, test_utils):
        """Plain images without EXIF are skipped; the run still succeeds."""
        test_utils.create_image(photos_dir / "b.jpg", size=(40, 40))

        assert run_main([str(photos_dir), str(output_dir)]) == Constants.ErrorCodes.SUCCESS

        data = json.loads((output_dir / "data.json").read_text())
        assert data == {"type": "FeatureCollection", "features": []}

    @pytest.mark.unit
    def test_nested_output_exit_code(self, photos_dir):
        nested = photos_dir / "out"
        nested.mkdir()

        code = run_main([str(photos_dir), str(nested)])

        assert code == Constants.ErrorCodes.NESTED_OUTPUT_DIRECTORY
        assert list(nested.iterdir()) == []

    @pytest.mark.unit
    def test_missing_output_exit_code(self, photos_dir, temp_dir):
        code = run_main([str(photos_dir), str(temp_dir / "missing")])
        assert code == Constants.ErrorCodes.OUTPUT_DIRECTORY_ERROR

    @pytest.mark.unit
    def test_missing_input_exit_code(self, temp_dir, output_dir):
        code = run_main([str(temp_dir / "missing"), str(output_dir)])

        assert code == Constants.ErrorCodes.INPUT_DIRECTORY_ERROR
        assert list(output_dir.iterdir()) == []

    @pytest.mark.unit
    def test_configuration_error_exit_code(self, photos_dir, output_dir):
        code = run_main([str(photos_dir), str(output_dir), "--width", "0"])
        assert code == Constants.ErrorCodes.CONFIGURATION_ERROR

    @pytest.mark.unit
    def test_file_operation_error_exit_code(self, photos_dir, output_dir):
        with patch(
            "geo_image_index.main.GeoJSONExporter.write_document",
            side_effect=FileOperationError("read-only"),
        ):
            code = run_main([str(photos_dir), str(output_dir)])
        assert code == Constants.ErrorCodes.FILE_OPERATION_ERROR

    @pytest.mark.unit
    def test_keyboard_interrupt_exit_code(self, photos_dir, output_dir):
        with patch("geo_image_index.main.IndexWorkflow.run", side_effect=KeyboardInterrupt):
            code = run_main([str(photos_dir), str(output_dir)])
        assert code == Constants.ErrorCodes.INTERRUPTED

    @pytest.mark.unit
    def test_unexpected_error_exit_code(self, photos_dir, output_dir):
        with patch("geo_image_index.main.IndexWorkflow.run", side_effect=RuntimeError("boom")):
            code = run_main([str(photos_dir), str(output_dir)])
        assert code == Constants.ErrorCodes.GENERAL_ERROR

    @pytest.mark.unit
    def test_verbose_switches_to_debug(self, photos_dir, output_dir):
        with patch("geo_image_index.main.LoggingSetup") as mock_logging_setup:
            mock_logging_setup.return_value.setup_logging.return_value = Mock()
            run_main([str(photos_dir), str(output_dir), "-v"])

        mock_logging_setup.return_value.set_level.assert_called_once()


class TestIndexWorkflow:
    """Test suite for IndexWorkflow."""

    @pytest.mark.integration
    def test_run_writes_document_and_logs_summary(self, photos_dir, output_dir, make_app_config,
                                                  mock_logger, test_utils):
        test_utils.create_image(photos_dir / "a.jpg")
        reader = FakeMetadataReader({"a.jpg": GeoCoordinates(52.5, 13.4)})
        workflow = IndexWorkflow(mock_logger, IndexPipeline(mock_logger, reader=reader))

        summary = workflow.run(make_app_config())

        assert summary.output_path == output_dir / "data.json"
        assert summary.thumbnails_written == 1
        mock_logger.info.assert_any_call(
            f"Wrote 1 thumbnails and index to {output_dir / 'data.json'}"
        )
