"""Tests for run logging configuration."""

import logging
from unittest.mock import patch

from newsflow.config.settings import Settings
from newsflow.tools.logging_setup import setup_logging


class TestSetupLogging:
    def teardown_method(self) -> None:
        for name in ("urllib3", "asyncio"):
            logging.getLogger(name).setLevel(logging.NOTSET)

    @patch("newsflow.tools.logging_setup.logging.basicConfig")
    def test_file_and_console_handlers(self, mock_config, tmp_path) -> None:
        log_file = tmp_path / "logs" / "run.log"

        setup_logging(Settings(log_file=str(log_file), log_level="debug"))

        kwargs = mock_config.call_args.kwargs
        try:
            assert kwargs["level"] == logging.DEBUG
            assert log_file.parent.is_dir()
            file_handlers = [h for h in kwargs["handlers"] if isinstance(h, logging.FileHandler)]
            assert len(file_handlers) == 1
            assert file_handlers[0].baseFilename == str(log_file)
        finally:
            for h in kwargs["handlers"]:
                h.close()

    @patch("newsflow.tools.logging_setup.logging.basicConfig")
    def test_http_and_browser_chatter_is_quieted(self, mock_config, tmp_path) -> None:
        setup_logging(Settings(log_file=str(tmp_path / "run.log"), log_level="DEBUG"))
        try:
            assert logging.getLogger("urllib3").level == logging.WARNING
            assert logging.getLogger("asyncio").level == logging.WARNING
        finally:
            for h in mock_config.call_args.kwargs["handlers"]:
                h.close()

    @patch("newsflow.tools.logging_setup.logging.basicConfig")
    def test_unknown_level_defaults_to_info(self, mock_config, tmp_path) -> None:
        setup_logging(Settings(log_file=str(tmp_path / "run.log"), log_level="chatty"))
        try:
            assert mock_config.call_args.kwargs["level"] == logging.INFO
        finally:
            for h in mock_config.call_args.kwargs["handlers"]:
                h.close()
