import logging
import os
from unittest.mock import MagicMock, patch

import pytest

from b2client.logging.config import configure_logging, logger
from b2client.logging.formatters import B2ClientLogFileFormatter, B2ClientLogFormatter


class TestConfigureLogging:
    """Test the configure_logging function"""

    @pytest.fixture(autouse=True)
    def setup_and_teardown(self):
        """Setup and teardown for each test"""
        original_handlers = logger.handlers[:]
        original_level = logger.level

        yield

        for handler in logger.handlers[:]:
            logger.removeHandler(handler)
        for handler in original_handlers:
            logger.addHandler(handler)
        logger.setLevel(original_level)

    def test_configure_logging_with_no_config(self):
        """Test configure_logging when no config is provided"""
        with patch("b2client.config.Config") as mock_config_class:
            mock_config = MagicMock()
            mock_config.log_level = logging.INFO
            mock_config_class.return_value = mock_config

            result = configure_logging()

            assert result == logger
            assert logger.level == logging.INFO
            assert len(logger.handlers) == 1

    def test_configure_logging_with_string_config_level(self):
        mock_config = MagicMock()
        mock_config.log_level = "error"

        configure_logging(mock_config)

        assert logger.level == logging.ERROR

    def test_configure_logging_with_unknown_config_level(self):
        mock_config = MagicMock()
        mock_config.log_level = "CHATTY"

        configure_logging(mock_config)

        assert logger.level == logging.WARNING

    def test_configure_logging_with_env_override(self):
        """Test configure_logging with environment variable override"""
        with patch.dict(os.environ, {"B2CLIENT_LOG_LEVEL": "debug"}):
            mock_config = MagicMock()
            mock_config.log_level = logging.ERROR

            configure_logging(mock_config)

            assert logger.level == logging.DEBUG

    def test_configure_logging_with_invalid_env_level(self):
        with patch.dict(os.environ, {"B2CLIENT_LOG_LEVEL": "INVALID_LEVEL"}):
            mock_config = MagicMock()
            mock_config.log_level = logging.DEBUG

            configure_logging(mock_config)

            assert logger.level == logging.DEBUG  # Falls back to config

    def test_configure_logging_replaces_handlers(self):
        mock_config = MagicMock()
        mock_config.log_level = logging.INFO

        configure_logging(mock_config)
        configure_logging(mock_config)

        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0].formatter, B2ClientLogFormatter)

    def test_configure_logging_to_file(self):
        with patch.dict(os.environ, {"B2CLIENT_LOGGING_TO_FILE": "true"}):
            with patch("logging.FileHandler") as mock_file_handler:
                mock_handler = MagicMock()
                mock_handler.level = logging.DEBUG
                mock_file_handler.return_value = mock_handler
                mock_config = MagicMock()
                mock_config.log_level = logging.INFO

                configure_logging(mock_config)

                mock_file_handler.assert_called_once_with("b2client.log", mode="w")
                mock_handler.setFormatter.assert_called_once()
                formatter = mock_handler.setFormatter.call_args[0][0]
                assert isinstance(formatter, B2ClientLogFileFormatter)

    def test_logger_does_not_propagate(self):
        assert logger.name == "b2client"
        assert logger.propagate is False


class TestFormatters:
    def test_console_formatter_prefixes_messages(self):
        record = logging.LogRecord("b2client", logging.INFO, __file__, 1, "uploaded", None, None)

        assert B2ClientLogFormatter().format(record) == "b2client: uploaded"

    def test_console_formatter_colours_warnings(self):
        record = logging.LogRecord("b2client", logging.WARNING, __file__, 1, "upload failed", None, None)

        assert B2ClientLogFormatter().format(record) == "\x1b[31;1mb2client: upload failed\x1b[0m"

    def test_file_formatter_strips_ansi(self):
        record = logging.LogRecord("b2client", logging.INFO, __file__, 1, "\x1b[31mred\x1b[0m", None, None)

        assert B2ClientLogFileFormatter("%(message)s").format(record) == "red"
