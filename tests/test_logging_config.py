"""Tests for logging setup."""

import logging
import sys

import pytest
from dogpatch.logging_config import setup_logging


@pytest.fixture(autouse=True)
def restore_dogpatch_logger():
    logger = logging.getLogger("dogpatch")
    saved = (logger.level, list(logger.handlers), logger.propagate)
    yield
    for handler in logger.handlers:
        if handler not in saved[1]:
            handler.close()
    logger.setLevel(saved[0])
    logger.handlers[:] = saved[1]
    logger.propagate = saved[2]


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_sets_level_and_handler(self):
        """Test that the dogpatch logger gets one console handler."""
        logger = setup_logging("DEBUG", force=True)
        assert logger.name == "dogpatch"
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1
        assert logger.propagate is False

    def test_console_handler_writes_to_stderr(self):
        """Test that console logging stays off stdout, which carries command output."""
        logger = setup_logging("INFO", force=True)
        assert logger.handlers[0].stream is sys.stderr

    def test_unknown_level_falls_back_to_info(self):
        """Test that an invalid level name does not raise."""
        logger = setup_logging("CHATTY", force=True)
        assert logger.level == logging.INFO

    def test_does_not_duplicate_handlers(self):
        """Test that repeated setup without force keeps existing handlers."""
        setup_logging("INFO", force=True)
        logger = setup_logging("INFO")
        assert len(logger.handlers) == 1

    def test_log_file(self, tmp_path):
        """Test that a file handler is added and receives records."""
        log_file = tmp_path / "dogpatch.log"
        logger = setup_logging("INFO", log_file=log_file, force=True)
        assert len(logger.handlers) == 2

        logging.getLogger("dogpatch.http").info("request sent")
        for handler in logger.handlers:
            handler.flush()
        assert "request sent" in log_file.read_text()
