"""Unit tests for log.py."""

import sys

from loguru import logger
from pomotodo.log import default_log_path, setup_logging


class TestSetupLogging:
    """Test log sink setup."""

    def test_writes_to_given_file(self, tmp_path):
        """Messages at or above the level reach the file."""
        path = setup_logging("INFO", tmp_path / "logs" / "app.log")
        logger.debug("hidden message")
        logger.info("visible message")
        logger.complete()

        text = path.read_text(encoding="utf-8")
        assert "visible message" in text
        assert "hidden message" not in text

        logger.remove()
        logger.add(sys.stderr)

    def test_default_path(self):
        """The default file lives in the platform log directory."""
        assert default_log_path().name == "pomotodo.log"
