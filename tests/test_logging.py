"""
Tests for logging configuration
"""
import logging

from roadfix.core.config import Settings
from roadfix.core.logging import setup_logging


class TestSetupLogging:
    """Test suite for setup_logging."""

    def teardown_method(self):
        logger = logging.getLogger("roadfix")
        for handler in [h for h in logger.handlers if h.get_name() == "roadfix"]:
            logger.removeHandler(handler)
        logger.setLevel(logging.NOTSET)

    def test_level_from_settings(self):
        """Test the roadfix logger takes its level from settings."""
        logger = setup_logging(Settings(log_level="warning", _env_file=None))

        assert logger.name == "roadfix"
        assert logger.level == logging.WARNING
        assert logging.getLogger("roadfix.database.store").getEffectiveLevel() == logging.WARNING

    def test_explicit_level_wins(self):
        """Test an explicit level overrides settings."""
        logger = setup_logging(Settings(log_level="INFO", _env_file=None), level="DEBUG")

        assert logger.level == logging.DEBUG

    def test_repeated_setup_keeps_one_handler(self):
        """Test calling setup twice does not duplicate output."""
        setup_logging()
        logger = setup_logging()

        named = [h for h in logger.handlers if h.get_name() == "roadfix"]
        assert len(named) == 1
