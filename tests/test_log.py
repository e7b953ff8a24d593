"""
Tests for the command-line logging setup.
"""

import logging

import pytest
from csfstudio.log import PACKAGE_LOGGER, parse_level, setup_logging


@pytest.fixture
def package_logger():
    logger = logging.getLogger(PACKAGE_LOGGER)
    yield logger
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)


class TestParseLevel:
    """Test level name parsing."""

    @pytest.mark.parametrize("name, expected", [("debug", logging.DEBUG), ("INFO", logging.INFO), ("Error", logging.ERROR)])
    def test_known_levels(self, name, expected):
        """Should accept level names in any case."""
        assert parse_level(name) == expected

    def test_unknown_level(self):
        """Should reject an unknown level name."""
        with pytest.raises(ValueError):
            parse_level("chatty")


class TestSetupLogging:
    """Test handler installation on the package logger."""

    def test_sets_level(self, package_logger):
        """Should set the package logger level."""
        setup_logging("WARNING")
        assert package_logger.level == logging.WARNING

    def test_root_logger_untouched(self, package_logger):
        """Should not add handlers to the root logger."""
        before = list(logging.getLogger().handlers)
        setup_logging("INFO")
        assert logging.getLogger().handlers == before

    def test_repeated_calls_replace_handlers(self, package_logger, tmp_path):
        """Should close the handlers of an earlier call instead of stacking them."""
        setup_logging("INFO", tmp_path / "first.log")
        first_handlers = list(package_logger.handlers)

        setup_logging("INFO", tmp_path / "second.log")

        assert len(package_logger.handlers) == 2
        assert not any(handler in package_logger.handlers for handler in first_handlers)
        file_handler = next(h for h in first_handlers if isinstance(h, logging.FileHandler))
        assert file_handler.stream is None

    def test_writes_log_file(self, package_logger, tmp_path):
        """Should write formatted records to the log file."""
        log_file = tmp_path / "run.log"
        setup_logging("INFO", log_file)

        logging.getLogger("csfstudio.cli").info("converted %d labels", 3)

        assert "| INFO | csfstudio.cli | converted 3 labels" in log_file.read_text(encoding="utf-8")
