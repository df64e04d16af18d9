"""
Tests for logging setup.
"""

import logging
import sys

import pytest
from loguru import logger

from moonshine.utils.logger import STDLIB_LOGGERS, InterceptHandler, get_logger, setup_logging


@pytest.fixture
def restore_logging():
    """Put Loguru and stdlib logging back the way they were."""
    root_handlers = logging.getLogger().handlers[:]
    root_level = logging.getLogger().level
    yield
    logger.remove()
    logger.add(sys.stderr)
    root = logging.getLogger()
    root.handlers = root_handlers
    root.setLevel(root_level)
    for name in STDLIB_LOGGERS:
        stdlib_logger = logging.getLogger(name)
        stdlib_logger.handlers = []
        stdlib_logger.propagate = True


class TestSetupLogging:
    """Test console sink configuration."""

    def test_console_goes_to_stderr(self, capsys, restore_logging):
        """Test module logs reach stderr and never stdout."""
        setup_logging(level="INFO")

        get_logger("moonshine.services.retrieval").info("scan finished")

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "moonshine.services.retrieval - scan finished" in captured.err

    def test_plain_text_when_not_a_terminal(self, capsys, restore_logging):
        """Test no ANSI colour codes are written to a piped stderr."""
        setup_logging(level="INFO")

        get_logger("moonshine.server").warning("stopping")

        assert "\x1b[" not in capsys.readouterr().err

    def test_level_filter(self, capsys, restore_logging):
        """Test records below the configured level are dropped."""
        setup_logging(level="WARNING")

        get_logger("moonshine.app").info("quiet")
        get_logger("moonshine.app").error("loud")

        err = capsys.readouterr().err
        assert "quiet" not in err
        assert "loud" in err

    def test_stdlib_records_are_forwarded(self, capsys, restore_logging):
        """Test MCP SDK log records land in the same sink under their logger name."""
        setup_logging(level="INFO")

        logging.getLogger("mcp").warning("session closed")

        assert "mcp - session closed" in capsys.readouterr().err
        assert any(isinstance(h, InterceptHandler) for h in logging.getLogger("mcp").handlers)

    def test_file_sink(self, tmp_path, restore_logging):
        """Test the optional file sink creates its directory."""
        log_dir = tmp_path / "logs"

        setup_logging(level="INFO", log_to_file=True, log_dir=str(log_dir), serialize=False)
        get_logger("moonshine.main").info("written to file")
        logger.complete()
        logger.remove()

        files = list(log_dir.glob("moonshine_*.log"))
        assert len(files) == 1
        assert "written to file" in files[0].read_text()
