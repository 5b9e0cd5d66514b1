"""Unit tests for logging configuration."""

import logging

from varsweep.utils import configure_logging


def handler_names() -> list[str]:
    return [h.get_name() for h in logging.getLogger().handlers]


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_writes_log_file(self, tmp_path):
        """Test the file handler is installed and writes to the given path."""
        log_file = tmp_path / "logs" / "run.log"
        configure_logging(log_file=log_file)

        assert "varsweep-file" in handler_names()
        assert log_file.exists()

    def test_unwritable_log_dir(self, tmp_path):
        """Test a log directory that is a regular file disables file logging."""
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")

        logger = configure_logging(log_dir=blocker)

        assert logger is not None
        assert "varsweep-file" not in handler_names()
        assert "varsweep-console" in handler_names()

    def test_reconfigure_replaces_handlers(self, tmp_path):
        """Test calling twice leaves one handler of each kind."""
        configure_logging(log_file=tmp_path / "first.log")
        configure_logging(log_file=tmp_path / "second.log")

        names = handler_names()
        assert names.count("varsweep-file") == 1
        assert names.count("varsweep-console") == 1
