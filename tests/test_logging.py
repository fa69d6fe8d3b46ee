"""
Tests for rhnconfig.logging module.

Tests the logger interface including:
- Verbosity flags of DefaultLogger
- Warnings and errors on stderr
- Global logger configuration
"""

from __future__ import annotations

from rhnconfig.config.store import ConfigStore
from rhnconfig.logging import (
    DefaultLogger,
    SilentLogger,
    get_global_logger,
    get_logger,
    set_global_logger,
)


class TestDefaultLogger:
    """Tests for DefaultLogger output."""

    def test_quiet_by_default(self, capsys):
        """Test that verbose/debug are suppressed without flags."""
        logger = DefaultLogger()
        logger.verbose("FILES", "hidden")
        logger.debug("PARSE", "hidden")

        assert capsys.readouterr().out == ""

    def test_debug_implies_verbose(self, capsys):
        """Test that debug mode prints verbose messages too."""
        logger = get_logger(debug=True)
        logger.verbose("FILES", "shown")
        logger.debug("PARSE", "detail")

        out = capsys.readouterr().out
        assert "[FILES] shown" in out
        assert "[PARSE] detail" in out

    def test_warning_and_error_on_stderr(self, capsys):
        """Test that problems are always reported on stderr."""
        logger = DefaultLogger()
        logger.warning("FILES", "missing dir")
        logger.error("PARSE", "bad file")

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "[FILES] [WARNING] missing dir" in captured.err
        assert "[PARSE] [ERROR] bad file" in captured.err


class TestGlobalLogger:
    """Tests for global logger configuration."""

    def test_store_uses_global_logger(self, tmp_test_dir, recording_logger):
        """Test that stores without a logger report to the global one."""
        previous = get_global_logger()
        set_global_logger(recording_logger)
        try:
            ConfigStore([tmp_test_dir / "missing"])
        finally:
            set_global_logger(previous)

        assert len(recording_logger.at("warning")) == 1

    def test_default_global_logger_is_silent(self):
        """Test the library default."""
        set_global_logger(SilentLogger())

        assert isinstance(get_global_logger(), SilentLogger)
