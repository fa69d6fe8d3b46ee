"""
Pytest configuration and shared fixtures for rhnconfig tests.

This module provides reusable fixtures and test utilities used across
the test suite.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from rhnconfig.config import clear_config


class RecordingLogger:
    """Logger that keeps every message for assertions."""

    def __init__(self) -> None:
        self.messages: list[tuple[str, str, str]] = []

    def _record(self, level: str, prefix: str, message: str) -> None:
        self.messages.append((level, prefix, message))

    def verbose(self, prefix: str, message: str) -> None:
        self._record("verbose", prefix, message)

    def debug(self, prefix: str, message: str) -> None:
        self._record("debug", prefix, message)

    def warning(self, prefix: str, message: str) -> None:
        self._record("warning", prefix, message)

    def error(self, prefix: str, message: str) -> None:
        self._record("error", prefix, message)

    def at(self, level: str) -> list[str]:
        return [message for lvl, _, message in self.messages if lvl == level]


@pytest.fixture
def tmp_test_dir(tmp_path: Path) -> Path:
    """
    Provide a temporary directory for test artifacts.

    Automatically cleaned up after test completion.
    """
    return tmp_path


@pytest.fixture
def recording_logger() -> RecordingLogger:
    """Provide a logger that records messages instead of printing them."""
    return RecordingLogger()


@pytest.fixture
def create_conf_file(tmp_test_dir: Path):
    """
    Factory fixture for creating configuration files.

    Usage:
        path = create_conf_file("defaults/rhn.conf", "server.port = 80\\n")
    """

    def _create(relative: str, content: str) -> Path:
        path = tmp_test_dir / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _create


@pytest.fixture
def layered_dirs(create_conf_file, tmp_test_dir: Path) -> tuple[Path, Path]:
    """
    Provide a shipped-defaults directory and an operator override directory.

    defaults/ holds rhn.conf, rhn_taskomatic.conf and rhn_web.conf;
    etc/ overrides a few of their values.
    """
    create_conf_file(
        "defaults/rhn.conf",
        "server.port = 80\n"
        "server.hostname = localhost\n"
        "java.debug = false\n",
    )
    create_conf_file(
        "defaults/rhn_taskomatic.conf",
        "heap = 512\n"
        "channels = base,updates,extras\n",
    )
    create_conf_file(
        "defaults/rhn_web.conf",
        "title = Spacewalk\n"
        "session_timeout = 3600\n",
    )
    create_conf_file(
        "etc/rhn.conf",
        "port = 8080\n"
        "java.debug = yes\n"
        "taskomatic.heap = 1024\n",
    )
    return tmp_test_dir / "defaults", tmp_test_dir / "etc"


@pytest.fixture(autouse=True)
def reset_shared_config():
    """Make sure no test leaks the process-wide configuration."""
    clear_config()
    yield
    clear_config()
