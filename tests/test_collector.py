"""
Tests for rhnconfig.config.collector module.

Tests file discovery including:
- Directory scanning for *.conf files
- Single file search paths
- Missing and unreadable paths
"""

from __future__ import annotations

import os

import pytest

from rhnconfig.config.collector import collect_files


class TestDirectoryScan:
    """Tests for scanning a directory."""

    def test_only_conf_files_collected(self, tmp_test_dir, create_conf_file):
        """Test that only *.conf files are picked up."""
        create_conf_file("conf/rhn.conf", "a=1\n")
        create_conf_file("conf/rhn_web.conf", "b=2\n")
        create_conf_file("conf/README", "not config\n")
        create_conf_file("conf/rhn.conf.rpmsave", "a=0\n")

        files = collect_files(tmp_test_dir / "conf")

        assert [f.name for f in files] == ["rhn.conf", "rhn_web.conf"]

    def test_pattern_is_case_sensitive(self, tmp_test_dir, create_conf_file):
        """Test that upper-case extensions do not match."""
        create_conf_file("conf/rhn.CONF", "a=1\n")

        assert collect_files(tmp_test_dir / "conf") == []

    def test_subdirectories_not_descended(self, tmp_test_dir, create_conf_file):
        """Test that nested files are ignored."""
        create_conf_file("conf/rhn.conf", "a=1\n")
        create_conf_file("conf/nested/rhn_deep.conf", "b=2\n")
        (tmp_test_dir / "conf" / "dir.conf").mkdir()

        files = collect_files(tmp_test_dir / "conf")

        assert [f.name for f in files] == ["rhn.conf"]

    def test_paths_are_absolute(self, tmp_test_dir, create_conf_file, monkeypatch):
        """Test that relative search paths yield absolute file paths."""
        create_conf_file("conf/rhn.conf", "a=1\n")
        monkeypatch.chdir(tmp_test_dir)

        files = collect_files("conf")

        assert files[0].is_absolute()
        assert files[0].resolve() == (tmp_test_dir / "conf" / "rhn.conf").resolve()

    def test_empty_directory(self, tmp_test_dir):
        """Test that an empty directory yields nothing."""
        (tmp_test_dir / "empty").mkdir()

        assert collect_files(tmp_test_dir / "empty") == []

    @pytest.mark.skipif(
        not hasattr(os, "geteuid") or os.geteuid() == 0,
        reason="permission checks do not apply to root",
    )
    def test_unreadable_file_skipped(self, tmp_test_dir, create_conf_file):
        """Test that files without read permission are skipped."""
        create_conf_file("conf/rhn.conf", "a=1\n")
        secret = create_conf_file("conf/rhn_secret.conf", "b=2\n")
        secret.chmod(0)

        try:
            files = collect_files(tmp_test_dir / "conf")
        finally:
            secret.chmod(0o644)

        assert [f.name for f in files] == ["rhn.conf"]


class TestSingleFile:
    """Tests for search paths naming a file."""

    def test_file_used_regardless_of_extension(self, create_conf_file):
        """Test that an explicit file is used even without .conf."""
        path = create_conf_file("custom.properties", "a=1\n")

        assert collect_files(path) == [path]


class TestInaccessiblePaths:
    """Tests for missing or unusable search paths."""

    def test_missing_path_yields_nothing(self, tmp_test_dir, recording_logger):
        """Test that a missing path is tolerated and logged as a warning."""
        missing = tmp_test_dir / "does-not-exist"

        files = collect_files(missing, logger=recording_logger)

        assert files == []
        warnings = recording_logger.at("warning")
        assert len(warnings) == 1
        assert str(missing) in warnings[0]
        assert recording_logger.at("error") == []

    def test_listing_failure_logged(
        self, tmp_test_dir, create_conf_file, recording_logger, monkeypatch
    ):
        """Test that an OSError while listing is logged and ignored."""
        create_conf_file("conf/rhn.conf", "a=1\n")

        def broken_iterdir(self):
            raise PermissionError("denied")

        monkeypatch.setattr(type(tmp_test_dir), "iterdir", broken_iterdir)

        files = collect_files(tmp_test_dir / "conf", logger=recording_logger)

        assert files == []
        errors = recording_logger.at("error")
        assert len(errors) == 1
        assert "Unable to list files" in errors[0]
