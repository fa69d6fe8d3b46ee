"""
Tests for rhnconfig.config.namespace module.

Tests namespace derivation including:
- The base rhn.conf file
- rhn_<ns>.conf files
- Key qualification
"""

from __future__ import annotations

from pathlib import Path

import pytest

from rhnconfig.config.namespace import namespace_of, qualify_key


class TestNamespaceOf:
    """Tests for deriving a namespace from a file name."""

    @pytest.mark.parametrize(
        "file_name,expected",
        [
            ("rhn.conf", ""),
            ("rhn.properties", ""),
            ("rhn_web.conf", "web"),
            ("rhn_taskomatic.conf", "taskomatic"),
            ("rhn_taskomatic_daemon.conf", "taskomatic.daemon"),
            ("rhn_a_b.conf", "a.b"),
            ("java.conf", "java"),
            ("cobbler_settings.conf", "cobbler.settings"),
            ("rhn_noext", "noext"),
        ],
    )
    def test_namespace(self, file_name, expected):
        """Test namespace derivation for representative names."""
        assert namespace_of(file_name) == expected

    def test_only_file_name_is_used(self):
        """Test that directories in the path do not matter."""
        path = Path("/usr/share/rhn_stuff/config-defaults/rhn_server.conf")

        assert namespace_of(path) == "server"

    def test_prefix_only_stripped_at_start(self):
        """Test that rhn_ in the middle of a name is kept."""
        assert namespace_of("my_rhn_tool.conf") == "my.rhn.tool"

    def test_only_last_extension_stripped(self):
        """Test that only the final extension is removed."""
        assert namespace_of("rhn_web.conf.bak") == "web.conf"


class TestQualifyKey:
    """Tests for namespace qualification of parsed keys."""

    def test_empty_namespace_leaves_key(self):
        """Test that the base namespace never changes keys."""
        assert qualify_key("server.port", "") == "server.port"

    def test_key_prefixed_with_namespace(self):
        """Test that bare keys receive the namespace."""
        assert qualify_key("heap", "taskomatic") == "taskomatic.heap"

    def test_already_qualified_key_kept(self):
        """Test that keys already carrying the namespace are unchanged."""
        assert qualify_key("taskomatic.heap", "taskomatic") == "taskomatic.heap"

    def test_plain_prefix_match_counts_as_qualified(self):
        """Test that the check is a plain string prefix test."""
        assert qualify_key("webfoo", "web") == "webfoo"
