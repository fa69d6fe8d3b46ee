"""
rhnconfig - layered configuration loader

Reads runtime settings split across a shipped defaults tree and an
administrator-editable override tree of flat ``key = value`` files.

rhnconfig provides:
  - Discovery of *.conf files in one or more search locations
  - Namespaces derived from file names (rhn_taskomatic.conf -> taskomatic)
  - Deterministic merge order (override tree wins, base file last)
  - Typed accessors with web/server prefix fallback
  - A lazily built, thread-safe process-wide instance

Quick Start
-----------
Look up a value with the default locations:

    $ rhn-config get server.port --type int

List the files in merge order:

    $ rhn-config files

For full CLI documentation:

    $ rhn-config --help

Package Structure
-----------------
cli : module
    Command-line interface with argparse.
config : package
    File discovery, parsing, merging and lookup.
exceptions : module
    Exception hierarchy.
logging : module
    Pluggable logger used by the library.
results : module
    Public API return types.

Public API
----------
    from rhnconfig import ConfigStore, get_config, clear_config

    store = ConfigStore(["/usr/share/rhn/config-defaults", "/etc/rhn"])
    store.get_boolean("java.development_environment")

Project Information
-------------------
Author: Roger Cibrian
License: Apache-2.0
"""

__version__ = "0.1.0"
__author__ = "Roger Cibrian"
__license__ = "Apache-2.0"
__description__ = "Layered, namespace-aware configuration loader"

# Re-export commonly used names for convenience
from rhnconfig.config import ConfigStore, clear_config, get_config
from rhnconfig.results import LoadResult

__all__ = [
    "__version__",
    "__author__",
    "__license__",
    "__description__",
    "ConfigStore",
    "LoadResult",
    "clear_config",
    "get_config",
]
