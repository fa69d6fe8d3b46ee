# Copyright 2025 Roger Cibrian
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Configuration loading and lookup for rhnconfig.

This package discovers flat property files, merges them with deterministic
precedence and answers typed lookups:

  - collector: find *.conf files below a search path
  - namespace: derive a key namespace from a file name
  - ordering: keep files in merge order
  - properties: parse one file into qualified key/value pairs
  - store: the merged mapping and its typed accessors
  - defaults: the process-wide shared store

Public API:

- ConfigStore: Merged configuration with typed accessors
- get_config: Shared store built from the default locations
- clear_config: Drop the shared store

Example:
    Basic usage:

        from rhnconfig.config import ConfigStore

        store = ConfigStore(["/usr/share/rhn/config-defaults", "/etc/rhn"])
        print(store.get_int("server.port", 80))

"""

from .defaults import (
    clear_config,
    default_config_dir,
    default_config_file_path,
    default_search_paths,
    get_config,
)
from .namespace import namespace_of
from .store import TRUE_VALUES, ConfigStore

__all__ = [
    "ConfigStore",
    "TRUE_VALUES",
    "clear_config",
    "default_config_dir",
    "default_config_file_path",
    "default_search_paths",
    "get_config",
    "namespace_of",
]
