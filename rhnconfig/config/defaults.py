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

"""Process-wide default configuration.

The canonical configuration is made of two layers:

1. **Shipped defaults** (/usr/share/rhn/config-defaults): read-only files
   installed with the application.
2. **Operator overrides** (/etc/rhn): files edited by the administrator.
   Added second, so they win. The directory can be relocated with the
   RHN_CONFIG_DIR environment variable.

get_config() builds one shared ConfigStore from those layers the first time
it is called (under a lock, so concurrent first calls construct it once)
and returns the same instance afterwards. clear_config() drops it; the
next get_config() reloads from disk.

Code that can receive a ConfigStore explicitly should do so; this module
is a convenience for code that cannot.
"""

from __future__ import annotations

import os
import threading

from rhnconfig.config.store import ConfigStore
from rhnconfig.exceptions import ConstructionError

DEFAULT_CONF_DIR = "/etc/rhn"
DEFAULT_DEFAULTS_DIR = "/usr/share/rhn/config-defaults"
CONF_DIR_ENV = "RHN_CONFIG_DIR"

_lock = threading.Lock()
_config: ConfigStore | None = None


def default_config_dir() -> str:
    """Operator override directory, honouring RHN_CONFIG_DIR."""
    conf_dir = os.environ.get(CONF_DIR_ENV, "")
    if not conf_dir.strip():
        return DEFAULT_CONF_DIR
    return conf_dir


def default_config_file_path() -> str:
    """Path of the operator's main rhn.conf file."""
    return f"{default_config_dir()}/rhn.conf"


def default_search_paths() -> list[str]:
    """The canonical search paths, lowest precedence first."""
    return [DEFAULT_DEFAULTS_DIR, default_config_dir()]


def get_config() -> ConfigStore:
    """Return the shared configuration, building it on first use.

    Raises:
        ConstructionError: If loading the default locations fails. The
            original exception is chained.
    """
    global _config
    with _lock:
        if _config is None:
            try:
                _config = ConfigStore(default_search_paths())
            except Exception as err:
                raise ConstructionError(
                    f"Failed to load configuration: {err}"
                ) from err
        return _config


def clear_config() -> None:
    """Drop the shared configuration so the next get_config() reloads it."""
    global _config
    with _lock:
        _config = None
