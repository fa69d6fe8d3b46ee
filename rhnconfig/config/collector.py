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

"""Discovery of configuration files below a search path.

A search path is either a directory or a single file:

- **Directory**: the direct children are listed (no recursion) and every
  regular, readable file whose name matches ``*.conf`` (case-sensitive) is
  kept. Subdirectories and other names are skipped silently.
- **File**: a regular, readable file is used as-is, whatever its extension.
- **Anything else** (missing, unreadable, a socket...): no files. This is a
  normal situation (the operator override directory often does not exist)
  so it is only reported as a warning.

Listing failures are logged and treated as "no files found"; nothing in
this module raises to the caller.
"""

from __future__ import annotations

from fnmatch import fnmatchcase
import os
from pathlib import Path

from rhnconfig.exceptions import DiscoveryError
from rhnconfig.logging import Logger, get_global_logger

CONFIG_FILE_PATTERN = "*.conf"


def _absolute(path: Path) -> Path:
    return Path(os.path.abspath(path))


def _is_readable_file(path: Path) -> bool:
    return os.path.isfile(path) and os.access(path, os.R_OK)


def _list_directory(directory: Path) -> list[Path]:
    """Return the eligible config files directly inside 'directory'.

    Raises:
        DiscoveryError: If the directory cannot be listed.
    """
    try:
        children = list(directory.iterdir())
    except OSError as err:
        raise DiscoveryError(
            f"Unable to list files in directory {directory}: {err}", directory
        ) from err

    return [
        _absolute(child)
        for child in children
        if fnmatchcase(child.name, CONFIG_FILE_PATTERN) and _is_readable_file(child)
    ]


def collect_files(path: str | Path, logger: Logger | None = None) -> list[Path]:
    """Resolve a search path into the configuration files it contributes.

    Args:
        path: Directory to scan or single file to use.
        logger: Logger for diagnostics. Defaults to the global logger.

    Returns:
        Absolute paths of the eligible files, sorted by name. Empty when the
        path is missing, unreadable or cannot be listed.
    """
    if logger is None:
        logger = get_global_logger()

    location = Path(path)

    if os.path.isdir(location) and os.access(location, os.R_OK):
        try:
            files = _list_directory(location)
        except DiscoveryError as err:
            logger.error("FILES", str(err))
            return []
        logger.verbose("FILES", f"Found {len(files)} config file(s) in {location}")
        return sorted(files)

    if _is_readable_file(location):
        logger.verbose("FILES", f"Using config file {location}")
        return [_absolute(location)]

    logger.warning("FILES", f"Ignoring path {location} since it's not accessible")
    return []
