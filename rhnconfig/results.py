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

"""Public API return types for rhnconfig.

All dataclasses are frozen (immutable) to prevent accidental mutation of
return values.

Example:
    Inspecting a load pass:
        ```python
        from rhnconfig import ConfigStore

        store = ConfigStore()
        result = store.load(["/usr/share/rhn/config-defaults", "/etc/rhn"])
        for path in result.failed:
            print(f"skipped unparsable file {path}")
        ```
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class LoadResult:
    """Result from a merge pass.

    Attributes:
        files: Files visited, in merge order (failed files included).
        failed: Files that could not be read or parsed and contributed
            nothing.
        key_count: Number of keys in the merged mapping afterwards,
            in-memory overrides included.
    """

    files: tuple[Path, ...]
    failed: tuple[Path, ...]
    key_count: int
