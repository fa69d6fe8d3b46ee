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

"""Merge ordering of discovered configuration files.

Files are merged "last write wins", so the order in which they are visited
decides precedence. Two rules produce that order:

1. **Layers**: every search path added to the set opens a new layer, and
   layers are visited in the order they were added. Files from the
   operator override directory (added after the shipped defaults) are
   therefore read last and win.
2. **Within a layer**: the child namespace is read before the base
   namespace. Files are sorted by descending length of their absolute path
   and, for equal lengths, by reverse lexicographic order. A longer name
   encodes a more specific namespace (rhn_taskomatic_daemon.conf before
   rhn_taskomatic.conf before rhn.conf), which lets the base file, visited
   last, override anything it spells out with a fully qualified key.

The within-layer order is a strict total order: two distinct paths never
compare equal.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from pathlib import Path


def file_sort_key(path: Path | str) -> tuple[int, str]:
    """Sort key for files inside one layer.

    Sort with ``reverse=True``: longer paths first, then reverse
    lexicographic order of the absolute path string.
    """
    text = str(path)
    return (len(text), text)


class OrderedFileSet:
    """Set of configuration files kept in merge order.

    Duplicates (by absolute path) collapse: a file already present keeps the
    position of the layer that first contributed it.

    Example:
        ```python
        files = OrderedFileSet()
        files.add_layer([Path("/usr/share/rhn/config-defaults/rhn.conf")])
        files.add_layer([Path("/etc/rhn/rhn.conf")])
        list(files)  # defaults first, /etc/rhn/rhn.conf last
        ```
    """

    def __init__(self) -> None:
        self._layers: list[list[Path]] = []
        self._members: set[str] = set()

    def add_layer(self, files: Iterable[Path]) -> list[Path]:
        """Add the files of one search path as a new layer.

        Returns:
            The files that were actually added, in merge order.
        """
        added: list[Path] = []
        for path in files:
            key = str(path)
            if key in self._members:
                continue
            self._members.add(key)
            added.append(Path(path))
        added.sort(key=file_sort_key, reverse=True)
        self._layers.append(added)
        return list(added)

    def clear(self) -> None:
        self._layers = []
        self._members = set()

    def __iter__(self) -> Iterator[Path]:
        for layer in self._layers:
            yield from layer

    def __len__(self) -> int:
        return len(self._members)

    def __contains__(self, path: object) -> bool:
        return str(path) in self._members
