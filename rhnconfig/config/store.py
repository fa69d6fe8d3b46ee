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

"""Merged configuration store with typed accessors.

ConfigStore ties the pipeline together:

    search paths -> collect_files -> OrderedFileSet -> parse_file -> mapping

and exposes the merged, flat key -> value mapping through typed getters.

Key Resolution
--------------
get_string("ns.name") splits the key on its last dot and tries, in order:

1. ``name`` on its own (unqualified)
2. ``ns.name`` when a namespace was given
3. ``web.name`` then ``server.name`` when no namespace was given

The first hit wins. Values are returned stripped; a value that is empty
after stripping counts as absent, so "unset" and "explicitly empty" cannot
be told apart through the getters (use contains_key() for that).

In-memory Overrides
-------------------
set_string(), set_boolean() and remove() change the merged mapping
directly and are never written to disk. They are remembered as an overlay
that is re-applied after every merge, so a later load() or parse_files()
does not undo them. clear_overrides() drops the overlay.

Thread Safety
-------------
The mapping is a copy-on-write snapshot. Readers use whatever dict is
current without locking; every writer builds a new dict under one
store-wide lock and swaps the reference.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
import re
import threading

from rhnconfig.config.collector import collect_files
from rhnconfig.config.namespace import namespace_of
from rhnconfig.config.ordering import OrderedFileSet
from rhnconfig.config.properties import parse_file
from rhnconfig.exceptions import ParseError, TypeCoercionError
from rhnconfig.logging import Logger, get_global_logger
from rhnconfig.results import LoadResult

# Values considered true, ignoring case
TRUE_VALUES = ("1", "y", "true", "yes", "on")

# Namespaces tried, in order, for a key given without one
DEFAULT_PREFIX_ORDER = ("web", "server")

_INTEGER = re.compile(r"[+-]?[0-9]+")
_DECIMAL = re.compile(r"[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?[fFdD]?")
_SPECIAL_REALS = ("NaN", "Infinity", "+Infinity", "-Infinity")
_INT_RANGE = (-(2**31), 2**31 - 1)
_LONG_RANGE = (-(2**63), 2**63 - 1)


def is_true_value(value: str | None) -> bool:
    """Return True if 'value' is one of TRUE_VALUES (case-insensitive, unstripped)."""
    if value is None:
        return False
    return value.lower() in TRUE_VALUES


def _split_list(value: str) -> list[str]:
    parts = value.split(",")
    # trailing empty fields are dropped, leading and inner ones are kept
    while parts and parts[-1] == "":
        parts.pop()
    return parts


class ConfigStore:
    """Layered, namespace-aware configuration.

    Args:
        search_paths: Directories or files to load immediately, lowest
            precedence first. When omitted the store starts empty.
        prefix_order: Namespaces tried for keys given without one.
        logger: Logger for diagnostics. Defaults to the global logger.

    Example:
        ```python
        store = ConfigStore(["/usr/share/rhn/config-defaults", "/etc/rhn"])
        port = store.get_int("server.port", 80)
        debug = store.get_boolean("java.debug")
        hosts = store.get_list("server.satellite.allowed_hosts")
        ```
    """

    def __init__(
        self,
        search_paths: Iterable[str | Path] | None = None,
        *,
        prefix_order: Iterable[str] = DEFAULT_PREFIX_ORDER,
        logger: Logger | None = None,
    ) -> None:
        self._lock = threading.Lock()
        self._files = OrderedFileSet()
        self._prefix_order = tuple(prefix_order)
        self._logger = logger

        self._file_values: dict[str, str] = {}
        self._overrides: dict[str, str] = {}
        self._removed: set[str] = set()
        self._values: dict[str, str] = {}

        if search_paths is not None:
            self.load(search_paths)

    @property
    def logger(self) -> Logger:
        if self._logger is None:
            return get_global_logger()
        return self._logger

    @property
    def prefix_order(self) -> tuple[str, ...]:
        return self._prefix_order

    @property
    def files(self) -> tuple[Path, ...]:
        """Files registered so far, in merge order."""
        with self._lock:
            return tuple(self._files)

    # -------------------------------
    # Loading
    # -------------------------------

    def load(self, search_paths: Iterable[str | Path]) -> LoadResult:
        """Rebuild the file set from 'search_paths' and merge it.

        Each path becomes a new layer, so later paths win. In-memory
        overrides survive and are re-applied on top.
        """
        with self._lock:
            self._files.clear()
            for path in search_paths:
                self._add_layer(path)
            return self._merge()

    def add_path(self, path: str | Path) -> list[Path]:
        """Register one more search path as the highest-precedence layer.

        The mapping is not touched until parse_files() runs.

        Returns:
            The newly registered files, in merge order.
        """
        with self._lock:
            return self._add_layer(path)

    def parse_files(self) -> LoadResult:
        """Merge every registered file, in order, into a fresh mapping."""
        with self._lock:
            return self._merge()

    def _add_layer(self, path: str | Path) -> list[Path]:
        return self._files.add_layer(collect_files(path, logger=self.logger))

    def _merge(self) -> LoadResult:
        logger = self.logger
        merged: dict[str, str] = {}
        visited: list[Path] = []
        failed: list[Path] = []

        for path in self._files:
            visited.append(path)
            namespace = namespace_of(path)
            try:
                entries = parse_file(path, namespace)
            except ParseError as err:
                logger.error("PARSE", f"Could not parse file {path}: {err}")
                failed.append(path)
                continue

            logger.debug("PARSE", f"Adding namespace: '{namespace}' for file: {path}")
            for key, value in entries.items():
                logger.debug("PARSE", f"Adding: {key}: {value}")
            merged.update(entries)

        self._file_values = merged
        self._values = self._with_overrides(merged)

        logger.verbose(
            "CONFIG",
            f"Merged {len(visited)} file(s) into {len(self._values)} key(s)",
        )
        return LoadResult(
            files=tuple(visited),
            failed=tuple(failed),
            key_count=len(self._values),
        )

    def _with_overrides(self, base: dict[str, str]) -> dict[str, str]:
        values = dict(base)
        values.update(self._overrides)
        for key in self._removed:
            values.pop(key, None)
        return values

    # -------------------------------
    # String access
    # -------------------------------

    def get_string(self, key: str | None, default: str | None = None) -> str | None:
        """Resolve 'key' with prefix fallback.

        Args:
            key: Dotted key such as "server.port", or a bare name.
            default: Returned when the key resolves to nothing.

        Returns:
            The stripped value, or 'default' when the key is absent or its
            value is blank.
        """
        if key is None:
            return default

        values = self._values
        logger = self.logger

        namespace = ""
        name = key
        last_dot = key.rfind(".")
        if last_dot > 0:
            namespace, name = key[:last_dot], key[last_dot + 1 :]

        result = values.get(name)
        if result is None:
            if namespace:
                result = values.get(f"{namespace}.{name}")
            else:
                for prefix in self._prefix_order:
                    result = values.get(f"{prefix}.{name}")
                    if result is not None:
                        break

        if result is not None:
            result = result.strip()
        if not result:
            logger.debug("CONFIG", f"get_string({key}) -> default")
            return default

        logger.debug("CONFIG", f"get_string({key}) -> {result}")
        return result

    def get_string_array(self, key: str | None) -> list[str] | None:
        """Comma-split value of 'key', or None when absent."""
        value = self.get_string(key)
        if value is None:
            return None
        return _split_list(value)

    def get_list(self, key: str | None) -> list[str]:
        """Comma-split value of 'key'; an absent key gives an empty list."""
        return self.get_string_array(key) or []

    # -------------------------------
    # Typed access
    # -------------------------------

    def _get_integer(
        self, key: str, default: int | None, target: str, bounds: tuple[int, int]
    ) -> int | None:
        value = self.get_string(key)
        if value is None:
            return default
        if not _INTEGER.fullmatch(value):
            raise TypeCoercionError(key, value, target)
        number = int(value)
        low, high = bounds
        if not low <= number <= high:
            raise TypeCoercionError(key, value, target)
        return number

    def _get_real(self, key: str, default: float | None, target: str) -> float | None:
        value = self.get_string(key)
        if value is None:
            return default
        if value in _SPECIAL_REALS:
            return float(value)
        if not _DECIMAL.fullmatch(value):
            raise TypeCoercionError(key, value, target)
        # trailing f/d type suffix
        return float(value.rstrip("fFdD"))

    def get_int(self, key: str, default: int | None = None) -> int | None:
        """Value of 'key' as a signed 32-bit integer.

        Raises:
            TypeCoercionError: If a value is present but is not a decimal
                integer in range.
        """
        return self._get_integer(key, default, "int", _INT_RANGE)

    def get_long(self, key: str, default: int | None = None) -> int | None:
        """Value of 'key' as a signed 64-bit integer."""
        return self._get_integer(key, default, "long", _LONG_RANGE)

    def get_float(self, key: str, default: float | None = None) -> float | None:
        """Value of 'key' as a float.

        Accepts decimal and exponent notation with an optional f/d suffix
        ("1.5", ".5", "1e3", "2.5f"), plus the exact spellings "NaN" and
        "[+-]Infinity". Lower-case "nan"/"inf" are rejected.

        Raises:
            TypeCoercionError: If a value is present but not numeric.
        """
        return self._get_real(key, default, "float")

    def get_double(self, key: str, default: float | None = None) -> float | None:
        return self._get_real(key, default, "double")

    def get_boolean(self, key: str, default: bool = False) -> bool:
        """Value of 'key' as a boolean.

        "1", "y", "true", "yes" and "on" (any case) are true. Any other
        present value is false; an absent key gives 'default'.
        """
        value = self.get_string(key)
        if value is None:
            return default
        result = is_true_value(value)
        self.logger.debug("CONFIG", f"get_boolean({key}) is {value} -> {result}")
        return result

    # -------------------------------
    # Mutation
    # -------------------------------

    def set_string(self, key: str, value: str) -> str | None:
        """Set 'key' in memory, bypassing the files.

        Returns:
            The previously stored raw value, if any.
        """
        with self._lock:
            previous = self._values.get(key)
            self._overrides[key] = value
            self._removed.discard(key)
            values = dict(self._values)
            values[key] = value
            self._values = values
        return previous

    def set_boolean(self, key: str, value: str | None) -> None:
        """Store "1" if 'value' is a true value, "0" otherwise."""
        self.set_string(key, "1" if is_true_value(value) else "0")

    def remove(self, key: str) -> None:
        """Remove 'key' from the mapping; later merges keep it removed."""
        with self._lock:
            self._overrides.pop(key, None)
            self._removed.add(key)
            if key in self._values:
                values = dict(self._values)
                del values[key]
                self._values = values

    def clear_overrides(self) -> None:
        """Forget in-memory changes and restore the last merged file values."""
        with self._lock:
            self._overrides = {}
            self._removed = set()
            self._values = dict(self._file_values)

    # -------------------------------
    # Inspection
    # -------------------------------

    def contains_key(self, key: str) -> bool:
        """Exact presence test; no namespace fallback is applied."""
        return key in self._values

    def get_namespace_properties(
        self, namespace: str, rename_to: str | None = None
    ) -> dict[str, str]:
        """Return every entry whose key starts with 'namespace'.

        Args:
            namespace: Key prefix to select.
            rename_to: If given, the first occurrence of 'namespace' in each
                returned key is replaced with it.

        Note:
            This scans every key. Call it at startup or other discrete
            moments, not in hot paths.
        """
        selected: dict[str, str] = {}
        for key, value in self._values.items():
            if not key.startswith(namespace):
                continue
            self.logger.debug("CONFIG", f"Looking for key: [{key}]")
            if rename_to is not None and rename_to != namespace:
                key = key.replace(namespace, rename_to, 1)
            selected[key] = value
        return selected

    def keys(self) -> list[str]:
        return list(self._values)

    def as_dict(self) -> dict[str, str]:
        """Copy of the merged mapping (raw, unstripped values)."""
        return dict(self._values)

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"ConfigStore(files={len(self._files)}, keys={len(self._values)})"
