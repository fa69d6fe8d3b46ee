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

"""Exception hierarchy for rhnconfig.

This module defines a custom exception hierarchy that allows library users
to distinguish between different types of errors:

- DiscoveryError: A search path is missing or cannot be listed
- ParseError: A configuration file cannot be read or parsed
- TypeCoercionError: A stored value does not convert to the requested type
- ConstructionError: The process-wide configuration could not be built

Only TypeCoercionError and ConstructionError ever reach callers of the
public API. Discovery and parse failures are logged by the loader and the
offending source simply contributes nothing.

All exceptions inherit from RhnConfigError, allowing users to catch all
rhnconfig errors with a single except clause if needed.

Example:
    Catching a malformed numeric value:
        ```python
        from rhnconfig import get_config
        from rhnconfig.exceptions import TypeCoercionError

        try:
            port = get_config().get_int("server.port", 80)
        except TypeCoercionError as e:
            print(f"Bad value for {e.key}: {e.value!r}")
        ```
"""

from __future__ import annotations

from pathlib import Path

__all__ = [
    "RhnConfigError",
    "DiscoveryError",
    "ParseError",
    "PropertyParseError",
    "TypeCoercionError",
    "ConstructionError",
]


class RhnConfigError(Exception):
    """Base exception for all rhnconfig errors."""

    pass


class DiscoveryError(RhnConfigError):
    """Raised when a search path cannot be turned into configuration files.

    The loader never lets this escape; it is logged and the path is treated
    as contributing no files.

    Attributes:
        path: The search path that could not be used.
    """

    def __init__(self, message: str, path: Path | str | None = None) -> None:
        super().__init__(message)
        self.path = path


class ParseError(RhnConfigError):
    """Raised when the contents of a configuration file cannot be parsed.

    Attributes:
        line: 1-based line number where the problem was found, if known.
    """

    def __init__(self, message: str, line: int | None = None) -> None:
        super().__init__(message)
        self.line = line


class PropertyParseError(ParseError):
    """Raised by the properties grammar for malformed text.

    read_properties() re-raises it as a ParseError naming the file.
    """

    pass


class TypeCoercionError(RhnConfigError, ValueError):
    """Raised when a present value cannot be converted to the requested type.

    Absence of a key is never an error; only a value that exists but is
    malformed (e.g. "eighty" for an integer setting) raises this.

    Attributes:
        key: The key that was looked up.
        value: The resolved string value.
        target: Name of the requested type ("int", "float", ...).
    """

    def __init__(self, key: str, value: str, target: str) -> None:
        super().__init__(f"Value {value!r} of '{key}' is not a valid {target}")
        self.key = key
        self.value = value
        self.target = target


class ConstructionError(RhnConfigError):
    """Raised when the default configuration store cannot be constructed.

    The underlying failure is always chained as ``__cause__``.
    """

    pass
