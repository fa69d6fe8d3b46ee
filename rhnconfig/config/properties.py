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

"""Flat key/value property file parsing.

Configuration files use the classic flat "properties" syntax:

    # comment
    ! also a comment
    server.port = 8080
    web.title: Spacewalk
    taskomatic.heap 512
    long.value = first part \\
                 second part

Grammar
-------
- Lines end at ``\\n``, ``\\r`` or ``\\r\\n``.
- Leading whitespace (space, tab, form feed) is ignored. Blank lines and
  lines whose first non-blank character is ``#`` or ``!`` are skipped.
- A line ending in an odd number of backslashes continues on the next line;
  the leading whitespace of the continuation line is dropped.
- The key ends at the first unescaped ``=``, ``:`` or whitespace. Whitespace
  around the separator is skipped; the rest of the line is the value.
- Escapes ``\\t``, ``\\n``, ``\\r``, ``\\f`` and ``\\uXXXX`` are decoded; any
  other escaped character stands for itself.

Backslash Normalization
-----------------------
Before a configuration *file* is parsed, every backslash in its text is
doubled. Values such as ``C:\\path\\to\\file`` therefore come back exactly as
written instead of being read as escapes. A side effect is that line
continuation and ``\\uXXXX`` escapes never trigger for files; they remain
available through parse_properties() for already-escaped text.

Functions
---------
parse_properties : function
    Parse properties text into a dict (grammar only).
read_properties : function
    Read a file as UTF-8, normalize backslashes, parse.
parse_file : function
    read_properties() plus namespace qualification of every key.
"""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
import re

from rhnconfig.config.namespace import namespace_of, qualify_key
from rhnconfig.exceptions import ParseError, PropertyParseError

_NEWLINE = re.compile(r"\r\n|\r|\n")
_WHITESPACE = " \t\f"
_SEPARATORS = "=:"
_COMMENT_MARKERS = "#!"
_ESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}


def _continues(line: str) -> bool:
    """True if 'line' ends with an odd number of backslashes."""
    trailing = len(line) - len(line.rstrip("\\"))
    return trailing % 2 == 1


def _logical_lines(text: str) -> Iterator[tuple[int, str]]:
    """Yield (line_number, logical_line) with comments and blanks removed."""
    natural = _NEWLINE.split(text)
    index = 0
    while index < len(natural):
        number = index + 1
        line = natural[index].lstrip(_WHITESPACE)
        index += 1
        if not line or line[0] in _COMMENT_MARKERS:
            continue

        parts: list[str] = []
        while _continues(line):
            parts.append(line[:-1])
            if index >= len(natural):
                line = ""
                break
            line = natural[index].lstrip(_WHITESPACE)
            index += 1
        parts.append(line)
        yield number, "".join(parts)


def _unescape(text: str, line_number: int) -> str:
    out: list[str] = []
    i = 0
    n = len(text)
    while i < n:
        char = text[i]
        i += 1
        if char != "\\":
            out.append(char)
            continue
        if i >= n:
            break
        char = text[i]
        i += 1
        if char == "u":
            digits = text[i : i + 4]
            if len(digits) != 4 or any(
                d not in "0123456789abcdefABCDEF" for d in digits
            ):
                raise PropertyParseError(
                    f"Malformed \\uxxxx encoding on line {line_number}",
                    line=line_number,
                )
            out.append(chr(int(digits, 16)))
            i += 4
        else:
            out.append(_ESCAPES.get(char, char))
    return "".join(out)


def _split_entry(line: str) -> tuple[str, str]:
    """Split a logical line into its raw (still escaped) key and value."""
    key_end = len(line)
    value_start = len(line)
    has_separator = False
    escaped = False

    for index, char in enumerate(line):
        if not escaped and char in _SEPARATORS:
            key_end, value_start = index, index + 1
            has_separator = True
            break
        if not escaped and char in _WHITESPACE:
            key_end, value_start = index, index + 1
            break
        escaped = char == "\\" and not escaped

    while value_start < len(line):
        char = line[value_start]
        if char not in _WHITESPACE:
            if has_separator or char not in _SEPARATORS:
                break
            has_separator = True
        value_start += 1

    return line[:key_end], line[value_start:]


def parse_properties(text: str) -> dict[str, str]:
    """Parse flat properties text.

    Args:
        text: Properties source. Backslashes are interpreted as escapes.

    Returns:
        Mapping of keys to values in file order; a repeated key keeps its
        last value.

    Raises:
        PropertyParseError: On a malformed ``\\uXXXX`` escape.
    """
    entries: dict[str, str] = {}
    for number, line in _logical_lines(text):
        raw_key, raw_value = _split_entry(line)
        entries[_unescape(raw_key, number)] = _unescape(raw_value, number)
    return entries


def read_properties(path: Path) -> dict[str, str]:
    """Read a configuration file and parse it with backslashes kept literal.

    Raises:
        ParseError: If the file cannot be read, is not valid UTF-8, or is
            malformed. The original error is chained.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as err:
        raise ParseError(f"Could not read {path}: {err}") from err

    try:
        return parse_properties(text.replace("\\", "\\\\"))
    except PropertyParseError as err:
        raise ParseError(f"Could not parse {path}: {err}", line=err.line) from err


def parse_file(path: Path, namespace: str | None = None) -> dict[str, str]:
    """Parse a configuration file into namespace-qualified entries.

    Args:
        path: File to parse.
        namespace: Namespace to qualify keys with. Derived from the file
            name when omitted.

    Returns:
        Mapping of qualified keys to raw values.

    Raises:
        ParseError: See read_properties().
    """
    if namespace is None:
        namespace = namespace_of(path)
    return {
        qualify_key(key, namespace): value
        for key, value in read_properties(path).items()
    }
