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

"""Namespace derivation from configuration file names.

The namespace of a file is computed from its name alone:

    rhn.conf                      -> ""  (base namespace)
    rhn_taskomatic.conf           -> "taskomatic"
    rhn_taskomatic_daemon.conf    -> "taskomatic.daemon"
    java.conf                     -> "java"

Keys read from a file are then qualified with that namespace unless they
already start with it.
"""

from __future__ import annotations

from pathlib import Path

BASE_NAME = "rhn"
BASE_PREFIX = f"{BASE_NAME}_"


def namespace_of(file_name: str | Path) -> str:
    """Derive the dotted namespace for a configuration file.

    Args:
        file_name: File name or path; only the final component is used.

    Returns:
        The namespace, ``""`` for the base ``rhn.*`` file.
    """
    name = Path(file_name).name

    # rhn.conf does not follow the rhn_<ns>.conf convention
    if name.startswith(f"{BASE_NAME}."):
        return ""

    if name.startswith(BASE_PREFIX):
        name = name[len(BASE_PREFIX) :]
    stem, dot, _ = name.rpartition(".")
    if dot:
        name = stem
    return name.replace("_", ".")


def qualify_key(key: str, namespace: str) -> str:
    """Prefix 'key' with 'namespace' unless it already starts with it.

    The check is a plain string prefix test, so with the empty namespace
    every key is returned unchanged.
    """
    if key.startswith(namespace):
        return key
    return f"{namespace}.{key}"
