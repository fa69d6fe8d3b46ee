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

"""Command-line interface for rhnconfig.

This module provides the rhn-config entry point, used by operators to see
what the application will read from its configuration trees.

Commands:

    get: Resolve one key (with prefix fallback) and print its value
    files: List the configuration files in merge order
    dump: Print the merged mapping, optionally limited to a namespace

Example:
    Resolve a key:
        ```bash
        $ rhn-config get server.port --type int
        ```

    Use other locations than the defaults:
        ```bash
        $ rhn-config -p ./config-defaults -p ./etc files
        ```

    Dump a namespace as YAML:
        ```bash
        $ rhn-config dump --namespace taskomatic --format yaml
        ```

Exit Codes:

- 0: Success
- 1: Error (key not found, malformed value)

Note:
    Without --path the canonical locations are used
    (/usr/share/rhn/config-defaults, then /etc/rhn or RHN_CONFIG_DIR).
    Debug mode implies verbose mode and traces every parsed entry.
"""

from __future__ import annotations

import argparse
from importlib.metadata import PackageNotFoundError, version
import sys

import yaml

from rhnconfig.config import ConfigStore, default_search_paths, namespace_of
from rhnconfig.config.store import is_true_value
from rhnconfig.exceptions import RhnConfigError, TypeCoercionError
from rhnconfig.logging import get_logger, set_global_logger


def _package_version() -> str:
    try:
        return version("rhnconfig")
    except PackageNotFoundError:
        from rhnconfig import __version__

        return __version__


def _load_store(args: argparse.Namespace) -> ConfigStore:
    """Configure the global logger and load the requested search paths."""
    logger = get_logger(verbose=args.verbose, debug=args.debug)
    set_global_logger(logger)

    paths = args.path or default_search_paths()
    return ConfigStore(paths, logger=logger)


def _print_error(args: argparse.Namespace, err: Exception) -> None:
    print(f"Error: {err}")
    if args.verbose or args.debug:
        import traceback

        traceback.print_exc()


def cmd_get(args: argparse.Namespace) -> int:
    """Handler for 'rhn-config get' command.

    Resolves the key the same way the application does (unqualified name
    first, then the namespace, then the web/server fallbacks) and prints
    the value converted to the requested type.

    Args:
        args: Parsed command-line arguments containing the key, the value
            type and an optional default.

    Returns:
        Exit code (0 if a value or default was printed, 1 otherwise).
    """
    store = _load_store(args)

    if args.type == "bool":
        default = is_true_value(args.default) if args.default is not None else False
        print("true" if store.get_boolean(args.key, default) else "false")
        return 0

    if args.type == "list":
        for item in store.get_list(args.key):
            print(item)
        return 0

    getters = {
        "string": store.get_string,
        "int": store.get_long,
        "float": store.get_double,
    }
    try:
        value = getters[args.type](args.key)
    except TypeCoercionError as err:
        _print_error(args, err)
        return 1

    if value is None:
        if args.default is not None:
            print(args.default)
            return 0
        print(f"Error: Key not found: {args.key}")
        return 1

    print(value)
    return 0


def cmd_files(args: argparse.Namespace) -> int:
    """Handler for 'rhn-config files' command.

    Lists every configuration file that will be read, in merge order (the
    last file listed wins on conflicting keys), with the namespace derived
    from its name.

    Returns:
        Exit code (always 0; missing locations are only warnings).
    """
    store = _load_store(args)
    files = store.files

    print("=" * 70)
    print("CONFIGURATION FILES (merge order)")
    print("=" * 70)
    for index, path in enumerate(files, start=1):
        namespace = namespace_of(path) or "<base>"
        print(f"{index:>3}. {path}  [{namespace}]")
    print("=" * 70)
    print(f"{len(files)} file(s), {len(store)} key(s)")
    return 0


def cmd_dump(args: argparse.Namespace) -> int:
    """Handler for 'rhn-config dump' command.

    Prints the merged mapping sorted by key, either as properties
    (``key = value``) or as a YAML mapping.

    Returns:
        Exit code (0 for success, 1 for failure).
    """
    store = _load_store(args)

    try:
        if args.namespace:
            entries = store.get_namespace_properties(args.namespace, args.rename_to)
        else:
            entries = store.as_dict()
    except RhnConfigError as err:
        _print_error(args, err)
        return 1

    ordered = dict(sorted(entries.items()))
    if args.format == "yaml":
        print(yaml.safe_dump(ordered, default_flow_style=False, sort_keys=False), end="")
    else:
        for key, value in ordered.items():
            print(f"{key} = {value}")
    return 0


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-p",
        "--path",
        action="append",
        default=None,
        help="Search path (directory or file); repeat for more layers, later wins",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show which files are found and merged",
    )
    parser.add_argument(
        "-d",
        "--debug",
        action="store_true",
        help="Show every parsed entry (implies --verbose)",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rhn-config",
        description="Inspect the layered rhn configuration",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"rhn-config {_package_version()}",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        help="Available commands",
        required=True,
    )

    # 'get' command
    parser_get = subparsers.add_parser(
        "get",
        help="Resolve a key and print its value",
        description="Resolve a key with namespace and web/server prefix fallback.",
    )
    parser_get.add_argument("key", help="Key to resolve, e.g. server.port")
    parser_get.add_argument(
        "--type",
        choices=["string", "int", "float", "bool", "list"],
        default="string",
        help="Convert the value to this type (default: string)",
    )
    parser_get.add_argument(
        "--default",
        default=None,
        help="Value to print when the key is absent",
    )
    _add_common_arguments(parser_get)
    parser_get.set_defaults(func=cmd_get)

    # 'files' command
    parser_files = subparsers.add_parser(
        "files",
        help="List configuration files in merge order",
        description="List the files that are read, in the order they are merged.",
    )
    _add_common_arguments(parser_files)
    parser_files.set_defaults(func=cmd_files)

    # 'dump' command
    parser_dump = subparsers.add_parser(
        "dump",
        help="Print the merged configuration",
        description="Print every merged entry, or those of one namespace.",
    )
    parser_dump.add_argument(
        "--namespace",
        default=None,
        help="Only print keys starting with this prefix",
    )
    parser_dump.add_argument(
        "--rename-to",
        default=None,
        help="Replace the --namespace prefix with this one in printed keys",
    )
    parser_dump.add_argument(
        "--format",
        choices=["properties", "yaml"],
        default="properties",
        help="Output format (default: properties)",
    )
    _add_common_arguments(parser_dump)
    parser_dump.set_defaults(func=cmd_dump)

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the rhn-config CLI.

    This function is registered as the 'rhn-config' console script in
    pyproject.toml.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    exit_code = args.func(args)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
