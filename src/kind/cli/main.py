# Copyright 2026 Kind Contributors
# SPDX-License-Identifier: Apache-2.0

"""Entry point for the kind command-line interface."""

import argparse
import importlib
import logging
import sys
from pathlib import Path

import yaml

from kind.errors import ConversionError, DefinitionError
from kind.loader.schema_file import SchemaFileError, load_schema
from kind.model.types import describe

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


def main() -> None:
    """Run the kind CLI."""
    parser = argparse.ArgumentParser(
        prog="kind",
        description="kind: validate records against declarative schemas",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    # check subcommand
    check_parser = subparsers.add_parser(
        "check",
        help="Validate data records against a schema file",
        description=(
            "Build every record in a JSON or YAML data file with the factory "
            "described by a schema file and report conversion errors."
        ),
    )
    check_parser.add_argument("schema", help="Path to the YAML schema file")
    check_parser.add_argument("data", help="Path to a JSON or YAML file holding one record or a list of records")
    _add_type_argument(check_parser)

    # describe subcommand
    describe_parser = subparsers.add_parser(
        "describe",
        help="Print the fields declared by a schema file",
        description="Print each field of a schema file with its type.",
    )
    describe_parser.add_argument("schema", help="Path to the YAML schema file")
    _add_type_argument(describe_parser)

    args = parser.parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    if args.command is None:
        parser.print_help()
        sys.exit(0)

    sys.exit(_dispatch(args))


# ################
# Implementation
# ################


def _add_type_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--type",
        dest="types",
        action="append",
        default=[],
        metavar="NAME=MODULE:ATTR",
        help="Register a custom type usable in the schema (repeatable)",
    )


def _dispatch(args: argparse.Namespace) -> int:
    """Dispatch to the appropriate subcommand handler."""
    if args.command == "check":
        return _cmd_check(args)
    if args.command == "describe":
        return _cmd_describe(args)
    return 0


def _cmd_check(args: argparse.Namespace) -> int:
    """Handle the check subcommand."""
    try:
        custom_types = _import_custom_types(args.types)
        schema = load_schema(Path(args.schema), custom_types)
        factory = schema.define(name=Path(args.schema).stem)
    except (SchemaFileError, DefinitionError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    try:
        records = _load_records(Path(args.data))
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print(f"Checking {len(records)} record(s)...")
    failures = 0
    for index, record in enumerate(records):
        if not isinstance(record, dict):
            print(f"Error: record {index}: expected a mapping, got {type(record).__name__}", file=sys.stderr)
            failures += 1
            continue
        try:
            factory(record)
        except (ConversionError, TypeError) as exc:
            print(f"Error: record {index}: {exc}", file=sys.stderr)
            failures += 1

    if failures:
        print(f"{failures} of {len(records)} record(s) invalid.", file=sys.stderr)
        return 1

    print(f"All {len(records)} record(s) valid.")
    return 0


def _cmd_describe(args: argparse.Namespace) -> int:
    """Handle the describe subcommand."""
    try:
        custom_types = _import_custom_types(args.types)
        schema = load_schema(Path(args.schema), custom_types)
    except SchemaFileError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    for name, descriptor in schema.fields.items():
        print(f"{name}: {describe(descriptor)}")
    print(f"extra: {schema.extra.value}")
    return 0


def _import_custom_types(entries: list[str]) -> dict[str, object]:
    """Resolve ``NAME=MODULE:ATTR`` entries into importable objects."""
    custom_types: dict[str, object] = {}
    for entry in entries:
        name, sep, target = entry.partition("=")
        module_name, colon, attr = target.partition(":")
        if not sep or not colon or not name or not module_name or not attr:
            raise SchemaFileError(f"Invalid --type value {entry!r}; expected NAME=MODULE:ATTR")
        try:
            module = importlib.import_module(module_name)
        except ImportError as exc:
            raise SchemaFileError(f"Cannot import module '{module_name}' for type '{name}': {exc}") from exc
        try:
            custom_types[name] = getattr(module, attr)
        except AttributeError:
            raise SchemaFileError(f"Module '{module_name}' has no attribute '{attr}'") from None
        logger.debug("Registered custom type %s from %s", name, target)
    return custom_types


def _load_records(path: Path) -> list[object]:
    """Load a data file holding one record or a list of records."""
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ValueError(f"Data file not found: {path}") from None
    except OSError as exc:
        raise ValueError(f"Cannot read data file: {exc}") from exc

    # JSON documents are valid YAML, so one loader covers both formats.
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid data in {path}: {exc}") from exc

    if data is None:
        return []
    if isinstance(data, list):
        return data
    return [data]
