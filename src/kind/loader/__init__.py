# Copyright 2026 Kind Contributors
# SPDX-License-Identifier: Apache-2.0

"""Loading factory schemas from YAML files."""

from kind.loader.schema_file import (
    SchemaFile,
    SchemaFileError,
    load_schema,
    parse_schema,
    parse_type_expression,
)

__all__ = [
    "SchemaFile",
    "SchemaFileError",
    "load_schema",
    "parse_schema",
    "parse_type_expression",
]
