# Copyright 2026 Kind Contributors
# SPDX-License-Identifier: Apache-2.0

"""Schema-driven construction of validated, behavior-carrying objects.

Example::

    from kind import array_of, define_type, optional

    Person = define_type(
        {
            "name": str,
            "age": int,
            "nicknames": optional(array_of(str)),
            "greet": lambda self: f"Hello, {self.name}",
        }
    )

    person = Person({"name": "Ada", "age": "36"})
    assert person.age == 36
"""

from kind.conversion.engine import MISSING, convert
from kind.errors import ConversionError, DefinitionError
from kind.factory.builder import ExtraFields, build_instance, define_type, kind, schema_of
from kind.factory.definition import split_definition
from kind.model.types import (
    Boolean,
    Date,
    Number,
    String,
    TypeDescriptor,
    array_of,
    classify,
    custom,
    describe,
    optional,
)

__all__ = [
    "Boolean",
    "ConversionError",
    "Date",
    "DefinitionError",
    "ExtraFields",
    "MISSING",
    "Number",
    "String",
    "TypeDescriptor",
    "array_of",
    "build_instance",
    "classify",
    "convert",
    "custom",
    "define_type",
    "describe",
    "kind",
    "optional",
    "schema_of",
    "split_definition",
]
