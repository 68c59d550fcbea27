# Copyright 2026 Kind Contributors
# SPDX-License-Identifier: Apache-2.0

"""Splitting a mixed type definition into its data schema and behavior table."""

from __future__ import annotations

import inspect
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field

from kind.errors import DefinitionError
from kind.model.types import TypeDescriptor, classify

# ###############
# Public Interface
# ###############


@dataclass
class Definition:
    """A type definition partitioned into data and behavior.

    Attributes:
        schema: Field name to type descriptor, in declaration order.
        behavior: Member name to raw class attribute (function, ``property``,
            ``staticmethod``, ``classmethod``, or a plain class-level value).
    """

    schema: dict[str, TypeDescriptor] = field(default_factory=dict)
    behavior: dict[str, object] = field(default_factory=dict)


# Attributes the generated factory class owns.
RESERVED_NAMES = frozenset({"__init__", "__kind_schema__", "__kind_extra__"})


def split_definition(definition: Mapping[str, object] | type) -> Definition:
    """Partition a definition into its schema and behavior table.

    A definition is either a mapping or a class whose body declares the
    fields and members::

        class Rectangle:
            width = float
            height = float

            @property
            def area(self):
                return self.width * self.height

    Entries are classified with :func:`~kind.model.types.classify`. Behavior
    members are copied as raw attributes, so a ``property`` stays a
    ``property`` and is recomputed on every access.

    Args:
        definition: The mixed definition.

    Returns:
        The partitioned :class:`Definition`.

    Raises:
        DefinitionError: If a member name is reserved by the factory, or a
            class body annotates a name without assigning it a type.
    """
    result = Definition()
    for name, member in _iter_members(definition):
        if name in RESERVED_NAMES:
            raise DefinitionError(f"'{name}' is reserved and cannot be declared in a type definition")
        descriptor = classify(member)
        if descriptor is None:
            result.behavior[name] = member
        else:
            result.schema[name] = descriptor
    return result


def explicit_definition(schema: Mapping[str, object], behavior: Mapping[str, object]) -> Definition:
    """Build a definition from a separate schema and behavior table.

    Unlike :func:`split_definition`, nothing is inferred: every schema entry
    must be a type and every behavior entry is taken as behavior.

    Raises:
        DefinitionError: If a schema entry is not a type, a name appears in
            both tables, or a name is reserved.
    """
    result = Definition()
    for name, entry in _iter_members(schema):
        descriptor = classify(entry)
        if descriptor is None:
            raise DefinitionError(f"Schema entry '{name}' is not a type: {entry!r}")
        result.schema[name] = descriptor
    for name, member in _iter_members(behavior):
        if name in result.schema:
            raise DefinitionError(f"'{name}' is declared both as a field and as behavior")
        result.behavior[name] = member
    for name in (*result.schema, *result.behavior):
        if name in RESERVED_NAMES:
            raise DefinitionError(f"'{name}' is reserved and cannot be declared in a type definition")
    return result


# ################
# Implementation
# ################

# Class attributes created by the interpreter rather than written by the user.
_IMPLICIT_CLASS_ATTRS = frozenset(
    {
        "__module__",
        "__qualname__",
        "__doc__",
        "__dict__",
        "__weakref__",
        "__annotations__",
        "__annotate__",
        "__annotate_func__",
        "__annotations_cache__",
        "__classdictcell__",
        "__firstlineno__",
        "__static_attributes__",
        "__orig_bases__",
        "__parameters__",
    }
)


def _iter_members(definition: Mapping[str, object] | type) -> Iterator[tuple[str, object]]:
    if isinstance(definition, type):
        members = vars(definition)
        for name in inspect.get_annotations(definition):
            if name not in members:
                raise DefinitionError(
                    f"'{name}' is annotated but has no value; declare fields as '{name} = <type>'"
                )
        for name, member in members.items():
            if name not in _IMPLICIT_CLASS_ATTRS:
                yield name, member
        return
    if not isinstance(definition, Mapping):
        raise DefinitionError(f"A type definition must be a mapping or a class, got {type(definition).__name__}")
    for name, member in definition.items():
        if not isinstance(name, str):
            raise DefinitionError(f"Definition keys must be strings, got {name!r}")
        yield name, member
