# Copyright 2026 Kind Contributors
# SPDX-License-Identifier: Apache-2.0

"""YAML schema files: declaring factory schemas outside of Python code.

A schema file maps field names to type expressions::

    fields:
      name: String
      age: Optional<Number>
      tags: List<String>
      email: Email
    extra: forbid

Type expressions are ``String``, ``Number``, ``Boolean``, ``Date``,
``List<T>``, ``Optional<T>``, or the name of a custom type supplied by the
caller.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from kind.errors import DefinitionError
from kind.factory.builder import ExtraFields, define_type
from kind.model.types import (
    ArrayDescriptor,
    Boolean,
    Date,
    Number,
    OptionalDescriptor,
    String,
    TypeDescriptor,
    classify,
    custom,
)

# ###############
# Public Interface
# ###############


class SchemaFileError(Exception):
    """Raised when a schema file cannot be loaded or is invalid."""


@dataclass
class SchemaFile:
    """A schema loaded from a YAML file.

    Attributes:
        fields: Field name to type descriptor, in file order.
        extra: Policy for input keys not declared in *fields*.
    """

    fields: dict[str, TypeDescriptor] = field(default_factory=dict)
    extra: ExtraFields = ExtraFields.ALLOW

    def define(self, name: str = "Kind", behavior: Mapping[str, object] | None = None) -> type:
        """Create a factory for this schema."""
        return define_type(self.fields, behavior=behavior or {}, name=name, extra=self.extra)


def load_schema(path: Path, custom_types: Mapping[str, object] | None = None) -> SchemaFile:
    """Load and parse a YAML schema file.

    Args:
        path: Path to the schema file.
        custom_types: Names usable in type expressions, mapped to classes or
            one-argument callables.

    Returns:
        The parsed :class:`SchemaFile`.

    Raises:
        SchemaFileError: If the file cannot be read or the schema is invalid.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise SchemaFileError(f"Schema file not found: {path}") from None
    except OSError as exc:
        raise SchemaFileError(f"Cannot read schema file: {exc}") from exc

    return parse_schema(text, custom_types, source_label=str(path))


def parse_schema(
    text: str,
    custom_types: Mapping[str, object] | None = None,
    source_label: str = "<string>",
) -> SchemaFile:
    """Parse schema YAML text into a :class:`SchemaFile`.

    Args:
        text: Raw YAML content.
        custom_types: Names usable in type expressions.
        source_label: Human-readable label used in error messages.

    Raises:
        SchemaFileError: If the YAML is invalid or the schema is malformed.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise SchemaFileError(f"Invalid YAML in {source_label}: {exc}") from exc

    if not isinstance(data, dict):
        raise SchemaFileError(f"{source_label}: schema file must be a YAML mapping")

    unknown = sorted(str(key) for key in data if key not in ("fields", "extra"))
    if unknown:
        raise SchemaFileError(f"{source_label}: unknown top-level key(s): {', '.join(unknown)}")

    raw_fields = data.get("fields")
    if not isinstance(raw_fields, dict) or not raw_fields:
        raise SchemaFileError(f"{source_label}: 'fields' must be a non-empty mapping")

    types = _resolve_custom_types(custom_types or {}, source_label)
    fields: dict[str, TypeDescriptor] = {}
    for name, expression in raw_fields.items():
        location = f"{source_label}: field '{name}'"
        if not isinstance(expression, str):
            raise SchemaFileError(f"{location}: type must be a string")
        try:
            fields[str(name)] = parse_type_expression(expression, types)
        except SchemaFileError as exc:
            raise SchemaFileError(f"{location}: {exc}") from exc

    extra = data.get("extra", ExtraFields.ALLOW.value)
    try:
        policy = ExtraFields(extra)
    except ValueError:
        allowed = ", ".join(p.value for p in ExtraFields)
        raise SchemaFileError(f"{source_label}: 'extra' must be one of {allowed}, got {extra!r}") from None

    return SchemaFile(fields=fields, extra=policy)


def parse_type_expression(text: str, custom_types: Mapping[str, TypeDescriptor] | None = None) -> TypeDescriptor:
    """Parse a type expression such as ``Optional<List<Number>>``.

    Args:
        text: The expression.
        custom_types: Custom type names mapped to their descriptors.

    Raises:
        SchemaFileError: If the expression is malformed or names an unknown type.
    """
    return _TypeExpressionParser(text, custom_types or {}).parse()


# ################
# Implementation
# ################

_PRIMITIVES: dict[str, TypeDescriptor] = {
    "String": String,
    "Number": Number,
    "Boolean": Boolean,
    "Date": Date,
}

_WRAPPERS: dict[str, Callable[[TypeDescriptor], TypeDescriptor]] = {
    "List": lambda inner: ArrayDescriptor(inner=inner),
    "Optional": lambda inner: OptionalDescriptor(inner=inner),
}


def _resolve_custom_types(custom_types: Mapping[str, object], source_label: str) -> dict[str, TypeDescriptor]:
    resolved: dict[str, TypeDescriptor] = {}
    for name, entry in custom_types.items():
        if name in _PRIMITIVES or name in _WRAPPERS:
            raise SchemaFileError(f"{source_label}: custom type '{name}' shadows a built-in type")
        descriptor = classify(entry)
        if descriptor is None:
            try:
                descriptor = custom(entry)  # type: ignore[arg-type]
            except DefinitionError as exc:
                raise SchemaFileError(f"{source_label}: custom type '{name}': {exc}") from exc
        resolved[name] = descriptor
    return resolved


class _TypeExpressionParser:
    """Recursive-descent parser over the tokens of one type expression."""

    def __init__(self, text: str, custom_types: Mapping[str, TypeDescriptor]) -> None:
        self._text = text
        self._tokens = _tokenize(text)
        self._pos = 0
        self._custom = custom_types

    def parse(self) -> TypeDescriptor:
        descriptor = self._parse_type()
        if self._pos != len(self._tokens):
            raise SchemaFileError(f"Unexpected {self._tokens[self._pos]!r} in type expression {self._text!r}")
        return descriptor

    def _parse_type(self) -> TypeDescriptor:
        name = self._advance()
        if not name.isidentifier():
            raise SchemaFileError(f"Expected a type name in {self._text!r}, got {name!r}")
        if name in _PRIMITIVES:
            return _PRIMITIVES[name]
        if name in _WRAPPERS:
            self._expect("<")
            inner = self._parse_type()
            self._expect(">")
            return _WRAPPERS[name](inner)
        if name in self._custom:
            return self._custom[name]
        raise SchemaFileError(f"Unknown type {name!r}")

    def _advance(self) -> str:
        if self._pos >= len(self._tokens):
            raise SchemaFileError(f"Unexpected end of type expression {self._text!r}")
        token = self._tokens[self._pos]
        self._pos += 1
        return token

    def _expect(self, token: str) -> None:
        actual = self._advance()
        if actual != token:
            raise SchemaFileError(f"Expected {token!r} in type expression {self._text!r}, got {actual!r}")


def _tokenize(text: str) -> list[str]:
    """Split a type expression into names and the ``<`` / ``>`` punctuation."""
    tokens: list[str] = []
    current = ""
    for char in text:
        if char in "<>":
            if current:
                tokens.append(current)
                current = ""
            tokens.append(char)
        elif char.isspace():
            if current:
                tokens.append(current)
                current = ""
        else:
            current += char
    if current:
        tokens.append(current)
    return tokens
