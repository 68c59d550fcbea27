# Copyright 2026 Kind Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for splitting definitions into schema and behavior."""

import pytest

from kind.errors import DefinitionError
from kind.factory import Definition, explicit_definition, split_definition
from kind.model import ArrayDescriptor, CustomDescriptor, Number, String, optional

# ###############
# Helpers
# ###############


class Email(str):
    """Custom field type."""


# ###############
# Mapping definitions
# ###############


def test_split_mapping_definition() -> None:
    """Types go to the schema; everything else goes to behavior."""

    def greet(self: object) -> str:
        return "hello"

    area = property(lambda self: 1)
    result = split_definition(
        {
            "name": str,
            "greet": greet,
            "age": int,
            "area": area,
            "species": "human",
        }
    )

    assert result.schema == {"name": String, "age": Number}
    assert result.behavior == {"greet": greet, "area": area, "species": "human"}


def test_split_preserves_declaration_order() -> None:
    """Schema order follows the definition order."""
    result = split_definition({"b": str, "a": int, "c": optional(str)})
    assert list(result.schema) == ["b", "a", "c"]


def test_split_recognises_custom_types_and_wrappers() -> None:
    """Custom classes and wrapper descriptors are schema entries."""
    result = split_definition({"email": Email, "tags": ArrayDescriptor(inner=String)})
    assert isinstance(result.schema["email"], CustomDescriptor)
    assert result.schema["tags"] == ArrayDescriptor(inner=String)
    assert result.behavior == {}


def test_split_rejects_non_mappings() -> None:
    """A definition must be a mapping or a class."""
    with pytest.raises(DefinitionError, match="must be a mapping or a class"):
        split_definition([("name", str)])  # type: ignore[arg-type]


def test_split_rejects_non_string_keys() -> None:
    """Definition keys must be field names."""
    with pytest.raises(DefinitionError, match="keys must be strings"):
        split_definition({1: str})  # type: ignore[dict-item]


@pytest.mark.parametrize("name", ["__init__", "__kind_schema__", "__kind_extra__"])
def test_split_rejects_reserved_names(name: str) -> None:
    """Names owned by the generated factory cannot be declared."""
    with pytest.raises(DefinitionError, match="reserved"):
        split_definition({name: str})


# ###############
# Class definitions
# ###############


def test_split_class_definition_keeps_properties_as_descriptors() -> None:
    """Properties are copied as property objects, not evaluated."""

    class Rectangle:
        """A rectangle."""

        width = float
        height = float

        @property
        def area(self) -> float:
            return self.width * self.height  # type: ignore[operator]

        def scale(self, factor: float) -> None:
            pass

    result = split_definition(Rectangle)

    assert list(result.schema) == ["width", "height"]
    assert isinstance(result.behavior["area"], property)
    assert result.behavior["scale"] is Rectangle.__dict__["scale"]


def test_split_class_definition_skips_interpreter_attributes() -> None:
    """Module, qualname, doc and similar attributes are not members."""

    class Point:
        """A point."""

        x = int

        def __str__(self) -> str:
            return "point"

    result = split_definition(Point)

    assert set(result.schema) == {"x"}
    assert set(result.behavior) == {"__str__"}


def test_split_class_definition_keeps_static_and_class_methods() -> None:
    """staticmethod and classmethod objects are kept as raw descriptors."""

    class Tools:
        value = int

        @staticmethod
        def helper() -> int:
            return 1

        @classmethod
        def build(cls) -> str:
            return cls.__name__

    result = split_definition(Tools)

    assert isinstance(result.behavior["helper"], staticmethod)
    assert isinstance(result.behavior["build"], classmethod)


def test_split_class_definition_rejects_annotation_only_fields() -> None:
    """An annotated name without a value is an error, not a dropped field."""

    class Person:
        name: str
        age = int

    with pytest.raises(DefinitionError, match="'name' is annotated but has no value"):
        split_definition(Person)


def test_split_class_definition_accepts_annotated_values() -> None:
    """Annotations on assigned names do not change classification."""

    class Counter:
        count: int = 0
        label: type = str

    result = split_definition(Counter)

    assert result.schema == {"label": String}
    assert result.behavior == {"count": 0}


# ###############
# Explicit definitions
# ###############


def test_explicit_definition() -> None:
    """A schema and behavior table supplied separately are taken as given."""

    def describe(self: object) -> str:
        return "item"

    result = explicit_definition({"name": str}, {"describe": describe, "size": Email})

    assert result == Definition(schema={"name": String}, behavior={"describe": describe, "size": Email})


def test_explicit_definition_rejects_non_types_in_schema() -> None:
    """Every schema entry must be a type."""
    with pytest.raises(DefinitionError, match="Schema entry 'greet' is not a type"):
        explicit_definition({"greet": lambda self: "hi"}, {})


def test_explicit_definition_rejects_overlapping_names() -> None:
    """A name cannot be both a field and a behavior member."""
    with pytest.raises(DefinitionError, match="declared both as a field and as behavior"):
        explicit_definition({"name": str}, {"name": property(lambda self: "x")})


def test_explicit_definition_rejects_reserved_names() -> None:
    """Reserved names are rejected in either table."""
    with pytest.raises(DefinitionError, match="reserved"):
        explicit_definition({"name": str}, {"__init__": lambda self: None})
