# Copyright 2026 Kind Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the type descriptor model and the definition entry classifier."""

from datetime import datetime

import pytest
from pydantic import TypeAdapter, ValidationError

from kind.errors import DefinitionError
from kind.model import (
    ArrayDescriptor,
    Boolean,
    CustomDescriptor,
    Date,
    Number,
    OptionalDescriptor,
    PrimitiveDescriptor,
    PrimitiveKind,
    String,
    TypeDescriptor,
    array_of,
    classify,
    custom,
    describe,
    optional,
)

# ###############
# Helpers
# ###############


class Email(str):
    """Minimal custom type used as a constructor in descriptors."""


def _parse_email(value: str) -> Email:
    return Email(value)


# ###############
# Classifier
# ###############


@pytest.mark.parametrize(
    ("marker", "expected"),
    [
        (str, String),
        (int, Number),
        (float, Number),
        (bool, Boolean),
        (datetime, Date),
    ],
)
def test_primitive_markers_classify_as_primitives(marker: type, expected: PrimitiveDescriptor) -> None:
    """Python primitive types map to the matching primitive descriptor."""
    assert classify(marker) == expected


def test_other_classes_classify_as_custom() -> None:
    """Any class that is not a primitive marker becomes a custom descriptor."""
    descriptor = classify(Email)
    assert isinstance(descriptor, CustomDescriptor)
    assert descriptor.constructor is Email


def test_descriptors_are_returned_unchanged() -> None:
    """Existing descriptors, including wrappers, are trusted as given."""
    wrapped = optional(array_of(int))
    assert classify(wrapped) is wrapped
    assert classify(Number) is Number


@pytest.mark.parametrize(
    "entry",
    [
        lambda self: self,
        property(lambda self: 1),
        staticmethod(len),
        "plain value",
        42,
        None,
    ],
)
def test_non_types_classify_as_behavior(entry: object) -> None:
    """Functions, properties and plain values are not descriptors."""
    assert classify(entry) is None


# ###############
# Wrappers
# ###############


def test_optional_and_array_wrap_classified_types() -> None:
    """optional() and array_of() accept Python types and descriptors alike."""
    assert optional(int) == OptionalDescriptor(inner=Number)
    assert array_of(String) == ArrayDescriptor(inner=String)


def test_wrappers_nest_to_arbitrary_depth() -> None:
    """Wrappers may wrap each other repeatedly."""
    nested = optional(array_of(array_of(optional(bool))))
    assert isinstance(nested, OptionalDescriptor)
    assert isinstance(nested.inner, ArrayDescriptor)
    assert isinstance(nested.inner.inner, ArrayDescriptor)
    assert nested.inner.inner.inner == OptionalDescriptor(inner=Boolean)


def test_wrapping_a_non_type_is_rejected() -> None:
    """Wrapping something that is not a type raises DefinitionError."""
    with pytest.raises(DefinitionError, match="optional\\(\\) expects a type"):
        optional("String")
    with pytest.raises(DefinitionError, match="array_of\\(\\) expects a type"):
        array_of(lambda value: value)


def test_custom_accepts_callables() -> None:
    """custom() turns a plain function into a custom descriptor."""
    descriptor = custom(_parse_email)
    assert descriptor.constructor is _parse_email


def test_custom_rejects_non_callables() -> None:
    """custom() requires something it can call."""
    with pytest.raises(DefinitionError):
        custom("not callable")  # type: ignore[arg-type]


# ###############
# Model behavior
# ###############


def test_descriptors_are_frozen() -> None:
    """Descriptors cannot be mutated after creation."""
    with pytest.raises(ValidationError):
        String.primitive = PrimitiveKind.NUMBER  # type: ignore[misc]


def test_descriptors_are_hashable() -> None:
    """Frozen descriptors can be used in sets and as dictionary keys."""
    assert len({optional(int), optional(int), array_of(int)}) == 2


def test_descriptor_union_validates_from_plain_data() -> None:
    """The discriminated union deserializes nested descriptors by their kind."""
    adapter: TypeAdapter[TypeDescriptor] = TypeAdapter(TypeDescriptor)
    descriptor = adapter.validate_python(
        {"kind": "array", "inner": {"kind": "optional", "inner": {"kind": "primitive", "primitive": "Date"}}}
    )
    assert descriptor == array_of(optional(Date))


@pytest.mark.parametrize(
    ("descriptor", "expected"),
    [
        (String, "String"),
        (Number, "Number"),
        (Boolean, "Boolean"),
        (Date, "Date"),
        (classify(Email), "Email"),
        (custom(_parse_email), "_parse_email"),
        (optional(array_of(int)), "Optional<List<Number>>"),
    ],
)
def test_describe(descriptor: TypeDescriptor, expected: str) -> None:
    """describe() renders the expected type name used in messages."""
    assert describe(descriptor) == expected
