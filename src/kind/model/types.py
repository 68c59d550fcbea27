# Copyright 2026 Kind Contributors
# SPDX-License-Identifier: Apache-2.0

"""Type descriptors for schema fields and the classifier for definition entries."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from enum import Enum
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict
from pydantic import Field as _Field

from kind.errors import DefinitionError

# ###############
# Public Interface
# ###############


class PrimitiveKind(Enum):
    """Primitive types a field can be converted to."""

    STRING = "String"
    NUMBER = "Number"
    BOOLEAN = "Boolean"
    DATE = "Date"


class PrimitiveDescriptor(BaseModel):
    """Descriptor for a primitive field type."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["primitive"] = "primitive"
    primitive: PrimitiveKind


class CustomDescriptor(BaseModel):
    """Descriptor for a custom type, constructed with the raw field value."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["custom"] = "custom"
    constructor: Callable[[Any], Any]


class OptionalDescriptor(BaseModel):
    """Descriptor wrapping another descriptor; the field may be omitted."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["optional"] = "optional"
    inner: TypeDescriptor


class ArrayDescriptor(BaseModel):
    """Descriptor wrapping another descriptor; the field is a homogeneous list."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["array"] = "array"
    inner: TypeDescriptor


# A field type descriptor. The `kind` discriminator keeps the set closed.
TypeDescriptor = Annotated[
    PrimitiveDescriptor | CustomDescriptor | OptionalDescriptor | ArrayDescriptor,
    _Field(discriminator="kind"),
]

String = PrimitiveDescriptor(primitive=PrimitiveKind.STRING)
Number = PrimitiveDescriptor(primitive=PrimitiveKind.NUMBER)
Boolean = PrimitiveDescriptor(primitive=PrimitiveKind.BOOLEAN)
Date = PrimitiveDescriptor(primitive=PrimitiveKind.DATE)


def classify(value: object) -> TypeDescriptor | None:
    """Classify a definition entry as a type descriptor or as behavior.

    Precedence:
    1. Descriptor instances are returned unchanged; the inner descriptor of a
       wrapper is trusted as given.
    2. The Python primitive markers ``str``, ``int``, ``float``, ``bool`` and
       ``datetime`` map to their primitive descriptor.
    3. Any other class becomes a :class:`CustomDescriptor`.
    4. Everything else (functions, properties, plain values) returns ``None``.

    Args:
        value: A single definition entry.

    Returns:
        The descriptor, or ``None`` when the entry is a behavior member.
    """
    if isinstance(value, _DESCRIPTOR_CLASSES):
        return value
    if isinstance(value, type):
        primitive = _PRIMITIVE_MARKERS.get(value)
        if primitive is not None:
            return primitive
        return CustomDescriptor(constructor=value)
    return None


def optional(descriptor: object) -> OptionalDescriptor:
    """Wrap a type so the field may be omitted from the input."""
    return OptionalDescriptor(inner=_require_descriptor(descriptor, "optional"))


def array_of(descriptor: object) -> ArrayDescriptor:
    """Wrap a type so the field holds a list of converted elements."""
    return ArrayDescriptor(inner=_require_descriptor(descriptor, "array_of"))


def custom(constructor: Callable[[Any], Any]) -> CustomDescriptor:
    """Declare a custom type from any one-argument callable.

    Classes are recognised automatically; this is for factory functions and
    other callables that :func:`classify` would treat as behavior.
    """
    if not callable(constructor):
        raise DefinitionError(f"custom() expects a callable, got {constructor!r}")
    return CustomDescriptor(constructor=constructor)


def describe(descriptor: TypeDescriptor) -> str:
    """Return the display name of a descriptor, e.g. ``Optional<List<Number>>``."""
    if isinstance(descriptor, PrimitiveDescriptor):
        return descriptor.primitive.value
    if isinstance(descriptor, CustomDescriptor):
        return getattr(descriptor.constructor, "__name__", repr(descriptor.constructor))
    if isinstance(descriptor, OptionalDescriptor):
        return f"Optional<{describe(descriptor.inner)}>"
    return f"List<{describe(descriptor.inner)}>"


# ################
# Implementation
# ################

_DESCRIPTOR_CLASSES = (PrimitiveDescriptor, CustomDescriptor, OptionalDescriptor, ArrayDescriptor)

_PRIMITIVE_MARKERS: dict[type, PrimitiveDescriptor] = {
    str: String,
    int: Number,
    float: Number,
    bool: Boolean,
    datetime: Date,
}


def _require_descriptor(value: object, wrapper: str) -> TypeDescriptor:
    descriptor = classify(value)
    if descriptor is None:
        raise DefinitionError(f"{wrapper}() expects a type, got {value!r}")
    return descriptor


# Resolve forward references for the recursive wrapper models.
OptionalDescriptor.model_rebuild()
ArrayDescriptor.model_rebuild()
