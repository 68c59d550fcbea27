# Copyright 2026 Kind Contributors
# SPDX-License-Identifier: Apache-2.0

"""Type descriptor model: primitive, custom, optional and array field types."""

from kind.model.types import (
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

__all__ = [
    "PrimitiveKind",
    "PrimitiveDescriptor",
    "CustomDescriptor",
    "OptionalDescriptor",
    "ArrayDescriptor",
    "TypeDescriptor",
    "String",
    "Number",
    "Boolean",
    "Date",
    "array_of",
    "classify",
    "custom",
    "describe",
    "optional",
]
