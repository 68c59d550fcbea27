# Copyright 2026 Kind Contributors
# SPDX-License-Identifier: Apache-2.0

"""Conversion of raw field values into the types named by their descriptors.

Conversion is lenient about shape and strict about parseability: strings,
numbers and booleans cross-convert freely, the way values arrive from forms,
query strings and JSON bodies, but a string that cannot become a number or a
date fails loudly.

Absence (:data:`MISSING`) and ``None`` are never errors. They pass through
unchanged for every descriptor; the instance builder decides whether an
absent field is assigned at all.
"""

from __future__ import annotations

import math
import re
from datetime import UTC, date, datetime
from decimal import Decimal
from typing import Any, Final

from kind.errors import ConversionError, observed_type_name
from kind.model.types import (
    ArrayDescriptor,
    CustomDescriptor,
    OptionalDescriptor,
    PrimitiveDescriptor,
    PrimitiveKind,
    TypeDescriptor,
    describe,
)

# ###############
# Public Interface
# ###############


class _Missing:
    """Type of the :data:`MISSING` sentinel."""

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


# Marks a field whose key is absent from the input data.
MISSING: Final = _Missing()


def convert(field_path: str, raw_value: Any, descriptor: TypeDescriptor) -> Any:
    """Convert a raw value to the type described by *descriptor*.

    Args:
        field_path: Path of the field being converted, used in error messages.
            Array elements extend it with an index, e.g. ``tags[3]``.
        raw_value: The input value, :data:`MISSING` when the key was absent.
        descriptor: The declared type of the field.

    Returns:
        The converted value. :data:`MISSING` and ``None`` are returned as is.

    Raises:
        ConversionError: If a present value cannot be converted. Errors raised
            by custom constructors are chained as the ``__cause__``.
    """
    if raw_value is MISSING or raw_value is None:
        return raw_value
    if isinstance(descriptor, PrimitiveDescriptor):
        return _convert_primitive(field_path, raw_value, descriptor)
    if isinstance(descriptor, CustomDescriptor):
        return _convert_custom(field_path, raw_value, descriptor)
    if isinstance(descriptor, OptionalDescriptor):
        return convert(field_path, raw_value, descriptor.inner)
    if isinstance(descriptor, ArrayDescriptor):
        return _convert_array(field_path, raw_value, descriptor)
    raise TypeError(f"Unsupported type descriptor: {descriptor!r}")


# ################
# Implementation
# ################

_FALSE_STRINGS = frozenset({"false", "0", ""})

# Plain ASCII decimal notation; no digit separators, no inf/nan words.
_INTEGER_TEXT = re.compile(r"[+-]?[0-9]+", re.ASCII)
_DECIMAL_TEXT = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?", re.ASCII)


def _convert_primitive(field_path: str, value: Any, descriptor: PrimitiveDescriptor) -> Any:
    primitive = descriptor.primitive
    if primitive is PrimitiveKind.STRING:
        return _to_string(value)
    if primitive is PrimitiveKind.NUMBER:
        result = _to_number(value)
        if result is None:
            raise ConversionError(field_path, value, describe(descriptor), "Cannot convert to number")
        return result
    if primitive is PrimitiveKind.BOOLEAN:
        return _to_boolean(value)
    result = _to_date(value)
    if result is None:
        raise ConversionError(field_path, value, describe(descriptor), "Cannot convert to Date")
    return result


def _to_string(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)


def _to_number(value: Any) -> int | float | None:
    """Return the numeric value of *value*, or ``None`` if it is not a number."""
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return None if math.isnan(value) else value
    if isinstance(value, Decimal):
        return None if value.is_nan() else float(value)
    if isinstance(value, datetime):
        return int(_as_aware(value).timestamp() * 1000)
    if not isinstance(value, str):
        return None
    text = value.strip()
    if not text:
        return 0
    if _INTEGER_TEXT.fullmatch(text):
        return int(text)
    if _DECIMAL_TEXT.fullmatch(text):
        return float(text)
    return None


def _to_boolean(value: Any) -> bool:
    if isinstance(value, str):
        return value.lower() not in _FALSE_STRINGS
    return bool(value)


def _to_date(value: Any) -> datetime | None:
    """Return *value* as an aware datetime, or ``None`` if it is not a valid date."""
    if isinstance(value, datetime):
        return _as_aware(value)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=UTC)
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value / 1000, tz=UTC)
        except (OverflowError, OSError, ValueError):
            return None
    if not isinstance(value, str):
        return None
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        return _as_aware(datetime.fromisoformat(text))
    except ValueError:
        return None


def _as_aware(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def _convert_custom(field_path: str, value: Any, descriptor: CustomDescriptor) -> Any:
    try:
        return descriptor.constructor(value)
    except Exception as exc:
        raise ConversionError(field_path, value, describe(descriptor), str(exc) or type(exc).__name__) from exc


def _convert_array(field_path: str, value: Any, descriptor: ArrayDescriptor) -> list[Any]:
    if not isinstance(value, (list, tuple)):
        raise ConversionError(
            field_path,
            value,
            describe(descriptor),
            f"Expected array but got {observed_type_name(value)}",
        )
    converted: list[Any] = []
    for index, element in enumerate(value):
        try:
            converted.append(convert(f"{field_path}[{index}]", element, descriptor.inner))
        except ConversionError as exc:
            raise ConversionError(
                field_path,
                value,
                describe(descriptor),
                f"Array element at index {index}: {exc.reason}",
                index=index,
            ) from exc
    return converted
