# Copyright 2026 Kind Contributors
# SPDX-License-Identifier: Apache-2.0

"""Error types raised while defining factories and converting field values."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

# ###############
# Public Interface
# ###############


class DefinitionError(TypeError):
    """Raised when a type definition cannot be turned into a factory.

    Definition errors surface at factory-creation time: a non-type entry in an
    explicit schema, a name claimed by both schema and behavior, or a wrapper
    such as ``optional()`` applied to something that is not a type.
    """


class ConversionError(ValueError):
    """Raised when a present field value cannot be converted to its declared type.

    Attributes:
        field_path: Dotted/indexed path of the offending field, e.g. ``tags[2]``.
        value: The raw value that failed conversion.
        observed_type: Observed runtime type label (see :func:`observed_type_name`).
        expected: Human-readable name of the expected type, e.g. ``List<Number>``.
        reason: Short description of the failure.
        index: Failing element index when the field is an array, else ``None``.
    """

    def __init__(
        self,
        field_path: str,
        value: Any,
        expected: str,
        reason: str,
        *,
        index: int | None = None,
    ) -> None:
        self.field_path = field_path
        self.value = value
        self.observed_type = observed_type_name(value)
        self.expected = expected
        self.reason = reason
        self.index = index
        super().__init__(
            f"Invalid value for field '{field_path}': expected {expected}, "
            f"got {self.observed_type} {_short_repr(value)}: {reason}"
        )


def observed_type_name(value: Any) -> str:
    """Return the label used for a value's runtime type in error messages.

    Scalars and mappings use the names common to untyped transports such as
    JSON (``string``, ``number``, ``boolean``, ``object``); anything else is
    reported by its Python type name.
    """
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, Mapping):
        return "object"
    return type(value).__name__


# ################
# Implementation
# ################

_MAX_REPR = 80


def _short_repr(value: Any) -> str:
    text = repr(value)
    if len(text) > _MAX_REPR:
        return text[: _MAX_REPR - 3] + "..."
    return text
