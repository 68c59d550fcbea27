# Copyright 2026 Kind Contributors
# SPDX-License-Identifier: Apache-2.0

"""Factory creation: definition splitting and instance construction."""

from kind.factory.builder import ExtraFields, build_instance, define_type, kind, schema_of
from kind.factory.definition import Definition, explicit_definition, split_definition

__all__ = [
    "Definition",
    "ExtraFields",
    "build_instance",
    "define_type",
    "explicit_definition",
    "kind",
    "schema_of",
    "split_definition",
]
