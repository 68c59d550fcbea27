# Copyright 2026 Kind Contributors
# SPDX-License-Identifier: Apache-2.0

"""Conversion of raw input values against type descriptors."""

from kind.conversion.engine import MISSING, convert

__all__ = [
    "MISSING",
    "convert",
]
