# Copyright 2026 SchemaGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Constraint policy for generated schemas."""

from schemagen.policy.constraints import ARRAY_MAX_ITEMS, NUMERIC_BOUND, STRING_MAX_LENGTH, ConstraintPolicy

__all__ = [
    "ARRAY_MAX_ITEMS",
    "NUMERIC_BOUND",
    "STRING_MAX_LENGTH",
    "ConstraintPolicy",
]
