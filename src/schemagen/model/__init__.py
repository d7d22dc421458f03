# Copyright 2026 SchemaGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Descriptors, directives and documents shared across the generator."""

from schemagen.model.documents import SCHEMA_SUFFIX, ConstraintDirective, EnumMode, SchemaDocument
from schemagen.model.types import FieldDescriptor, Kind, TypeDescriptor, TypeReference

__all__ = [
    # Reflection
    "Kind",
    "TypeReference",
    "FieldDescriptor",
    "TypeDescriptor",
    # Policy output
    "EnumMode",
    "ConstraintDirective",
    # Documents
    "SchemaDocument",
    "SCHEMA_SUFFIX",
]
