# Copyright 2026 SchemaGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Type catalog: discovery and reflection of schema types."""

from schemagen.catalog.reflect import CatalogError, describe, is_schema_type, type_reference
from schemagen.catalog.scanner import import_roots, scan_package

__all__ = [
    "CatalogError",
    "describe",
    "import_roots",
    "is_schema_type",
    "scan_package",
    "type_reference",
]
