# Copyright 2026 SchemaGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Schema generation: assembling documents and writing them to disk."""

from schemagen.generator.assembler import AssemblyError, PolicyJsonSchema, assemble
from schemagen.generator.build import (
    GenerationError,
    GenerationFailure,
    GenerationReport,
    generate_schemas,
    run,
)
from schemagen.generator.output import OutputError, SchemaWriter, schema_path

__all__ = [
    "AssemblyError",
    "GenerationError",
    "GenerationFailure",
    "GenerationReport",
    "OutputError",
    "PolicyJsonSchema",
    "SchemaWriter",
    "assemble",
    "generate_schemas",
    "run",
    "schema_path",
]
