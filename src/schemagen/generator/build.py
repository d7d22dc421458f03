# Copyright 2026 SchemaGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Schema generation run: catalog → assembler → output directory.

Types are processed one after the other. By default a type that fails to
assemble or persist is recorded and the run continues with the remaining
types; the report then lists every failure. With ``fail_fast`` the first
failure aborts the run.

A catalog that cannot be enumerated and an output directory that cannot be
created abort the run before any document is written.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from schemagen.catalog.scanner import scan_package
from schemagen.config.settings import GeneratorConfig
from schemagen.generator.assembler import AssemblyError, assemble
from schemagen.generator.output import OutputError, SchemaWriter
from schemagen.model.types import TypeDescriptor
from schemagen.policy.constraints import ConstraintPolicy

_log = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


@dataclass(frozen=True)
class GenerationFailure:
    """A type whose schema could not be generated or written."""

    qualified_name: str
    message: str


@dataclass
class GenerationReport:
    """Outcome of a generation run."""

    written: list[Path] = field(default_factory=list)
    failures: list[GenerationFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


class GenerationError(Exception):
    """Raised when a run is aborted by a per-type failure in fail-fast mode."""

    def __init__(self, message: str, report: GenerationReport) -> None:
        super().__init__(message)
        self.report = report


def generate_schemas(
    descriptors: Iterable[TypeDescriptor],
    writer: SchemaWriter,
    policy: ConstraintPolicy,
    *,
    fail_fast: bool = False,
) -> GenerationReport:
    """Generate and persist one schema document per descriptor.

    Args:
        descriptors: The types to generate schemas for.
        writer: Destination for the documents.
        policy: Constraint policy applied to every document.
        fail_fast: Abort on the first failing type instead of collecting
            failures.

    Returns:
        A :class:`GenerationReport` with the written paths and failures.

    Raises:
        GenerationError: In fail-fast mode, on the first failing type.
    """
    report = GenerationReport()
    for descriptor in descriptors:
        try:
            document = assemble(descriptor, policy)
            report.written.append(writer.persist(document))
        except (AssemblyError, OutputError) as exc:
            _log.info("Schema generation failed for %s: %s", descriptor.qualified_name, exc)
            report.failures.append(GenerationFailure(descriptor.qualified_name, str(exc)))
            if fail_fast:
                raise GenerationError(str(exc), report) from exc
    return report


def run(config: GeneratorConfig, policy: ConstraintPolicy | None = None) -> GenerationReport:
    """Scan the configured package and generate its schemas.

    Raises:
        CatalogError: If the root package cannot be enumerated.
        OutputError: If the output directory cannot be created.
        GenerationError: In fail-fast mode, on the first failing type.
    """
    policy = policy or ConstraintPolicy()
    descriptors = scan_package(config.root_package, config.classpath)

    writer = SchemaWriter(Path(config.output_directory))
    writer.prepare()

    _log.info("Generating %d schema(s) into %s", len(descriptors), writer.output_dir)
    return generate_schemas(descriptors, writer, policy, fail_fast=config.fail_fast)
