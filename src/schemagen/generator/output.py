# Copyright 2026 SchemaGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Persistence of schema documents below an output directory."""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

from schemagen.model.documents import SCHEMA_SUFFIX, SchemaDocument

_log = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


class OutputError(Exception):
    """Raised when a schema document or the output directory cannot be written."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


def schema_path(output_dir: Path, qualified_name: str) -> Path:
    """Return the file a type's schema is written to.

    Namespace segments become directories below *output_dir* and the simple
    name plus ``.json`` becomes the file name, e.g. ``out`` and
    ``a.b.Widget`` give ``out/a/b/Widget.json``.
    """
    *namespace, simple_name = qualified_name.split(".")
    return output_dir.joinpath(*namespace, simple_name + SCHEMA_SUFFIX)


class SchemaWriter:
    """Writes schema documents below a fixed output directory.

    Each document is first written to a temporary file next to its target and
    then moved into place, so a failed write never leaves a truncated
    document behind.
    """

    def __init__(self, output_dir: Path) -> None:
        self.output_dir = output_dir

    def prepare(self) -> None:
        """Create the output directory if it does not exist yet.

        Raises:
            OutputError: If the directory cannot be created.
        """
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise OutputError(f"Cannot create output directory '{self.output_dir}': {exc}") from exc

    def persist(self, document: SchemaDocument) -> Path:
        """Write *document* and return the path it was written to.

        Raises:
            OutputError: If the document cannot be written.
        """
        target = schema_path(self.output_dir, document.qualified_name)
        tmp_path: Path | None = None
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=target.parent,
                prefix=f".{target.stem}.",
                suffix=".tmp",
                delete=False,
            ) as handle:
                tmp_path = Path(handle.name)
                handle.write(document.serialize())
            # Temporary files are private; give the schema the mode a plain open() would.
            os.chmod(tmp_path, _file_mode())
            os.replace(tmp_path, target)
        except OSError as exc:
            if tmp_path is not None:
                tmp_path.unlink(missing_ok=True)
            raise OutputError(f"Cannot write schema '{target}': {exc}") from exc

        _log.info("Wrote %s", target)
        return target


# ################
# Implementation
# ################


def _file_mode() -> int:
    """Return the permissions of a newly created regular file under the current umask."""
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask
