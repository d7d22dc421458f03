# Copyright 2026 SchemaGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Discovery of schema types under a root package.

The root package is imported and every submodule below it is walked
transitively. A class is collected from the module that defines it, so
re-exports in ``__init__`` modules do not produce duplicates. Classes nested
inside other classes are collected as well.
"""

from __future__ import annotations

import importlib
import inspect
import logging
import pkgutil
import sys
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from pathlib import Path
from types import ModuleType

from schemagen.catalog.reflect import CatalogError, describe, is_schema_type
from schemagen.model.types import TypeDescriptor

_log = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


@contextmanager
def import_roots(classpath: Iterable[str | Path]) -> Iterator[None]:
    """Temporarily prepend *classpath* entries to ``sys.path``.

    ``sys.path`` is restored on exit; modules imported in between stay in
    ``sys.modules``.
    """
    saved = list(sys.path)
    entries = [str(Path(entry).resolve()) for entry in classpath]
    sys.path[:0] = [entry for entry in entries if entry not in saved]
    importlib.invalidate_caches()
    try:
        yield
    finally:
        sys.path[:] = saved


def scan_package(root_package: str, classpath: Iterable[str | Path] = ()) -> list[TypeDescriptor]:
    """Enumerate every schema type defined under *root_package*.

    Args:
        root_package: Dotted name of the package (or plain module) to scan.
        classpath: Additional import roots searched before ``sys.path``.

    Returns:
        The descriptors of all schema types found, sorted by qualified name.

    Raises:
        CatalogError: If the root package or any of its submodules cannot be
            imported, or a collected class cannot be described.
    """
    _log.info("Scanning package '%s'", root_package)
    with import_roots(classpath):
        modules = list(_walk_modules(root_package))

    found: dict[str, TypeDescriptor] = {}
    for module in modules:
        for cls in _classes_defined_in(module):
            if not is_schema_type(cls):
                continue
            descriptor = describe(cls)
            found.setdefault(descriptor.qualified_name, descriptor)

    _log.info("Found %d schema type(s) under '%s'", len(found), root_package)
    return [found[name] for name in sorted(found)]


# ################
# Implementation
# ################


def _import(name: str) -> ModuleType:
    try:
        return importlib.import_module(name)
    except Exception as exc:
        raise CatalogError(f"Cannot import '{name}': {exc}") from exc


def _walk_modules(root_package: str) -> Iterator[ModuleType]:
    """Yield the root module followed by all of its submodules."""
    root = _import(root_package)
    yield root

    search_path = getattr(root, "__path__", None)
    if search_path is None:
        return

    def _on_error(name: str) -> None:
        raise CatalogError(f"Cannot import package '{name}' while scanning '{root_package}'")

    for info in pkgutil.walk_packages(search_path, prefix=root.__name__ + ".", onerror=_on_error):
        _log.debug("Importing module '%s'", info.name)
        yield _import(info.name)


def _classes_defined_in(module: ModuleType) -> Iterator[type]:
    for _, obj in inspect.getmembers(module, inspect.isclass):
        if obj.__module__ == module.__name__:
            yield from _with_nested(obj)


def _with_nested(cls: type) -> Iterator[type]:
    """Yield *cls* and, recursively, the classes declared in its body."""
    yield cls
    for member in vars(cls).values():
        if inspect.isclass(member) and member.__qualname__ == f"{cls.__qualname__}.{member.__name__}":
            yield from _with_nested(member)
