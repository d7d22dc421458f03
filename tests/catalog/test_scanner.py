# Copyright 2026 SchemaGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for package scanning."""

import logging
import sys
from pathlib import Path

import pytest

from schemagen.catalog import CatalogError, import_roots, scan_package

# ###############
# scan_package
# ###############


def test_scan_finds_every_schema_type(shop_package: tuple[str, Path]) -> None:
    """Types from modules, subpackages and nested classes are found, sorted by name."""
    name, root = shop_package
    descriptors = scan_package(name, [root])
    assert [d.qualified_name for d in descriptors] == [
        f"{name}.models.Color",
        f"{name}.models.Order",
        f"{name}.models.Widget",
        f"{name}.sub.deep.Outer",
        f"{name}.sub.deep.Outer.Inner",
        f"{name}.sub.deep.Point",
    ]


def test_scan_skips_non_schema_classes(shop_package: tuple[str, Path]) -> None:
    """Abstract classes, protocols and plain classes are not collected."""
    name, root = shop_package
    simple_names = {d.simple_name for d in scan_package(name, [root])}
    assert simple_names.isdisjoint({"Shape", "Greeter", "Helper"})


def test_scan_does_not_duplicate_reexports(shop_package: tuple[str, Path]) -> None:
    """A class re-exported by the package ``__init__`` is reported once, under its defining module."""
    name, root = shop_package
    widgets = [d for d in scan_package(name, [root]) if d.simple_name == "Widget"]
    assert len(widgets) == 1
    assert widgets[0].namespace == f"{name}.models"


def test_scan_describes_fields(shop_package: tuple[str, Path]) -> None:
    name, root = shop_package
    order = next(d for d in scan_package(name, [root]) if d.simple_name == "Order")
    assert [f.property_name for f in order.fields] == ["ref", "quantity", "color", "note", "tags"]


def test_scan_plain_module(shop_package: tuple[str, Path]) -> None:
    """A module root yields only the types that module defines."""
    name, root = shop_package
    descriptors = scan_package(f"{name}.models", [root])
    assert [d.simple_name for d in descriptors] == ["Color", "Order", "Widget"]


def test_scan_subpackage(shop_package: tuple[str, Path]) -> None:
    name, root = shop_package
    descriptors = scan_package(f"{name}.sub", [root])
    assert [d.qualified_name for d in descriptors] == [
        f"{name}.sub.deep.Outer",
        f"{name}.sub.deep.Outer.Inner",
        f"{name}.sub.deep.Point",
    ]


def test_scan_is_deterministic(shop_package: tuple[str, Path]) -> None:
    name, root = shop_package
    first = [d.qualified_name for d in scan_package(name, [root])]
    second = [d.qualified_name for d in scan_package(name, [root])]
    assert first == second


def test_scan_empty_package(make_package) -> None:
    name, root = make_package({"helpers.py": "def helper():\n    return 1\n"})
    assert scan_package(name, [root]) == []


def test_scan_missing_package_raises(tmp_path: Path) -> None:
    with pytest.raises(CatalogError, match="sgfixture_does_not_exist"):
        scan_package("sgfixture_does_not_exist", [tmp_path])


def test_scan_broken_module_raises(make_package) -> None:
    """An exception raised while importing a submodule aborts the scan."""
    name, root = make_package(
        {
            "good.py": "from dataclasses import dataclass\n\n@dataclass\nclass Good:\n    value: int\n",
            "broken.py": "raise RuntimeError('boom')\n",
        }
    )
    with pytest.raises(CatalogError, match="broken"):
        scan_package(name, [root])


def test_scan_broken_subpackage_raises(make_package) -> None:
    name, root = make_package({"inner/__init__.py": "import sgfixture_not_installed\n"})
    with pytest.raises(CatalogError, match="inner"):
        scan_package(name, [root])


def test_scan_logs_progress(shop_package: tuple[str, Path], caplog: pytest.LogCaptureFixture) -> None:
    name, root = shop_package
    with caplog.at_level(logging.INFO, logger="schemagen.catalog.scanner"):
        scan_package(name, [root])
    assert f"Found 6 schema type(s) under '{name}'" in caplog.text


# ###############
# import_roots
# ###############


def test_import_roots_prepends_and_restores(tmp_path: Path) -> None:
    before = list(sys.path)
    with import_roots([tmp_path]):
        assert sys.path[0] == str(tmp_path.resolve())
    assert sys.path == before


def test_import_roots_restores_after_error(tmp_path: Path) -> None:
    before = list(sys.path)
    with pytest.raises(RuntimeError):
        with import_roots([tmp_path]):
            raise RuntimeError("boom")
    assert sys.path == before


def test_scan_restores_sys_path(shop_package: tuple[str, Path]) -> None:
    name, root = shop_package
    before = list(sys.path)
    scan_package(name, [root])
    assert sys.path == before
