# Copyright 2026 SchemaGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Shared fixtures: throwaway packages importable through a classpath entry."""

import sys
import textwrap
import uuid
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest

PackageFactory = Callable[[dict[str, str]], tuple[str, Path]]


@pytest.fixture
def make_package(tmp_path: Path) -> Iterator[PackageFactory]:
    """Return a factory writing a uniquely named package below a classpath root.

    The factory takes a mapping from file paths (relative to the package
    directory) to source text and returns ``(package_name, classpath_root)``.
    Missing ``__init__.py`` files are created. Imported modules are removed
    from ``sys.modules`` afterwards.
    """
    created: list[str] = []

    def _make(files: dict[str, str]) -> tuple[str, Path]:
        name = f"sgfixture_{uuid.uuid4().hex[:12]}"
        root = tmp_path / "classpath"
        package_dir = root / name
        package_dir.mkdir(parents=True)
        for relative, source in files.items():
            path = package_dir / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(textwrap.dedent(source), encoding="utf-8")
        for directory in [package_dir, *[p for p in package_dir.rglob("*") if p.is_dir()]]:
            init = directory / "__init__.py"
            if not init.exists():
                init.write_text("", encoding="utf-8")
        created.append(name)
        return name, root

    yield _make

    for module_name in list(sys.modules):
        if any(module_name == n or module_name.startswith(n + ".") for n in created):
            del sys.modules[module_name]


# Source of a small package exercising every kind of schema type.
SHOP_MODELS = """\
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Protocol

from pydantic import BaseModel, Field


class Color(Enum):
    RED = 1
    GREEN = 2


@dataclass
class Widget:
    count: int
    label: str


class Order(BaseModel):
    reference: str = Field(alias="ref")
    quantity: int = 1
    color: Color = Color.RED
    note: Optional[str] = None
    tags: list[str] = []


class Shape(BaseModel, ABC):
    @abstractmethod
    def area(self) -> float: ...


class Greeter(Protocol):
    def greet(self) -> str: ...


class Helper:
    pass
"""

SHOP_DEEP = """\
from dataclasses import dataclass
from typing import TypedDict


class Point(TypedDict):
    x: float
    y: float


@dataclass
class Outer:
    @dataclass
    class Inner:
        depth: int

    inner: Inner
    name: str = "outer"
"""


@pytest.fixture
def shop_package(make_package: PackageFactory) -> tuple[str, Path]:
    """A package with schema types in a module, a subpackage and a nested class."""
    return make_package(
        {
            "__init__.py": "from .models import Widget\n",
            "models.py": SHOP_MODELS,
            "sub/deep.py": SHOP_DEEP,
        }
    )
