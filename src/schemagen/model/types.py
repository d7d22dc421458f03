# Copyright 2026 SchemaGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Reflection handles for the types and fields a schema is generated from."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

# ###############
# Public Interface
# ###############


class Kind(Enum):
    """Coarse classification of a field type used by the constraint policy."""

    INTEGER = "integer"
    FLOATING_POINT = "floating-point"
    TEXT = "text"
    OTHER = "other"


@dataclass(frozen=True)
class TypeReference:
    """A resolved field type with wrappers stripped.

    Attributes:
        erased: The non-generic runtime class (``list`` for ``list[int]``) or,
            for special forms that have no class, the form itself.
        arguments: References for the generic parameters, in order.
        nullable: True when a ``None`` member was removed from a union.
    """

    erased: Any
    arguments: tuple[TypeReference, ...] = ()
    nullable: bool = False


@dataclass(frozen=True)
class FieldDescriptor:
    """A declared field of a schema type."""

    name: str
    type: TypeReference
    alias: str | None = None

    @property
    def property_name(self) -> str:
        """The key under which the field appears in the schema's ``properties``."""
        return self.alias or self.name


@dataclass(frozen=True)
class TypeDescriptor:
    """A schema type together with its declared fields."""

    type: type
    fields: tuple[FieldDescriptor, ...] = field(default_factory=tuple)

    @property
    def qualified_name(self) -> str:
        return f"{self.type.__module__}.{self.type.__qualname__}"

    @property
    def simple_name(self) -> str:
        return self.qualified_name.rsplit(".", 1)[-1]

    @property
    def namespace(self) -> str:
        return self.qualified_name.rpartition(".")[0]
