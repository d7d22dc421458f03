# Copyright 2026 SchemaGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Constraint directives and assembled schema documents."""

from __future__ import annotations

import json
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict

# ###############
# Public Interface
# ###############

SCHEMA_SUFFIX = ".json"


class EnumMode(Enum):
    """How enumeration members are written into a schema."""

    BY_NAME = "by-name"
    BY_STRING_CONVERSION = "by-string-conversion"


class ConstraintDirective(BaseModel):
    """The constraints the policy attaches to one scope (a field or a type).

    A ``None`` value means the scope is left unconstrained in that respect.
    """

    model_config = ConfigDict(frozen=True)

    max_length: int | None = None
    minimum: Decimal | None = None
    maximum: Decimal | None = None
    max_items: int | None = None
    nullable_default: bool = True
    additional_properties_allowed: bool = False


@dataclass(frozen=True)
class SchemaDocument:
    """The JSON Schema generated for one type."""

    qualified_name: str
    content: dict[str, Any]

    def serialize(self) -> str:
        """Return the canonical text form: two-space indented JSON with a trailing newline."""
        return json.dumps(self.content, indent=2, ensure_ascii=False) + "\n"
