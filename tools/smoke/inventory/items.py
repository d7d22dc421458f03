# Copyright 2026 SchemaGen Contributors
# SPDX-License-Identifier: Apache-2.0

from dataclasses import dataclass, field
from enum import Enum


class Unit(Enum):
    PIECE = 1
    KILOGRAM = 2


@dataclass
class Item:
    sku: str
    unit: Unit
    stock: int = 0
    tags: list[str] = field(default_factory=list)
