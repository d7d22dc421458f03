# Copyright 2026 SchemaGen Contributors
# SPDX-License-Identifier: Apache-2.0

from pydantic import BaseModel, Field

from inventory.items import Item


class OrderLine(BaseModel):
    item: Item
    quantity: int = Field(alias="qty")
    note: str | None = None
