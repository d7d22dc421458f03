# Copyright 2026 SchemaGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""The constraint policy applied to every generated schema.

The policy decides, per field and per type, which JSON Schema constraints are
attached:

* integer and floating-point fields are bounded to
  ``[-NUMERIC_BOUND, NUMERIC_BOUND]``;
* text fields are limited to ``STRING_MAX_LENGTH`` characters;
* every array, at any depth, is limited to ``ARRAY_MAX_ITEMS`` items;
* every field is nullable;
* undeclared properties are rejected;
* enumerations are written by member name.

The bound is a fixed business rule and deliberately sits inside the 32-bit
signed integer range; it is not derived from the range of any type.
"""

from __future__ import annotations

import numbers
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict

from schemagen.model.documents import ConstraintDirective, EnumMode
from schemagen.model.types import FieldDescriptor, Kind, TypeDescriptor, TypeReference

# ###############
# Public Interface
# ###############

NUMERIC_BOUND = 214748624
STRING_MAX_LENGTH = 255
ARRAY_MAX_ITEMS = 255


class ConstraintPolicy(BaseModel):
    """Immutable policy value, built once per run and shared by reference."""

    model_config = ConfigDict(frozen=True)

    def classify(self, type_reference: TypeReference) -> Kind:
        """Classify a normalized field type by its erased form."""
        erased = type_reference.erased
        if not isinstance(erased, type) or issubclass(erased, (bool, Enum)):
            return Kind.OTHER
        if issubclass(erased, numbers.Integral):
            return Kind.INTEGER
        if issubclass(erased, (numbers.Real, Decimal)):
            return Kind.FLOATING_POINT
        if issubclass(erased, str):
            return Kind.TEXT
        return Kind.OTHER

    def numeric_bounds(self, kind: Kind) -> tuple[Decimal | None, Decimal | None]:
        """Return the inclusive ``(minimum, maximum)`` for *kind*."""
        if kind in (Kind.INTEGER, Kind.FLOATING_POINT):
            return Decimal(-NUMERIC_BOUND), Decimal(NUMERIC_BOUND)
        return None, None

    def string_max_length(self, kind: Kind) -> int | None:
        return STRING_MAX_LENGTH if kind is Kind.TEXT else None

    def type_array_max_items(self) -> int:
        return ARRAY_MAX_ITEMS

    def default_nullability(self) -> bool:
        return True

    def default_additional_properties(self) -> bool:
        return False

    def enum_representation(self) -> EnumMode:
        return EnumMode.BY_NAME

    def enum_label(self, member: Enum) -> str:
        """Return the schema value written for an enumeration member."""
        if self.enum_representation() is EnumMode.BY_NAME:
            return member.name
        return str(member)

    def decide(self, scope: FieldDescriptor | TypeDescriptor) -> ConstraintDirective:
        """Return the directive for a single field or for a type in general.

        Field directives carry the bounds and length that follow from the
        field's own kind. Type directives carry the array limit and the
        nullability and additional-properties defaults.
        """
        if isinstance(scope, FieldDescriptor):
            kind = self.classify(scope.type)
            minimum, maximum = self.numeric_bounds(kind)
            return ConstraintDirective(
                max_length=self.string_max_length(kind),
                minimum=minimum,
                maximum=maximum,
                nullable_default=self.default_nullability(),
                additional_properties_allowed=self.default_additional_properties(),
            )
        return ConstraintDirective(
            max_items=self.type_array_max_items(),
            nullable_default=self.default_nullability(),
            additional_properties_allowed=self.default_additional_properties(),
        )

    def field_directives(self, descriptor: TypeDescriptor) -> dict[str, ConstraintDirective]:
        """Return one directive per field of *descriptor*, keyed by property name."""
        return {f.property_name: self.decide(f) for f in descriptor.fields}
