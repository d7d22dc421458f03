# Copyright 2026 SchemaGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Assembly of JSON Schema documents through pydantic's schema generator.

pydantic builds the structural schema (properties, types, required fields,
nested definitions). :class:`PolicyJsonSchema` hooks into that walk and
applies the :class:`~schemagen.policy.ConstraintPolicy` at the right scope:

* object schemas of models, dataclasses and ``TypedDict``\\s receive the
  per-field directives on their properties and the type-level
  additional-properties default;
* every array node receives the type-level item limit;
* enumerations are rendered through the policy's enum representation.

Constraints a type declares explicitly (``Field(max_length=10)``) take
precedence over the policy's values.
"""

from __future__ import annotations

from decimal import Decimal
from enum import Enum
from typing import Any

from pydantic import PydanticUndefinedAnnotation, PydanticUserError, TypeAdapter
from pydantic.json_schema import DEFAULT_REF_TEMPLATE, GenerateJsonSchema, JsonSchemaMode, JsonSchemaValue
from pydantic_core import CoreSchema, core_schema

from schemagen.catalog.reflect import CatalogError, describe, is_schema_type
from schemagen.model.documents import ConstraintDirective, SchemaDocument
from schemagen.model.types import TypeDescriptor
from schemagen.policy.constraints import ConstraintPolicy

# ###############
# Public Interface
# ###############


class AssemblyError(Exception):
    """Raised when no schema can be generated for a type."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class PolicyJsonSchema(GenerateJsonSchema):
    """A pydantic JSON Schema generator that applies a constraint policy."""

    def __init__(
        self,
        policy: ConstraintPolicy,
        by_alias: bool = True,
        ref_template: str = DEFAULT_REF_TEMPLATE,
    ) -> None:
        super().__init__(by_alias=by_alias, ref_template=ref_template)
        self.policy = policy

    def generate(self, schema: CoreSchema, mode: JsonSchemaMode = "validation") -> JsonSchemaValue:
        json_schema = super().generate(schema, mode=mode)
        return {"$schema": self.schema_dialect, **json_schema}

    # -------- object scopes --------

    def model_schema(self, schema: core_schema.ModelSchema) -> JsonSchemaValue:
        return self._apply_policy(super().model_schema(schema), schema["cls"])

    def dataclass_schema(self, schema: core_schema.DataclassSchema) -> JsonSchemaValue:
        return self._apply_policy(super().dataclass_schema(schema), schema["cls"])

    def typed_dict_schema(self, schema: core_schema.TypedDictSchema) -> JsonSchemaValue:
        return self._apply_policy(super().typed_dict_schema(schema), schema.get("cls"))

    # -------- array scopes --------

    def list_schema(self, schema: core_schema.ListSchema) -> JsonSchemaValue:
        return self._limit_items(super().list_schema(schema))

    def set_schema(self, schema: core_schema.SetSchema) -> JsonSchemaValue:
        return self._limit_items(super().set_schema(schema))

    def frozenset_schema(self, schema: core_schema.FrozenSetSchema) -> JsonSchemaValue:
        return self._limit_items(super().frozenset_schema(schema))

    def tuple_schema(self, schema: core_schema.TupleSchema) -> JsonSchemaValue:
        return self._limit_items(super().tuple_schema(schema))

    def generator_schema(self, schema: core_schema.GeneratorSchema) -> JsonSchemaValue:
        return self._limit_items(super().generator_schema(schema))

    # -------- enumerations --------

    def enum_schema(self, schema: core_schema.EnumSchema) -> JsonSchemaValue:
        json_schema = super().enum_schema(schema)
        json_schema["enum"] = [self.policy.enum_label(member) for member in schema["members"]]
        json_schema["type"] = "string"
        return json_schema

    def encode_default(self, dft: Any) -> Any:
        if isinstance(dft, Enum):
            return self.policy.enum_label(dft)
        return super().encode_default(dft)

    # -------- helpers --------

    def _apply_policy(self, json_schema: JsonSchemaValue, cls: type | None) -> JsonSchemaValue:
        if cls is None or not is_schema_type(cls):
            return json_schema

        descriptor = describe(cls)
        properties = json_schema.get("properties")
        if isinstance(properties, dict):
            directives = self.policy.field_directives(descriptor)
            json_schema["properties"] = {
                name: _constrain_field(prop, directives[name]) if name in directives else prop
                for name, prop in properties.items()
            }
        type_directive = self.policy.decide(descriptor)
        json_schema.setdefault("additionalProperties", type_directive.additional_properties_allowed)
        return json_schema

    def _limit_items(self, json_schema: JsonSchemaValue) -> JsonSchemaValue:
        json_schema.setdefault("maxItems", self.policy.type_array_max_items())
        return json_schema


def assemble(descriptor: TypeDescriptor, policy: ConstraintPolicy) -> SchemaDocument:
    """Generate the schema document for one type.

    Args:
        descriptor: The type to render.
        policy: The constraint policy applied while rendering.

    Returns:
        The assembled :class:`SchemaDocument`.

    Raises:
        AssemblyError: If pydantic cannot build a JSON Schema for the type.
    """
    try:
        adapter = TypeAdapter(descriptor.type)
        content = PolicyJsonSchema(policy).generate(adapter.core_schema, mode="validation")
    except (PydanticUserError, PydanticUndefinedAnnotation, CatalogError, ValueError) as exc:
        raise AssemblyError(f"Cannot generate schema for '{descriptor.qualified_name}': {exc}") from exc
    return SchemaDocument(qualified_name=descriptor.qualified_name, content=content)


# ################
# Implementation
# ################

# Keywords that describe a property rather than constrain its value.
_ANNOTATION_KEYS = frozenset({"title", "description", "default", "examples", "deprecated", "readOnly", "writeOnly"})
_VALUE_SET_KEYS = frozenset({"enum", "const"})


def _constrain_field(prop: JsonSchemaValue, directive: ConstraintDirective) -> JsonSchemaValue:
    constrained = dict(prop)
    for key, value in (
        ("minimum", directive.minimum),
        ("maximum", directive.maximum),
        ("maxLength", directive.max_length),
    ):
        if value is not None:
            constrained.setdefault(key, _json_number(value))
    if directive.nullable_default:
        constrained = _allow_null(constrained)
    return constrained


def _json_number(value: Decimal | int) -> int | float:
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    return value


def _accepts_null(prop: JsonSchemaValue) -> bool:
    if not prop:
        return True
    declared = prop.get("type")
    if declared == "null" or (isinstance(declared, list) and "null" in declared):
        return True
    return any(_accepts_null(branch) for key in ("anyOf", "oneOf") for branch in prop.get(key, []))


def _allow_null(prop: JsonSchemaValue) -> JsonSchemaValue:
    """Return *prop* widened to also accept ``null``."""
    if _accepts_null(prop):
        return prop
    if isinstance(prop.get("type"), str) and not _VALUE_SET_KEYS & prop.keys():
        return {**prop, "type": [prop["type"], "null"]}
    outer = {k: v for k, v in prop.items() if k in _ANNOTATION_KEYS}
    inner = {k: v for k, v in prop.items() if k not in _ANNOTATION_KEYS}
    return {"anyOf": [inner, {"type": "null"}], **outer}
