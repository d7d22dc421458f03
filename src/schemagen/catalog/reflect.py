# Copyright 2026 SchemaGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Reflection of Python classes into type and field descriptors.

Only classes the schema library can render structurally are schema types:
dataclasses (stdlib and pydantic), pydantic models, ``TypedDict`` classes and
enumerations with at least one member.

Field annotations go through a normalization pass before the policy sees
them. Wrappers that do not change the underlying representation are removed:

* ``Annotated[T, ...]`` becomes ``T``;
* ``Required[T]`` and ``NotRequired[T]`` become ``T``;
* ``NewType("UserId", int)`` becomes ``int``;
* ``Optional[T]`` and ``T | None`` become ``T`` flagged as nullable;
* a ``TypeVar`` becomes its bound, or ``object`` when unbound.

Generic aliases erase to their origin class and keep their arguments, so
``list[int]`` is a ``list`` with one ``int`` argument.

Each field also records the key pydantic uses for it in a validation-mode
schema: the validation alias, else the alias, else the name produced by the
config's ``alias_generator``, else the declared name.
"""

from __future__ import annotations

import dataclasses
import inspect
import types
import typing
from collections.abc import Iterable, Mapping
from enum import Enum
from typing import Annotated, Any, Literal, NotRequired, Required, TypeVar, Union, get_args, get_origin

from pydantic import AliasChoices, AliasGenerator, AliasPath, BaseModel, PydanticUserError, RootModel
from pydantic.dataclasses import is_pydantic_dataclass
from pydantic.fields import FieldInfo

from schemagen.model.types import FieldDescriptor, TypeDescriptor, TypeReference

# ###############
# Public Interface
# ###############


class CatalogError(Exception):
    """Raised when the type catalog cannot be built.

    Covers packages that cannot be imported and classes whose fields cannot
    be resolved.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)


def type_reference(annotation: Any) -> TypeReference:
    """Normalize a field annotation into a :class:`TypeReference`."""
    if annotation is Any:
        return TypeReference(object)

    origin = get_origin(annotation)

    if origin is Annotated or origin in _QUALIFIERS:
        return type_reference(get_args(annotation)[0])

    if isinstance(annotation, typing.NewType):
        return type_reference(annotation.__supertype__)

    if isinstance(annotation, TypeVar):
        return type_reference(annotation.__bound__ if annotation.__bound__ is not None else object)

    if origin in _UNION_ORIGINS:
        members = get_args(annotation)
        present = [m for m in members if m is not _NONE_TYPE]
        nullable = len(present) < len(members)
        if len(present) == 1:
            inner = type_reference(present[0])
            return TypeReference(inner.erased, inner.arguments, nullable=nullable or inner.nullable)
        return TypeReference(Union, tuple(type_reference(m) for m in present), nullable=nullable)

    if origin is Literal:
        return TypeReference(Literal)

    if origin is not None:
        arguments = tuple(type_reference(a) for a in get_args(annotation) if a is not Ellipsis)
        return TypeReference(origin, arguments)

    if isinstance(annotation, type):
        return TypeReference(annotation)

    # Unresolved forward references and other special forms.
    return TypeReference(object)


def is_schema_type(obj: object) -> bool:
    """Return True if *obj* is a concrete class a schema can be generated for."""
    if not inspect.isclass(obj) or obj is object or obj is BaseModel:
        return False
    # Root models render as their wrapped value, not as an object.
    if issubclass(obj, RootModel) or inspect.isabstract(obj) or getattr(obj, "_is_protocol", False):
        return False
    if issubclass(obj, Enum):
        return len(obj.__members__) > 0
    return issubclass(obj, BaseModel) or dataclasses.is_dataclass(obj) or typing.is_typeddict(obj)


def describe(cls: type) -> TypeDescriptor:
    """Build the :class:`TypeDescriptor` of a schema type.

    Raises:
        CatalogError: If *cls* is not a schema type or its fields cannot be
            resolved.
    """
    if not is_schema_type(cls):
        raise CatalogError(f"'{cls.__module__}.{cls.__qualname__}' is not a supported schema type")

    if issubclass(cls, Enum):
        return TypeDescriptor(type=cls)

    if issubclass(cls, BaseModel):
        return TypeDescriptor(type=cls, fields=_from_field_infos(cls.model_fields, cls.model_config))

    if is_pydantic_dataclass(cls):
        return TypeDescriptor(
            type=cls,
            fields=_from_field_infos(cls.__pydantic_fields__, getattr(cls, "__pydantic_config__", {})),
        )

    hints = _type_hints(cls)
    if dataclasses.is_dataclass(cls):
        declared = [(f.name, f.default) for f in dataclasses.fields(cls)]
    else:
        declared = [(name, dataclasses.MISSING) for name in hints]

    config = getattr(cls, "__pydantic_config__", {})
    fields = []
    for name, default in declared:
        annotation = hints.get(name, Any)
        info = _field_info(cls, name, annotation, default)
        fields.append(
            FieldDescriptor(name=name, type=type_reference(annotation), alias=_property_key(info, name, config))
        )
    return TypeDescriptor(type=cls, fields=tuple(fields))


# ################
# Implementation
# ################

_NONE_TYPE = type(None)
_UNION_ORIGINS = (Union, types.UnionType)
_QUALIFIERS = (Required, NotRequired)


def _type_hints(cls: type) -> dict[str, Any]:
    """Resolve the annotations of *cls*, converting failures into CatalogError.

    ``Annotated`` metadata is kept so that ``Field(alias=...)`` markers are seen.
    """
    try:
        return typing.get_type_hints(cls, include_extras=True)
    except Exception as exc:
        raise CatalogError(f"Cannot resolve type hints of '{cls.__module__}.{cls.__qualname__}': {exc}") from exc


def _from_field_infos(infos: Mapping[str, FieldInfo], config: Mapping[str, Any]) -> tuple[FieldDescriptor, ...]:
    return tuple(
        FieldDescriptor(name=name, type=type_reference(info.annotation), alias=_property_key(info, name, config))
        for name, info in infos.items()
    )


def _field_info(cls: type, name: str, annotation: Any, default: Any) -> FieldInfo:
    """Build the pydantic view of a stdlib dataclass or ``TypedDict`` field."""
    while get_origin(annotation) in _QUALIFIERS:
        annotation = get_args(annotation)[0]
    try:
        if default is dataclasses.MISSING:
            return FieldInfo.from_annotation(annotation)
        return FieldInfo.from_annotated_attribute(annotation, default)
    except PydanticUserError as exc:
        raise CatalogError(f"Cannot read field '{name}' of '{cls.__module__}.{cls.__qualname__}': {exc}") from exc


def _first_plain_path(paths: Iterable[list[str | int]]) -> str | None:
    for path in paths:
        if len(path) == 1 and isinstance(path[0], str):
            return path[0]
    return None


def _validation_alias(info: FieldInfo, name: str, config: Mapping[str, Any]) -> Any:
    """Return the validation alias of a field once the config's alias generator is applied."""
    generator = config.get("alias_generator")
    declared = info.validation_alias if info.validation_alias is not None else info.alias
    if generator is None:
        return declared
    # A declared alias has priority 2 and outranks generated ones.
    if info.alias_priority is not None and info.alias_priority > 1 and declared is not None:
        return declared
    if isinstance(generator, AliasGenerator):
        alias, validation_alias, _ = generator.generate_aliases(name)
        return validation_alias if validation_alias is not None else alias
    return generator(name)


def _property_key(info: FieldInfo, name: str, config: Mapping[str, Any]) -> str | None:
    """Return the alias a validation-mode schema lists the field under, if any.

    A string validation alias wins; an ``AliasPath`` or ``AliasChoices``
    contributes its first single-segment string path, or nothing when it has
    none. Without a validation alias the plain ``alias`` is used.
    """
    alias = _validation_alias(info, name, config)
    if isinstance(alias, str):
        return alias
    if isinstance(alias, AliasPath):
        return _first_plain_path([alias.convert_to_aliases()])
    if isinstance(alias, AliasChoices):
        return _first_plain_path(alias.convert_to_aliases())
    return None
