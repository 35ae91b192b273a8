"""Describe Python classes as ordered accessors and mutators."""

from __future__ import annotations

import enum
import inspect
import typing
from dataclasses import dataclass, field
from typing import Any, ClassVar, get_origin, get_type_hints

from pydantic import BaseModel

from property_mapper.errors import IntrospectionError
from property_mapper.matching.matchable import unwrap_optional
from property_mapper.types import PropertyType


class PropertyKind(enum.Enum):
    """How a property is exposed on its declaring type."""

    FIELD = "field"
    PROPERTY = "property"


@dataclass(frozen=True)
class PropertyInfo:
    """Named, typed property of a class.

    Parameters
    ----------
    name : str
        Attribute name.
    value_type : PropertyType
        Resolved annotation with ``None`` stripped from optionals.
    declaring_type : type
        Class the property was introspected from.
    kind : PropertyKind, default=PropertyKind.FIELD
        Annotated attribute or ``@property``.
    """

    name: str
    value_type: PropertyType = field(compare=False)
    declaring_type: type
    kind: PropertyKind = PropertyKind.FIELD

    def __repr__(self) -> str:
        return f"{self.declaring_type.__name__}.{self.name}"


Accessor = PropertyInfo
Mutator = PropertyInfo


@dataclass(frozen=True)
class TypeInfo:
    """Readable and writable properties of a class, in declaration order."""

    type: type
    accessors: dict[str, PropertyInfo]
    mutators: dict[str, PropertyInfo]


def _is_class_var(annotation: object) -> bool:
    return annotation is ClassVar or get_origin(annotation) is ClassVar


def _resolve_hints(cls: type) -> dict[str, Any]:
    try:
        return get_type_hints(cls)
    except (NameError, TypeError) as exc:
        raise IntrospectionError(
            f"Unable to resolve type hints for {cls.__qualname__}: {exc}"
        ) from exc


def _field_hints(cls: type) -> dict[str, Any]:
    if issubclass(cls, BaseModel):
        return {name: info.annotation for name, info in cls.model_fields.items()}
    return _resolve_hints(cls)


def _field_properties(cls: type) -> dict[str, PropertyInfo]:
    properties: dict[str, PropertyInfo] = {}
    for name, hint in _field_hints(cls).items():
        if name.startswith("_") or _is_class_var(hint):
            continue
        if isinstance(inspect.getattr_static(cls, name, None), property):
            continue
        properties[name] = PropertyInfo(
            name=name,
            value_type=unwrap_optional(hint),
            declaring_type=cls,
        )
    return properties


def _property_descriptors(cls: type) -> list[tuple[str, property]]:
    seen: dict[str, property] = {}
    for base in reversed(cls.__mro__):
        # pydantic's own model_* properties are framework API, not data.
        if base.__module__.split(".")[0] == "pydantic":
            continue
        for name, value in vars(base).items():
            if isinstance(value, property) and not name.startswith("_"):
                seen[name] = value
    return list(seen.items())


def _property_type(cls: type, name: str, prop: property) -> PropertyType | None:
    if prop.fget is None:
        return None
    try:
        hints = get_type_hints(prop.fget)
    except (NameError, TypeError) as exc:
        raise IntrospectionError(
            f"Unable to resolve return type of {cls.__qualname__}.{name}: {exc}"
        ) from exc
    return hints.get("return")


def describe_type(cls: type, *, include_properties: bool = True) -> TypeInfo:
    """Introspect ``cls`` into a ``TypeInfo``.

    Parameters
    ----------
    cls : type
        Dataclass, pydantic model or any class with annotations.
    include_properties : bool, default=True
        Also expose annotated ``@property`` members.

    Returns
    -------
    TypeInfo
        Accessors and mutators ordered by declaration, base classes first.

    Raises
    ------
    IntrospectionError
        If ``cls`` is not a class or its annotations cannot be resolved.
    """
    if not isinstance(cls, type):
        raise IntrospectionError(f"Expected a class, got {cls!r}.")

    fields = _field_properties(cls)
    accessors = dict(fields)
    mutators = dict(fields)

    if include_properties:
        for name, prop in _property_descriptors(cls):
            value_type = _property_type(cls, name, prop)
            if value_type is None:
                continue
            info = PropertyInfo(
                name=name,
                value_type=unwrap_optional(value_type),
                declaring_type=cls,
                kind=PropertyKind.PROPERTY,
            )
            accessors[name] = info
            if prop.fset is not None:
                mutators[name] = info

    return TypeInfo(type=cls, accessors=accessors, mutators=mutators)


class TypeInfoRegistry:
    """Cache of ``TypeInfo`` objects keyed by class and introspection options."""

    def __init__(self) -> None:
        self._cache: dict[tuple[type, bool], TypeInfo] = {}

    def type_info_for(self, cls: PropertyType, *, include_properties: bool = True) -> TypeInfo:
        """Return (and memoize) the descriptor for ``cls``.

        Parameterized generics are described through their origin class.
        """
        origin = get_origin(cls)
        target = origin if isinstance(origin, type) else cls
        if isinstance(target, typing.TypeAliasType):
            target = target.__value__
        key = (target, include_properties)
        info = self._cache.get(key)
        if info is None:
            info = describe_type(target, include_properties=include_properties)
            self._cache[key] = info
        return info

    def clear(self) -> None:
        self._cache.clear()


default_registry = TypeInfoRegistry()
