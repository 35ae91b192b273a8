"""Type classification used to gate recursive descent."""

from __future__ import annotations

import datetime as dt
import enum
import types
import typing
import uuid
from collections.abc import Collection, Iterable, Iterator, Mapping
from decimal import Decimal
from fractions import Fraction
from typing import Any, get_args, get_origin

from property_mapper.types import PropertyType

PRIMITIVE_TYPES: frozenset[type] = frozenset(
    {
        bool,
        int,
        float,
        complex,
        Decimal,
        Fraction,
        dt.date,
        dt.datetime,
        dt.time,
        dt.timedelta,
        uuid.UUID,
        type(None),
    }
)

TEXT_TYPES: frozenset[type] = frozenset({str, bytes, bytearray})


def raw_type(tp: PropertyType) -> PropertyType:
    """Return the runtime class behind a parameterized annotation.

    ``list[Item]`` becomes ``list``; plain classes, unions and ``Any`` are
    returned unchanged.
    """
    origin = get_origin(tp)
    if origin is None or origin is types.UnionType or isinstance(origin, typing.TypeAliasType):
        return tp
    return origin


def unwrap_optional(tp: PropertyType) -> PropertyType:
    """Strip ``None`` from ``X | None`` and ``Optional[X]`` annotations."""
    origin = get_origin(tp)
    if origin is typing.Union or origin is types.UnionType:
        args = [arg for arg in get_args(tp) if arg is not type(None)]
        if len(args) == 1:
            return args[0]
    return tp


def is_any(tp: PropertyType) -> bool:
    return tp is Any or tp is object


def is_iterable(tp: PropertyType) -> bool:
    """Whether values of ``tp`` are multi-valued containers.

    Text types are iterable at runtime but are treated as scalars here. Plain
    ``__iter__`` support is not enough (pydantic models iterate over their
    fields), the type has to be a collection, an iterator or ``Iterable``
    itself.
    """
    cls = raw_type(tp)
    if not isinstance(cls, type) or cls in TEXT_TYPES:
        return False
    return cls is Iterable or issubclass(cls, (Collection, Iterator, Mapping))


def is_mapping(tp: PropertyType) -> bool:
    cls = raw_type(tp)
    return isinstance(cls, type) and issubclass(cls, Mapping)


def is_primitive(tp: PropertyType) -> bool:
    """Whether ``tp`` is a scalar value type (numbers, dates, enums...)."""
    cls = raw_type(tp)
    if not isinstance(cls, type):
        return False
    if cls in PRIMITIVE_TYPES or issubclass(cls, enum.Enum):
        return True
    return any(issubclass(cls, primitive) for primitive in PRIMITIVE_TYPES)


def is_matchable(tp: PropertyType) -> bool:
    """Whether ``tp`` is a structured type eligible for recursive descent.

    Parameters
    ----------
    tp : PropertyType
        Resolved property annotation.

    Returns
    -------
    bool
        ``False`` for ``object``/``Any``, text, primitive and iterable types,
        and for annotations that are not classes (unions, type variables);
        ``True`` otherwise.
    """
    if is_any(tp):
        return False
    cls = raw_type(tp)
    if not isinstance(cls, type):
        return False
    if cls in TEXT_TYPES or issubclass(cls, (str, bytes)):
        return False
    return not is_primitive(cls) and not is_iterable(cls)
