"""Built-in conditional converters, in default priority order."""

from __future__ import annotations

import datetime as dt
import enum
from decimal import Decimal
from fractions import Fraction

from property_mapper.converters.base import ConditionalConverter, MatchResult
from property_mapper.matching.matchable import is_any, is_iterable, is_mapping, raw_type
from property_mapper.types import PropertyType

NUMBER_TYPES: tuple[type, ...] = (int, float, complex, Decimal, Fraction)
TEMPORAL_TYPES: tuple[type, ...] = (dt.date, dt.datetime, dt.time)


def _cls(tp: PropertyType) -> type | None:
    cls = raw_type(tp)
    return cls if isinstance(cls, type) else None


def _is_subclass(tp: PropertyType, bases: type | tuple[type, ...]) -> bool:
    cls = _cls(tp)
    return cls is not None and issubclass(cls, bases)


def _is_number(tp: PropertyType) -> bool:
    return _is_subclass(tp, NUMBER_TYPES) and not _is_subclass(tp, (bool, enum.Enum))


class CollectionConverter:
    """Iterable to non-mapping iterable."""

    name = "collection"

    def match(self, source_type: PropertyType, destination_type: PropertyType) -> MatchResult:
        if (
            is_iterable(source_type)
            and is_iterable(destination_type)
            and not is_mapping(destination_type)
        ):
            return MatchResult.FULL
        return MatchResult.NONE


class MappingConverter:
    """Mapping to mapping."""

    name = "mapping"

    def match(self, source_type: PropertyType, destination_type: PropertyType) -> MatchResult:
        if is_mapping(source_type) and is_mapping(destination_type):
            return MatchResult.FULL
        return MatchResult.NONE


class AssignableConverter:
    """Source values that already are destination instances."""

    name = "assignable"

    def match(self, source_type: PropertyType, destination_type: PropertyType) -> MatchResult:
        if is_any(destination_type):
            return MatchResult.FULL
        if is_any(source_type):
            return MatchResult.PARTIAL
        source_cls, destination_cls = _cls(source_type), _cls(destination_type)
        if source_cls is None or destination_cls is None:
            return MatchResult.NONE
        if issubclass(source_cls, destination_cls):
            return MatchResult.FULL
        return MatchResult.NONE


class EnumConverter:
    """Enum or text to enum."""

    name = "enum"

    def match(self, source_type: PropertyType, destination_type: PropertyType) -> MatchResult:
        if not _is_subclass(destination_type, enum.Enum):
            return MatchResult.NONE
        if _is_subclass(source_type, enum.Enum):
            return MatchResult.FULL
        if _is_subclass(source_type, (str, int)):
            return MatchResult.PARTIAL
        return MatchResult.NONE


class StringConverter:
    """Anything to ``str``; only text sources are guaranteed."""

    name = "string"

    def match(self, source_type: PropertyType, destination_type: PropertyType) -> MatchResult:
        if _cls(destination_type) is not str:
            return MatchResult.NONE
        return MatchResult.FULL if _is_subclass(source_type, str) else MatchResult.PARTIAL


class NumberConverter:
    """Numbers and booleans to numbers; text is parsed."""

    name = "number"

    def match(self, source_type: PropertyType, destination_type: PropertyType) -> MatchResult:
        if not _is_number(destination_type):
            return MatchResult.NONE
        if _is_number(source_type) or _is_subclass(source_type, bool):
            return MatchResult.FULL
        if _is_subclass(source_type, str):
            return MatchResult.PARTIAL
        return MatchResult.NONE


class BooleanConverter:
    """Booleans to ``bool``; text and integers are interpreted."""

    name = "boolean"

    def match(self, source_type: PropertyType, destination_type: PropertyType) -> MatchResult:
        if _cls(destination_type) is not bool:
            return MatchResult.NONE
        if _is_subclass(source_type, bool):
            return MatchResult.FULL
        if _is_subclass(source_type, (str, int)):
            return MatchResult.PARTIAL
        return MatchResult.NONE


class DateTimeConverter:
    """Dates and datetimes to temporal types; text and timestamps are parsed."""

    name = "datetime"

    def match(self, source_type: PropertyType, destination_type: PropertyType) -> MatchResult:
        if not _is_subclass(destination_type, TEMPORAL_TYPES):
            return MatchResult.NONE
        if _is_subclass(source_type, (dt.date, dt.datetime)):
            return MatchResult.FULL
        if _is_subclass(source_type, str) or _is_number(source_type):
            return MatchResult.PARTIAL
        return MatchResult.NONE


def builtin_converters() -> list[ConditionalConverter]:
    """Return fresh built-in converters in default priority order."""
    return [
        CollectionConverter(),
        MappingConverter(),
        AssignableConverter(),
        EnumConverter(),
        StringConverter(),
        NumberConverter(),
        BooleanConverter(),
        DateTimeConverter(),
    ]
