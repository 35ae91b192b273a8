"""Application ports for clean architecture boundaries."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Protocol

from property_mapper.types import PropertyType, ValueConverter

if TYPE_CHECKING:
    from property_mapper.adapters.tokenizers import NameableType
    from property_mapper.converters.base import ConditionalConverter
    from property_mapper.mappings import PropertyMapping
    from property_mapper.matching.path_tracker import PropertyNameInfo


class PropertyDescriptor(Protocol):
    """Named, typed property exposed by a type descriptor."""

    name: str
    value_type: PropertyType


class TypeDescriptor(Protocol):
    """Ordered readable and writable properties of a type."""

    type: type
    accessors: Mapping[str, PropertyDescriptor]
    mutators: Mapping[str, PropertyDescriptor]


class NameTokenizer(Protocol):
    """Break a property name into comparable tokens."""

    def tokenize(self, name: str, nameable_type: NameableType) -> list[str]:
        """Return the tokens of ``name``."""


class MatchingStrategy(Protocol):
    """Decide whether the current source and destination paths correspond."""

    def matches(self, path_state: PropertyNameInfo) -> bool:
        """Return ``True`` when both accumulated paths denote one property."""

    def is_exact(self) -> bool:
        """Return ``True`` when the first match ends the source scan."""


class ConverterCatalog(Protocol):
    """Ordered collection of conditional converters."""

    def converters(self) -> Sequence[ConditionalConverter]:
        """Return converters in priority order."""


class PriorResult(Protocol):
    """Previously built mapping set between two types."""

    converter: ValueConverter | None

    def get_mappings(self) -> list[PropertyMapping]:
        """Return committed mappings."""


class PriorResultStore(Protocol):
    """Lookup of previously built results by type pair."""

    def get(
        self, source_type: PropertyType, destination_type: PropertyType
    ) -> PriorResult | None:
        """Return the stored result for the pair, if any."""


class MappingTarget(Protocol):
    """Caller-owned destination of committed mappings."""

    source_type: type
    destination_type: type

    def add_mapping(self, mapping: PropertyMapping) -> None:
        """Commit ``mapping``."""

    def is_mapped(self, path: str) -> bool:
        """Whether ``path`` already has a mapping."""

    def is_skipped(self, path: str) -> bool:
        """Whether ``path`` was excluded from implicit matching."""
