"""Application-layer use-cases and result objects."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING

from property_mapper.application.results import MappingRow

if TYPE_CHECKING:
    from property_mapper.application.ports import ConverterCatalog, MatchingStrategy
    from property_mapper.mappings import TypeMap
    from property_mapper.schemas import MatchingConfiguration
    from property_mapper.store import TypeMapStore


def build_type_map(
    *,
    source_type: type,
    destination_type: type,
    configuration: MatchingConfiguration,
    store: TypeMapStore | None = None,
    converter_store: ConverterCatalog | None = None,
    matching_strategy: MatchingStrategy | None = None,
    explicit_mappings: Mapping[str, str] | None = None,
    skip: Iterable[str] | None = None,
) -> TypeMap:
    """Build a type map via lazy use-case import."""
    from property_mapper.application.use_cases import build_type_map as _impl

    return _impl(
        source_type=source_type,
        destination_type=destination_type,
        configuration=configuration,
        store=store,
        converter_store=converter_store,
        matching_strategy=matching_strategy,
        explicit_mappings=explicit_mappings,
        skip=skip,
    )


def describe_mappings(type_map: TypeMap) -> list[MappingRow]:
    """Describe mappings via lazy use-case import."""
    from property_mapper.application.use_cases import describe_mappings as _impl

    return _impl(type_map)


__all__ = ["MappingRow", "build_type_map", "describe_mappings"]
