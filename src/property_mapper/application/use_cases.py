"""Application use-cases orchestrating type map construction."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from property_mapper.application.ports import ConverterCatalog, MatchingStrategy
from property_mapper.application.results import MappingRow
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
    """Use-case: build (or reuse) the type map for a source/destination pair.

    Parameters
    ----------
    source_type, destination_type : type
        Classes to match.
    configuration : MatchingConfiguration
        Matching settings; ignored when ``store`` is given.
    store : TypeMapStore | None, optional
        Store providing previously built type maps. A new store is created
        when omitted.
    converter_store : ConverterCatalog | None, optional
        Converter catalog for a newly created store.
    matching_strategy : MatchingStrategy | None, optional
        Strategy object for a newly created store.
    explicit_mappings : Mapping[str, str] | None, optional
        ``{destination_path: source_path}`` declared before implicit matching.
    skip : Iterable[str] | None, optional
        Destination paths excluded from nested implicit matching.

    Returns
    -------
    TypeMap
        Built type map, also registered in the store.
    """
    store = store or TypeMapStore(
        configuration,
        converter_store=converter_store,
        matching_strategy=matching_strategy,
    )
    if not explicit_mappings and not skip:
        return store.get_or_create(source_type, destination_type)

    type_map = store.create_type_map(source_type, destination_type)
    for destination_path, source_path in (explicit_mappings or {}).items():
        type_map.map_property(source_path, destination_path)
    for destination_path in skip or []:
        type_map.skip(destination_path)
    return store.build(type_map)


def describe_mappings(type_map: TypeMap) -> list[MappingRow]:
    """Use-case: flatten a type map into presentation rows."""
    return [
        MappingRow(
            source=mapping.source_path,
            destination=mapping.path,
            converter=_converter_name(mapping.converter),
            cyclic=mapping.cyclic,
            explicit=mapping.explicit,
        )
        for mapping in type_map.get_mappings()
    ]


def _converter_name(converter: object | None) -> str | None:
    if converter is None:
        return None
    return getattr(converter, "__name__", type(converter).__name__)
