"""Top-level API for implicit property mapping between types."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from property_mapper.application.results import MappingRow
    from property_mapper.mappings import TypeMap
    from property_mapper.schemas import MatchingConfiguration
    from property_mapper.store import TypeMapStore

__version__ = "0.1.0"


def build_type_map(
    source_type: type,
    destination_type: type,
    *,
    configuration: MatchingConfiguration | None = None,
    store: TypeMapStore | None = None,
    converter_modules: Iterable[str] | None = None,
    explicit_mappings: Mapping[str, str] | None = None,
    skip: Iterable[str] | None = None,
) -> TypeMap:
    """Match source properties onto destination properties.

    Parameters
    ----------
    source_type : type
        Class whose readable properties are matched.
    destination_type : type
        Class whose writable properties are filled.
    configuration : MatchingConfiguration, optional
        Matching settings.
    store : TypeMapStore, optional
        Store of previously built type maps to reuse.
    converter_modules : Iterable[str], optional
        Modules or files registering extra converters.
    explicit_mappings : Mapping[str, str], optional
        ``{destination_path: source_path}`` pairs kept as declared.
    skip : Iterable[str], optional
        Destination paths left out of nested matching.

    Returns
    -------
    TypeMap
        Built type map.
    """
    from .api import build_type_map as _impl

    return _impl(
        source_type,
        destination_type,
        configuration=configuration,
        store=store,
        converter_modules=converter_modules,
        explicit_mappings=explicit_mappings,
        skip=skip,
    )


def describe_mappings(type_map: TypeMap) -> list[MappingRow]:
    """Return one presentation row per committed mapping."""
    from .api import describe_mappings as _impl

    return _impl(type_map)


__all__ = ["build_type_map", "describe_mappings"]
