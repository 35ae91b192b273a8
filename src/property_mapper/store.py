"""In-memory store of built type maps, reused across builds."""

from __future__ import annotations

import logging

from property_mapper.adapters.introspection import TypeInfoRegistry, default_registry
from property_mapper.adapters.strategies import get_matching_strategy
from property_mapper.adapters.tokenizers import get_tokenizer
from property_mapper.application.ports import ConverterCatalog, MatchingStrategy
from property_mapper.converters.registry import create_default_store
from property_mapper.mappings import TypeMap
from property_mapper.matching.builder import PropertyMappingBuilder
from property_mapper.matching.matchable import raw_type
from property_mapper.schemas import MatchingConfiguration
from property_mapper.types import PropertyType, TypePair, ValueConverter

logger = logging.getLogger(__name__)


class TypeMapStore:
    """Type maps keyed by ``(source_type, destination_type)``.

    Parameters
    ----------
    configuration : MatchingConfiguration | None, optional
        Settings used when building new type maps.
    converter_store : ConverterCatalog | None, optional
        Converter catalog; defaults to the built-in catalog.
    matching_strategy : MatchingStrategy | None, optional
        Strategy object overriding ``configuration.matching_strategy``.
    registry : TypeInfoRegistry | None, optional
        Introspection cache shared by every type map of this store.
    """

    def __init__(
        self,
        configuration: MatchingConfiguration | None = None,
        converter_store: ConverterCatalog | None = None,
        matching_strategy: MatchingStrategy | None = None,
        registry: TypeInfoRegistry | None = None,
    ) -> None:
        self.configuration = configuration or MatchingConfiguration()
        self.converter_store = converter_store or create_default_store()
        self.matching_strategy = matching_strategy or get_matching_strategy(
            self.configuration.matching_strategy
        )
        self.registry = registry or default_registry
        self._type_maps: dict[TypePair, TypeMap] = {}

    def get(
        self, source_type: PropertyType, destination_type: PropertyType
    ) -> TypeMap | None:
        return self._type_maps.get((raw_type(source_type), raw_type(destination_type)))

    def put(self, type_map: TypeMap) -> None:
        self._type_maps[(type_map.source_type, type_map.destination_type)] = type_map

    def type_maps(self) -> list[TypeMap]:
        return list(self._type_maps.values())

    def create_type_map(
        self,
        source_type: type,
        destination_type: type,
        converter: ValueConverter | None = None,
    ) -> TypeMap:
        """Create an empty type map sharing this store's introspection settings.

        The type map is not stored; use it to declare explicit mappings or
        skipped paths before calling ``build``.
        """
        return TypeMap(
            source_type,
            destination_type,
            converter=converter,
            registry=self.registry,
            include_properties=self.configuration.include_properties,
        )

    def build(self, type_map: TypeMap) -> TypeMap:
        """Fill ``type_map`` with implicit mappings and store it.

        Raises
        ------
        ConfigurationError
            If the build finds ambiguous destination properties. The type
            map is not stored in that case.
        """
        if self.configuration.implicit_mapping_enabled and type_map.converter is None:
            logger.debug(
                "Building implicit mappings %s -> %s",
                type_map.source_type.__qualname__,
                type_map.destination_type.__qualname__,
            )
            PropertyMappingBuilder(
                type_map,
                self,
                self.converter_store,
                self.matching_strategy,
                get_tokenizer(self.configuration.source_name_tokenizer),
                get_tokenizer(self.configuration.destination_name_tokenizer),
                ambiguity_ignored=self.configuration.ambiguity_ignored,
                registry=self.registry,
                include_properties=self.configuration.include_properties,
            ).build()
        self.put(type_map)
        return type_map

    def get_or_create(self, source_type: type, destination_type: type) -> TypeMap:
        """Return the stored type map for the pair, building it if missing."""
        existing = self.get(source_type, destination_type)
        if existing is not None:
            return existing
        return self.build(self.create_type_map(source_type, destination_type))
