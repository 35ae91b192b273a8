"""Implicit property matching between a source and a destination type."""

from __future__ import annotations

import logging

from property_mapper.adapters.introspection import (
    PropertyInfo,
    TypeInfo,
    TypeInfoRegistry,
    default_registry,
)
from property_mapper.application.ports import (
    ConverterCatalog,
    MappingTarget,
    MatchingStrategy,
    NameTokenizer,
    PriorResult,
    PriorResultStore,
)
from property_mapper.converters.base import MatchResult
from property_mapper.errors import Errors
from property_mapper.mappings import PropertyMapping
from property_mapper.matching.disambiguator import disambiguate
from property_mapper.matching.matchable import is_iterable, is_matchable, raw_type
from property_mapper.matching.path_tracker import PropertyNameInfo
from property_mapper.types import PropertyType

logger = logging.getLogger(__name__)


class PropertyMappingBuilder:
    """Discover and commit implicit mappings for one type map.

    The builder walks the destination type depth-first and, for every
    destination property, walks the whole source type looking for paths the
    matching strategy accepts. Candidates are resolved per destination
    property and committed to ``type_map``.

    A builder holds its traversal state as instance attributes: use one
    instance per ``build`` call and never share it between threads.

    Parameters
    ----------
    type_map : MappingTarget
        Type map receiving committed mappings. Its existing mappings are
        treated as explicit and are never re-derived.
    type_map_store : PriorResultStore
        Previously built type maps, reused for nested type pairs.
    converter_store : ConverterCatalog
        Conditional converters in priority order.
    matching_strategy : MatchingStrategy
        Path correspondence policy.
    source_tokenizer, destination_tokenizer : NameTokenizer
        Property name tokenizers.
    ambiguity_ignored : bool, default=False
        Leave ambiguous destination properties unmapped instead of failing.
    registry : TypeInfoRegistry | None, optional
        Type introspection cache.
    include_properties : bool, default=True
        Expose ``@property`` members during introspection.
    """

    def __init__(
        self,
        type_map: MappingTarget,
        type_map_store: PriorResultStore,
        converter_store: ConverterCatalog,
        matching_strategy: MatchingStrategy,
        source_tokenizer: NameTokenizer,
        destination_tokenizer: NameTokenizer,
        *,
        ambiguity_ignored: bool = False,
        registry: TypeInfoRegistry | None = None,
        include_properties: bool = True,
    ) -> None:
        self.type_map = type_map
        self.type_map_store = type_map_store
        self.converter_store = converter_store
        self.matching_strategy = matching_strategy
        self.source_tokenizer = source_tokenizer
        self.destination_tokenizer = destination_tokenizer
        self.ambiguity_ignored = ambiguity_ignored
        self._registry = registry or default_registry
        self._include_properties = include_properties

        self.errors = Errors()
        self.property_name_info = PropertyNameInfo(
            type_map.source_type, source_tokenizer, destination_tokenizer
        )
        self._source_type_info = self._type_info(type_map.source_type)
        self._source_types: set[PropertyType] = set()
        self._destination_types: set[PropertyType] = set()
        self._mappings: list[PropertyMapping] = []
        # Source types were not verified by the converter that accepted them.
        self._partially_matched: list[PropertyMapping] = []
        # Paths that match by name but no converter accepted by type.
        self._intermediate: dict[PropertyInfo, PropertyMapping] = {}
        # Re-rooted copies of mappings from stored type maps.
        self._merged: list[PropertyMapping] = []

    def build(self) -> None:
        """Populate the type map with implicit mappings.

        Raises
        ------
        ConfigurationError
            If destination properties are ambiguous and ambiguity is not
            ignored.
        """
        self._match_destination(self._type_info(self.type_map.destination_type))

    def _type_info(self, cls: PropertyType) -> TypeInfo:
        return self._registry.type_info_for(cls, include_properties=self._include_properties)

    def _match_destination(self, destination_type_info: TypeInfo) -> None:
        self._destination_types.add(destination_type_info.type)
        names = self.property_name_info

        for mutator in destination_type_info.mutators.values():
            names.push_destination(mutator)
            destination_path = names.destination_path

            # Explicit paths are not re-derived; their children still are.
            if not self.type_map.is_mapped(destination_path):
                self._match_source(self._source_type_info, mutator)
                names.clear_source()
                self._source_types.clear()

            if not self._mappings and self._partially_matched:
                self._mappings.extend(self._partially_matched)

            if self._mappings:
                self._commit_candidates(destination_path, mutator)
            elif self._merged:
                for mapping in self._merged:
                    self.type_map.add_mapping(mapping)
                self._merged.clear()
            elif (
                is_matchable(mutator.value_type)
                and raw_type(mutator.value_type) not in self._destination_types
                and not self.type_map.is_skipped(destination_path)
            ):
                self._match_destination(self._type_info(mutator.value_type))

            names.pop_destination()

        self._destination_types.discard(destination_type_info.type)
        self.errors.raise_if_errors()

    def _commit_candidates(self, destination_path: str, mutator: PropertyInfo) -> None:
        mapping: PropertyMapping | None
        if len(self._mappings) == 1:
            mapping = self._mappings[0]
        else:
            mapping = disambiguate(
                self._mappings, self.source_tokenizer, self.destination_tokenizer
            )
            if mapping is None:
                if self.ambiguity_ignored:
                    logger.debug("Ignoring ambiguous destination %s", destination_path)
                else:
                    logger.debug("Ambiguous destination %s", destination_path)
                    self.errors.ambiguous_destination(destination_path, mutator, self._mappings)

        if mapping is not None:
            self.type_map.add_mapping(mapping)

            # A collection destination may be reached again through one of
            # the same source accessors deeper down; keep those paths too.
            if is_iterable(mapping.last_destination_property.value_type):
                for accessor in mapping.source_properties:
                    intermediate = self._intermediate.get(accessor)
                    if intermediate is not None and intermediate.path != mapping.path:
                        self.type_map.add_mapping(intermediate)

        self._mappings.clear()
        self._partially_matched.clear()
        self._intermediate.clear()
        self._merged.clear()

    def _match_source(self, source_type_info: TypeInfo, destination_mutator: PropertyInfo) -> bool:
        """Collect candidates for ``destination_mutator`` from one source type.

        Returns
        -------
        bool
            ``True`` when an exact strategy found its match and the whole
            source scan must stop.
        """
        self._source_types.add(source_type_info.type)
        names = self.property_name_info
        try:
            for accessor in source_type_info.accessors.values():
                names.push_source(accessor)
                try:
                    if self.matching_strategy.matches(names) and self._match_accessor(
                        accessor, destination_mutator
                    ):
                        return True
                    nested = raw_type(accessor.value_type)
                    if is_matchable(nested) and nested not in self._source_types:
                        if self._match_source(self._type_info(nested), destination_mutator):
                            return True
                finally:
                    names.pop_source()
            return False
        finally:
            self._source_types.discard(source_type_info.type)

    def _match_accessor(self, accessor: PropertyInfo, destination_mutator: PropertyInfo) -> bool:
        """Record candidates for a source path the strategy accepted.

        Returns ``True`` when the scan must stop under an exact strategy.
        """
        names = self.property_name_info
        destination_type = destination_mutator.value_type

        if raw_type(destination_type) in self._destination_types:
            self._mappings.append(
                PropertyMapping.of(
                    names.source_properties, names.destination_properties, cyclic=True
                )
            )
            return False

        prior = self.type_map_store.get(accessor.value_type, destination_type)
        if prior is not None:
            self._use_prior_result(prior)
            if self.matching_strategy.is_exact():
                return True
        else:
            result = self._match_converters(accessor, destination_type)
            if result is MatchResult.FULL:
                return self.matching_strategy.is_exact()
            if result is MatchResult.PARTIAL:
                return False

        self._intermediate[accessor] = PropertyMapping.of(
            names.source_properties, names.destination_properties
        )
        return False

    def _use_prior_result(self, prior: PriorResult) -> None:
        names = self.property_name_info
        if prior.converter is None:
            for mapping in prior.get_mappings():
                self._merged.append(
                    mapping.merged_copy(names.source_properties, names.destination_properties)
                )
        else:
            self._mappings.append(
                PropertyMapping.of(
                    names.source_properties,
                    names.destination_properties,
                    converter=prior.converter,
                )
            )

    def _match_converters(
        self, accessor: PropertyInfo, destination_type: PropertyType
    ) -> MatchResult:
        """Let the first converter that handles the type pair decide."""
        names = self.property_name_info
        for converter in self.converter_store.converters():
            result = converter.match(accessor.value_type, destination_type)
            if result is MatchResult.NONE:
                continue

            mapping = PropertyMapping.of(names.source_properties, names.destination_properties)
            if result is MatchResult.FULL:
                self._mappings.append(mapping)
            else:
                self._partially_matched.append(mapping)
            return result
        return MatchResult.NONE
