"""Public API wrappers with validated configuration."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from pydantic import ValidationError

from property_mapper.application.ports import ConverterCatalog, MatchingStrategy
from property_mapper.application.results import MappingRow
from property_mapper.application.use_cases import build_type_map as _build_type_map
from property_mapper.application.use_cases import describe_mappings as _describe_mappings
from property_mapper.converters.registry import create_default_store
from property_mapper.errors import ConfigurationError, ErrorMessage
from property_mapper.mappings import TypeMap
from property_mapper.schemas import MatchingConfiguration
from property_mapper.store import TypeMapStore


def build_configuration(
    *,
    matching_strategy: str = "standard",
    source_name_tokenizer: str = "snake_camel",
    destination_name_tokenizer: str = "snake_camel",
    ambiguity_ignored: bool = False,
    implicit_mapping_enabled: bool = True,
    include_properties: bool = True,
) -> MatchingConfiguration:
    """Validate keyword settings into a ``MatchingConfiguration``.

    Raises
    ------
    ConfigurationError
        If a setting is invalid.
    """
    try:
        return MatchingConfiguration(
            matching_strategy=matching_strategy,
            source_name_tokenizer=source_name_tokenizer,
            destination_name_tokenizer=destination_name_tokenizer,
            ambiguity_ignored=ambiguity_ignored,
            implicit_mapping_enabled=implicit_mapping_enabled,
            include_properties=include_properties,
        )
    except ValidationError as exc:
        raise ConfigurationError(
            [ErrorMessage(f"Invalid matching configuration: {exc}")]
        ) from exc


def build_type_map(
    source_type: type,
    destination_type: type,
    *,
    configuration: MatchingConfiguration | None = None,
    store: TypeMapStore | None = None,
    converter_modules: Iterable[str] | None = None,
    converter_store: ConverterCatalog | None = None,
    matching_strategy: MatchingStrategy | None = None,
    explicit_mappings: Mapping[str, str] | None = None,
    skip: Iterable[str] | None = None,
) -> TypeMap:
    """Match ``source_type`` properties onto ``destination_type`` properties.

    Parameters
    ----------
    source_type, destination_type : type
        Classes to match.
    configuration : MatchingConfiguration | None, optional
        Matching settings; defaults to ``MatchingConfiguration()``.
    store : TypeMapStore | None, optional
        Store of previously built type maps to reuse and extend.
    converter_modules : Iterable[str] | None, optional
        Modules or files registering extra converters ahead of the built-ins.
    converter_store : ConverterCatalog | None, optional
        Complete converter catalog, overriding ``converter_modules``.
    matching_strategy : MatchingStrategy | None, optional
        Custom strategy object, overriding the configured strategy name.
    explicit_mappings : Mapping[str, str] | None, optional
        ``{destination_path: source_path}`` pairs that implicit matching keeps.
    skip : Iterable[str] | None, optional
        Destination paths excluded from nested implicit matching.

    Returns
    -------
    TypeMap
        Type map holding explicit and implicit mappings.

    Raises
    ------
    ConfigurationError
        If destination properties are ambiguous or an explicit path does not
        resolve.
    """
    if converter_store is None and converter_modules:
        converter_store = create_default_store(converter_modules)
    return _build_type_map(
        source_type=source_type,
        destination_type=destination_type,
        configuration=configuration or MatchingConfiguration(),
        store=store,
        converter_store=converter_store,
        matching_strategy=matching_strategy,
        explicit_mappings=explicit_mappings,
        skip=skip,
    )


def describe_mappings(type_map: TypeMap) -> list[MappingRow]:
    """Return one presentation row per committed mapping."""
    return _describe_mappings(type_map)
