"""Mutable source and destination property paths used during traversal."""

from __future__ import annotations

from property_mapper.adapters.introspection import PropertyInfo
from property_mapper.adapters.tokenizers import NameableType
from property_mapper.application.ports import NameTokenizer
from property_mapper.matching.matchable import is_matchable


def nameable_type_for(prop: PropertyInfo) -> NameableType:
    """Tokenizer hint for ``prop``: nested structures vs leaf values."""
    return NameableType.NESTED if is_matchable(prop.value_type) else NameableType.LEAF


class PropertyNameInfo:
    """Property stacks and their tokens for the pair being matched.

    Matching strategies receive this object and read the ``*_tokens``
    properties. Tokenized names are memoized per side.
    """

    def __init__(
        self,
        source_type: type,
        source_tokenizer: NameTokenizer,
        destination_tokenizer: NameTokenizer,
    ) -> None:
        self.source_type = source_type
        self.source_tokenizer = source_tokenizer
        self.destination_tokenizer = destination_tokenizer
        self.source_properties: list[PropertyInfo] = []
        self.destination_properties: list[PropertyInfo] = []
        self._source_tokens: dict[tuple[str, NameableType], list[str]] = {}
        self._destination_tokens: dict[tuple[str, NameableType], list[str]] = {}
        self._source_class_tokens: list[str] | None = None

    def push_source(self, prop: PropertyInfo) -> None:
        self.source_properties.append(prop)

    def pop_source(self) -> None:
        self.source_properties.pop()

    def clear_source(self) -> None:
        self.source_properties.clear()

    def push_destination(self, prop: PropertyInfo) -> None:
        self.destination_properties.append(prop)

    def pop_destination(self) -> None:
        self.destination_properties.pop()

    @property
    def source_path(self) -> str:
        return join_path(self.source_properties)

    @property
    def destination_path(self) -> str:
        return join_path(self.destination_properties)

    @property
    def source_property_tokens(self) -> list[list[str]]:
        return [self._tokens_for(prop, source=True) for prop in self.source_properties]

    @property
    def destination_property_tokens(self) -> list[list[str]]:
        return [self._tokens_for(prop, source=False) for prop in self.destination_properties]

    @property
    def source_class_tokens(self) -> list[str]:
        """Tokens of the root source type's name."""
        if self._source_class_tokens is None:
            self._source_class_tokens = self.source_tokenizer.tokenize(
                self.source_type.__name__, NameableType.NESTED
            )
        return self._source_class_tokens

    def _tokens_for(self, prop: PropertyInfo, *, source: bool) -> list[str]:
        kind = nameable_type_for(prop)
        cache = self._source_tokens if source else self._destination_tokens
        tokens = cache.get((prop.name, kind))
        if tokens is None:
            tokenizer = self.source_tokenizer if source else self.destination_tokenizer
            tokens = tokenizer.tokenize(prop.name, kind)
            cache[(prop.name, kind)] = tokens
        return tokens

    def __repr__(self) -> str:
        return (
            f"PropertyNameInfo(source={self.source_path!r}, "
            f"destination={self.destination_path!r})"
        )


def join_path(properties: list[PropertyInfo] | tuple[PropertyInfo, ...]) -> str:
    """Dotted path of property names."""
    return ".".join(prop.name for prop in properties)
