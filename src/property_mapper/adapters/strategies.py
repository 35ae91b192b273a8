"""Matching strategies deciding whether two property paths correspond."""

from __future__ import annotations

from property_mapper.matching.path_tracker import PropertyNameInfo
from property_mapper.types import MatchingStrategyName


def _lower(tokens: list[str]) -> list[str]:
    return [token.lower() for token in tokens]


class StandardMatchingStrategy:
    """Every destination token and every source property must be matched.

    * each destination token equals a token of some source property, or a
      token of the source type's name;
    * each source property contributes at least one matched token.
    """

    name = "standard"

    def matches(self, path_state: PropertyNameInfo) -> bool:
        source_tokens = [_lower(tokens) for tokens in path_state.source_property_tokens]
        class_tokens = set(_lower(path_state.source_class_tokens))
        matched_sources = [False] * len(source_tokens)

        for destination_tokens in path_state.destination_property_tokens:
            for token in _lower(destination_tokens):
                found = False
                for index, tokens in enumerate(source_tokens):
                    if token in tokens:
                        matched_sources[index] = True
                        found = True
                if not found and token not in class_tokens:
                    return False

        return all(matched_sources)

    def is_exact(self) -> bool:
        return False


class LooseMatchingStrategy:
    """Only the last properties on both sides carry weight.

    * each token of the last destination property equals some source token;
    * the last source property has at least one token found on the
      destination side.
    """

    name = "loose"

    def matches(self, path_state: PropertyNameInfo) -> bool:
        source_tokens = [_lower(tokens) for tokens in path_state.source_property_tokens]
        destination_tokens = [
            _lower(tokens) for tokens in path_state.destination_property_tokens
        ]
        if not source_tokens or not destination_tokens:
            return False

        all_source = {token for tokens in source_tokens for token in tokens}
        all_source.update(_lower(path_state.source_class_tokens))
        if not all(token in all_source for token in destination_tokens[-1]):
            return False

        all_destination = {token for tokens in destination_tokens for token in tokens}
        return any(token in all_destination for token in source_tokens[-1])

    def is_exact(self) -> bool:
        return False


class StrictMatchingStrategy:
    """Property paths must have identical shape and identical tokens, in order."""

    name = "strict"

    def matches(self, path_state: PropertyNameInfo) -> bool:
        source_tokens = path_state.source_property_tokens
        destination_tokens = path_state.destination_property_tokens
        if len(source_tokens) != len(destination_tokens):
            return False
        return all(
            _lower(source) == _lower(destination)
            for source, destination in zip(source_tokens, destination_tokens, strict=True)
        )

    def is_exact(self) -> bool:
        return True


_STRATEGIES = {
    "standard": StandardMatchingStrategy,
    "loose": LooseMatchingStrategy,
    "strict": StrictMatchingStrategy,
}


def get_matching_strategy(
    name: MatchingStrategyName,
) -> StandardMatchingStrategy | LooseMatchingStrategy | StrictMatchingStrategy:
    """Resolve a matching strategy by configuration name.

    Raises
    ------
    KeyError
        If ``name`` is not a known strategy.
    """
    return _STRATEGIES[name]()
