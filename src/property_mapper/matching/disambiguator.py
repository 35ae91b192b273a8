"""Pick the closest of several competing mappings by name-token overlap."""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence

from property_mapper.application.ports import NameTokenizer
from property_mapper.mappings import PropertyMapping
from property_mapper.matching.path_tracker import nameable_type_for

logger = logging.getLogger(__name__)


def match_ratio(
    mapping: PropertyMapping,
    source_tokenizer: NameTokenizer,
    destination_tokenizer: NameTokenizer,
) -> float:
    """Share of tokens matched between the two paths of ``mapping``.

    Destination tokens are matched case-insensitively against the pooled
    source tokens, each source token at most once, in path order. Matching
    stops once every source token is used.

    Returns
    -------
    float
        ``matched / (source_tokens + destination_tokens)``, or NaN when
        neither path has tokens. NaN never wins nor ties in ``disambiguate``.
    """
    source_tokens = [
        [
            token.lower()
            for token in source_tokenizer.tokenize(prop.name, nameable_type_for(prop))
        ]
        for prop in mapping.source_properties
    ]
    used = [[False] * len(tokens) for tokens in source_tokens]
    total_source = sum(len(tokens) for tokens in source_tokens)
    total_destination = 0
    matches = 0

    for prop in mapping.destination_properties:
        destination_tokens = destination_tokenizer.tokenize(prop.name, nameable_type_for(prop))
        total_destination += len(destination_tokens)
        for destination_token in destination_tokens:
            if matches >= total_source:
                break
            wanted = destination_token.lower()
            for i, tokens in enumerate(source_tokens):
                j = next(
                    (k for k, token in enumerate(tokens) if not used[i][k] and token == wanted),
                    None,
                )
                if j is not None:
                    used[i][j] = True
                    matches += 1
                    break

    total = total_source + total_destination
    return matches / total if total else math.nan


def disambiguate(
    mappings: Sequence[PropertyMapping],
    source_tokenizer: NameTokenizer,
    destination_tokenizer: NameTokenizer,
) -> PropertyMapping | None:
    """Return the candidate with the strictly highest match ratio.

    Candidates are compared in order. A ratio equal to the best so far marks
    a tie; a strictly higher ratio becomes the new best and clears the tie.

    Returns
    -------
    PropertyMapping | None
        The closest mapping, or ``None`` when the best ratio is tied.
    """
    max_ratio = -1.0
    multiple_max = False
    closest: PropertyMapping | None = None

    for mapping in mappings:
        ratio = match_ratio(mapping, source_tokenizer, destination_tokenizer)
        logger.debug("Candidate %s scored %.4f", mapping, ratio)
        if ratio == max_ratio:
            multiple_max = True
        if ratio > max_ratio:
            max_ratio = ratio
            closest = mapping
            multiple_max = False

    return None if multiple_max else closest
