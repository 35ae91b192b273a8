"""Conditional converter protocol and match results."""

from __future__ import annotations

import enum
from typing import Protocol, runtime_checkable

from property_mapper.types import PropertyType


class MatchResult(enum.Enum):
    """How well a converter handles a source/destination type pair.

    ``FULL`` means any value of the source type converts. ``PARTIAL`` means
    conversion depends on the runtime value (``"12"`` to ``int`` works,
    ``"twelve"`` does not).
    """

    NONE = "none"
    PARTIAL = "partial"
    FULL = "full"


@runtime_checkable
class ConditionalConverter(Protocol):
    """Protocol implemented by catalog converters."""

    name: str

    def match(
        self,
        source_type: PropertyType,
        destination_type: PropertyType,
    ) -> MatchResult:
        """Check whether this converter handles the pair.

        Parameters
        ----------
        source_type : PropertyType
            Accessor value type.
        destination_type : PropertyType
            Mutator value type.

        Returns
        -------
        MatchResult
            ``NONE`` when the pair is not handled at all.
        """
