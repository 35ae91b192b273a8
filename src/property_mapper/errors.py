"""Exception hierarchy and error collection for mapping configuration."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from property_mapper.adapters.introspection import PropertyInfo
    from property_mapper.mappings import PropertyMapping


class PropertyMapperError(Exception):
    """Base error for property-mapper failures."""

    exit_code = 1


class IntrospectionError(PropertyMapperError):
    """Raised when a type cannot be described as accessors and mutators."""


class ConverterError(PropertyMapperError):
    """Raised when the converter catalog cannot be assembled."""


@dataclass(frozen=True)
class ErrorMessage:
    """Single configuration problem found while building mappings."""

    message: str

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class AmbiguousDestination(ErrorMessage):
    """Destination property matched by several equally likely source paths."""

    destination_path: str = ""
    mutator: PropertyInfo | None = None
    candidates: tuple[PropertyMapping, ...] = field(default_factory=tuple)


class ConfigurationError(PropertyMapperError):
    """Aggregate of configuration problems reported by a single build."""

    exit_code = 2

    def __init__(self, messages: Sequence[ErrorMessage]) -> None:
        self.messages = list(messages)
        lines = [f"{index}) {message}" for index, message in enumerate(self.messages, 1)]
        super().__init__(
            f"{len(self.messages)} mapping configuration error(s):\n" + "\n".join(lines)
        )


class Errors:
    """Collect configuration problems and raise them together."""

    def __init__(self) -> None:
        self._messages: list[ErrorMessage] = []

    def __len__(self) -> int:
        return len(self._messages)

    @property
    def messages(self) -> list[ErrorMessage]:
        return list(self._messages)

    def add(self, message: ErrorMessage) -> Errors:
        self._messages.append(message)
        return self

    def ambiguous_destination(
        self,
        destination_path: str,
        mutator: PropertyInfo,
        candidates: Sequence[PropertyMapping],
    ) -> Errors:
        """Record that ``destination_path`` has no unique best source.

        Parameters
        ----------
        destination_path : str
            Dotted destination path being resolved.
        mutator : PropertyInfo
            Last destination property on that path.
        candidates : Sequence[PropertyMapping]
            Competing candidate mappings.

        Returns
        -------
        Errors
            This collector, for chaining.
        """
        sources = "\n".join(f"  {candidate.source_path}" for candidate in candidates)
        message = (
            f"The destination property {destination_path} matches multiple source "
            f"property hierarchies:\n{sources}"
        )
        return self.add(
            AmbiguousDestination(
                message=message,
                destination_path=destination_path,
                mutator=mutator,
                candidates=tuple(candidates),
            )
        )

    def raise_if_errors(self) -> None:
        """Raise ``ConfigurationError`` if any problem was collected.

        The collector is emptied before raising.
        """
        if not self._messages:
            return
        messages, self._messages = self._messages, []
        raise ConfigurationError(messages)
