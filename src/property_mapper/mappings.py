"""Property mappings and the type maps that own them."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, replace

from property_mapper.adapters.introspection import (
    PropertyInfo,
    TypeInfoRegistry,
    default_registry,
)
from property_mapper.errors import ConfigurationError, ErrorMessage
from property_mapper.matching.matchable import is_matchable
from property_mapper.matching.path_tracker import join_path
from property_mapper.types import ValueConverter

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class PropertyMapping:
    """Pairing of a source accessor path with a destination mutator path.

    Parameters
    ----------
    source_properties : tuple[PropertyInfo, ...]
        Accessors read from the source root, outermost first.
    destination_properties : tuple[PropertyInfo, ...]
        Mutators written from the destination root, outermost first.
    converter : ValueConverter | None, default=None
        Custom converter taken from a stored type map.
    cyclic : bool, default=False
        Recorded because the destination property's type is already being
        built further up the destination path.
    explicit : bool, default=False
        Declared by the caller rather than discovered.

    Notes
    -----
    Equality and hashing use the destination path only: a type map holds at
    most one mapping per destination path.
    """

    source_properties: tuple[PropertyInfo, ...]
    destination_properties: tuple[PropertyInfo, ...]
    converter: ValueConverter | None = None
    cyclic: bool = False
    explicit: bool = False

    @classmethod
    def of(
        cls,
        source_properties: Sequence[PropertyInfo],
        destination_properties: Sequence[PropertyInfo],
        *,
        converter: ValueConverter | None = None,
        cyclic: bool = False,
        explicit: bool = False,
    ) -> PropertyMapping:
        """Snapshot mutable path stacks into a mapping."""
        return cls(
            source_properties=tuple(source_properties),
            destination_properties=tuple(destination_properties),
            converter=converter,
            cyclic=cyclic,
            explicit=explicit,
        )

    @property
    def source_path(self) -> str:
        return join_path(self.source_properties)

    @property
    def path(self) -> str:
        """Dotted destination path."""
        return join_path(self.destination_properties)

    @property
    def last_destination_property(self) -> PropertyInfo:
        return self.destination_properties[-1]

    def merged_copy(
        self,
        source_prefix: Sequence[PropertyInfo],
        destination_prefix: Sequence[PropertyInfo],
    ) -> PropertyMapping:
        """Copy this mapping re-rooted under the given path prefixes."""
        return replace(
            self,
            source_properties=tuple(source_prefix) + self.source_properties,
            destination_properties=tuple(destination_prefix) + self.destination_properties,
            explicit=False,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PropertyMapping):
            return NotImplemented
        return self.path == other.path

    def __hash__(self) -> int:
        return hash(self.path)

    def __str__(self) -> str:
        return f"{self.source_path} -> {self.path}"


class TypeMap:
    """Mappings from ``source_type`` to ``destination_type``.

    Explicit mappings and skipped paths declared here take precedence over
    implicit matching, which only fills destination paths left open.
    """

    def __init__(
        self,
        source_type: type,
        destination_type: type,
        *,
        converter: ValueConverter | None = None,
        registry: TypeInfoRegistry | None = None,
        include_properties: bool = True,
    ) -> None:
        self.source_type = source_type
        self.destination_type = destination_type
        self.converter = converter
        self._registry = registry or default_registry
        self._include_properties = include_properties
        self._mappings: dict[str, PropertyMapping] = {}
        self._skipped: set[str] = set()

    def add_mapping(self, mapping: PropertyMapping) -> None:
        """Commit ``mapping``, replacing any mapping with the same path.

        An explicit mapping is only replaced by another explicit mapping.
        """
        existing = self._mappings.get(mapping.path)
        if existing is not None and existing.explicit and not mapping.explicit:
            logger.debug("Keeping explicit mapping %s over %s", existing, mapping)
            return
        logger.debug(
            "%s -> %s: %s",
            self.source_type.__name__,
            self.destination_type.__name__,
            mapping,
        )
        self._mappings[mapping.path] = mapping

    def map_property(
        self,
        source_path: str,
        destination_path: str,
        converter: ValueConverter | None = None,
    ) -> PropertyMapping:
        """Declare an explicit mapping between two dotted paths.

        Parameters
        ----------
        source_path : str
            Dotted accessor path on ``source_type``, e.g. ``"customer.name"``.
        destination_path : str
            Dotted mutator path on ``destination_type``.
        converter : ValueConverter | None, default=None
            Optional custom converter.

        Returns
        -------
        PropertyMapping
            The committed explicit mapping.

        Raises
        ------
        ConfigurationError
            If either path does not resolve.
        """
        mapping = PropertyMapping.of(
            self._resolve(self.source_type, source_path, readable=True),
            self._resolve(self.destination_type, destination_path, readable=False),
            converter=converter,
            explicit=True,
        )
        self.add_mapping(mapping)
        return mapping

    def skip(self, destination_path: str) -> None:
        """Exclude ``destination_path`` from implicit nested matching."""
        self._skipped.add(destination_path)

    def is_mapped(self, path: str) -> bool:
        return path in self._mappings

    def is_skipped(self, path: str) -> bool:
        return path in self._skipped

    def get_mapping(self, path: str) -> PropertyMapping | None:
        return self._mappings.get(path)

    def get_mappings(self) -> list[PropertyMapping]:
        return list(self._mappings.values())

    def unmapped_destination_paths(self) -> list[str]:
        """Leaf destination paths with neither a mapping nor a mapped parent."""
        unmapped: list[str] = []
        self._collect_unmapped(self.destination_type, [], {self.destination_type}, unmapped)
        return unmapped

    def _collect_unmapped(
        self,
        cls: type,
        prefix: list[str],
        visited: set[type],
        out: list[str],
    ) -> None:
        info = self._registry.type_info_for(cls, include_properties=self._include_properties)
        for name, mutator in info.mutators.items():
            path = ".".join([*prefix, name])
            if self.is_mapped(path) or self.is_skipped(path):
                continue
            value_type = mutator.value_type
            if is_matchable(value_type) and value_type not in visited:
                visited.add(value_type)
                self._collect_unmapped(value_type, [*prefix, name], visited, out)
                visited.discard(value_type)
            elif not is_matchable(value_type):
                out.append(path)

    def _resolve(self, root: type, dotted: str, *, readable: bool) -> list[PropertyInfo]:
        properties: list[PropertyInfo] = []
        current: type = root
        for name in dotted.split("."):
            info = self._registry.type_info_for(
                current, include_properties=self._include_properties
            )
            members = info.accessors if readable else info.mutators
            prop = members.get(name)
            if prop is None:
                side = "source" if readable else "destination"
                raise ConfigurationError(
                    [ErrorMessage(f"Unknown {side} property '{dotted}' on {root.__qualname__}.")]
                )
            properties.append(prop)
            current = prop.value_type
        return properties

    def __iter__(self) -> Iterator[PropertyMapping]:
        return iter(self._mappings.values())

    def __len__(self) -> int:
        return len(self._mappings)

    def __repr__(self) -> str:
        return (
            f"TypeMap({self.source_type.__qualname__} -> "
            f"{self.destination_type.__qualname__}, {len(self)} mappings)"
        )
