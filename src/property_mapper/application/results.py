"""Application-layer result objects."""

from __future__ import annotations

from dataclasses import asdict, dataclass


@dataclass(frozen=True)
class MappingRow:
    """Presentation view of one committed mapping."""

    source: str
    destination: str
    converter: str | None = None
    cyclic: bool = False
    explicit: bool = False

    def as_dict(self) -> dict[str, str | bool | None]:
        return asdict(self)
