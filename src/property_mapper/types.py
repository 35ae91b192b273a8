"""Shared type aliases for mapping modules."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Literal

type PropertyType = Any
"""A resolved annotation: a class, a parameterized generic, or ``Any``."""

type TypePair = tuple[PropertyType, PropertyType]

type MatchingStrategyName = Literal["standard", "loose", "strict"]
type TokenizerName = Literal["camel_case", "underscore", "snake_camel"]

type ValueConverter = Callable[[Any], Any]
