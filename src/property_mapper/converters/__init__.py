"""Conditional converters and the converter catalog."""

from .base import ConditionalConverter, MatchResult
from .registry import ConverterStore, create_default_store

__all__ = ["ConditionalConverter", "ConverterStore", "MatchResult", "create_default_store"]
