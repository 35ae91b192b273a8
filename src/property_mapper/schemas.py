"""Pydantic schemas for runtime validation of matching configuration."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, field_validator

from property_mapper.types import MatchingStrategyName, TokenizerName


class MatchingConfiguration(BaseModel):
    """Validated settings for implicit mapping."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    matching_strategy: MatchingStrategyName = "standard"
    source_name_tokenizer: TokenizerName = "snake_camel"
    destination_name_tokenizer: TokenizerName = "snake_camel"
    ambiguity_ignored: bool = False
    implicit_mapping_enabled: bool = True
    include_properties: bool = True

    @field_validator(
        "matching_strategy",
        "source_name_tokenizer",
        "destination_name_tokenizer",
        mode="before",
    )
    @classmethod
    def _normalize_name(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().lower().replace("-", "_")
        return value
