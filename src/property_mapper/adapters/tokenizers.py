"""Property name tokenizers."""

from __future__ import annotations

import enum
import re

from property_mapper.types import TokenizerName

_CAMEL_HUMPS = re.compile(r"[A-Z]+(?=[A-Z][a-z])|[A-Z]?[a-z]+|[A-Z]+|\d+")


class NameableType(enum.Enum):
    """Kind of property being tokenized."""

    LEAF = "leaf"
    NESTED = "nested"


class CamelCaseTokenizer:
    """Split ``firstName`` into ``first``, ``Name``."""

    name = "camel_case"

    def tokenize(self, name: str, nameable_type: NameableType) -> list[str]:
        del nameable_type
        return _CAMEL_HUMPS.findall(name)


class UnderscoreTokenizer:
    """Split ``first_name`` into ``first``, ``name``."""

    name = "underscore"

    def tokenize(self, name: str, nameable_type: NameableType) -> list[str]:
        del nameable_type
        return [token for token in name.split("_") if token]


class SnakeCamelTokenizer:
    """Split on underscores, then on camel-case humps."""

    name = "snake_camel"

    def tokenize(self, name: str, nameable_type: NameableType) -> list[str]:
        del nameable_type
        tokens: list[str] = []
        for part in name.split("_"):
            tokens.extend(_CAMEL_HUMPS.findall(part))
        return tokens


_TOKENIZERS = {
    "camel_case": CamelCaseTokenizer,
    "underscore": UnderscoreTokenizer,
    "snake_camel": SnakeCamelTokenizer,
}


def get_tokenizer(
    name: TokenizerName,
) -> CamelCaseTokenizer | UnderscoreTokenizer | SnakeCamelTokenizer:
    """Resolve a tokenizer by configuration name.

    Raises
    ------
    KeyError
        If ``name`` is not a known tokenizer.
    """
    return _TOKENIZERS[name]()
