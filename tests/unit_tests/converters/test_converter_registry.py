"""Unit tests for the converter catalog and external converter loading."""

from __future__ import annotations

from pathlib import Path
from types import ModuleType

import pytest

from property_mapper.converters.base import MatchResult
from property_mapper.converters.registry import (
    ConverterStore,
    _register_from_module,
    create_default_store,
)
from property_mapper.errors import ConverterError


class NamedConverter:
    """Test double answering a fixed result."""

    def __init__(self, name: str, result: MatchResult = MatchResult.NONE) -> None:
        """Initialize name and answer."""
        self.name = name
        self.result = result

    def match(self, source_type: object, destination_type: object) -> MatchResult:
        """Return the configured answer."""
        del source_type, destination_type
        return self.result


def test_register_replaces_same_name_in_place() -> None:
    """Keep catalog order when a converter is re-registered."""
    store = ConverterStore([NamedConverter("a"), NamedConverter("b")])
    replacement = NamedConverter("a", MatchResult.FULL)

    store.register(replacement)

    assert store.names() == ["a", "b"]
    assert store.get("a") is replacement


def test_add_first_moves_converter_ahead() -> None:
    """Give a converter the highest priority."""
    store = ConverterStore([NamedConverter("a"), NamedConverter("b")])

    store.add_first(NamedConverter("b"))

    assert store.names() == ["b", "a"]


def test_get_unknown_lists_available() -> None:
    """Name available converters in the lookup error."""
    store = ConverterStore([NamedConverter("a")])

    with pytest.raises(ConverterError, match="Available converters: a"):
        store.get("missing")


def test_register_rejects_invalid_converters() -> None:
    """Require a non-empty name and a match method."""
    store = ConverterStore()

    with pytest.raises(ConverterError, match="non-empty"):
        store.register(NamedConverter(" "))

    class NoMatch:
        name = "broken"

    with pytest.raises(ConverterError, match="must define match"):
        store.register(NoMatch())  # type: ignore[arg-type]


def test_module_converter_list_keeps_order_ahead_of_builtins() -> None:
    """Place a module's CONVERTERS first, in declaration order."""
    module = ModuleType("custom_converters")
    module.CONVERTERS = [NamedConverter("x"), NamedConverter("y")]  # type: ignore[attr-defined]
    store = create_default_store()

    _register_from_module(module, store)

    assert store.names()[:3] == ["x", "y", "collection"]


def test_module_register_hook_is_called() -> None:
    """Let a module register converters itself."""
    module = ModuleType("hooked")

    def register_converters(store: ConverterStore) -> None:
        store.register(NamedConverter("hooked"))

    module.register_converters = register_converters  # type: ignore[attr-defined]
    store = ConverterStore()

    _register_from_module(module, store)

    assert store.names() == ["hooked"]


def test_module_without_converters_is_rejected() -> None:
    """Reject modules exposing no converter entry point."""
    with pytest.raises(ConverterError, match="register_converters"):
        _register_from_module(ModuleType("empty"), ConverterStore())


def test_load_module_from_file(tmp_path: Path) -> None:
    """Load a single CONVERTER from a Python file."""
    path = tmp_path / "money.py"
    path.write_text(
        "from property_mapper.converters.base import MatchResult\n"
        "\n"
        "class MoneyConverter:\n"
        "    name = 'money'\n"
        "\n"
        "    def match(self, source_type, destination_type):\n"
        "        return MatchResult.NONE\n"
        "\n"
        "CONVERTER = MoneyConverter()\n"
    )

    store = create_default_store([str(path)])

    assert store.names()[0] == "money"
    assert len(store.converters()) == 9


def test_load_unknown_module_fails() -> None:
    """Wrap import failures in a converter error."""
    with pytest.raises(ConverterError, match="Unable to import"):
        create_default_store(["definitely_missing_converter_module"])
