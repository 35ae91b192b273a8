"""Converter catalog and discovery helpers."""

from __future__ import annotations

import importlib
import importlib.util
import logging
from collections.abc import Iterable
from pathlib import Path
from types import ModuleType

from property_mapper.converters.base import ConditionalConverter
from property_mapper.converters.builtins import builtin_converters
from property_mapper.errors import ConverterError

logger = logging.getLogger(__name__)


class ConverterStore:
    """Ordered catalog of conditional converters.

    Order is priority: the engine asks converters in sequence and the first
    one that answers anything but ``NONE`` decides.
    """

    def __init__(self, converters: Iterable[ConditionalConverter] | None = None) -> None:
        self._converters: list[ConditionalConverter] = []
        for converter in converters or []:
            self.register(converter)

    def register(self, converter: ConditionalConverter) -> None:
        """Append converter, replacing one with the same name in place.

        Parameters
        ----------
        converter : ConditionalConverter
            Converter instance to register.

        Raises
        ------
        ConverterError
            If converter does not provide a valid name or ``match``.
        """
        name = self._validated_name(converter)
        for index, existing in enumerate(self._converters):
            if existing.name == name:
                self._converters[index] = converter
                return
        self._converters.append(converter)

    def add_first(self, converter: ConditionalConverter) -> None:
        """Register converter ahead of every other converter."""
        name = self._validated_name(converter)
        self._converters = [c for c in self._converters if c.name != name]
        self._converters.insert(0, converter)

    def names(self) -> list[str]:
        """Return converter names in priority order."""
        return [converter.name for converter in self._converters]

    def get(self, name: str) -> ConditionalConverter:
        """Get converter by name.

        Raises
        ------
        ConverterError
            If converter name is not registered.
        """
        for converter in self._converters:
            if converter.name == name:
                return converter
        raise ConverterError(
            f"Unknown converter '{name}'. Available converters: {', '.join(self.names())}"
        )

    def converters(self) -> list[ConditionalConverter]:
        return list(self._converters)

    def load_module(self, module_or_path: str) -> None:
        """Load converter providers from module name or file path.

        .. warning::
            This method executes code from the specified module. Only load
            converters from trusted sources.
        """
        module = _import_module_or_path(module_or_path)
        _register_from_module(module, self)

    @staticmethod
    def _validated_name(converter: ConditionalConverter) -> str:
        name = getattr(converter, "name", "")
        name = name.strip() if isinstance(name, str) else ""
        if not name:
            raise ConverterError("Converter must define a non-empty 'name'.")
        if not isinstance(converter, ConditionalConverter):
            raise ConverterError(
                f"Converter '{name}' must define match(source_type, destination_type)."
            )
        return name


def _import_module_or_path(module_or_path: str) -> ModuleType:
    """Import module by import path or filesystem path.

    Parameters
    ----------
    module_or_path : str
        Python module path or local file path. Must be from a trusted source.

    Returns
    -------
    ModuleType
        Imported module object.

    Raises
    ------
    ConverterError
        If import cannot be completed.
    """
    candidate = Path(module_or_path)
    if candidate.exists():
        spec = importlib.util.spec_from_file_location(candidate.stem, candidate)
        if spec is None or spec.loader is None:
            raise ConverterError(f"Unable to load converter module from {candidate}.")
        module = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(module)
        return module

    try:
        return importlib.import_module(module_or_path)
    except Exception as exc:
        raise ConverterError(
            f"Unable to import converter module '{module_or_path}': {exc}"
        ) from exc


def _register_from_module(module: ModuleType, store: ConverterStore) -> None:
    """Register converters found in ``module``.

    User converters take priority over the built-ins, so they are added
    first, keeping their relative order.
    """
    if hasattr(module, "register_converters"):
        module.register_converters(store)
        return

    converters_obj = getattr(module, "CONVERTERS", None)
    if converters_obj is not None:
        for converter in reversed(list(converters_obj)):
            store.add_first(converter)
        return

    converter_obj = getattr(module, "CONVERTER", None)
    if converter_obj is not None:
        store.add_first(converter_obj)
        return

    raise ConverterError(
        "Converter module must expose register_converters(store), CONVERTERS, or CONVERTER."
    )


def create_default_store(extra_modules: Iterable[str] | None = None) -> ConverterStore:
    """Create the default converter catalog.

    Parameters
    ----------
    extra_modules : Iterable[str] | None, optional
        Additional converter modules to load ahead of the built-ins.

    Returns
    -------
    ConverterStore
        Catalog with built-in and external converters.
    """
    store = ConverterStore(builtin_converters())
    for module in extra_modules or []:
        store.load_module(module)
        logger.debug("Loaded converters from %s", module)
    return store
