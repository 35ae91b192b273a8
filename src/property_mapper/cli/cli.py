#!/usr/bin/env python3
"""
property_mapper.cli.cli

Typer-based CLI for inspecting the implicit mappings between two classes.

Examples
--------
Show how ``Order`` properties map onto ``OrderDTO``:

    property-mapper inspect shop.models:Order shop.dto:OrderDTO

Load classes from a file and print JSON:

    property-mapper inspect ./models.py:Order ./models.py:OrderDTO --json
"""

from __future__ import annotations

import importlib
import importlib.util
import json
import logging
import sys
import traceback
from pathlib import Path

import typer

from property_mapper.errors import ConverterError, PropertyMapperError

app = typer.Typer(
    name="property-mapper",
    help="Discover property-to-property mappings between Python classes.",
    no_args_is_help=True,
)

STRATEGY_HELP = "Matching strategy: standard, loose or strict."
TOKENIZER_HELP = "Name tokenizer: snake_camel, camel_case or underscore."


# -----------------------------
# Utilities
# -----------------------------
def _print_error(exc: Exception, debug: bool) -> int:
    """Print a user-friendly error.

    Parameters
    ----------
    exc : Exception
        Exception raised while building mappings.
    debug : bool
        Whether to include traceback details.

    Returns
    -------
    int
        Process exit code.
    """
    typer.echo(f"✗ {type(exc).__name__}: {exc}", err=True)
    if debug:
        typer.echo("\nTraceback:", err=True)
        typer.echo("".join(traceback.format_exception(type(exc), exc, exc.__traceback__)), err=True)
    code = getattr(exc, "exit_code", None)
    if isinstance(code, int) and code > 0:
        return code
    return 1


def _load_class(reference: str) -> type:
    """Resolve ``module:Class`` or ``path/to/file.py:Class``.

    Raises
    ------
    typer.BadParameter
        If the reference is malformed or does not name a class.
    """
    module_ref, sep, attr_path = reference.rpartition(":")
    if not sep or not module_ref or not attr_path:
        raise typer.BadParameter(
            f"Invalid class reference '{reference}'. Use module:Class or file.py:Class."
        )

    candidate = Path(module_ref)
    try:
        if candidate.suffix == ".py" and candidate.exists():
            spec = importlib.util.spec_from_file_location(candidate.stem, candidate)
            if spec is None or spec.loader is None:
                raise typer.BadParameter(f"Unable to load module from {candidate}.")
            module = importlib.util.module_from_spec(spec)
            sys.modules[candidate.stem] = module
            spec.loader.exec_module(module)
        else:
            module = importlib.import_module(module_ref)
    except ImportError as exc:
        raise typer.BadParameter(f"Unable to import '{module_ref}': {exc}") from exc

    target: object = module
    for part in attr_path.split("."):
        try:
            target = getattr(target, part)
        except AttributeError as exc:
            raise typer.BadParameter(f"'{module_ref}' has no attribute '{attr_path}'.") from exc
    if not isinstance(target, type):
        raise typer.BadParameter(f"'{reference}' is not a class.")
    return target


# -----------------------------
# Global options
# -----------------------------
@app.callback()
def _main(
    ctx: typer.Context,
    debug: bool = typer.Option(
        False, "--debug", help="Show debug logging and full tracebacks on error."
    ),
) -> None:
    """Initialize shared CLI state.

    Parameters
    ----------
    ctx : typer.Context
        Typer context object used to store shared state.
    debug : bool, default=False
        Whether to enable debug logging and error output.
    """
    if debug:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    ctx.obj = {"debug": debug}


# -----------------------------
# Commands
# -----------------------------
@app.command("inspect")
def inspect_cmd(
    ctx: typer.Context,
    source: str = typer.Argument(..., help="Source class as module:Class or file.py:Class."),
    destination: str = typer.Argument(
        ..., help="Destination class as module:Class or file.py:Class."
    ),
    strategy: str = typer.Option("standard", "--strategy", help=STRATEGY_HELP),
    source_tokenizer: str = typer.Option(
        "snake_camel", "--source-tokenizer", help=TOKENIZER_HELP
    ),
    destination_tokenizer: str = typer.Option(
        "snake_camel", "--destination-tokenizer", help=TOKENIZER_HELP
    ),
    ignore_ambiguity: bool = typer.Option(
        False, "--ignore-ambiguity", help="Leave ambiguous destinations unmapped."
    ),
    no_properties: bool = typer.Option(
        False, "--no-properties", help="Ignore @property members when introspecting."
    ),
    converter_module: list[str] | None = typer.Option(
        None,
        "--converter-module",
        help="Module import path or file path registering converters (repeatable).",
    ),
    skip: list[str] | None = typer.Option(
        None, "--skip", help="Destination path excluded from nested matching (repeatable)."
    ),
    as_json: bool = typer.Option(False, "--json", help="Print mappings as JSON."),
) -> None:
    """Print the mappings discovered from SOURCE to DESTINATION.

    Parameters
    ----------
    ctx : typer.Context
        Typer context containing global options.
    source : str
        Source class reference.
    destination : str
        Destination class reference.
    strategy : str, default="standard"
        Matching strategy name.
    ignore_ambiguity : bool, default=False
        Whether ambiguous destination properties are skipped instead of
        failing the command.
    as_json : bool, default=False
        Emit a JSON array instead of text lines.
    """
    debug: bool = bool(ctx.obj.get("debug", False))

    source_type = _load_class(source)
    destination_type = _load_class(destination)

    try:
        from property_mapper.api import build_configuration, build_type_map, describe_mappings

        configuration = build_configuration(
            matching_strategy=strategy,
            source_name_tokenizer=source_tokenizer,
            destination_name_tokenizer=destination_tokenizer,
            ambiguity_ignored=ignore_ambiguity,
            include_properties=not no_properties,
        )
        type_map = build_type_map(
            source_type,
            destination_type,
            configuration=configuration,
            converter_modules=converter_module,
            skip=skip,
        )
        rows = describe_mappings(type_map)
    except PropertyMapperError as exc:
        raise typer.Exit(code=_print_error(exc, debug))
    except Exception as exc:
        # Unexpected crash: still show a clean message; debug prints traceback.
        raise typer.Exit(code=_print_error(exc, debug))

    if as_json:
        typer.echo(json.dumps([row.as_dict() for row in rows], indent=2))
        return

    typer.echo(
        f"{source_type.__qualname__} -> {destination_type.__qualname__}: "
        f"{len(rows)} mapping(s)"
    )
    for row in rows:
        flags: list[str] = []
        if row.cyclic:
            flags.append("cyclic")
        if row.explicit:
            flags.append("explicit")
        if row.converter:
            flags.append(f"converter={row.converter}")
        suffix = f"  [{', '.join(flags)}]" if flags else ""
        typer.echo(f"  {row.source} -> {row.destination}{suffix}")
    unmapped = type_map.unmapped_destination_paths()
    if unmapped:
        typer.echo(f"Unmapped destination properties: {', '.join(unmapped)}")


@app.command("converters")
def converters_cmd(
    ctx: typer.Context,
    converter_module: list[str] | None = typer.Option(
        None,
        "--converter-module",
        help="Module import path or file path registering converters (repeatable).",
    ),
) -> None:
    """List converters in priority order."""
    debug: bool = bool(ctx.obj.get("debug", False))
    try:
        from property_mapper.converters.registry import create_default_store

        store = create_default_store(converter_module)
    except ConverterError as exc:
        raise typer.Exit(code=_print_error(exc, debug))

    for index, name in enumerate(store.names(), 1):
        typer.echo(f"{index}. {name}")


if __name__ == "__main__":
    app()
