"""End-to-end smoke tests for the installed CLI entrypoint."""

from __future__ import annotations

import subprocess
from pathlib import Path

import property_mapper

MODELS = """
from dataclasses import dataclass


@dataclass
class Person:
    first_name: str
    age: int


@dataclass
class PersonRow:
    firstName: str
    age: str
"""


def test_package_import_smoke() -> None:
    """Ensure package can be imported in the test process."""
    assert property_mapper.__version__


def test_cli_help_smoke() -> None:
    """Ensure the installed CLI entrypoint responds to --help."""
    result = subprocess.run(
        ["property-mapper", "--help"],
        capture_output=True,
        text=True,
        check=False,
    )

    assert result.returncode == 0, result.stderr
    assert "Discover property-to-property mappings" in result.stdout


def test_cli_inspect_file_classes(tmp_path: Path) -> None:
    """Run a full inspection through the installed entrypoint."""
    models = tmp_path / "people.py"
    models.write_text(MODELS)

    result = subprocess.run(
        ["property-mapper", "inspect", f"{models}:Person", f"{models}:PersonRow"],
        capture_output=True,
        text=True,
        check=False,
    )

    assert result.returncode == 0, result.stderr
    assert "first_name -> firstName" in result.stdout
    assert "age -> age" in result.stdout


def test_cli_bad_class_reference_fails_cleanly() -> None:
    """Ensure CLI returns a usage error for an unresolvable class."""
    result = subprocess.run(
        ["property-mapper", "inspect", "no_such_module:Thing", "pathlib:Path"],
        capture_output=True,
        text=True,
        check=False,
    )

    assert result.returncode != 0
    assert "unable to import" in result.stderr.lower()
