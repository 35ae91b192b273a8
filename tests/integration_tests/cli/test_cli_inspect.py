"""Integration tests running the CLI against classes loaded from files."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from property_mapper.cli import cli as cli_module

runner = CliRunner()

MODELS = '''
from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel


@dataclass
class Address:
    street: str
    city: str


@dataclass
class Customer:
    name: str
    address: Address


@dataclass
class Order:
    customer: Customer
    total: float
    parent: Order | None = None


class OrderSummary(BaseModel):
    customer_name: str
    customer_address_city: str
    total: str
    parent: OrderSummary | None = None
    notes: str = ""


@dataclass
class Account:
    user_name: str
    user: Customer


@dataclass
class AccountView:
    user_name: str
'''

CONVERTERS = '''
from property_mapper.converters.base import MatchResult


class NeverConverter:
    name = "never"

    def match(self, source_type, destination_type):
        return MatchResult.NONE


CONVERTERS = [NeverConverter()]
'''


@pytest.fixture()
def models_path(tmp_path: Path) -> Path:
    """Write a module of sample classes."""
    path = tmp_path / "shop_models.py"
    path.write_text(MODELS)
    return path


def test_inspect_prints_text_report(models_path: Path) -> None:
    """Print mappings, flags and unmapped destinations."""
    result = runner.invoke(
        cli_module.app,
        ["inspect", f"{models_path}:Order", f"{models_path}:OrderSummary"],
    )

    assert result.exit_code == 0, result.output
    lines = result.output.splitlines()
    assert lines[0] == "Order -> OrderSummary: 4 mapping(s)"
    assert "  customer.name -> customer_name" in lines
    assert "  customer.address.city -> customer_address_city" in lines
    assert "  total -> total" in lines
    assert "  parent -> parent  [cyclic]" in lines
    assert lines[-1] == "Unmapped destination properties: notes"


def test_inspect_json_output(models_path: Path) -> None:
    """Emit one JSON object per mapping."""
    result = runner.invoke(
        cli_module.app,
        [
            "inspect",
            f"{models_path}:Order",
            f"{models_path}:OrderSummary",
            "--strategy",
            "loose",
            "--json",
        ],
    )

    assert result.exit_code == 0, result.output
    rows = json.loads(result.output)
    destinations = {row["destination"]: row["source"] for row in rows}
    assert destinations["customer_address_city"] == "customer.address.city"
    assert destinations["total"] == "total"


def test_inspect_ambiguity_exit_code(models_path: Path) -> None:
    """Fail with exit code 2 unless ambiguity is ignored."""
    args = ["inspect", f"{models_path}:Account", f"{models_path}:AccountView"]

    failed = runner.invoke(cli_module.app, args)
    assert failed.exit_code == 2
    assert "user_name" in failed.output

    ignored = runner.invoke(cli_module.app, [*args, "--ignore-ambiguity"])
    assert ignored.exit_code == 0, ignored.output
    assert "Unmapped destination properties: user_name" in ignored.output


def test_converters_with_module_file(tmp_path: Path) -> None:
    """List external converters ahead of the built-ins."""
    path = tmp_path / "extra_converters.py"
    path.write_text(CONVERTERS)

    result = runner.invoke(cli_module.app, ["converters", "--converter-module", str(path)])

    assert result.exit_code == 0, result.output
    assert result.output.splitlines()[:2] == ["1. never", "2. collection"]
