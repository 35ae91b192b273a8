#!/usr/bin/env python3
"""Example: discover mappings from a domain model onto a flat pydantic view."""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel

from property_mapper import build_type_map, describe_mappings
from property_mapper.api import build_configuration
from property_mapper.errors import ConfigurationError
from property_mapper.mappings import TypeMap
from property_mapper.store import TypeMapStore


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


@dataclass
class AddressLine:
    line: str


@dataclass
class Letter:
    recipient: AddressLine


@dataclass
class Parcel:
    recipient: Address


@dataclass
class Account:
    user_name: str
    user: Customer


@dataclass
class AccountView:
    user_name: str


def _print(type_map: TypeMap) -> None:
    for row in describe_mappings(type_map):
        flags = " (cyclic)" if row.cyclic else ""
        print(f"  {row.source:<24} -> {row.destination}{flags}")


def example_implicit_mapping() -> None:
    """Flatten nested source properties onto destination names."""
    print("\n" + "=" * 60)
    print("Example 1: Order -> OrderSummary")
    print("=" * 60)
    _print(build_type_map(Order, OrderSummary))


def example_reuse_store() -> None:
    """Reuse a stored type map with explicit mappings for a nested pair."""
    print("\n" + "=" * 60)
    print("Example 2: explicit nested mappings")
    print("=" * 60)

    store = TypeMapStore()
    build_type_map(Address, AddressLine, store=store, explicit_mappings={"line": "street"})
    _print(build_type_map(Parcel, Letter, store=store))


def example_ambiguity() -> None:
    """Show the aggregated error for ambiguous destinations."""
    print("\n" + "=" * 60)
    print("Example 3: ambiguous destination")
    print("=" * 60)
    try:
        build_type_map(Account, AccountView)
    except ConfigurationError as exc:
        print(exc)

    configuration = build_configuration(matching_strategy="strict")
    _print(build_type_map(Account, AccountView, configuration=configuration))


def main() -> None:
    example_implicit_mapping()
    example_reuse_store()
    example_ambiguity()


if __name__ == "__main__":
    main()
