"""Unit tests for implicit mapping traversal and commit rules."""

from __future__ import annotations

from dataclasses import dataclass

import pytest

from property_mapper.adapters.introspection import TypeInfoRegistry
from property_mapper.adapters.strategies import (
    LooseMatchingStrategy,
    StandardMatchingStrategy,
    StrictMatchingStrategy,
)
from property_mapper.adapters.tokenizers import SnakeCamelTokenizer
from property_mapper.converters.base import MatchResult
from property_mapper.converters.registry import create_default_store
from property_mapper.errors import AmbiguousDestination, ConfigurationError
from property_mapper.mappings import TypeMap
from property_mapper.matching.builder import PropertyMappingBuilder
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


@dataclass
class OrderDTO:
    customer_name: str
    customer_address_street: str
    customer_address_city: str
    total: float


@dataclass
class User:
    name: str


@dataclass
class Account:
    user_name: str
    user: User


@dataclass
class AccountDTO:
    user_name: str


@dataclass
class Node:
    name: str
    parent: Node


@dataclass
class NodeSource:
    name: str
    parent: NodeSource


@dataclass
class Buyer:
    orders: list[Purchase]


@dataclass
class Purchase:
    buyer: Buyer


@dataclass
class BuyerDTO:
    orders: list[PurchaseDTO]


@dataclass
class PurchaseDTO:
    buyer: BuyerDTO


@dataclass
class AddressDTO:
    street: str
    city: str


@dataclass
class Contact:
    address: Address


@dataclass
class ContactDTO:
    address: AddressDTO


@dataclass
class Tag:
    label: str


@dataclass
class Tagged:
    tags: list[Tag]


@dataclass
class Person:
    first_name: str
    firstName: str  # noqa: N815


@dataclass
class PersonDTO:
    first_name: str


@dataclass
class Details:
    age: int


@dataclass
class Profile:
    age: str
    details: Details


@dataclass
class ProfileDTO:
    age: int


def _builder(
    type_map: TypeMap,
    *,
    strategy: object | None = None,
    store: TypeMapStore | None = None,
    converters: object | None = None,
    ambiguity_ignored: bool = False,
) -> PropertyMappingBuilder:
    registry = TypeInfoRegistry()
    return PropertyMappingBuilder(
        type_map,
        store or TypeMapStore(registry=registry),
        converters or create_default_store(),
        strategy or StandardMatchingStrategy(),
        SnakeCamelTokenizer(),
        SnakeCamelTokenizer(),
        ambiguity_ignored=ambiguity_ignored,
        registry=registry,
    )


def _paths(type_map: TypeMap) -> dict[str, str]:
    return {mapping.path: mapping.source_path for mapping in type_map.get_mappings()}


def test_flattens_nested_source_properties() -> None:
    """Map flattened destination names onto nested source paths."""
    type_map = TypeMap(Order, OrderDTO)
    _builder(type_map).build()

    assert _paths(type_map) == {
        "customer_name": "customer.name",
        "customer_address_street": "customer.address.street",
        "customer_address_city": "customer.address.city",
        "total": "total",
    }


def test_single_match_commits_exact_paths() -> None:
    """Commit exactly the matched source and destination property chains."""
    type_map = TypeMap(Order, OrderDTO)
    _builder(type_map).build()

    mapping = type_map.get_mapping("customer_address_city")
    assert mapping is not None
    assert [p.name for p in mapping.source_properties] == ["customer", "address", "city"]
    assert [p.name for p in mapping.destination_properties] == ["customer_address_city"]
    assert mapping.converter is None
    assert not mapping.cyclic


def test_ambiguous_destination_raises_configuration_error() -> None:
    """Raise one aggregated error when two candidates score equally."""
    type_map = TypeMap(Account, AccountDTO)

    with pytest.raises(ConfigurationError) as exc_info:
        _builder(type_map).build()

    messages = exc_info.value.messages
    assert len(messages) == 1
    assert isinstance(messages[0], AmbiguousDestination)
    assert messages[0].destination_path == "user_name"
    assert {c.source_path for c in messages[0].candidates} == {"user_name", "user.name"}
    assert type_map.get_mappings() == []


def test_ambiguity_ignored_commits_nothing() -> None:
    """Leave the ambiguous property unmapped without raising."""
    type_map = TypeMap(Account, AccountDTO)
    _builder(type_map, ambiguity_ignored=True).build()

    assert type_map.get_mappings() == []


def test_self_referencing_types_terminate_with_cyclic_mapping() -> None:
    """Record a cyclic mapping for a property of the type under construction."""
    type_map = TypeMap(NodeSource, Node)
    _builder(type_map).build()

    assert _paths(type_map) == {"name": "name", "parent": "parent"}
    parent = type_map.get_mapping("parent")
    assert parent is not None
    assert parent.cyclic


def test_iterable_destination_commits_intermediate_mapping() -> None:
    """Restore the intermediate parent mapping behind a collection mapping."""
    type_map = TypeMap(Purchase, PurchaseDTO)
    _builder(type_map).build()

    assert _paths(type_map) == {
        "buyer.orders": "buyer.orders",
        "buyer": "buyer",
    }


def test_prior_type_map_is_merged_under_current_prefix() -> None:
    """Reuse stored mappings instead of re-deriving nested properties."""
    registry = TypeInfoRegistry()
    store = TypeMapStore(registry=registry)
    prior = store.create_type_map(Address, AddressDTO)
    prior.map_property("city", "street")
    prior.map_property("street", "city")
    store.put(prior)

    type_map = TypeMap(Contact, ContactDTO, registry=registry)
    _builder(type_map, store=store).build()

    assert _paths(type_map) == {
        "address.street": "address.city",
        "address.city": "address.street",
    }
    assert not any(mapping.explicit for mapping in type_map.get_mappings())


def test_prior_type_map_with_converter_yields_single_mapping() -> None:
    """Use a stored custom converter for the whole nested property."""

    def format_address(value: Address) -> str:
        return f"{value.street}, {value.city}"

    @dataclass
    class Letter:
        address: str

    store = TypeMapStore()
    store.put(TypeMap(Address, str, converter=format_address))

    type_map = TypeMap(Contact, Letter)
    _builder(type_map, store=store).build()

    mapping = type_map.get_mapping("address")
    assert mapping is not None
    assert mapping.source_path == "address"
    assert mapping.converter is format_address


def test_iterable_destination_is_never_recursed() -> None:
    """Do not descend into collection-typed destination properties."""

    @dataclass
    class Empty:
        other: int

    type_map = TypeMap(Empty, Tagged)
    _builder(type_map).build()

    assert type_map.get_mappings() == []


def test_unconvertible_matchable_destination_is_recursed() -> None:
    """Descend into a nested destination type when no converter applies."""

    @dataclass
    class Source:
        address: Address

    type_map = TypeMap(Source, ContactDTO)
    _builder(type_map).build()

    assert _paths(type_map) == {
        "address.street": "address.street",
        "address.city": "address.city",
    }


def test_skipped_destination_is_not_recursed() -> None:
    """Honor skipped destination paths during nested matching."""

    @dataclass
    class Source:
        address: Address

    type_map = TypeMap(Source, ContactDTO)
    type_map.skip("address")
    _builder(type_map).build()

    assert type_map.get_mappings() == []


def test_explicit_mapping_is_not_overwritten() -> None:
    """Keep the caller's mapping for an explicitly mapped destination."""

    @dataclass
    class Source:
        nickname: str
        first_name: str

    type_map = TypeMap(Source, PersonDTO)
    explicit = type_map.map_property("nickname", "first_name")
    _builder(type_map).build()

    mapping = type_map.get_mapping("first_name")
    assert mapping is explicit
    assert mapping.source_path == "nickname"
    assert mapping.explicit


def test_exact_strategy_records_single_candidate() -> None:
    """Stop at the first full match under an exact strategy."""
    type_map = TypeMap(Person, PersonDTO)
    _builder(type_map, strategy=StrictMatchingStrategy()).build()

    assert _paths(type_map) == {"first_name": "first_name"}


def test_inexact_strategy_reports_same_candidates_as_ambiguous() -> None:
    """Keep scanning under an inexact strategy and detect the tie."""
    type_map = TypeMap(Person, PersonDTO)

    with pytest.raises(ConfigurationError, match="first_name"):
        _builder(type_map).build()


def test_exact_strategy_stops_source_scan() -> None:
    """Ask the strategy nothing further once an exact full match exists."""

    class CountingStrategy:
        def __init__(self) -> None:
            self.calls = 0

        def matches(self, path_state: object) -> bool:
            del path_state
            self.calls += 1
            return True

        def is_exact(self) -> bool:
            return True

    class AlwaysFull:
        name = "always"

        def match(self, source_type: object, destination_type: object) -> MatchResult:
            del source_type, destination_type
            return MatchResult.FULL

    class Catalog:
        def converters(self) -> list[AlwaysFull]:
            return [AlwaysFull()]

    strategy = CountingStrategy()
    type_map = TypeMap(Profile, ProfileDTO)
    _builder(type_map, strategy=strategy, converters=Catalog()).build()

    assert strategy.calls == 1
    assert _paths(type_map) == {"age": "age"}


def test_partial_match_used_only_without_full_match() -> None:
    """Prefer a full candidate and fall back to partial ones."""
    type_map = TypeMap(Profile, ProfileDTO)
    _builder(type_map, strategy=LooseMatchingStrategy()).build()
    assert _paths(type_map) == {"age": "details.age"}

    @dataclass
    class TextProfile:
        age: str

    fallback = TypeMap(TextProfile, ProfileDTO)
    _builder(fallback).build()
    assert _paths(fallback) == {"age": "age"}


def test_loose_strategy_disambiguates_by_token_overlap() -> None:
    """Pick the direct property over the nested one with the same leaf name."""

    @dataclass
    class Source:
        name: str
        user: User

    @dataclass
    class Target:
        name: str

    type_map = TypeMap(Source, Target)
    _builder(type_map, strategy=LooseMatchingStrategy()).build()

    assert _paths(type_map) == {"name": "name"}


def test_all_ambiguities_are_reported_together() -> None:
    """Collect every ambiguity of a destination type into one error."""

    @dataclass
    class Source:
        user_name: str
        user_email: str
        user: Member

    @dataclass
    class Target:
        user_name: str
        user_email: str

    type_map = TypeMap(Source, Target)
    with pytest.raises(ConfigurationError) as exc_info:
        _builder(type_map).build()

    paths = [message.destination_path for message in exc_info.value.messages]
    assert paths == ["user_name", "user_email"]


@dataclass
class Member:
    name: str
    email: str


def test_explicit_nested_mapping_survives_prior_merge() -> None:
    """Keep an explicit nested mapping when a stored type map is merged."""
    registry = TypeInfoRegistry()
    store = TypeMapStore(registry=registry)
    store.get_or_create(Address, AddressDTO)

    type_map = TypeMap(Contact, ContactDTO, registry=registry)
    type_map.map_property("address.city", "address.street")
    _builder(type_map, store=store).build()

    street = type_map.get_mapping("address.street")
    assert street is not None
    assert street.explicit
    assert street.source_path == "address.city"
    assert _paths(type_map)["address.city"] == "address.city"


def test_explicit_parent_still_gets_implicit_children() -> None:
    """Match the unmapped children of an explicitly mapped destination object."""
    type_map = TypeMap(Contact, ContactDTO)
    type_map.map_property("address", "address")
    type_map.map_property("address.city", "address.street")
    _builder(type_map).build()

    assert _paths(type_map) == {
        "address": "address",
        "address.street": "address.city",
        "address.city": "address.city",
    }
    assert not type_map.get_mapping("address.city").explicit  # type: ignore[union-attr]
