"""Property-based tests: matching terminates on arbitrary class graphs."""

from __future__ import annotations

from hypothesis import given, settings
from hypothesis import strategies as st

from property_mapper.adapters.introspection import TypeInfoRegistry
from property_mapper.adapters.strategies import get_matching_strategy
from property_mapper.adapters.tokenizers import SnakeCamelTokenizer
from property_mapper.converters.registry import create_default_store
from property_mapper.mappings import TypeMap
from property_mapper.matching.builder import PropertyMappingBuilder
from property_mapper.store import TypeMapStore

NAMES = ["id", "name", "user_name", "parent", "items", "owner", "address", "city"]
CLASS_COUNT = 4

# A field type is a scalar name or ("ref", index) / ("list", index).
field_types = st.one_of(
    st.sampled_from(["int", "str"]),
    st.tuples(st.sampled_from(["ref", "list"]), st.integers(0, CLASS_COUNT - 1)),
)
class_specs = st.lists(
    st.dictionaries(st.sampled_from(NAMES), field_types, min_size=1, max_size=4),
    min_size=CLASS_COUNT,
    max_size=CLASS_COUNT,
)


def _build_classes(specs: list[dict[str, object]]) -> list[type]:
    classes = [type(f"Node{index}", (), {}) for index in range(len(specs))]
    for cls, spec in zip(classes, specs, strict=True):
        annotations: dict[str, object] = {}
        for name, field_type in spec.items():
            if field_type == "int":
                annotations[name] = int
            elif field_type == "str":
                annotations[name] = str
            else:
                kind, index = field_type  # type: ignore[misc]
                target = classes[index]
                annotations[name] = target if kind == "ref" else list[target]
        cls.__annotations__ = annotations
    return classes


@settings(max_examples=60, deadline=None)
@given(
    specs=class_specs,
    strategy_name=st.sampled_from(["standard", "loose", "strict"]),
    source_index=st.integers(0, CLASS_COUNT - 1),
    destination_index=st.integers(0, CLASS_COUNT - 1),
)
def test_matching_terminates_on_cyclic_graphs(
    specs: list[dict[str, object]],
    strategy_name: str,
    source_index: int,
    destination_index: int,
) -> None:
    """Finish on self-referencing graphs with one mapping per destination path."""
    classes = _build_classes(specs)
    registry = TypeInfoRegistry()
    type_map = TypeMap(classes[source_index], classes[destination_index], registry=registry)

    PropertyMappingBuilder(
        type_map,
        TypeMapStore(registry=registry),
        create_default_store(),
        get_matching_strategy(strategy_name),  # type: ignore[arg-type]
        SnakeCamelTokenizer(),
        SnakeCamelTokenizer(),
        ambiguity_ignored=True,
        registry=registry,
    ).build()

    paths = [mapping.path for mapping in type_map.get_mappings()]
    assert len(paths) == len(set(paths))
    for mapping in type_map.get_mappings():
        assert mapping.source_properties
        assert mapping.destination_properties
