"""Tests for the graph walker.

Critical Invariants:
- The copy shares no mutable container with the source
- The source is never modified
- The transformer sees every present node exactly once, children first
- Failures abort the whole call with a typed error and a path
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field

import pytest
from hypothesis import given
from hypothesis import strategies as st

from graphclone import (
    ArgumentError,
    ConstructionFailureError,
    CopySettings,
    GraphWalker,
    NotSupportedKindError,
    RecursionLimitExceededError,
    TransformerFailureError,
    deep_copy_and_apply,
)
from graphclone.transforms import identity

keys = st.text(min_size=1, max_size=5, alphabet=st.characters(whitelist_categories=["L"]))

nested_data = st.recursive(
    st.one_of(
        st.integers(),
        st.text(max_size=5),
        st.none(),
        st.booleans(),
        st.sets(st.integers(), max_size=3),
    ),
    lambda children: st.one_of(
        st.lists(children, max_size=3),
        st.dictionaries(keys, children, max_size=3),
        st.tuples(children, children),
    ),
    max_leaves=20,
)


@dataclass
class Person:
    Name: str
    Age: int


@dataclass(frozen=True)
class Badge:
    name: str


@dataclass
class Validated:
    age: int

    def __post_init__(self):
        if not isinstance(self.age, int):
            raise ValueError("age must be an int")


@dataclass
class Node:
    label: str
    children: list["Node"] = field(default_factory=list)
    parent: "Node | None" = None


def assert_independent(source, copy):
    """No mutable container of the copy is the source's own object."""
    if isinstance(source, (list, dict, set)):
        assert copy is not source
    if isinstance(source, dict):
        for key in source:
            assert_independent(source[key], copy[key])
    elif isinstance(source, (list, tuple)):
        for left, right in zip(source, copy, strict=True):
            assert_independent(left, right)


# Identity copies


@given(nested_data)
def test_identity_copy_is_equal_and_independent(value):
    copy = deep_copy_and_apply(value, identity)
    assert copy == value
    assert_independent(value, copy)


def test_copy_of_composite_is_independent(user):
    copy = deep_copy_and_apply(user, identity)

    assert copy == user
    assert copy is not user
    assert copy.address is not user.address
    assert copy.tags is not user.tags

    copy.tags.append("new")
    copy.address.city = "Shelbyville"
    assert user.tags == ["admin", "ops"]
    assert user.address.city == "Springfield"


@pytest.mark.parametrize("value", [5, "text", 2.5, b"raw", True])
def test_leaves_are_returned_unchanged(value):
    assert deep_copy_and_apply(value, identity) is value


def test_none_returns_none_without_calling_transform():
    calls = []
    assert deep_copy_and_apply(None, lambda f, v: calls.append(v) or v) is None
    assert calls == []


# Transformer semantics


def test_transform_runs_children_first_once_per_node():
    seen = []

    def record(field, value):
        seen.append(value)
        return value

    deep_copy_and_apply([1, [2]], record)
    assert seen == [1, 2, [2], [1, [2]]]


def test_map_keys_are_not_transformed():
    seen = []

    def record(field, value):
        seen.append(value)
        return value

    deep_copy_and_apply({"a": 1, "b": 2}, record)
    assert seen == [1, 2, {"a": 1, "b": 2}]


def test_root_and_root_level_elements_see_no_field():
    fields = []
    deep_copy_and_apply([1, 2], lambda f, v: fields.append(f) or v)
    assert fields == [None, None, None]


def test_field_is_forwarded_into_collection_elements(user):
    seen = []

    def record(field, value):
        seen.append((field.name if field else None, value))
        return value

    deep_copy_and_apply(user, record)
    assert ("tags", "admin") in seen
    assert ("tags", "ops") in seen
    assert ("tags", ["admin", "ops"]) in seen
    assert ("street", "1 Main St") in seen
    assert (None, user) in seen


def test_transform_result_is_kept_and_source_untouched(user):
    def shout(field, value):
        if field is not None and field.name == "name":
            return value.upper()
        return value

    copy = deep_copy_and_apply(user, shout)
    assert copy.name == "ALICE"
    assert user.name == "alice"


def test_transform_can_replace_root():
    assert deep_copy_and_apply([1, 2], lambda f, v: len(v) if isinstance(v, list) else v) == 2


# Errors


def test_missing_transform_raises_argument_error():
    with pytest.raises(ArgumentError):
        deep_copy_and_apply([1], None)


def test_non_callable_transform_raises_type_error():
    with pytest.raises(TypeError, match="callable"):
        GraphWalker("not a function")


def test_multi_dimensional_array_rejected():
    grid = memoryview(bytes(6)).cast("B", shape=[2, 3])
    with pytest.raises(NotSupportedKindError, match="rank 2") as exc_info:
        deep_copy_and_apply(grid, identity)
    assert exc_info.value.path == "root"
    assert "root" in str(exc_info.value)


def test_multi_dimensional_array_path_is_reported():
    grid = memoryview(bytes(6)).cast("B", shape=[2, 3])
    with pytest.raises(NotSupportedKindError) as exc_info:
        deep_copy_and_apply([1, grid], identity)
    assert exc_info.value.path == "root[1]"


def test_depth_ceiling_on_deeply_nested_arrays():
    value = (1,)
    for _ in range(105):
        value = (value,)

    with pytest.raises(RecursionLimitExceededError) as exc_info:
        deep_copy_and_apply(value, identity)

    message = str(exc_info.value)
    assert "100" in message
    assert "root[0]" in message
    assert exc_info.value.max_depth == 100


def test_cycles_fail_deterministically():
    loop = []
    loop.append(loop)
    with pytest.raises(RecursionLimitExceededError, match="Circular references"):
        deep_copy_and_apply(loop, identity)


def test_cyclic_composites_fail_deterministically():
    parent = Node("parent")
    parent.children.append(Node("child", parent=parent))
    with pytest.raises(RecursionLimitExceededError):
        deep_copy_and_apply(parent, identity)


@pytest.mark.parametrize(
    ("max_depth", "fails"),
    [(3, True), (4, False)],
)
def test_depth_ceiling_is_configurable(max_depth, fails):
    value = [[[1]]]
    settings = CopySettings(max_depth=max_depth)
    if fails:
        with pytest.raises(RecursionLimitExceededError) as exc_info:
            deep_copy_and_apply(value, identity, settings=settings)
        assert exc_info.value.path == "root[0][0][0]"
    else:
        assert deep_copy_and_apply(value, identity, settings=settings) == value


def test_disallowed_map_key_rejected_with_path():
    value = [{"a": 1}, {"b": 2}, {(1, 2): 3}]
    with pytest.raises(NotSupportedKindError, match="Mapping key type 'tuple'") as exc_info:
        deep_copy_and_apply(value, identity)
    assert exc_info.value.path == "root[2]"


def test_composite_map_key_rejected_with_path():
    value = [{}, {}, {Badge("admin"): "x"}]
    with pytest.raises(NotSupportedKindError, match="Badge") as exc_info:
        deep_copy_and_apply(value, identity)
    assert exc_info.value.path == "root[2]"


def test_transformer_exception_is_wrapped_with_path_and_cause():
    original = ValueError("boom")

    def explode(field, value):
        if field is not None and field.name == "Name":
            raise original
        return value

    with pytest.raises(TransformerFailureError) as exc_info:
        deep_copy_and_apply(Person("Ann", 40), explode)

    error = exc_info.value
    assert error.path == "root.Name"
    assert error.field_name == "Name"
    assert error.node_kind == "composite field"
    assert error.__cause__ is original
    assert "root.Name" in str(error)
    assert "Field name: Name" in str(error)


def test_one_shot_iterator_rejected_without_consuming():
    source = iter([1, 2])
    with pytest.raises(NotSupportedKindError, match="One-shot iterator"):
        deep_copy_and_apply(source, identity)
    assert next(source) == 1


def test_construction_failure_is_reported():
    def break_age(field, value):
        if field is not None and field.name == "age":
            return "***"
        return value

    with pytest.raises(ConstructionFailureError) as exc_info:
        deep_copy_and_apply(Validated(3), break_age)
    assert exc_info.value.path == "root"
    assert isinstance(exc_info.value.__cause__, ValueError)


# Concurrency and logging


def test_concurrent_copies_are_independent():
    source = [1, 2, 3, 4, 5]
    walker = GraphWalker(identity)

    with ThreadPoolExecutor(max_workers=10) as pool:
        copies = list(pool.map(lambda _: walker.copy(source), range(10)))

    assert all(copy == source for copy in copies)
    assert len({id(copy) for copy in copies}) == 10
    assert all(copy is not source for copy in copies)


def test_walker_logs_at_debug(caplog):
    with caplog.at_level(logging.DEBUG, logger="graphclone.copying.walker"):
        deep_copy_and_apply({"a": 1}, identity)
    assert "Deep copy started for dict" in caplog.text
    assert "Deep copy finished for dict" in caplog.text


def test_walker_logs_failure_at_debug(caplog):
    with caplog.at_level(logging.DEBUG, logger="graphclone.copying.walker"):
        with pytest.raises(NotSupportedKindError):
            deep_copy_and_apply({(1,): 1}, identity)
    assert "failed at root" in caplog.text
