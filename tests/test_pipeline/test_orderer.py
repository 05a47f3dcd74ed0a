"""Tests for stage 3: dependency ordering and cycle policies."""

from pathlib import Path

import pytest

from tssgen.analysis import build_ast
from tssgen.config import CyclePolicy
from tssgen.model.collection import Collection
from tssgen.parser import parse_css
from tssgen.pipeline import (
    DependencyCycleError,
    collect,
    cycle_members,
    cyclic_collections,
    dependant_counts,
    normalize_rules,
    order_collections,
    starting_points,
    unreachable,
)

FIXTURES = Path(__file__).parent.parent / "fixtures"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _collections(source: str) -> dict[str, Collection]:
    return collect(normalize_rules(build_ast(parse_css(source))))


def _graph(edges: dict[str, tuple[str, ...]]) -> dict[str, Collection]:
    return {name: Collection(name=name, dependencies=deps) for name, deps in edges.items()}


def _assert_topological(names: list[str], collections: dict[str, Collection]) -> None:
    position = {name: i for i, name in enumerate(names)}
    for name in names:
        for dep in collections[name].dependencies:
            assert position[dep] < position[name], f"{dep} must precede {name}"


# ---------------------------------------------------------------------------
# Dependants and starting points
# ---------------------------------------------------------------------------


class TestDependants:
    def test_counts(self):
        collections = _graph({"a": ("b", "c"), "b": ("c",), "c": ()})
        assert dependant_counts(collections) == {"a": 0, "b": 1, "c": 2}

    def test_starting_points_in_insertion_order(self):
        collections = _graph({"z": (), "a": ("z",), "m": ()})
        assert starting_points(collections) == ["a", "m"]


# ---------------------------------------------------------------------------
# Ordering
# ---------------------------------------------------------------------------


class TestOrder:
    def test_dependency_first(self):
        collections = _collections(".a { color: red; } .a .b { color: blue; }")
        assert order_collections(collections).names == [".b", ".a"]

    def test_diamond(self):
        collections = _collections(".app .btn {} .app .icon {} .btn .icon {}")
        ordering = order_collections(collections)
        assert ordering.names == [".icon", ".btn", ".app"]
        _assert_topological(ordering.names, collections)

    def test_independent_collections_keep_insertion_order(self):
        collections = _collections(".c {} .a {} body {} .b {}")
        assert order_collections(collections).names == [".c", ".a", "", ".b"]

    def test_dependencies_visited_in_recorded_order(self):
        collections = _graph({"root": ("x", "y", "z"), "x": (), "y": (), "z": ()})
        assert order_collections(collections).names == ["x", "y", "z", "root"]

    def test_shared_dependency_emitted_once(self):
        collections = _graph({"a": ("c",), "b": ("c",), "c": ()})
        assert order_collections(collections).names == ["c", "a", "b"]

    def test_deep_chain_does_not_recurse(self):
        depth = 5000
        collections = _graph(
            {f"c{i}": ((f"c{i + 1}",) if i < depth - 1 else ()) for i in range(depth)}
        )
        names = order_collections(collections).names
        assert names == [f"c{i}" for i in reversed(range(depth))]

    def test_repeatable(self):
        collections = _collections(".a .b {} .c .b {} .b .d {}")
        first = order_collections(collections)
        second = order_collections(collections)
        assert first == second

    def test_no_cycle_reports_nothing(self):
        ordering = order_collections(_collections(".a .b {}"))
        assert ordering.cyclic == ()

    def test_empty(self):
        assert order_collections({}).collections == ()


# ---------------------------------------------------------------------------
# Cycles
# ---------------------------------------------------------------------------


class TestCycles:
    @pytest.fixture()
    def collections(self) -> dict[str, Collection]:
        return _collections((FIXTURES / "cycle.css").read_text())

    def test_unreachable(self, collections):
        assert unreachable(collections) == [".item", ".menu"]

    def test_error_policy_raises(self, collections):
        with pytest.raises(DependencyCycleError) as exc_info:
            order_collections(collections, CyclePolicy.ERROR)
        assert exc_info.value.names == [".item", ".menu"]
        assert ".menu" in str(exc_info.value)

    def test_error_is_default(self, collections):
        with pytest.raises(DependencyCycleError):
            order_collections(collections)

    def test_break_policy_emits_everything(self, collections):
        ordering = order_collections(collections, CyclePolicy.BREAK)
        assert ordering.names == [".header", ".menu", ".item"]
        assert ordering.cyclic == (".item", ".menu")

    def test_drop_policy_omits_cycle(self, collections):
        ordering = order_collections(collections, CyclePolicy.DROP)
        assert ordering.names == [".header"]
        assert ordering.cyclic == (".item", ".menu")

    def test_node_only_reachable_through_cycle(self):
        collections = _graph({"a": ("b", "c"), "b": ("a",), "c": ()})
        assert unreachable(collections) == ["a", "b", "c"]
        ordering = order_collections(collections, CyclePolicy.BREAK)
        assert ordering.names == ["b", "c", "a"]


class TestReachableCycles:
    SOURCE = ".c .a { color: red; } .a .b { color: blue; } .b .a { color: green; }"

    @pytest.fixture()
    def collections(self) -> dict[str, Collection]:
        return _collections(self.SOURCE)

    def test_cycle_members(self, collections):
        assert unreachable(collections) == []
        assert cycle_members(collections) == [".a", ".b"]
        assert cyclic_collections(collections) == [".a", ".b"]

    def test_error_policy_raises(self, collections):
        with pytest.raises(DependencyCycleError) as exc_info:
            order_collections(collections)
        assert exc_info.value.names == [".a", ".b"]

    def test_break_policy_keeps_traversal_order(self, collections):
        ordering = order_collections(collections, CyclePolicy.BREAK)
        assert ordering.names == [".b", ".a", ".c"]
        assert ordering.cyclic == (".a", ".b")

    def test_drop_policy_omits_dependants(self, collections):
        ordering = order_collections(collections, CyclePolicy.DROP)
        assert ordering.names == []
        assert ordering.cyclic == (".a", ".b")

    def test_drop_keeps_unrelated_collections(self):
        collections = _graph({"x": ("a",), "a": ("b",), "b": ("a",), "y": ("z",), "z": ()})
        ordering = order_collections(collections, CyclePolicy.DROP)
        assert ordering.names == ["z", "y"]

    def test_longer_cycle_through_shared_node(self):
        collections = _graph({"r": ("x", "y"), "x": ("r",), "y": ("x",), "s": ("r",)})
        assert cycle_members(collections) == ["r", "x", "y"]

    def test_self_reference(self):
        collections = _graph({"top": ("a",), "a": ("a",)})
        assert cycle_members(collections) == ["a"]

    def test_acyclic_graph_has_no_members(self):
        collections = _graph({"a": ("b", "c"), "b": ("c",), "c": ()})
        assert cycle_members(collections) == []
        assert cyclic_collections(collections) == []

    def test_deep_chain_without_cycle(self):
        depth = 5000
        collections = _graph(
            {f"c{i}": ((f"c{i + 1}",) if i < depth - 1 else ()) for i in range(depth)}
        )
        assert cycle_members(collections) == []
