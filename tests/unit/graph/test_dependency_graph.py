# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Unit tests for DependencyGraph.

Covers topological ordering (determinism, tie-breaking, transitive closure),
atomic cycle rejection, forward references vs. strict mode, the
all-or-nothing batch policy, removal rules, and concurrent use.
"""

from __future__ import annotations

import threading

import pytest

from omnigate.exceptions import CycleError, InUseError, NotFoundError
from omnigate.graph import DependencyGraph, Node

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _chain(graph: DependencyGraph, *ids: str) -> None:
    """Insert ids so each depends on the previous one."""
    previous: list[str] = []
    for node_id in ids:
        graph.insert_node(node_id, "iaas", previous).unwrap()
        previous = [node_id]


# ---------------------------------------------------------------------------
# Ordering
# ---------------------------------------------------------------------------


@pytest.mark.unit
class TestTopologicalOrder:
    """Every node appears after all of its dependencies."""

    def test_linear_chain(self, graph: DependencyGraph) -> None:
        graph.insert_node("A", "iaas").unwrap()
        graph.insert_node("B", "iaas", ["A"]).unwrap()
        graph.insert_node("C", "iaas", ["B"]).unwrap()

        result = graph.topological_order("C")

        assert result.ok
        assert result.value == ("A", "B", "C")

    def test_single_node(self, graph: DependencyGraph) -> None:
        graph.insert_node("solo", "iaas").unwrap()
        assert graph.topological_order("solo").unwrap() == ("solo",)

    def test_diamond_ties_break_by_id(self, diamond_graph: DependencyGraph) -> None:
        assert diamond_graph.topological_order("A").unwrap() == ("D", "B", "C", "A")

    def test_only_transitive_dependencies_included(
        self, diamond_graph: DependencyGraph
    ) -> None:
        diamond_graph.insert_node("unrelated", "iaas").unwrap()
        assert diamond_graph.topological_order("B").unwrap() == ("D", "B")

    def test_repeated_calls_identical(self, diamond_graph: DependencyGraph) -> None:
        first = diamond_graph.topological_order("A").unwrap()
        for _ in range(10):
            assert diamond_graph.topological_order("A").unwrap() == first

    def test_insertion_order_irrelevant(self) -> None:
        forward = DependencyGraph()
        _chain(forward, "n1", "n2", "n3")

        backward = DependencyGraph()
        backward.insert_node("n3", "iaas", ["n2"]).unwrap()
        backward.insert_node("n2", "iaas", ["n1"]).unwrap()
        backward.insert_node("n1", "iaas").unwrap()

        assert forward.topological_order("n3").unwrap() == backward.topological_order(
            "n3"
        ).unwrap()

    def test_every_dependency_precedes_dependent(self) -> None:
        graph = DependencyGraph()
        edges = {
            "app": ["db", "cache", "auth"],
            "auth": ["db", "crypto"],
            "cache": ["net"],
            "db": ["net", "crypto"],
            "crypto": [],
            "net": [],
        }
        for node_id, deps in edges.items():
            graph.insert_node(node_id, "iaas", deps).unwrap()

        order = graph.topological_order("app").unwrap()

        position = {node_id: index for index, node_id in enumerate(order)}
        assert set(order) == set(edges)
        for node_id, deps in edges.items():
            for dep in deps:
                assert position[dep] < position[node_id]

    def test_missing_root(self, graph: DependencyGraph) -> None:
        result = graph.topological_order("ghost")
        error = result.error_as(NotFoundError)
        assert error is not None
        assert error.node_id == "ghost"
        assert error.code == "GRAPH_002"

    def test_dangling_dependency_reported(self, graph: DependencyGraph) -> None:
        graph.insert_node("A", "iaas", ["missing"]).unwrap()

        error = graph.topological_order("A").error_as(NotFoundError)

        assert error is not None
        assert error.node_id == "missing"
        assert error.referenced_by == "A"

    def test_ordering_does_not_mutate(self, diamond_graph: DependencyGraph) -> None:
        before = dict(diamond_graph.snapshot())
        diamond_graph.topological_order("A")
        assert dict(diamond_graph.snapshot()) == before

    def test_ordered_nodes_match_order(self, diamond_graph: DependencyGraph) -> None:
        nodes = diamond_graph.ordered_nodes("A").unwrap()

        assert tuple(n.node_id for n in nodes) == ("D", "B", "C", "A")
        assert nodes[-1].dependencies == ("B", "C")
        assert nodes[1] == diamond_graph.get("B")

    def test_ordered_nodes_errors(self, graph: DependencyGraph) -> None:
        graph.insert_node("A", "iaas", ["missing"]).unwrap()
        assert graph.ordered_nodes("A").error_as(NotFoundError) is not None
        assert graph.ordered_nodes("ghost").error_as(NotFoundError) is not None

    def test_corrupted_graph_reports_cycle(self, graph: DependencyGraph) -> None:
        # bypass insertion checks to simulate a broken invariant
        graph._nodes["P"] = Node("P", "iaas", ("Q",))
        graph._nodes["Q"] = Node("Q", "iaas", ("P",))

        error = graph.topological_order("P").error_as(CycleError)

        assert error is not None
        assert error.cycle == ("P", "Q")


# ---------------------------------------------------------------------------
# Cycle rejection
# ---------------------------------------------------------------------------


@pytest.mark.unit
class TestCycleRejection:
    """Insertions closing a cycle are rejected and leave the graph unchanged."""

    def test_two_node_cycle_rejects_second_insert(
        self, graph: DependencyGraph
    ) -> None:
        graph.insert_node("X", "iaas", ["Y"]).unwrap()

        result = graph.insert_node("Y", "iaas", ["X"])

        error = result.error_as(CycleError)
        assert error is not None
        assert error.cycle == ("X", "Y")
        assert error.code == "GRAPH_001"
        # X stays with its dangling dependency; Y is absent
        assert graph.node_ids() == ("X",)
        assert graph.get("X") == Node("X", "iaas", ("Y",))
        assert graph.topological_order("X").error_as(NotFoundError) is not None

    def test_self_dependency(self, graph: DependencyGraph) -> None:
        error = graph.insert_node("S", "iaas", ["S"]).error_as(CycleError)
        assert error is not None
        assert error.cycle == ("S",)
        assert "S" not in graph

    def test_long_cycle_is_canonical(self, graph: DependencyGraph) -> None:
        graph.insert_node("b", "iaas", ["c"]).unwrap()
        graph.insert_node("c", "iaas", ["a"]).unwrap()

        error = graph.insert_node("a", "iaas", ["b"]).error_as(CycleError)

        assert error is not None
        assert error.cycle == ("a", "b", "c")

    def test_rejected_update_keeps_previous_node(self, graph: DependencyGraph) -> None:
        _chain(graph, "A", "B", "C")
        snapshot = dict(graph.snapshot())
        dependents = graph.dependents_of("C")

        result = graph.insert_node("A", "iaas", ["C"])

        assert result.error_as(CycleError) is not None
        assert dict(graph.snapshot()) == snapshot
        assert graph.dependents_of("C") == dependents
        assert graph.topological_order("C").unwrap() == ("A", "B", "C")

    def test_graph_usable_after_rejection(self, graph: DependencyGraph) -> None:
        graph.insert_node("X", "iaas", ["Y"]).unwrap()
        graph.insert_node("Y", "iaas", ["X"])

        graph.insert_node("Y", "iaas").unwrap()

        assert graph.topological_order("X").unwrap() == ("Y", "X")


# ---------------------------------------------------------------------------
# Forward references and strict mode
# ---------------------------------------------------------------------------


@pytest.mark.unit
class TestForwardReferences:
    def test_forward_reference_allowed_by_default(
        self, graph: DependencyGraph
    ) -> None:
        assert graph.allow_forward_references
        assert graph.insert_node("A", "iaas", ["later"]).ok

    def test_strict_graph_rejects_unknown_dependency(
        self, strict_graph: DependencyGraph
    ) -> None:
        error = strict_graph.insert_node("A", "iaas", ["later"]).error_as(
            NotFoundError
        )
        assert error is not None
        assert error.node_id == "later"
        assert error.referenced_by == "A"
        assert len(strict_graph) == 0

    def test_strict_graph_accepts_known_dependency(
        self, strict_graph: DependencyGraph
    ) -> None:
        strict_graph.insert_node("B", "iaas").unwrap()
        assert strict_graph.insert_node("A", "iaas", ["B"]).ok


# ---------------------------------------------------------------------------
# Updates
# ---------------------------------------------------------------------------


@pytest.mark.unit
class TestUpdates:
    def test_reinsert_replaces_node(self, graph: DependencyGraph) -> None:
        graph.insert_node("B", "iaas").unwrap()
        graph.insert_node("A", "iaas", ["B"]).unwrap()

        graph.insert_node("A", "paas").unwrap()

        assert graph.get("A") == Node("A", "paas")
        assert graph.dependents_of("B") == ()
        assert graph.remove_node("B").ok

    def test_duplicate_dependencies_collapsed(self, graph: DependencyGraph) -> None:
        node = graph.insert_node("A", "iaas", ["B", "C", "B"]).unwrap()
        assert node.dependencies == ("B", "C")


# ---------------------------------------------------------------------------
# Batch insertion
# ---------------------------------------------------------------------------


@pytest.mark.unit
class TestInsertBatch:
    """Batches are all-or-nothing."""

    def test_batch_in_any_order(self, strict_graph: DependencyGraph) -> None:
        result = strict_graph.insert_batch(
            [Node("A", "iaas", ("B",)), Node("B", "iaas")]
        )
        assert result.ok
        assert strict_graph.topological_order("A").unwrap() == ("B", "A")

    def test_cyclic_batch_inserts_nothing(self, graph: DependencyGraph) -> None:
        graph.insert_node("keep", "iaas").unwrap()

        result = graph.insert_batch(
            [
                Node("ok", "iaas", ("keep",)),
                Node("X", "iaas", ("Y",)),
                Node("Y", "iaas", ("X",)),
            ]
        )

        error = result.error_as(CycleError)
        assert error is not None
        assert error.cycle == ("X", "Y")
        assert graph.node_ids() == ("keep",)
        assert graph.dependents_of("keep") == ()

    def test_batch_cycle_through_existing_node(self, graph: DependencyGraph) -> None:
        graph.insert_node("E", "iaas", ["N1"]).unwrap()

        result = graph.insert_batch(
            [Node("N1", "iaas", ("N2",)), Node("N2", "iaas", ("E",))]
        )

        assert result.error_as(CycleError) is not None
        assert graph.node_ids() == ("E",)

    def test_duplicate_ids_in_batch(self, graph: DependencyGraph) -> None:
        with pytest.raises(ValueError, match="more than once"):
            graph.insert_batch([Node("A", "iaas"), Node("A", "paas")])
        assert len(graph) == 0


# ---------------------------------------------------------------------------
# Removal
# ---------------------------------------------------------------------------


@pytest.mark.unit
class TestRemoveNode:
    def test_remove_leaf(self, diamond_graph: DependencyGraph) -> None:
        removed = diamond_graph.remove_node("A")
        assert removed.ok
        assert "A" not in diamond_graph
        assert diamond_graph.dependents_of("B") == ()

    def test_remove_in_use(self, diamond_graph: DependencyGraph) -> None:
        error = diamond_graph.remove_node("D").error_as(InUseError)

        assert error is not None
        assert error.dependents == ("B", "C")
        assert error.code == "GRAPH_003"
        assert "D" in diamond_graph

    def test_remove_missing(self, graph: DependencyGraph) -> None:
        assert graph.remove_node("ghost").error_as(NotFoundError) is not None

    def test_forward_reference_blocks_removal_of_later_node(
        self, graph: DependencyGraph
    ) -> None:
        graph.insert_node("A", "iaas", ["B"]).unwrap()
        graph.insert_node("B", "iaas").unwrap()

        error = graph.remove_node("B").error_as(InUseError)

        assert error is not None
        assert error.dependents == ("A",)


# ---------------------------------------------------------------------------
# Concurrency
# ---------------------------------------------------------------------------


@pytest.mark.unit
class TestConcurrentUse:
    def test_concurrent_inserts_and_orders(self) -> None:
        graph = DependencyGraph()
        graph.insert_node("root", "iaas").unwrap()
        errors: list[Exception] = []

        def writer(prefix: str) -> None:
            try:
                previous = "root"
                for i in range(50):
                    node_id = f"{prefix}{i:02d}"
                    graph.insert_node(node_id, "iaas", [previous]).unwrap()
                    previous = node_id
            except Exception as exc:
                errors.append(exc)

        def reader() -> None:
            try:
                for _ in range(100):
                    assert graph.topological_order("root").unwrap() == ("root",)
            except Exception as exc:
                errors.append(exc)

        threads = [threading.Thread(target=writer, args=(p,)) for p in "abc"]
        threads += [threading.Thread(target=reader) for _ in range(3)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert errors == []
        assert len(graph) == 151
        order = graph.topological_order("a49").unwrap()
        assert order[0] == "root"
        assert order[-1] == "a49"
        assert len(order) == 51
