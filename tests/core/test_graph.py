"""Tests for DependencyGraph ordering and edge bookkeeping."""

import logging

import pytest

from depsched.core import CycleError, DependencyGraph, UnknownNodeError


def noop():
    pass


def names(nodes):
    return [node.name for node in nodes]


def build(node_names, edges=()):
    graph = DependencyGraph()
    for name in node_names:
        graph.add_node(name, noop)
    for from_name, to_name in edges:
        graph.add_edge(from_name, to_name)
    return graph


def assert_respects(order, edges):
    for from_name, to_name in edges:
        assert order.index(from_name) < order.index(to_name), (from_name, to_name)


class TestAddNode:
    """Tests for node registration."""

    def test_add_node_registers(self):
        """Registered names are reported by has_node."""
        graph = DependencyGraph()
        node = graph.add_node("build", noop)

        assert graph.has_node("build")
        assert "build" in graph
        assert graph.get_node("build") is node
        assert node.body is noop
        assert not graph.has_node("deploy")
        assert graph.get_node("deploy") is None

    def test_has_node_does_not_mutate(self):
        """has_node on an unknown name leaves the graph unchanged."""
        graph = build(["a"])
        graph.has_node("b")
        assert graph.list_nodes() == ["a"]

    def test_list_nodes_in_registration_order(self):
        """list_nodes follows registration order."""
        graph = build(["c", "a", "b"])
        assert graph.list_nodes() == ["c", "a", "b"]
        assert len(graph) == 3

    def test_reregister_replaces_node_and_drops_edges(self):
        """Re-registering a name discards the old node's relations."""
        graph = build(["a", "b", "c"], [("a", "b"), ("b", "c")])
        old_b = graph.get_node("b")

        def new_body():
            return "new"

        new_b = graph.add_node("b", new_body)

        assert new_b is not old_b
        assert graph.get_node("b").body is new_body
        assert graph.edges() == []
        assert graph.get_node("a").dependents == frozenset()
        assert graph.get_node("c").dependencies == frozenset()

    def test_reregister_keeps_registration_position(self):
        """A replaced name keeps its place in iteration order."""
        graph = build(["a", "b", "c"])
        graph.add_node("a", noop)
        assert graph.list_nodes() == ["a", "b", "c"]

    def test_reregister_logs_warning(self, caplog):
        """Replacing a node is logged."""
        graph = build(["a", "b"], [("a", "b")])
        with caplog.at_level(logging.WARNING, logger="depsched.core.graph"):
            graph.add_node("a", noop)
        assert "node_replaced: node=a, dropped_edges=1" in caplog.text

    def test_empty_name_rejected(self):
        """Empty names are rejected."""
        graph = DependencyGraph()
        with pytest.raises(ValueError, match="cannot be empty"):
            graph.add_node("", noop)

    def test_non_callable_body_rejected(self):
        """Bodies must be callable."""
        graph = DependencyGraph()
        with pytest.raises(TypeError, match="must be callable"):
            graph.add_node("a", "not callable")
        assert not graph.has_node("a")


class TestEdges:
    """Tests for add_edge / remove_edge."""

    def test_add_edge_updates_both_sides(self):
        """Dependency and dependent sets stay symmetric."""
        graph = build(["a", "b"])
        graph.add_edge("a", "b")

        a, b = graph.get_node("a"), graph.get_node("b")
        assert a.dependents == frozenset({b})
        assert b.dependencies == frozenset({a})
        assert a.dependencies == frozenset()
        assert b.dependents == frozenset()

    def test_add_edge_idempotent(self):
        """Adding the same edge twice records it once."""
        graph = build(["a", "b"], [("a", "b"), ("a", "b")])
        assert graph.edges() == [("a", "b")]

    def test_add_edge_twice_gives_same_order(self):
        """A duplicated edge does not change the computed order."""
        once = build(["x", "a", "b"], [("a", "b")])
        twice = build(["x", "a", "b"], [("a", "b"), ("a", "b")])
        assert names(once.topological_order()) == names(twice.topological_order())

    @pytest.mark.parametrize("from_name,to_name,missing", [("a", "zz", "zz"), ("zz", "a", "zz")])
    def test_add_edge_unknown_node(self, from_name, to_name, missing):
        """Unknown endpoints raise and change nothing."""
        graph = build(["a", "b"])
        before = names(graph.topological_order())

        with pytest.raises(UnknownNodeError) as exc_info:
            graph.add_edge(from_name, to_name)

        assert exc_info.value.name == missing
        assert str(exc_info.value) == f"Unknown node: '{missing}'"
        assert graph.edges() == []
        assert names(graph.topological_order()) == before

    def test_unknown_node_error_is_key_error(self):
        """UnknownNodeError can be caught as KeyError."""
        graph = build(["a"])
        with pytest.raises(KeyError):
            graph.add_edge("a", "b")

    def test_remove_edge(self):
        """remove_edge clears both sides."""
        graph = build(["a", "b"], [("a", "b")])
        graph.remove_edge("a", "b")

        assert graph.edges() == []
        assert graph.get_node("a").dependents == frozenset()
        assert graph.get_node("b").dependencies == frozenset()

    def test_remove_missing_edge_is_noop(self):
        """Removing an edge that was never added does nothing."""
        graph = build(["a", "b", "c"], [("a", "b")])
        graph.remove_edge("b", "c")
        graph.remove_edge("b", "a")
        assert graph.edges() == [("a", "b")]

    def test_remove_edge_unknown_node(self):
        """remove_edge with an unknown endpoint raises."""
        graph = build(["a", "b"], [("a", "b")])
        with pytest.raises(UnknownNodeError):
            graph.remove_edge("a", "nope")
        assert graph.edges() == [("a", "b")]

    def test_remove_then_add_restores_constraint(self):
        """Removing and re-adding an edge restores the ordering constraint."""
        graph = build(["b", "a"], [("a", "b")])
        original = names(graph.topological_order())

        graph.remove_edge("a", "b")
        graph.add_edge("a", "b")

        order = names(graph.topological_order())
        assert_respects(order, [("a", "b")])
        assert order == original


class TestTopologicalOrder:
    """Tests for topological_order."""

    def test_empty_graph(self):
        """An empty graph has an empty order."""
        assert DependencyGraph().topological_order() == []

    def test_chain(self):
        """A chain comes out in chain order."""
        graph = build(["Task 1", "Task 2", "Task 3"], [("Task 1", "Task 2"), ("Task 2", "Task 3")])
        assert names(graph.topological_order()) == ["Task 1", "Task 2", "Task 3"]

    def test_chain_registered_in_reverse(self):
        """Registration order does not override edges."""
        graph = build(["c", "b", "a"], [("a", "b"), ("b", "c")])
        assert names(graph.topological_order()) == ["a", "b", "c"]

    def test_independent_nodes_deterministic(self):
        """Unconstrained nodes get a stable order across calls."""
        graph = build(["X", "Y"])
        first = names(graph.topological_order())

        assert sorted(first) == ["X", "Y"]
        for _ in range(5):
            assert names(graph.topological_order()) == first

    def test_independent_nodes_tie_break(self):
        """Later walk roots are placed ahead of earlier ones."""
        graph = build(["X", "Y"])
        assert names(graph.topological_order()) == ["Y", "X"]

    def test_diamond(self):
        """Diamond dependencies are respected."""
        edges = [("a", "b"), ("a", "c"), ("b", "d"), ("c", "d")]
        graph = build(["d", "c", "b", "a"], edges)
        order = names(graph.topological_order())

        assert sorted(order) == ["a", "b", "c", "d"]
        assert_respects(order, edges)

    def test_matches_recursive_prepend_order(self):
        """Order equals the recursive dependents-first, prepend-on-finish walk."""
        edges = [("a", "c"), ("a", "b"), ("b", "d"), ("e", "d"), ("c", "d")]
        graph = build(["a", "b", "c", "d", "e", "f"], edges)

        result = []
        visited = set()

        def dfs(node):
            visited.add(node)
            for dependent in node._dependents:
                if dependent not in visited:
                    dfs(dependent)
            result.insert(0, node)

        for node in graph:
            if node not in visited:
                dfs(node)

        assert names(graph.topological_order()) == names(result)

    def test_every_edge_respected(self):
        """Every edge of a wider DAG is respected."""
        node_names = [f"n{i}" for i in range(12)]
        edges = [
            (f"n{i}", f"n{j}") for i in range(12) for j in range(i + 1, 12) if (i * 7 + j) % 3 == 0
        ]
        graph = build(list(reversed(node_names)), edges)
        order = names(graph.topological_order())

        assert sorted(order) == sorted(node_names)
        assert_respects(order, edges)

    def test_fresh_order_after_edge_change(self):
        """Each call reflects the current edges."""
        graph = build(["a", "b"], [("b", "a")])
        assert names(graph.topological_order()) == ["b", "a"]

        graph.remove_edge("b", "a")
        graph.add_edge("a", "b")
        assert names(graph.topological_order()) == ["a", "b"]

    def test_deep_chain_no_recursion_limit(self):
        """Long chains are ordered without hitting the recursion limit."""
        count = 5000
        graph = DependencyGraph()
        for i in range(count):
            graph.add_node(f"t{i}", noop)
        for i in range(count - 1):
            graph.add_edge(f"t{i}", f"t{i + 1}")

        assert names(graph.topological_order()) == [f"t{i}" for i in range(count)]


class TestCycles:
    """Tests for cycle detection."""

    def test_two_node_cycle_raises(self):
        """A two-node cycle raises CycleError."""
        graph = build(["a", "b"], [("a", "b"), ("b", "a")])
        with pytest.raises(CycleError) as exc_info:
            graph.topological_order()
        assert exc_info.value.cycle == ["a", "b", "a"]
        assert "Cycle detected: a -> b -> a" in str(exc_info.value)

    def test_self_loop_raises(self):
        """A self-loop is a cycle."""
        graph = build(["a"], [("a", "a")])
        with pytest.raises(CycleError) as exc_info:
            graph.topological_order()
        assert exc_info.value.cycle == ["a", "a"]

    def test_cycle_reported_with_acyclic_prefix(self):
        """Only the nodes on the cycle are reported."""
        graph = build(["root", "a", "b", "c"], [("root", "a"), ("a", "b"), ("b", "c"), ("c", "a")])
        assert graph.find_cycle() == ["a", "b", "c", "a"]

    def test_cycle_error_is_value_error(self):
        """CycleError can be caught as ValueError."""
        graph = build(["a", "b"], [("a", "b"), ("b", "a")])
        with pytest.raises(ValueError):
            graph.topological_order()

    def test_find_cycle_none_when_acyclic(self):
        """find_cycle returns None for a DAG."""
        graph = build(["a", "b"], [("a", "b")])
        assert graph.find_cycle() is None

    def test_validate(self):
        """validate lists cycle errors without raising."""
        graph = build(["a", "b"], [("a", "b")])
        assert graph.validate() == []

        graph.add_edge("b", "a")
        errors = graph.validate()
        assert len(errors) == 1
        assert "Cycle detected" in errors[0]

    def test_breaking_cycle_restores_ordering(self):
        """Removing an edge on the cycle makes the graph orderable again."""
        graph = build(["a", "b", "c"], [("a", "b"), ("b", "c"), ("c", "a")])
        graph.remove_edge("c", "a")
        assert names(graph.topological_order()) == ["a", "b", "c"]
