"""Dependency graph of tasks and its topological ordering."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import Any

from depsched.core.errors import CycleError, UnknownNodeError
from depsched.core.logging_config import get_logger
from depsched.core.validation import validate_task_body, validate_task_name

logger = get_logger(__name__)

# Traversal colours
_GREY = 1  # on the walk stack
_BLACK = 2  # placed in the result


class TaskNode:
    """A task in a dependency graph.

    Nodes are created by DependencyGraph.add_node() and linked only
    through the graph's edge operations, which keep the dependency and
    dependent sides in sync. Identity is the object itself: re-registering
    a name creates a new node.

    Attributes:
        name: Unique task name within its graph.
        body: Zero-argument callable run by the scheduler.
    """

    __slots__ = ("name", "body", "_dependencies", "_dependents")

    def __init__(self, name: str, body: Callable[[], Any]) -> None:
        self.name = name
        self.body = body
        # dicts used as insertion-ordered sets
        self._dependencies: dict[TaskNode, None] = {}
        self._dependents: dict[TaskNode, None] = {}

    @property
    def dependencies(self) -> frozenset[TaskNode]:
        """Nodes that must run before this node."""
        return frozenset(self._dependencies)

    @property
    def dependents(self) -> frozenset[TaskNode]:
        """Nodes that must run after this node."""
        return frozenset(self._dependents)

    def run(self) -> Any:
        """Invoke the task body."""
        return self.body()

    def __repr__(self) -> str:
        deps = [d.name for d in self._dependencies]
        return f"TaskNode({self.name!r}, depends_on={deps})"


class DependencyGraph:
    """Directed graph of named tasks and "must run before" edges.

    Edge semantics: add_edge("a", "b") means a must run before b, so
    "a" becomes a dependency of "b" and "b" a dependent of "a".

    The graph is not thread-safe. Mutation and ordering must not
    interleave across threads.

    Example:
        >>> graph = DependencyGraph()
        >>> graph.add_node("fetch", fetch_data)
        >>> graph.add_node("process", process_data)
        >>> graph.add_edge("fetch", "process")
        >>> [n.name for n in graph.topological_order()]
        ['fetch', 'process']
    """

    def __init__(self) -> None:
        self._nodes: dict[str, TaskNode] = {}

    def add_node(self, name: str, body: Callable[[], Any]) -> TaskNode:
        """Register a task node.

        Registering an existing name replaces the old node. Edges attached
        to the old node are discarded and the name keeps its original
        registration position.

        Args:
            name: Unique task name.
            body: Zero-argument callable.

        Returns:
            The new node.

        Raises:
            ValueError: If name is empty or not a string.
            TypeError: If body is not callable.
        """
        validate_task_name(name)
        validate_task_body(body, name)

        old = self._nodes.get(name)
        if old is not None:
            logger.warning(
                "node_replaced: node=%s, dropped_edges=%d",
                name,
                len(old._dependencies) + len(old._dependents),
            )
            for dependency in list(old._dependencies):
                self._unlink(dependency, old)
            for dependent in list(old._dependents):
                self._unlink(old, dependent)

        node = TaskNode(name, body)
        self._nodes[name] = node
        logger.debug("node_added: node=%s", name)
        return node

    def add_edge(self, from_name: str, to_name: str) -> None:
        """Record that from_name must run before to_name.

        Adding an existing edge is a no-op.

        Raises:
            UnknownNodeError: If either name is not registered.
        """
        from_node, to_node = self._require(from_name, to_name)
        self._link(from_node, to_node)
        logger.debug("edge_added: from=%s, to=%s", from_name, to_name)

    def remove_edge(self, from_name: str, to_name: str) -> None:
        """Remove the edge from_name -> to_name.

        Removing an edge that does not exist is a no-op.

        Raises:
            UnknownNodeError: If either name is not registered.
        """
        from_node, to_node = self._require(from_name, to_name)
        self._unlink(from_node, to_node)
        logger.debug("edge_removed: from=%s, to=%s", from_name, to_name)

    def has_node(self, name: str) -> bool:
        """Check whether a task name is registered."""
        return name in self._nodes

    def get_node(self, name: str) -> TaskNode | None:
        """Get a node by name, or None if not registered."""
        return self._nodes.get(name)

    def list_nodes(self) -> list[str]:
        """List task names in registration order."""
        return list(self._nodes)

    def edges(self) -> list[tuple[str, str]]:
        """List all edges as (dependency, dependent) name pairs."""
        return [
            (node.name, dependent.name)
            for node in self._nodes.values()
            for dependent in node._dependents
        ]

    def topological_order(self) -> list[TaskNode]:
        """Compute an execution order for all registered nodes.

        Depth-first walk in the dependents direction with an explicit
        stack. Outer iteration follows registration order; a node is
        prepended to the result once everything reachable through its
        dependents has been placed. Unconstrained nodes therefore come
        out in reverse registration order of their walk roots.

        Returns:
            Every node, with each dependency before its dependents.

        Raises:
            CycleError: If the graph contains a cycle.
        """
        state: dict[TaskNode, int] = {}
        placed: list[TaskNode] = []

        for root in self._nodes.values():
            if root in state:
                continue

            state[root] = _GREY
            stack: list[tuple[TaskNode, Iterator[TaskNode]]] = [(root, iter(root._dependents))]

            while stack:
                node, dependents = stack[-1]
                for dependent in dependents:
                    colour = state.get(dependent)
                    if colour is None:
                        state[dependent] = _GREY
                        stack.append((dependent, iter(dependent._dependents)))
                        break
                    if colour == _GREY:
                        raise CycleError(self._cycle_path(stack, dependent))
                else:
                    stack.pop()
                    state[node] = _BLACK
                    placed.append(node)

        placed.reverse()
        return placed

    def find_cycle(self) -> list[str] | None:
        """Find one cycle in the graph.

        Returns:
            Task names along the cycle (first name repeated at the end),
            or None if the graph is acyclic.
        """
        try:
            self.topological_order()
        except CycleError as e:
            return e.cycle
        return None

    def validate(self) -> list[str]:
        """Validate the graph.

        Checks for:
        - Cycles

        Returns:
            List of error messages (empty if valid).
        """
        errors: list[str] = []
        cycle = self.find_cycle()
        if cycle:
            errors.append(f"Cycle detected: {' -> '.join(cycle)}")
        return errors

    def _require(self, from_name: str, to_name: str) -> tuple[TaskNode, TaskNode]:
        """Resolve both endpoints of an edge or fail without mutating."""
        for name in (from_name, to_name):
            if name not in self._nodes:
                raise UnknownNodeError(name)
        return self._nodes[from_name], self._nodes[to_name]

    @staticmethod
    def _link(dependency: TaskNode, dependent: TaskNode) -> None:
        dependency._dependents[dependent] = None
        dependent._dependencies[dependency] = None

    @staticmethod
    def _unlink(dependency: TaskNode, dependent: TaskNode) -> None:
        dependency._dependents.pop(dependent, None)
        dependent._dependencies.pop(dependency, None)

    @staticmethod
    def _cycle_path(
        stack: list[tuple[TaskNode, Iterator[TaskNode]]], repeated: TaskNode
    ) -> list[str]:
        names = [node.name for node, _ in stack]
        start = names.index(repeated.name)
        return names[start:] + [repeated.name]

    def __contains__(self, name: object) -> bool:
        return name in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[TaskNode]:
        return iter(list(self._nodes.values()))

    def __repr__(self) -> str:
        return f"DependencyGraph({list(self._nodes)})"
