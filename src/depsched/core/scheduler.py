"""Scheduler - registers tasks and runs them in dependency order."""

from __future__ import annotations

import time
from collections.abc import Callable
from datetime import datetime
from typing import Any

from depsched.core.errors import TaskExecutionError
from depsched.core.graph import DependencyGraph, TaskNode
from depsched.core.logging_config import get_logger
from depsched.core.types import ExecutionTrace, TaskResult, TaskStatus

logger = get_logger(__name__)


class Scheduler:
    """Runs registered tasks so that dependencies execute first.

    Thin façade over a DependencyGraph it owns. Every execute() call
    computes a fresh order from the graph's current edges and runs the
    task bodies one at a time on the calling thread.

    Not thread-safe: do not mutate the scheduler from another thread
    while execute() is running.

    Args:
        graph: Graph to schedule over. A new empty graph by default.

    Example:
        >>> scheduler = Scheduler()
        >>> scheduler.add_task("Task 1", lambda: print("Executing Task 1"))
        >>> scheduler.add_task("Task 2", lambda: print("Executing Task 2"))
        >>> scheduler.add_dependency("Task 1", "Task 2")
        >>> scheduler.execute()
        Executing Task 1
        Executing Task 2
    """

    def __init__(self, graph: DependencyGraph | None = None) -> None:
        self._graph = graph if graph is not None else DependencyGraph()
        self._last_trace: ExecutionTrace | None = None

    @property
    def graph(self) -> DependencyGraph:
        """The underlying dependency graph."""
        return self._graph

    @property
    def last_trace(self) -> ExecutionTrace | None:
        """Trace of the most recent execute() call, if any."""
        return self._last_trace

    def add_task(self, name: str, body: Callable[[], Any]) -> Scheduler:
        """Register a task. Re-registering a name replaces the task and its edges.

        Returns:
            Self for chaining.
        """
        self._graph.add_node(name, body)
        return self

    def add_dependency(self, from_name: str, to_name: str) -> Scheduler:
        """Require from_name to run before to_name.

        Returns:
            Self for chaining.

        Raises:
            UnknownNodeError: If either task is not registered.
        """
        self._graph.add_edge(from_name, to_name)
        return self

    def remove_dependency(self, from_name: str, to_name: str) -> Scheduler:
        """Drop the constraint that from_name runs before to_name.

        Returns:
            Self for chaining.

        Raises:
            UnknownNodeError: If either task is not registered.
        """
        self._graph.remove_edge(from_name, to_name)
        return self

    def chain(self, *names: str) -> Scheduler:
        """Set up linear dependencies: a >> b >> c.

        Args:
            names: Task names in execution order.

        Returns:
            Self for chaining.
        """
        for previous, current in zip(names, names[1:]):
            self._graph.add_edge(previous, current)
        return self

    def has_task(self, name: str) -> bool:
        """Check whether a task is registered."""
        return self._graph.has_node(name)

    def execution_order(self) -> list[str]:
        """Get the order execute() would use right now.

        Raises:
            CycleError: If the dependencies form a cycle.
        """
        return [node.name for node in self._graph.topological_order()]

    def execute(self) -> None:
        """Run every task body once, dependencies first.

        Fail-fast: the first body that raises stops the pass and later
        tasks are not run. The trace of the pass is kept in last_trace
        and is closed even when a body raises KeyboardInterrupt or
        another BaseException, which propagate unwrapped.

        Raises:
            CycleError: If the dependencies form a cycle (nothing runs).
            TaskExecutionError: If a task body raises. The original
                exception is chained as __cause__.
        """
        order = self._graph.topological_order()
        trace = ExecutionTrace(order=[node.name for node in order])
        self._last_trace = trace
        logger.info("execute_start: tasks=%d", len(order))
        pass_start = time.monotonic()

        try:
            for index, node in enumerate(order):
                logger.debug("task_start: task=%s", node.name)
                start = time.monotonic()
                try:
                    node.run()
                except BaseException as e:
                    self._record_failure(trace, order, index, e, start)
                    if isinstance(e, Exception):
                        raise TaskExecutionError(node.name, trace.completed, e) from e
                    raise

                duration_ms = (time.monotonic() - start) * 1000
                trace.results.append(
                    TaskResult(task=node.name, status=TaskStatus.COMPLETED, duration_ms=duration_ms)
                )
                logger.debug("task_complete: task=%s (%.1fms)", node.name, duration_ms)
        finally:
            trace.end_time = datetime.now()

        logger.info(
            "execute_complete: tasks=%d (%.1fms)",
            len(order),
            (time.monotonic() - pass_start) * 1000,
        )

    @staticmethod
    def _record_failure(
        trace: ExecutionTrace,
        order: list[TaskNode],
        index: int,
        error: BaseException,
        start: float,
    ) -> None:
        """Mark order[index] as failed and everything after it as skipped."""
        node = order[index]
        trace.results.append(
            TaskResult(
                task=node.name,
                status=TaskStatus.FAILED,
                error=str(error) or type(error).__name__,
                duration_ms=(time.monotonic() - start) * 1000,
            )
        )
        trace.results.extend(
            TaskResult(task=skipped.name, status=TaskStatus.SKIPPED)
            for skipped in order[index + 1 :]
        )
        logger.error(
            "task_failed: task=%s, error=%s, skipped=%d",
            node.name,
            trace.results[index].error,
            len(order) - index - 1,
        )

    def __repr__(self) -> str:
        return f"Scheduler({self._graph.list_nodes()})"
