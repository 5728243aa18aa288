"""Scheduler error types.

Custom exceptions for graph mutation, ordering and task execution failures.
"""

from __future__ import annotations


class DepSchedError(Exception):
    """Base error for depsched operations."""


class UnknownNodeError(DepSchedError, KeyError):
    """A task name referenced by an edge operation is not registered.

    Raised by add_edge/remove_edge (and the scheduler methods that
    delegate to them) before any mutation happens.
    """

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Unknown node: '{self.name}'"


class CycleError(DepSchedError, ValueError):
    """The dependency graph contains a cycle and cannot be ordered.

    Attributes:
        cycle: Task names along the cycle, first name repeated at the end.
    """

    def __init__(self, cycle: list[str]) -> None:
        self.cycle = list(cycle)
        super().__init__(f"Cycle detected: {' -> '.join(self.cycle)}")


class TaskExecutionError(DepSchedError):
    """A task body raised during Scheduler.execute().

    The original exception is chained as __cause__. Tasks later in
    the order were not run.

    Attributes:
        task: Name of the task whose body failed.
        completed: Names of the tasks that completed before the failure.
    """

    def __init__(self, task: str, completed: list[str], error: BaseException) -> None:
        self.task = task
        self.completed = list(completed)
        super().__init__(f"Task '{task}' failed: {error}")
