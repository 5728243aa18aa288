"""depsched - run named tasks in dependency order.

Layers:
    core/       Dependency graph, ordering and the scheduler
    frontends/  Command line interface

Quick Start:
    >>> from depsched import Scheduler
    >>>
    >>> scheduler = Scheduler()
    >>> scheduler.add_task("Task 1", lambda: print("Executing Task 1"))
    >>> scheduler.add_task("Task 2", lambda: print("Executing Task 2"))
    >>> scheduler.add_dependency("Task 1", "Task 2")
    >>> scheduler.execute()
"""

from depsched.__version__ import __version__
from depsched.core import (
    CycleError,
    DependencyGraph,
    DepSchedError,
    ExecutionTrace,
    Scheduler,
    TaskExecutionError,
    TaskNode,
    TaskResult,
    TaskStatus,
    UnknownNodeError,
)

__all__ = [
    "__version__",
    "DependencyGraph",
    "TaskNode",
    "Scheduler",
    "ExecutionTrace",
    "TaskResult",
    "TaskStatus",
    "DepSchedError",
    "UnknownNodeError",
    "CycleError",
    "TaskExecutionError",
]
