"""Core - dependency graph and scheduler.

This module contains no knowledge of:
- The command line
- Where task definitions come from
- How output is presented

Architecture:
    graph           DependencyGraph and TaskNode, topological ordering
    scheduler       Scheduler facade that runs task bodies in order
    errors          Error taxonomy
    types           Execution trace data types
    logging_config  Logging setup shared by all components

Example:
    >>> from depsched.core import Scheduler
    >>>
    >>> scheduler = Scheduler()
    >>> scheduler.add_task("fetch", fetch_data)
    >>> scheduler.add_task("process", process_data)
    >>> scheduler.add_dependency("fetch", "process")
    >>> scheduler.execute()
"""

from depsched.core.errors import (
    CycleError,
    DepSchedError,
    TaskExecutionError,
    UnknownNodeError,
)
from depsched.core.graph import DependencyGraph, TaskNode
from depsched.core.scheduler import Scheduler
from depsched.core.types import ExecutionTrace, TaskResult, TaskStatus

__all__ = [
    # Graph
    "DependencyGraph",
    "TaskNode",
    # Scheduler
    "Scheduler",
    # Types
    "ExecutionTrace",
    "TaskResult",
    "TaskStatus",
    # Errors
    "DepSchedError",
    "UnknownNodeError",
    "CycleError",
    "TaskExecutionError",
]
