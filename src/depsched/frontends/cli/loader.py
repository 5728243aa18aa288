"""Task file loading.

A task file is a Python file executed in a namespace that already holds
a fresh `scheduler` and the `Scheduler` class. It either configures that
scheduler directly:

    scheduler.add_task("build", build)
    scheduler.add_task("test", run_tests)
    scheduler.add_dependency("build", "test")

or defines a `tasks` list whose entries become tasks that echo a message:

    tasks = [
        {"name": "build", "message": "Building"},
        {"name": "test", "depends_on": ["build"]},
    ]
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

import rich_click as click

from depsched.core import Scheduler
from depsched.core.logging_config import get_logger

logger = get_logger(__name__)


def echo_body(message: str) -> Callable[[], None]:
    """Build a task body that prints a message."""

    def body() -> None:
        click.echo(message)

    return body


def scheduler_from_tasks(tasks: list[dict[str, Any]]) -> Scheduler:
    """Build a scheduler from a list of task dicts.

    Each dict has a "name", an optional "message" (default
    "Executing <name>") and an optional "depends_on" list. All tasks are
    registered before any dependency is added, so entries may reference
    tasks defined later in the list.

    Raises:
        ValueError: If an entry is malformed.
        UnknownNodeError: If depends_on names an undefined task.
    """
    scheduler = Scheduler()

    for i, entry in enumerate(tasks):
        if not isinstance(entry, dict) or "name" not in entry:
            raise ValueError(f"Task entry {i} must be a dict with a 'name' key")
        name = entry["name"]
        scheduler.add_task(name, echo_body(entry.get("message") or f"Executing {name}"))

    for entry in tasks:
        depends_on = entry.get("depends_on") or []
        if isinstance(depends_on, str):
            depends_on = [depends_on]
        for dependency in depends_on:
            scheduler.add_dependency(dependency, entry["name"])

    return scheduler


def load_task_file(filepath: str | Path) -> Scheduler:
    """Load a scheduler from a Python task file.

    Args:
        filepath: Path to the task file.

    Returns:
        The configured scheduler.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file defines neither tasks nor a scheduler, or both.
    """
    path = Path(filepath)
    if not path.is_file():
        raise FileNotFoundError(f"File not found: {filepath}")

    scheduler = Scheduler()
    namespace: dict[str, Any] = {
        "__name__": "__depsched_tasks__",
        "Scheduler": Scheduler,
        "scheduler": scheduler,
    }

    code = path.read_text()
    exec(compile(code, str(path), "exec"), namespace)

    tasks = namespace.get("tasks")
    loaded = namespace.get("scheduler")
    configured = isinstance(loaded, Scheduler) and len(loaded.graph) > 0

    if tasks is not None:
        if configured:
            raise ValueError("File defines both 'tasks' and a configured 'scheduler'; use one")
        if not isinstance(tasks, list):
            raise ValueError("'tasks' must be a list of task dicts")
        logger.debug("task_file_loaded: file=%s, tasks=%d", path, len(tasks))
        return scheduler_from_tasks(tasks)

    if configured:
        logger.debug("task_file_loaded: file=%s, tasks=%d", path, len(loaded.graph))
        return loaded

    raise ValueError("No 'tasks' list or configured 'scheduler' found in file")
