"""Pytest configuration and fixtures."""

import logging

import pytest

from depsched.core import Scheduler
from depsched.core import logging_config


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo logging configuration done by CLI invocations."""
    root = logging.getLogger()
    before = list(root.handlers)
    level = root.level
    yield
    for handler in list(root.handlers):
        if handler not in before:
            root.removeHandler(handler)
            if isinstance(handler, logging.FileHandler):
                handler.close()
    root.setLevel(level)
    logging_config._configured = False


@pytest.fixture
def calls():
    """List that recording task bodies append their names to."""
    return []


@pytest.fixture
def record(calls):
    """Factory for task bodies that record their name when run."""

    def make(name):
        def body():
            calls.append(name)

        return body

    return make


@pytest.fixture
def chain_scheduler(record):
    """Scheduler with Task 1 -> Task 2 -> Task 3."""
    scheduler = Scheduler()
    for name in ("Task 1", "Task 2", "Task 3"):
        scheduler.add_task(name, record(name))
    scheduler.add_dependency("Task 1", "Task 2")
    scheduler.add_dependency("Task 2", "Task 3")
    return scheduler


@pytest.fixture
def write_task_file(tmp_path):
    """Write a task file into tmp_path and return its path."""

    def write(content, name="tasks.py"):
        path = tmp_path / name
        path.write_text(content)
        return path

    return write
