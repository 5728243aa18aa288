"""Input validation for task registration.

Provides consistent validation rules for task names and bodies.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

MAX_NAME_LENGTH = 128


def validate_task_name(name: Any, entity: str = "task") -> None:
    """Validate a task name.

    Rules:
    - Must be a string
    - 1-128 characters, not only whitespace

    Names are otherwise free-form ("Task 1" is fine).

    Args:
        name: The name to validate.
        entity: What the name is for (used in error messages).

    Raises:
        ValueError: If the name is invalid.

    Example:
        >>> validate_task_name("Task 1")   # OK
        >>> validate_task_name("build")    # OK
        >>> validate_task_name("   ")      # ValueError
    """
    entity_cap = entity.capitalize()

    if not isinstance(name, str):
        raise ValueError(f"{entity_cap} name must be a string, got {type(name).__name__}")

    if not name or not name.strip():
        raise ValueError(f"{entity_cap} name cannot be empty")

    if len(name) > MAX_NAME_LENGTH:
        raise ValueError(f"{entity_cap} name must be {MAX_NAME_LENGTH} characters or less")


def validate_task_body(body: Callable[[], Any], name: str) -> None:
    """Check that a task body is callable.

    Raises:
        TypeError: If body is not callable.
    """
    if not callable(body):
        raise TypeError(f"Task '{name}' body must be callable, got {type(body).__name__}")


def is_valid_task_name(name: Any) -> bool:
    """Check if a task name is valid without raising.

    Args:
        name: The name to check.

    Returns:
        True if valid, False otherwise.
    """
    try:
        validate_task_name(name)
    except ValueError:
        return False
    return True
