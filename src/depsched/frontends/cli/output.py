"""Output formatting utilities for CLI commands."""

from __future__ import annotations

import json
import sys
from typing import Any, NoReturn

import rich_click as click
from rich.console import Console
from rich.table import Table
from rich.text import Text


def output_json(data: Any, indent: int = 2) -> None:
    """Output data as formatted JSON."""
    click.echo(json.dumps(data, indent=indent))


def print_order(order: list[str], dependencies: dict[str, list[str]]) -> None:
    """Print an execution order as a numbered table.

    Args:
        order: Task names in execution order.
        dependencies: Task name -> names it runs after.
    """
    table = Table(show_header=True, header_style="bold")
    table.add_column("#", justify="right")
    table.add_column("Task")
    table.add_column("After")

    for i, name in enumerate(order, 1):
        # names are literal text, never markup
        table.add_row(str(i), Text(name), Text(", ".join(dependencies.get(name, []))))

    Console().print(table)


def error_exit(message: str, code: int = 1) -> NoReturn:
    """Print error message and exit with code."""
    click.echo(f"Error: {message}", err=True)
    sys.exit(code)
