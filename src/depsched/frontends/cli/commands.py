"""depsched command group and subcommands."""

from __future__ import annotations

import rich_click as click

from depsched.core import DepSchedError, Scheduler, TaskExecutionError
from depsched.core.logging_config import configure_logging
from depsched.frontends.cli.loader import echo_body, load_task_file
from depsched.frontends.cli.output import error_exit, output_json, print_order

click.rich_click.USE_RICH_MARKUP = True
click.rich_click.USE_MARKDOWN = True
click.rich_click.SHOW_ARGUMENTS = True
click.rich_click.GROUP_ARGUMENTS_OPTIONS = True
click.rich_click.STYLE_ERRORS_SUGGESTION = "magenta italic"
click.rich_click.ERRORS_SUGGESTION = "Try running '--help' for more information."
click.rich_click.ERRORS_EPILOGUE = ""
click.rich_click.MAX_WIDTH = 100

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def _load(file: str) -> Scheduler:
    try:
        return load_task_file(file)
    except Exception as e:
        error_exit(str(e))


def _ordered(scheduler: Scheduler) -> list[str]:
    try:
        return scheduler.execution_order()
    except DepSchedError as e:
        error_exit(str(e))


def _dependencies(scheduler: Scheduler) -> dict[str, list[str]]:
    deps: dict[str, list[str]] = {}
    for dependency, dependent in scheduler.graph.edges():
        deps.setdefault(dependent, []).append(dependency)
    return deps


@click.group()
@click.version_option(package_name="depsched")
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default=None,
    help="Log level (default: DEPSCHED_LOG_LEVEL or WARNING)",
)
def cli(log_level: str | None) -> None:
    """depsched - run named tasks in dependency order.

    Tasks are defined in a Python **task file** that either configures the
    provided `scheduler` or defines a `tasks` list.

    **Commands:**

        depsched order   Show the execution order of a task file

        depsched run     Execute a task file

        depsched demo    Run the built-in three-task example
    """
    configure_logging(level=log_level, force=True)


@cli.command()
@click.argument("file")
@click.option("--json", "-j", "json_output", is_flag=True, help="Output as JSON")
def order(file: str, json_output: bool) -> None:
    """Show the execution order for a task file.

    **Examples:**

        depsched order tasks.py

        depsched order tasks.py --json
    """
    scheduler = _load(file)
    names = _ordered(scheduler)

    if json_output:
        output_json(names)
    else:
        print_order(names, _dependencies(scheduler))


@cli.command()
@click.argument("file")
@click.option("--dry-run", "-d", is_flag=True, help="Show execution order without running")
def run(file: str, dry_run: bool) -> None:
    """Execute the tasks in a task file in dependency order.

    Stops at the first task that fails and exits with status 1.

    **Examples:**

        depsched run tasks.py

        depsched run tasks.py --dry-run
    """
    scheduler = _load(file)
    names = _ordered(scheduler)

    if dry_run:
        click.echo("[DRY RUN] Execution order:")
        deps = _dependencies(scheduler)
        for i, name in enumerate(names, 1):
            after = deps.get(name)
            after_str = f" (after: {', '.join(after)})" if after else ""
            click.echo(f"  [{i}] {name}{after_str}")
        return

    try:
        scheduler.execute()
    except TaskExecutionError as e:
        completed = ", ".join(e.completed) or "none"
        error_exit(f"{e} (completed: {completed})")
    except DepSchedError as e:
        error_exit(str(e))


@cli.command()
def demo() -> None:
    """Run the built-in example: Task 1 -> Task 2 -> Task 3."""
    scheduler = Scheduler()
    for name in ("Task 1", "Task 2", "Task 3"):
        scheduler.add_task(name, echo_body(f"Executing {name}"))
    scheduler.add_dependency("Task 1", "Task 2")
    scheduler.add_dependency("Task 2", "Task 3")
    scheduler.execute()
