"""Three-task chain, loadable with `depsched run examples/chain_tasks.py`."""

tasks = [
    {"name": "Task 1"},
    {"name": "Task 2", "depends_on": ["Task 1"]},
    {"name": "Task 3", "depends_on": ["Task 2"]},
]
