"""Build pipeline configuring the provided scheduler directly.

Run with:
    depsched order examples/build_pipeline.py
    depsched --log-level debug run examples/build_pipeline.py
"""

artifacts = []


def step(name):
    def body():
        artifacts.append(name)
        print(f"{name} done ({len(artifacts)} steps so far)")

    return body


for name in ("fetch", "build", "lint", "test", "package"):
    scheduler.add_task(name, step(name))  # noqa: F821

scheduler.chain("fetch", "build", "test", "package")  # noqa: F821
scheduler.add_dependency("build", "lint")  # noqa: F821
scheduler.add_dependency("lint", "package")  # noqa: F821
