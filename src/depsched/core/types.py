"""Pure data types for depsched.core.

Simple dataclasses describing what happened during an execution pass.
They carry no behaviour and are safe to serialize or pass around.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


class TaskStatus(Enum):
    """Outcome of a task within one execution pass."""

    COMPLETED = "completed"
    FAILED = "failed"
    SKIPPED = "skipped"  # Not run because an earlier task failed


@dataclass
class TaskResult:
    """Result of running (or not running) one task.

    Attributes:
        task: Task name.
        status: Outcome of the task.
        error: Error message if the body raised.
        duration_ms: Time spent in the body (0 for skipped tasks).
    """

    task: str
    status: TaskStatus
    error: str | None = None
    duration_ms: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dict."""
        return {
            "task": self.task,
            "status": self.status.value,
            "error": self.error,
            "duration_ms": self.duration_ms,
        }


@dataclass
class ExecutionTrace:
    """Record of one Scheduler.execute() pass.

    Attributes:
        order: Task names in the computed execution order.
        results: One TaskResult per task in order, including skipped ones.
        start_time: When the pass started.
        end_time: When the pass finished (None while running).
    """

    order: list[str] = field(default_factory=list)
    results: list[TaskResult] = field(default_factory=list)
    start_time: datetime = field(default_factory=datetime.now)
    end_time: datetime | None = None

    @property
    def completed(self) -> list[str]:
        """Names of tasks that ran successfully."""
        return [r.task for r in self.results if r.status == TaskStatus.COMPLETED]

    @property
    def failed(self) -> TaskResult | None:
        """The failed task's result, if any."""
        for result in self.results:
            if result.status == TaskStatus.FAILED:
                return result
        return None

    @property
    def success(self) -> bool:
        """True if every task completed."""
        return self.end_time is not None and self.failed is None

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dict."""
        return {
            "order": list(self.order),
            "results": [r.to_dict() for r in self.results],
            "start_time": self.start_time.isoformat(),
            "end_time": self.end_time.isoformat() if self.end_time else None,
            "success": self.success,
        }
