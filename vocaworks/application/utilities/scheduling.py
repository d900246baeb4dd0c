"""Bounded-concurrency task scheduling.

This module runs a list of deferred async operations with a fixed number of
worker coroutines on the current event loop. Each worker claims the next
unclaimed index from a shared cursor and writes that index's outcome exactly
once, so outcomes line up positionally with the input regardless of the
order in which operations complete.

Key Components:
- TaskOutcome: Success-or-failure result for one operation
- TaskScheduler: Worker pool with a fixed concurrency limit
- run_with_concurrency: Convenience wrapper around TaskScheduler
"""

import asyncio
from collections.abc import Awaitable, Callable, Sequence
from typing import Any, Generic, TypeAlias, TypeVar

from attrs import define, field

from vocaworks.config import get_logger

logger = get_logger(__name__)

R = TypeVar("R")

Task: TypeAlias = Callable[[], Awaitable[R]]
ProgressCallback: TypeAlias = Callable[[int, int], None]


@define(frozen=True, slots=True)
class TaskOutcome(Generic[R]):
    """Outcome of one scheduled operation.

    Exactly one of ``value`` and ``error`` is meaningful: ``error`` is None
    for successful operations.
    """

    index: int
    value: R | None = None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> R:
        """Return the value or raise the captured error."""
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]


@define(slots=True)
class _Cursor:
    """Next unclaimed task index shared by all workers."""

    position: int = 0

    def claim(self, total: int) -> int | None:
        # No await between read and advance, so claims never collide
        if self.position >= total:
            return None
        index = self.position
        self.position += 1
        return index


@define(frozen=True, slots=True)
class TaskScheduler:
    """Run deferred operations with at most ``concurrency_limit`` in flight.

    Failures are captured per index and never stop sibling workers. Nothing
    is retried. Cancellation is not captured and propagates to the caller.

    Attributes:
        concurrency_limit: Maximum number of operations pending at once
        progress_log_frequency: Log progress every N completed operations
        logger_instance: Logger for recording scheduling events
    """

    concurrency_limit: int
    progress_log_frequency: int = 10
    logger_instance: Any = field(factory=lambda: logger)

    def worker_count(self, total: int) -> int:
        """Clamp the concurrency limit to [1, total]."""
        return max(1, min(self.concurrency_limit, total))

    async def run(
        self,
        tasks: Sequence[Task[R]],
        progress_callback: ProgressCallback | None = None,
    ) -> list[TaskOutcome[R]]:
        """Execute every task and return outcomes in input order.

        Args:
            tasks: Zero-argument callables returning awaitables
            progress_callback: Optional ``(completed, total)`` hook called after
                each outcome is recorded

        Returns:
            One TaskOutcome per task, ``outcomes[i]`` belonging to ``tasks[i]``
        """
        total = len(tasks)
        if total == 0:
            return []

        slots: list[TaskOutcome[R] | None] = [None] * total
        cursor = _Cursor()
        completed = 0
        workers = self.worker_count(total)

        self.logger_instance.debug(
            f"Scheduling {total} tasks on {workers} workers",
            total=total,
            workers=workers,
        )

        async def worker(worker_id: int) -> None:
            nonlocal completed
            while (index := cursor.claim(total)) is not None:
                try:
                    value = await tasks[index]()
                except Exception as e:
                    self.logger_instance.warning(
                        "Task {} failed: {}",
                        index,
                        e,
                        worker=worker_id,
                        error_type=type(e).__name__,
                    )
                    slots[index] = TaskOutcome(index=index, error=e)
                else:
                    slots[index] = TaskOutcome(index=index, value=value)

                completed += 1
                if progress_callback:
                    progress_callback(completed, total)
                if (
                    self.progress_log_frequency > 0
                    and completed % self.progress_log_frequency == 0
                ) or completed == total:
                    self.logger_instance.debug(f"Completed {completed}/{total} tasks")

        await asyncio.gather(*(worker(worker_id) for worker_id in range(workers)))

        # Every index is claimed exactly once, so every slot is filled
        return [outcome for outcome in slots if outcome is not None]


async def run_with_concurrency(
    tasks: Sequence[Task[R]],
    limit: int,
    progress_callback: ProgressCallback | None = None,
) -> list[TaskOutcome[R]]:
    """Run tasks with at most ``limit`` pending at once, preserving order."""
    return await TaskScheduler(concurrency_limit=limit).run(
        tasks, progress_callback=progress_callback
    )
