"""Application utilities - shared utilities for application services."""

from .results import AggregationResult, ErrorKind, RecordError
from .scheduling import TaskOutcome, TaskScheduler, run_with_concurrency

__all__ = [
    "AggregationResult",
    "ErrorKind",
    "RecordError",
    "TaskOutcome",
    "TaskScheduler",
    "run_with_concurrency",
]
