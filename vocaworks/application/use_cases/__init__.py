"""Application use cases."""

from .aggregate_works import AggregateWorksUseCase

__all__ = ["AggregateWorksUseCase"]
