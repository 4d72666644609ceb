"""
Abstract reducer interfaces and error types for the salary aggregation benchmark.

Concrete reducers (sequential, per-record threads, map-reduce, bounded pool)
implement `sum` and `max`; `average` is derived from `sum` so every reducer
shares the same empty-input guard and truncating division.
"""

from __future__ import annotations

import abc
from typing import Protocol, Sequence, runtime_checkable

from salarybench.domain.models import HasSalary


class ReducerError(ValueError):
    """Raised when a reduction cannot produce a result."""


class EmptyInputError(ReducerError):
    """Raised when aggregating over zero records."""

    def __init__(self, operation: str) -> None:
        super().__init__(f"cannot compute {operation} salary of an empty record sequence")
        self.operation = operation


@runtime_checkable
class Reducer(Protocol):
    """
    Common interface all reducers implement.

    Attributes
    ----------
    name : str
        A short machine-friendly identifier.
    description : str
        A human-friendly summary of the approach.
    """

    name: str
    description: str

    def sum(self, records: Sequence[HasSalary]) -> int: ...

    def max(self, records: Sequence[HasSalary]) -> int: ...

    def average(self, records: Sequence[HasSalary]) -> int: ...


class AbstractReducer(abc.ABC):
    """
    ABC helper for class-based reducers.

    Subclasses set `name` and `description` and implement `sum` and `max`.
    `max` implementations seed their running maximum at 0, which is only
    correct because salaries are never negative.
    """

    name: str
    description: str

    @abc.abstractmethod
    def sum(self, records: Sequence[HasSalary]) -> int:  # pragma: no cover - interface only
        raise NotImplementedError

    @abc.abstractmethod
    def max(self, records: Sequence[HasSalary]) -> int:  # pragma: no cover - interface only
        raise NotImplementedError

    def average(self, records: Sequence[HasSalary]) -> int:
        """Integer (truncating) mean salary."""
        _require_records(records, "average")
        return self.sum(records) // len(records)


def _require_records(records: Sequence[HasSalary], operation: str) -> None:
    if len(records) == 0:
        raise EmptyInputError(operation)


__all__ = [
    "AbstractReducer",
    "EmptyInputError",
    "Reducer",
    "ReducerError",
]
