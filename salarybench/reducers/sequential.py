"""
Sequential (baseline) reducer: one pass, single thread.

Intended as the simplest possible baseline to compare the concurrent reducers
against.
"""

from __future__ import annotations

from typing import Sequence

from salarybench.domain.models import HasSalary
from salarybench.reducers.abstract import AbstractReducer, _require_records


class SequentialReducer(AbstractReducer):
    """Plain left-to-right loop. Deterministic and side-effect free."""

    name: str = "sequential"
    description: str = "Single-threaded loop over the records."

    def sum(self, records: Sequence[HasSalary]) -> int:
        total = 0
        for record in records:
            total += record.salary
        return total

    def max(self, records: Sequence[HasSalary]) -> int:
        _require_records(records, "max")
        highest = 0
        for record in records:
            if record.salary > highest:
                highest = record.salary
        return highest


__all__ = ["SequentialReducer"]
