"""
Map-reduce reducer: one future per record, no shared mutable state.

Each unit of work returns its record's salary through its future; the caller
folds the results sequentially once every future has completed. Lost updates
are impossible because nothing is shared.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor, wait
from typing import List, Sequence

from salarybench.domain.models import HasSalary
from salarybench.reducers.abstract import AbstractReducer, ReducerError, _require_records


def _salary_of(record: HasSalary) -> int:
    return record.salary


class MapReduceReducer(AbstractReducer):
    name: str = "mapreduce"
    description: str = "One future per record, sequential fold of the results."

    def _map(self, records: Sequence[HasSalary]) -> List[int]:
        if not records:
            return []
        with ThreadPoolExecutor(max_workers=len(records), thread_name_prefix="mapreduce") as pool:
            futures = [pool.submit(_salary_of, record) for record in records]
            wait(futures)
        try:
            return [future.result() for future in futures]
        except Exception as exc:
            raise ReducerError(f"mapreduce worker failed: {exc!r}") from exc

    def sum(self, records: Sequence[HasSalary]) -> int:
        total = 0
        for salary in self._map(records):
            total += salary
        return total

    def max(self, records: Sequence[HasSalary]) -> int:
        _require_records(records, "max")
        highest = 0
        for salary in self._map(records):
            if salary > highest:
                highest = salary
        return highest


__all__ = ["MapReduceReducer"]
