"""
Bounded-pool reducer: a fixed number of worker threads over record chunks.

The records are split into contiguous chunks; each pool worker reduces its
chunk locally and the partial results are combined once the pool drains.
This is the shape the per-record fan-out grows into when it has to scale.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from salarybench.config import get_settings
from salarybench.domain.models import HasSalary
from salarybench.reducers.abstract import AbstractReducer, ReducerError, _require_records


@dataclass(frozen=True)
class WorkItem:
    start: int
    end: int


def _chunk_sum(records: Sequence[HasSalary], work: WorkItem) -> int:
    total = 0
    for record in records[work.start : work.end]:
        total += record.salary
    return total


def _chunk_max(records: Sequence[HasSalary], work: WorkItem) -> int:
    highest = 0
    for record in records[work.start : work.end]:
        if record.salary > highest:
            highest = record.salary
    return highest


class PooledReducer(AbstractReducer):
    """
    Reduce chunks of records on a `ThreadPoolExecutor` of fixed size.

    Parameters
    ----------
    concurrency : int | None
        Pool size. Defaults to ``settings.benchmark_concurrency``.
    """

    name: str = "pooled"
    description: str = "Bounded thread pool over contiguous chunks, partial results combined."

    def __init__(self, concurrency: Optional[int] = None) -> None:
        if concurrency is None:
            concurrency = get_settings().benchmark_concurrency
        self.concurrency = concurrency
        if self.concurrency < 1:
            raise ValueError(f"concurrency must be at least 1, got {self.concurrency}")

    def _make_work_items(self, total: int) -> List[WorkItem]:
        chunk_size = max(-(-total // self.concurrency), 1)
        work: List[WorkItem] = []
        start = 0
        while start < total:
            end = min(start + chunk_size, total)
            work.append(WorkItem(start=start, end=end))
            start = end
        return work

    def _partials(
        self, records: Sequence[HasSalary], reduce_chunk: Callable[[Sequence[HasSalary], WorkItem], int]
    ) -> List[int]:
        work_items = self._make_work_items(len(records))
        if not work_items:
            return []
        with ThreadPoolExecutor(max_workers=self.concurrency, thread_name_prefix="pooled") as pool:
            futures = [pool.submit(reduce_chunk, records, work) for work in work_items]
            try:
                return [future.result() for future in futures]
            except Exception as exc:
                raise ReducerError(f"pooled worker failed: {exc!r}") from exc

    def sum(self, records: Sequence[HasSalary]) -> int:
        return sum(self._partials(records, _chunk_sum))

    def max(self, records: Sequence[HasSalary]) -> int:
        _require_records(records, "max")
        return max(self._partials(records, _chunk_max))


__all__ = ["PooledReducer", "WorkItem"]
