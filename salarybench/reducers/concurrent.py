"""
Concurrent reducer: one thread per record, shared accumulators, full join.

This is the naive fan-out the benchmark measures. Every record gets its own
`threading.Thread` that performs a single contribution to a shared
accumulator; the caller joins every thread before reading the result. There
is no pooling and no cap on the number of threads.
"""

from __future__ import annotations

import threading
from typing import Callable, List, Optional, Sequence

from salarybench.config import get_settings
from salarybench.domain.models import HasSalary
from salarybench.reducers.abstract import AbstractReducer, ReducerError, _require_records
from salarybench.reducers.accumulators import AtomicCounter, MaxRegister
from salarybench.utils.logging import get_logger

log = get_logger(__name__)


def _join_all(threads: Sequence[threading.Thread]) -> None:
    """
    Block until every thread has finished.

    An interrupted wait is logged and retried for the same thread; the
    barrier never gives up early.
    """
    for thread in threads:
        while True:
            try:
                thread.join()
                break
            except InterruptedError:
                log.warning(
                    "Wait interrupted, still waiting for worker",
                    extra={"worker": thread.name},
                    exc_info=True,
                )


class ConcurrentReducer(AbstractReducer):
    """
    Fan out one thread per record against a shared accumulator.

    Parameters
    ----------
    guarded_max : bool | None
        Hold the register lock around the whole read-compare-write of `max`.
        ``False`` reproduces the unguarded check-then-act race. Defaults to
        ``settings.guarded_max``.
    """

    name: str = "concurrent"
    description: str = "One thread per record, shared locked accumulator, join barrier."

    def __init__(self, guarded_max: Optional[bool] = None) -> None:
        if guarded_max is None:
            guarded_max = get_settings().guarded_max
        self.guarded_max = guarded_max

    def sum(self, records: Sequence[HasSalary]) -> int:
        total = AtomicCounter(0)
        self._fan_out(records, lambda record: total.get_and_add(record.salary), "sum")
        return total.get()

    def max(self, records: Sequence[HasSalary]) -> int:
        _require_records(records, "max")
        highest = MaxRegister(0, guarded=self.guarded_max)
        self._fan_out(records, lambda record: highest.update(record.salary), "max")
        return highest.get()

    def _fan_out(
        self,
        records: Sequence[HasSalary],
        contribute: Callable[[HasSalary], object],
        operation: str,
    ) -> None:
        failures: List[BaseException] = []

        def unit(record: HasSalary) -> None:
            try:
                contribute(record)
            except Exception as exc:  # noqa: BLE001 - re-raised after the barrier
                failures.append(exc)

        threads: List[threading.Thread] = []
        try:
            for index, record in enumerate(records):
                thread = threading.Thread(target=unit, args=(record,), name=f"{operation}-worker-{index}")
                thread.start()
                threads.append(thread)
            log.debug("Dispatched workers", extra={"operation": operation, "workers": len(threads)})
        finally:
            # only started threads are tracked
            _join_all(threads)

        if failures:
            raise ReducerError(
                f"{len(failures)} of {len(threads)} {operation} workers failed: {failures[0]!r}"
            ) from failures[0]


__all__ = ["ConcurrentReducer"]
