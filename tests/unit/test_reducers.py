from __future__ import annotations

import threading
import time

import pytest

from salarybench.reducers import concurrent as concurrent_module
from salarybench.reducers import (
    ConcurrentReducer,
    EmptyInputError,
    MapReduceReducer,
    PooledReducer,
    ReducerError,
    SequentialReducer,
)
from salarybench.reducers.accumulators import MaxRegister
from salarybench.reducers.concurrent import _join_all

REDUCERS = [
    SequentialReducer,
    ConcurrentReducer,
    MapReduceReducer,
    lambda: PooledReducer(concurrency=3),
]


@pytest.fixture(params=REDUCERS, ids=["sequential", "concurrent", "mapreduce", "pooled"])
def reducer(request):
    return request.param()


def test_concrete_scenario(reducer, sample_records):
    assert reducer.sum(sample_records) == 1000
    assert reducer.average(sample_records) == 250
    assert reducer.max(sample_records) == 400


def test_average_truncates(reducer, make_records):
    assert reducer.average(make_records(1, 2)) == 1
    assert reducer.average(make_records(7)) == 7


def test_max_of_all_zero_salaries(reducer, make_records):
    assert reducer.max(make_records(0, 0, 0)) == 0


def test_empty_input_raises(reducer):
    with pytest.raises(EmptyInputError, match="average"):
        reducer.average(())
    with pytest.raises(EmptyInputError, match="max"):
        reducer.max(())


def test_empty_input_error_is_a_value_error():
    assert issubclass(EmptyInputError, ReducerError)
    assert issubclass(ReducerError, ValueError)


def test_sum_of_empty_input_is_zero(reducer):
    assert reducer.sum(()) == 0


def test_all_strategies_agree(make_records):
    records = make_records(5, 9_999, 0, 42, 1_234, 9_998, 17)
    results = {
        (factory().sum(records), factory().average(records), factory().max(records))
        for factory in REDUCERS
    }
    assert results == {(21_295, 3_042, 9_999)}


def test_sequential_is_deterministic(sample_records):
    reducer = SequentialReducer()
    first = (reducer.sum(sample_records), reducer.average(sample_records), reducer.max(sample_records))
    for _ in range(5):
        assert (
            reducer.sum(sample_records),
            reducer.average(sample_records),
            reducer.max(sample_records),
        ) == first


def test_concurrent_spawns_one_thread_per_record(monkeypatch, make_records):
    started: list[str] = []
    real_thread = threading.Thread

    class CountingThread(real_thread):
        def start(self) -> None:
            started.append(self.name)
            super().start()

    monkeypatch.setattr(concurrent_module.threading, "Thread", CountingThread)
    records = make_records(*range(12))

    ConcurrentReducer(guarded_max=True).max(records)

    assert len(started) == 12
    assert all(name.startswith("max-worker-") for name in started)


def test_concurrent_defaults_to_guarded_max_from_settings(monkeypatch):
    monkeypatch.setenv("BENCHMARK_GUARDED_MAX", "false")
    from salarybench.config import get_settings

    get_settings.cache_clear()

    assert ConcurrentReducer().guarded_max is False
    assert ConcurrentReducer(guarded_max=True).guarded_max is True


@pytest.fixture
def slow_compare_and_set(monkeypatch):
    """Widen the gap between reading and writing the max register."""

    def _slow(self, candidate: int) -> bool:
        current = self._value
        time.sleep(0.005)
        if candidate > current:
            self._value = candidate
            return True
        return False

    monkeypatch.setattr(MaxRegister, "_compare_and_set", _slow)


def test_guarded_max_keeps_largest_update(slow_compare_and_set, make_records):
    # The largest salary is dispatched first, so later smaller writes race it.
    records = make_records(199, *range(1, 199))

    assert ConcurrentReducer(guarded_max=True).max(records) == 199


def test_unguarded_max_loses_largest_update(slow_compare_and_set, make_records):
    records = make_records(199, *range(1, 199))

    assert ConcurrentReducer(guarded_max=False).max(records) < 199


def test_dispatch_failure_still_joins_started_workers(monkeypatch):
    real_thread = threading.Thread
    started: list[threading.Thread] = []

    class FailingThread(real_thread):
        def start(self) -> None:
            if self.name.endswith("-3"):
                raise RuntimeError("can't start new thread")
            super().start()
            started.append(self)

    class SlowSalary:
        @property
        def salary(self) -> int:
            time.sleep(0.2)
            return 1

    monkeypatch.setattr(concurrent_module.threading, "Thread", FailingThread)

    with pytest.raises(RuntimeError, match="can't start new thread"):
        ConcurrentReducer().sum([SlowSalary() for _ in range(5)])

    assert len(started) == 3
    assert not any(thread.is_alive() for thread in started)


def test_worker_failure_surfaces_after_barrier(make_records):
    class Broken:
        @property
        def salary(self) -> int:
            raise RuntimeError("no salary")

    records = (*make_records(1, 2), Broken())

    with pytest.raises(ReducerError, match="1 of 3 sum workers failed"):
        ConcurrentReducer().sum(records)


def test_join_retries_interrupted_wait(caplog: pytest.LogCaptureFixture):
    class InterruptedOnce:
        name = "sum-worker-0"

        def __init__(self) -> None:
            self.join_calls = 0

        def join(self) -> None:
            self.join_calls += 1
            if self.join_calls == 1:
                raise InterruptedError("EINTR")

    worker = InterruptedOnce()
    with caplog.at_level("WARNING"):
        _join_all([worker])

    assert worker.join_calls == 2
    assert "still waiting" in caplog.text


def test_pooled_rejects_zero_concurrency():
    with pytest.raises(ValueError):
        PooledReducer(concurrency=0)


def test_pooled_work_items_cover_every_record():
    work = PooledReducer(concurrency=4)._make_work_items(10)

    assert [(w.start, w.end) for w in work] == [(0, 3), (3, 6), (6, 9), (9, 10)]
