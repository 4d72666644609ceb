"""
Benchmark harness: times reducers over a shared, immutable record sequence.

Two entry points:

- `run_benchmark` runs the fixed four-call scenario (average and max, each
  concurrent then sequential) and returns a `BenchmarkReport` of
  nanosecond timings plus the computed values.
- `run_strategies` compares any set of registered reducers, with optional
  warmup and repeated runs aggregated into summary statistics.

Usage:
    from salarybench.orchestrator import prepare_records, run_benchmark

    records = prepare_records(count=10, seed=42)
    report = run_benchmark(records)
    print(report.elapsed_ns(AVG_CONCURRENT))
"""

from __future__ import annotations

import statistics
import time
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from salarybench.config import get_settings
from salarybench.domain.generator import generate_records, present_records
from salarybench.domain.models import HasSalary, Vacancy
from salarybench.reducers.abstract import Reducer
from salarybench.reducers.concurrent import ConcurrentReducer
from salarybench.reducers.mapreduce import MapReduceReducer
from salarybench.reducers.pooled import PooledReducer
from salarybench.reducers.sequential import SequentialReducer
from salarybench.utils.logging import get_logger
from salarybench.utils.profiler import profile_block

log = get_logger(__name__)

AVG_CONCURRENT = "avg_concurrent"
MAX_CONCURRENT = "max_concurrent"
AVG_SEQUENTIAL = "avg_sequential"
MAX_SEQUENTIAL = "max_sequential"

BENCHMARK_ORDER: Tuple[str, ...] = (AVG_CONCURRENT, MAX_CONCURRENT, AVG_SEQUENTIAL, MAX_SEQUENTIAL)


@dataclass(frozen=True)
class TimingSample:
    operation: str
    elapsed_ns: int
    value: int


@dataclass(frozen=True)
class BenchmarkReport:
    """Timings of one benchmark scenario, in invocation order."""

    record_count: int
    samples: Tuple[TimingSample, ...]

    def sample(self, operation: str) -> TimingSample:
        for sample in self.samples:
            if sample.operation == operation:
                return sample
        raise KeyError(operation)

    def elapsed_ns(self, operation: str) -> int:
        return self.sample(operation).elapsed_ns

    def value(self, operation: str) -> int:
        return self.sample(operation).value

    @property
    def consistent(self) -> bool:
        """True when both strategies computed the same average and max."""
        return self.value(AVG_CONCURRENT) == self.value(AVG_SEQUENTIAL) and self.value(
            MAX_CONCURRENT
        ) == self.value(MAX_SEQUENTIAL)


def prepare_records(
    count: Optional[int] = None,
    seed: Optional[int] = None,
    salary_min: Optional[int] = None,
    salary_max: Optional[int] = None,
) -> Tuple[Vacancy, ...]:
    """
    Generate the scenario's vacancies and drop any that failed validation.

    Unset arguments fall back to the settings.
    """
    settings = get_settings()
    effective_count = settings.benchmark_records if count is None else count
    generated = generate_records(
        effective_count,
        salary_min=settings.salary_min if salary_min is None else salary_min,
        salary_max=settings.salary_max if salary_max is None else salary_max,
        seed=settings.benchmark_seed if seed is None else seed,
    )
    records = present_records(generated)
    dropped = len(generated) - len(records)
    if dropped:
        log.warning(
            "Dropped absent vacancies before aggregation",
            extra={"dropped": dropped, "kept": len(records)},
        )
    return records


def _timed(operation: str, func: Callable[[Sequence[HasSalary]], int], records: Sequence[HasSalary]) -> TimingSample:
    start = time.perf_counter_ns()
    value = func(records)
    elapsed = time.perf_counter_ns() - start
    log.info(
        f"[TIMED] {operation}",
        extra={"operation": operation, "elapsed_ns": elapsed, "value": value},
    )
    return TimingSample(operation=operation, elapsed_ns=elapsed, value=value)


def run_benchmark(
    records: Sequence[HasSalary],
    concurrent: Optional[Reducer] = None,
    sequential: Optional[Reducer] = None,
) -> BenchmarkReport:
    """
    Time each of the four reductions exactly once, in `BENCHMARK_ORDER`.

    Parameters
    ----------
    records : sequence
        Non-empty, read-only sequence of salaried records.
    concurrent : Reducer | None
        Defaults to a `ConcurrentReducer` configured from settings.
    sequential : Reducer | None
        Defaults to `SequentialReducer`.

    Raises
    ------
    EmptyInputError
        If `records` is empty. Nothing is timed or reported in that case.
    """
    concurrent = concurrent or ConcurrentReducer()
    sequential = sequential or SequentialReducer()

    calls: Dict[str, Callable[[Sequence[HasSalary]], int]] = {
        AVG_CONCURRENT: concurrent.average,
        MAX_CONCURRENT: concurrent.max,
        AVG_SEQUENTIAL: sequential.average,
        MAX_SEQUENTIAL: sequential.max,
    }
    samples = tuple(_timed(operation, calls[operation], records) for operation in BENCHMARK_ORDER)
    report = BenchmarkReport(record_count=len(records), samples=samples)

    if not report.consistent:
        log.warning(
            "Concurrent and sequential results disagree",
            extra={operation: report.value(operation) for operation in BENCHMARK_ORDER},
        )
    return report


def _reducer_factories() -> Dict[str, Callable[[], Reducer]]:
    """Registry of available reducers."""
    return {
        "sequential": lambda: SequentialReducer(),
        "concurrent": lambda: ConcurrentReducer(),
        "mapreduce": lambda: MapReduceReducer(),
        "pooled": lambda: PooledReducer(),
    }


def available_reducers() -> List[str]:
    """List available reducer names."""
    return sorted(_reducer_factories().keys())


def _resolve_reducer(name: str) -> Reducer:
    factories = _reducer_factories()
    if name not in factories:
        raise ValueError(f"Unknown reducer '{name}'. Available: {', '.join(factories)}")
    return factories[name]()


def _profiled_execute(reducer: Reducer, records: Sequence[HasSalary]) -> dict:
    result: dict = {"strategy": reducer.name, "records": len(records)}
    try:
        with profile_block(reducer.name, sample_interval_ms=5) as stats:
            avg_sample = _timed(f"{reducer.name}.average", reducer.average, records)
            max_sample = _timed(f"{reducer.name}.max", reducer.max, records)
    except Exception as exc:  # noqa: BLE001 - intentional broad catch to record failures
        log.exception(f"[REDUCER FAILED] {reducer.name}", extra={"strategy": reducer.name})
        result["error"] = str(exc)
        return result

    result.update(
        {
            "average": avg_sample.value,
            "max": max_sample.value,
            "avg_ns": avg_sample.elapsed_ns,
            "max_ns": max_sample.elapsed_ns,
            "total_ns": stats.duration_ns,
            "peak_threads": stats.peak_threads,
            "peak_rss_bytes": stats.peak_rss_bytes,
            "cpu_percent": round(stats.cpu_percent, 1) if stats.cpu_percent is not None else None,
        }
    )
    return result


def _summarize(values: List[int]) -> dict:
    return {
        "median": int(statistics.median(values)),
        "mean": int(statistics.mean(values)),
        "stddev": int(statistics.stdev(values)) if len(values) > 1 else 0,
        "min": min(values),
        "max": max(values),
    }


def _aggregate_runs(run_results: List[dict]) -> dict:
    """
    Aggregate multiple runs of one reducer into summary statistics.

    Failed runs are excluded; if every run failed the first error is kept.
    """
    ok = [r for r in run_results if "error" not in r]
    aggregated: dict = {
        "strategy": run_results[0]["strategy"],
        "records": run_results[0]["records"],
        "runs": len(run_results),
        "individual_runs": run_results,
    }
    if not ok:
        aggregated["error"] = run_results[0]["error"]
        return aggregated

    aggregated["average"] = ok[0]["average"]
    aggregated["max"] = ok[0]["max"]
    for key in ("avg_ns", "max_ns", "total_ns"):
        aggregated[key] = _summarize([r[key] for r in ok])
    aggregated["peak_threads"] = max(r["peak_threads"] or 0 for r in ok)
    return aggregated


def run_strategies(
    strategy_names: Optional[Iterable[str]] = None,
    records: Optional[Sequence[HasSalary]] = None,
    warmup: bool = False,
    runs: Optional[int] = None,
) -> List[dict]:
    """
    Run one or more reducers over the same records and collect timings.

    Parameters
    ----------
    strategy_names : iterable[str] | None
        Reducer names to execute. If None or ["all"], executes all available.
    records : sequence | None
        Records to aggregate. Defaults to `prepare_records()`.
    warmup : bool
        Whether to run each reducer once before measurement.
    runs : int | None
        Measurement runs per reducer. Defaults to settings.benchmark_runs.

    Returns
    -------
    List[dict]
        One result per reducer. With runs > 1, timings are summarized as
        median, mean, stddev, min and max nanoseconds.
    """
    settings = get_settings()
    effective_runs = runs or settings.benchmark_runs
    data = prepare_records() if records is None else records

    names = list(strategy_names) if strategy_names is not None else ["all"]
    if len(names) == 1 and names[0] == "all":
        names = available_reducers()

    results: List[dict] = []
    for name in names:
        log.info(f"[STRATEGY] {name.upper()}", extra={"strategy": name, "records": len(data)})
        reducer = _resolve_reducer(name)

        if warmup:
            try:
                reducer.average(data)
                reducer.max(data)
            except Exception as exc:  # noqa: BLE001 - measurement run reports the failure
                log.warning(f"[WARMUP] Failed for {name}", extra={"strategy": name, "error": str(exc)})

        run_results = []
        for run_num in range(1, effective_runs + 1):
            result = _profiled_execute(reducer, data)
            result["run"] = run_num
            run_results.append(result)

        if effective_runs > 1:
            results.append(_aggregate_runs(run_results))
        else:
            results.extend(run_results)

    log.info("[ORCHESTRATOR COMPLETE]", extra={"strategies": names})
    return results


__all__ = [
    "AVG_CONCURRENT",
    "AVG_SEQUENTIAL",
    "BENCHMARK_ORDER",
    "BenchmarkReport",
    "MAX_CONCURRENT",
    "MAX_SEQUENTIAL",
    "TimingSample",
    "available_reducers",
    "prepare_records",
    "run_benchmark",
    "run_strategies",
]
