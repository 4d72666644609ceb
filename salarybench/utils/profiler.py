"""
Profiling utilities for the salary aggregation benchmark.

This module provides a context manager and a decorator to measure:
- Wall-clock time in nanoseconds (perf_counter_ns, monotonic)
- CPU usage (psutil)
- Peak RSS and peak OS thread count via a background sampling thread

Usage examples:
    from salarybench.utils.profiler import profile_block

    with profile_block("concurrent") as stats:
        reducer.average(records)

    print(stats.duration_ns, stats.peak_threads, stats.peak_rss_bytes)

The sampling thread is itself a thread of the process; it is only started
when `sample_interval_ms` is positive so plain timing runs stay undisturbed.
"""

from __future__ import annotations

import contextlib
import threading
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Generator, Optional

import psutil


@dataclass
class ProfileStats:
    """
    Container for profiling measurements.
    """

    label: str
    start_ns: int = field(default=0)
    end_ns: int = field(default=0)
    duration_ns: int = field(default=0)
    peak_rss_bytes: Optional[int] = field(default=None)
    peak_threads: Optional[int] = field(default=None)
    cpu_percent: Optional[float] = field(default=None)
    extra: dict[str, Any] = field(default_factory=dict)

    @property
    def duration_seconds(self) -> float:
        return self.duration_ns / 1_000_000_000


@contextlib.contextmanager
def profile_block(label: str, sample_interval_ms: int = 0) -> Generator[ProfileStats, None, None]:
    """
    Context manager to profile a block of code.

    Parameters
    ----------
    label : str
        Human-friendly label for the profiled block.
    sample_interval_ms : int
        Interval in milliseconds for RSS/thread sampling. Zero disables the
        sampler; start and end snapshots are still taken.
    """
    stats = ProfileStats(label=label)
    process = psutil.Process()
    peak_rss = process.memory_info().rss
    peak_threads = process.num_threads()
    stop_sampling = threading.Event()

    def _sample() -> None:
        nonlocal peak_rss, peak_threads
        while not stop_sampling.is_set():
            try:
                peak_rss = max(peak_rss, process.memory_info().rss)
                peak_threads = max(peak_threads, process.num_threads())
            except psutil.Error:
                return
            stop_sampling.wait(timeout=sample_interval_ms / 1000.0)

    sampler: Optional[threading.Thread] = None
    if sample_interval_ms > 0:
        sampler = threading.Thread(target=_sample, name="profiler-sampler", daemon=True)
        sampler.start()

    # CPU percent needs a priming call
    process.cpu_percent(interval=None)

    stats.start_ns = time.perf_counter_ns()
    try:
        yield stats
    finally:
        stats.end_ns = time.perf_counter_ns()
        stats.duration_ns = stats.end_ns - stats.start_ns

        stop_sampling.set()
        if sampler is not None:
            sampler.join(timeout=1.0)

        peak_rss = max(peak_rss, process.memory_info().rss)
        stats.peak_rss_bytes = peak_rss
        stats.peak_threads = peak_threads
        stats.cpu_percent = process.cpu_percent(interval=None)


def profile_function(
    label: Optional[str] = None,
    sample_interval_ms: int = 0,
) -> Callable[[Callable[..., Any]], Callable[..., ProfileStats]]:
    """
    Decorator to profile a function call and return ProfileStats.

    The wrapped function's return value is kept in ``stats.extra["result"]``.

    Example
    -------
        @profile_function("sequential-max")
        def run():
            return SequentialReducer().max(records)

        stats = run()
        print(stats.duration_ns, stats.extra["result"])
    """

    def decorator(func: Callable[..., Any]) -> Callable[..., ProfileStats]:
        def wrapper(*args: Any, **kwargs: Any) -> ProfileStats:
            tag = label or func.__name__
            with profile_block(tag, sample_interval_ms=sample_interval_ms) as stats:
                stats.extra["result"] = func(*args, **kwargs)
            return stats

        return wrapper

    return decorator


__all__ = ["ProfileStats", "profile_block", "profile_function"]
