"""
salarybench - Concurrent vs. sequential salary aggregation benchmark.

Times average and maximum salary computations over synthetic job vacancies
using different strategies:

- A single-threaded loop
- One thread per record with shared, locked accumulators
- One future per record folded sequentially (map-reduce)
- A bounded thread pool over record chunks
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from salarybench.config import Settings, get_settings
from salarybench.domain import Vacancy, generate_records, present_records
from salarybench.orchestrator import (
    BenchmarkReport,
    TimingSample,
    available_reducers,
    prepare_records,
    run_benchmark,
    run_strategies,
)
from salarybench.reducers import (
    AbstractReducer,
    ConcurrentReducer,
    EmptyInputError,
    MapReduceReducer,
    PooledReducer,
    Reducer,
    ReducerError,
    SequentialReducer,
)
from salarybench.utils.logging import configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "Settings",
    "get_settings",
    # Domain
    "Vacancy",
    "generate_records",
    "present_records",
    # Harness
    "BenchmarkReport",
    "TimingSample",
    "available_reducers",
    "prepare_records",
    "run_benchmark",
    "run_strategies",
    # Reducers
    "AbstractReducer",
    "ConcurrentReducer",
    "EmptyInputError",
    "MapReduceReducer",
    "PooledReducer",
    "Reducer",
    "ReducerError",
    "SequentialReducer",
    # Logging
    "configure_logging",
    "get_logger",
]
