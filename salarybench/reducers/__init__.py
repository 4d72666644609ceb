"""
Reducers package for the salary aggregation benchmark.

Re-exports the abstract interfaces and the concrete reducer classes so
downstream code can import from `salarybench.reducers` directly.
"""

from salarybench.reducers.abstract import (
    AbstractReducer,
    EmptyInputError,
    Reducer,
    ReducerError,
)
from salarybench.reducers.accumulators import AtomicCounter, MaxRegister
from salarybench.reducers.concurrent import ConcurrentReducer
from salarybench.reducers.mapreduce import MapReduceReducer
from salarybench.reducers.pooled import PooledReducer
from salarybench.reducers.sequential import SequentialReducer

__all__ = [
    # Abstracts
    "AbstractReducer",
    "Reducer",
    # Errors
    "EmptyInputError",
    "ReducerError",
    # Accumulators
    "AtomicCounter",
    "MaxRegister",
    # Concrete reducers
    "ConcurrentReducer",
    "MapReduceReducer",
    "PooledReducer",
    "SequentialReducer",
]
