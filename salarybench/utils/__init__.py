"""
Utilities package for the salary aggregation benchmark.

Exports shared helpers for logging and profiling.
Keep this package lightweight and free of domain-specific logic.
"""

from salarybench.utils.logging import configure_logging, get_logger
from salarybench.utils.profiler import ProfileStats, profile_block, profile_function

__all__ = [
    "configure_logging",
    "get_logger",
    "ProfileStats",
    "profile_block",
    "profile_function",
]
