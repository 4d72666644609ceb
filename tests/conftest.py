"""
Pytest configuration for the salary aggregation benchmark.

Provides fixtures for:
- Settings isolation (cache cleared, env overrides via monkeypatch)
- Lightweight salaried records for reducer tests
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generator, Tuple

import pytest

from salarybench.config import get_settings


@dataclass(frozen=True)
class Salaried:
    salary: int


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """
    Clear the cached settings around every test so env overrides apply.
    """
    for name in ("BENCHMARK_RECORDS", "BENCHMARK_SEED", "BENCHMARK_GUARDED_MAX", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def make_records():
    def _make(*salaries: int) -> Tuple[Salaried, ...]:
        return tuple(Salaried(salary) for salary in salaries)

    return _make


@pytest.fixture
def sample_records(make_records) -> Tuple[Salaried, ...]:
    return make_records(100, 200, 300, 400)
