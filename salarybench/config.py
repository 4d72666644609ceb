"""
Configuration settings for the salary aggregation benchmark.

Uses Pydantic Settings to load environment variables for logging, the synthetic
record scenario, and reducer defaults. The fixed scenario of the benchmark
(ten records, salaries in [0, 10000)) is expressed as defaults here rather than
as constants in the harness.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Application
    log_level: str = Field("WARNING", alias="LOG_LEVEL")
    log_json: bool = Field(False, alias="LOG_JSON")

    # Scenario
    benchmark_records: int = Field(10, ge=0, alias="BENCHMARK_RECORDS")
    salary_min: int = Field(0, ge=0, alias="SALARY_MIN")
    salary_max: int = Field(10_000, alias="SALARY_MAX")
    benchmark_seed: Optional[int] = Field(None, alias="BENCHMARK_SEED")

    # Reducers
    guarded_max: bool = Field(True, alias="BENCHMARK_GUARDED_MAX")
    benchmark_concurrency: int = Field(4, ge=1, alias="BENCHMARK_CONCURRENCY")
    benchmark_runs: int = Field(1, ge=1, alias="BENCHMARK_RUNS")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    @model_validator(mode="after")
    def _check_salary_range(self) -> "Settings":
        if self.salary_max <= self.salary_min:
            raise ValueError(
                f"salary_max ({self.salary_max}) must be greater than salary_min ({self.salary_min})"
            )
        return self


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Retrieve a cached instance of Settings to avoid repeated env parsing.
    """
    return Settings()


__all__ = ["Settings", "get_settings"]
