"""
Synthetic vacancy generation.

Records are built from raw text exactly as an upstream parser would see them,
so validation runs on every generated vacancy. A record that fails validation
is replaced by ``None`` rather than aborting generation; use
`present_records` to drop those placeholders before aggregating.
"""

from __future__ import annotations

import random
from typing import Callable, Iterable, Optional, Tuple

from pydantic import ValidationError

from salarybench.domain.models import Vacancy
from salarybench.utils.logging import get_logger

log = get_logger(__name__)

VacancyFactory = Callable[[random.Random, int, int], Vacancy]

MAX_WORK_EXP_YEARS = 40


def generate_vacancy(rng: random.Random, salary_min: int = 0, salary_max: int = 10_000) -> Vacancy:
    """
    Build one vacancy with a salary drawn uniformly from [salary_min, salary_max).
    """
    return Vacancy.from_raw(
        company_name="Company",
        specialization="Specialization",
        conditions="Conditions",
        salary_text=str(rng.randrange(salary_min, salary_max)),
        worker_specialization_name="IT",
        work_exp_years_text=str(rng.randint(0, MAX_WORK_EXP_YEARS)),
        education_text="",
        car=False,
    )


def generate_records(
    count: int,
    *,
    salary_min: int = 0,
    salary_max: int = 10_000,
    seed: Optional[int] = None,
    factory: VacancyFactory = generate_vacancy,
) -> Tuple[Optional[Vacancy], ...]:
    """
    Generate `count` vacancies.

    Parameters
    ----------
    count : int
        Number of slots to produce; must be non-negative.
    salary_min, salary_max : int
        Half-open salary range handed to the factory.
    seed : int | None
        RNG seed for reproducible runs.
    factory : callable
        Builds one vacancy from ``(rng, salary_min, salary_max)``.

    Returns
    -------
    tuple
        Exactly `count` entries; a slot is ``None`` where the factory raised
        a validation error.
    """
    if count < 0:
        raise ValueError(f"count must be non-negative, got {count}")

    rng = random.Random(seed)
    records: list[Optional[Vacancy]] = []
    for index in range(count):
        try:
            records.append(factory(rng, salary_min, salary_max))
        except (ValidationError, ValueError) as exc:
            log.warning(
                "Discarding malformed synthetic vacancy",
                extra={"index": index, "error": str(exc)},
            )
            records.append(None)

    log.debug("Generated vacancies", extra={"count": count, "seed": seed})
    return tuple(records)


def present_records(records: Iterable[Optional[Vacancy]]) -> Tuple[Vacancy, ...]:
    """Drop absent placeholders, keeping order."""
    kept = tuple(record for record in records if record is not None)
    return kept


__all__ = ["generate_records", "generate_vacancy", "present_records", "VacancyFactory"]
