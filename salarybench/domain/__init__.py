"""
Domain package for the salary aggregation benchmark.

Exports the vacancy model and the synthetic record source.
Keep this package focused on data definitions and validation concerns.
"""

from salarybench.domain.generator import generate_records, generate_vacancy, present_records
from salarybench.domain.models import (
    Education,
    HasSalary,
    Vacancy,
    WorkerRequirements,
    WorkerSpecialization,
)

__all__ = [
    "Education",
    "HasSalary",
    "Vacancy",
    "WorkerRequirements",
    "WorkerSpecialization",
    "generate_records",
    "generate_vacancy",
    "present_records",
]
