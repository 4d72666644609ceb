"""
Domain models for the salary aggregation benchmark.

Defines the vacancy record and its worker requirements. The aggregation core
only relies on the `HasSalary` protocol; everything else here is the data
model the synthetic generator builds.
"""
from __future__ import annotations

from enum import Enum
from typing import Any, Optional, Protocol, runtime_checkable

from pydantic import BaseModel, Field, field_validator


@runtime_checkable
class HasSalary(Protocol):
    """Anything the reducers can aggregate."""

    @property
    def salary(self) -> int: ...


class Education(str, Enum):
    NONE = "none"
    SCHOOL = "school"
    UNIVERSITY = "university"

    @classmethod
    def parse(cls, text: str) -> Optional["Education"]:
        """
        Map free text to an education level; unknown values give None.

        The empty string means no education requirement.
        """
        normalized = text.strip().lower()
        if not normalized:
            return cls.NONE
        try:
            return cls(normalized)
        except ValueError:
            return None


class WorkerSpecialization(BaseModel):
    specialization_name: str = Field(..., min_length=1)
    work_exp_years: int = Field(..., ge=0, description="Required experience in years.")

    model_config = {"frozen": True}


class WorkerRequirements(BaseModel):
    """
    What a vacancy asks of a candidate.

    `car` is informational: two requirement sets that differ only by `car`
    compare (and hash) equal.
    """

    specialization: Optional[WorkerSpecialization] = None
    education: Optional[Education] = None
    car: bool = False

    model_config = {"frozen": True}

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, WorkerRequirements):
            return NotImplemented
        return self.specialization == other.specialization and self.education == other.education

    def __hash__(self) -> int:
        return hash((self.specialization, self.education))


class Vacancy(BaseModel):
    """
    A single job vacancy. Immutable once built.
    """

    company_name: str = Field(..., description="Hiring company.")
    specialization: str = Field(..., description="Vacancy specialization.")
    conditions: str = Field("", description="Working conditions.")
    salary: int = Field(..., ge=0, description="Offered salary; never negative.")
    worker_requirements: WorkerRequirements = Field(default_factory=WorkerRequirements)

    model_config = {
        "frozen": True,
        "str_strip_whitespace": True,
    }

    @field_validator("company_name", "specialization")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value:
            raise ValueError("must not be blank")
        return value

    @classmethod
    def from_raw(
        cls,
        company_name: str,
        specialization: str,
        conditions: str,
        salary_text: str,
        worker_specialization_name: Optional[str],
        work_exp_years_text: str,
        education_text: str,
        car: bool = False,
    ) -> "Vacancy":
        """
        Build a vacancy from unparsed text fields.

        An unparsable salary becomes 0. A missing worker specialization name or
        an unparsable experience value drops the worker specialization.
        Raises pydantic.ValidationError when the parsed values are invalid
        (blank company, negative salary, negative experience).
        """
        return cls(
            company_name=company_name,
            specialization=specialization,
            conditions=conditions,
            salary=_parse_salary(salary_text),
            worker_requirements=WorkerRequirements(
                specialization=_parse_worker_specialization(
                    worker_specialization_name, work_exp_years_text
                ),
                education=Education.parse(education_text),
                car=car,
            ),
        )

    @property
    def education(self) -> Optional[Education]:
        return self.worker_requirements.education

    def __lt__(self, other: Any) -> bool:
        if not isinstance(other, Vacancy):
            return NotImplemented
        return self.company_name < other.company_name

    def __str__(self) -> str:
        education = self.education.name if self.education is not None else None
        return (
            f"{self.company_name}: {self.specialization}({self.conditions}) - "
            f"{self.salary}$ {education} car: {self.worker_requirements.car}"
        )


def _parse_salary(text: str) -> int:
    try:
        return int(text.strip())
    except ValueError:
        return 0


def _parse_worker_specialization(
    name: Optional[str], work_exp_years_text: str
) -> Optional[WorkerSpecialization]:
    if not name:
        return None
    try:
        years = int(work_exp_years_text.strip())
    except ValueError:
        return None
    return WorkerSpecialization(specialization_name=name.strip(), work_exp_years=years)


__all__ = [
    "Education",
    "HasSalary",
    "Vacancy",
    "WorkerRequirements",
    "WorkerSpecialization",
]
