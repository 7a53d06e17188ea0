"""Candidate document shapes: the lenient source record and the validated pool entry."""

from __future__ import annotations

import re
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

WorkAvailability = Literal["full-time", "part-time", "contract", "internship"]

WORK_AVAILABILITY_KINDS: tuple[str, ...] = (
    "full-time",
    "part-time",
    "contract",
    "internship",
)

_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class RawWorkExperience(BaseModel):
    """Employment entry as it appears in the source feed."""

    company: str | None = None
    role_name: str | None = Field(default=None, alias="roleName")

    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class RawDegree(BaseModel):
    """Degree entry as it appears in the source feed."""

    degree: str | None = None
    subject: str | None = None
    school: str | None = None
    gpa: str | None = None
    start_date: str | None = Field(default=None, alias="startDate")
    end_date: str | None = Field(default=None, alias="endDate")
    original_school: str | None = Field(default=None, alias="originalSchool")
    is_top50: bool | None = Field(default=None, alias="isTop50")
    is_top25: bool | None = Field(default=None, alias="isTop25")

    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class RawEducation(BaseModel):
    highest_level: str | None = None
    degrees: list[RawDegree] | None = None

    model_config = ConfigDict(extra="ignore")


class RawCandidate(BaseModel):
    """Loosely-typed applicant record; every field may be missing."""

    id: str | None = None
    name: str | None = None
    email: str | None = None
    phone: str | None = None
    location: str | None = None
    submitted_at: str | None = None
    work_availability: list[str] | None = None
    annual_salary_expectation: dict[str, str] | None = None
    work_experiences: list[RawWorkExperience] | None = None
    education: RawEducation | None = None
    skills: list[str] | None = None

    model_config = ConfigDict(extra="ignore")


class WorkExperience(BaseModel):
    """Validated employment entry."""

    company: str = Field(min_length=1)
    role_name: str = Field(min_length=1)

    model_config = ConfigDict(frozen=True, extra="forbid")


class Degree(BaseModel):
    """Validated degree entry.

    ``is_top25`` and ``is_top50`` are independent flags; a school counts as a
    top school when either is set.
    """

    degree: str
    subject: str
    school: str
    gpa: str
    start_date: datetime
    end_date: datetime
    original_school: str
    is_top50: bool
    is_top25: bool | None = None

    model_config = ConfigDict(frozen=True, extra="forbid")

    @property
    def is_top_school(self) -> bool:
        return bool(self.is_top25 or self.is_top50)


class Education(BaseModel):
    highest_level: str
    degrees: tuple[Degree, ...] = ()

    model_config = ConfigDict(frozen=True, extra="forbid")


class SalaryExpectation(BaseModel):
    """Annual salary expectation per availability kind, as display strings."""

    full_time: str | None = Field(default=None, alias="full-time")
    part_time: str | None = Field(default=None, alias="part-time")
    contract: str | None = None
    internship: str | None = None

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    def items(self) -> list[tuple[str, str]]:
        """Return the present ``(kind, value)`` pairs keyed by source names."""
        return [
            (kind, value)
            for kind, value in self.model_dump(by_alias=True).items()
            if value is not None
        ]


class Candidate(BaseModel):
    """Validated, immutable pool entry."""

    id: str = Field(min_length=1)
    name: str = Field(min_length=2)
    email: str
    phone: str
    location: str
    submitted_at: datetime
    work_availability: tuple[WorkAvailability, ...] = Field(min_length=1)
    salary_expectation: SalaryExpectation = Field(default_factory=SalaryExpectation)
    work_experiences: tuple[WorkExperience, ...] = ()
    education: Education
    skills: tuple[str, ...] = ()

    model_config = ConfigDict(frozen=True, extra="forbid")

    @field_validator("email")
    @classmethod
    def _check_email(cls, value: str) -> str:
        if not _EMAIL_PATTERN.match(value):
            raise ValueError(f"invalid email address: {value!r}")
        return value

    @field_validator("work_availability")
    @classmethod
    def _dedupe_availability(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        return tuple(dict.fromkeys(value))

    @field_validator("skills")
    @classmethod
    def _check_skills(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        for skill in value:
            if not skill.strip():
                raise ValueError("skills must be non-empty strings")
        return value

    @property
    def role_count(self) -> int:
        return len(self.work_experiences)

    @property
    def full_time_salary(self) -> str | None:
        return self.salary_expectation.full_time
