"""Reviewer-owned state: filters, sorting and decision ledgers."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from .candidate import WorkAvailability

Priority = Literal["high", "medium", "low"]
DiversityFactor = Literal["location", "education", "experience", "skills"]
SortDirection = Literal["asc", "desc"]
LedgerActionKind = Literal[
    "shortlist",
    "unshortlist",
    "select",
    "unselect",
    "clear_selection",
]


class SortKey(str, Enum):
    """Fields the candidate list can be ordered by."""

    TOTAL_SCORE = "total_score"
    ID = "id"
    NAME = "name"
    EMAIL = "email"
    PHONE = "phone"
    LOCATION = "location"
    SUBMITTED_AT = "submitted_at"
    EXPERIENCE = "experience"
    SKILLS = "skills"
    SALARY = "salary"
    EDUCATION_LEVEL = "education_level"


class FilterState(BaseModel):
    """Active predicates. Empty or unset fields impose no constraint."""

    search: str = ""
    locations: frozenset[str] = frozenset()
    work_availability: frozenset[WorkAvailability] = frozenset()
    min_experience: int = Field(default=0, ge=0)
    max_salary: int | None = None
    education_levels: frozenset[str] = frozenset()
    skills: frozenset[str] = frozenset()
    is_shortlisted: bool | None = None
    is_selected: bool | None = None

    model_config = ConfigDict(frozen=True, extra="ignore")

    def merge(self, updates: dict) -> "FilterState":
        """Return a new filter state with ``updates`` applied over this one."""
        merged = self.model_dump()
        merged.update(updates)
        return FilterState.model_validate(merged)


class SortConfig(BaseModel):
    key: SortKey = SortKey.TOTAL_SCORE
    direction: SortDirection = "desc"

    model_config = ConfigDict(frozen=True, extra="forbid")


class ShortlistEntry(BaseModel):
    candidate_id: str
    shortlisted_at: datetime
    reason: str = ""
    priority: Priority = "medium"

    model_config = ConfigDict(frozen=True, extra="forbid")


class SelectionEntry(BaseModel):
    candidate_id: str
    selected_at: datetime
    position: str = ""
    reason: str = ""
    diversity_factor: DiversityFactor | None = None

    model_config = ConfigDict(frozen=True, extra="forbid")


class LedgerAction(BaseModel):
    """Append-only record of a reviewer decision."""

    candidate_id: str | None
    action: LedgerActionKind
    timestamp: datetime

    model_config = ConfigDict(frozen=True, extra="forbid")
