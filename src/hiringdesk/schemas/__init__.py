"""Pydantic schema definitions for candidates, scores and reviewer state."""

from __future__ import annotations

from .analysis import (
    BiasAnalysis,
    DiversityMetrics,
    EducationBias,
    LocationBias,
    SkillsBias,
    TeamComposition,
)
from .candidate import (
    WORK_AVAILABILITY_KINDS,
    Candidate,
    Degree,
    Education,
    RawCandidate,
    SalaryExpectation,
    WorkExperience,
)
from .review import (
    FilterState,
    LedgerAction,
    SelectionEntry,
    ShortlistEntry,
    SortConfig,
    SortKey,
)
from .score import CandidateScore, ScoreWeights

__all__ = [
    "BiasAnalysis",
    "Candidate",
    "CandidateScore",
    "Degree",
    "DiversityMetrics",
    "Education",
    "EducationBias",
    "FilterState",
    "LedgerAction",
    "LocationBias",
    "RawCandidate",
    "SalaryExpectation",
    "ScoreWeights",
    "SelectionEntry",
    "ShortlistEntry",
    "SkillsBias",
    "SortConfig",
    "SortKey",
    "TeamComposition",
    "WORK_AVAILABILITY_KINDS",
    "WorkExperience",
]
