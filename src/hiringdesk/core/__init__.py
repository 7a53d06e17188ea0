"""Core review engine components."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from ..schemas import Candidate

# NOTE: keep imports explicit for export clarity.
from .diversity import DiversityAnalyzer
from .evaluators import (
    DiversityEvaluator,
    EducationEvaluator,
    ExperienceEvaluator,
    SalaryEvaluator,
    SkillEvaluator,
)
from .filtering import FilterEngine, extract_filter_options
from .normalization import normalize_salaries, normalize_skills
from .score_analysis import ScoreAnalyzer
from .scoring import EvaluationResult, ScoringEngine
from .skills import SkillCategorizer
from .validation import CandidateValidator, ValidationIssue, ValidationReport


@runtime_checkable
class Evaluator(Protocol):
    """Evaluator contract for computing one or more component scores."""

    method: str

    def evaluate(self, candidate: Candidate, context: dict[str, Any]) -> dict[str, Any]:
        """Return ``{"method", "scores", "metadata"}`` for a candidate in context."""


__all__ = [
    "CandidateValidator",
    "DiversityAnalyzer",
    "DiversityEvaluator",
    "EducationEvaluator",
    "EvaluationResult",
    "Evaluator",
    "ExperienceEvaluator",
    "FilterEngine",
    "SalaryEvaluator",
    "ScoreAnalyzer",
    "ScoringEngine",
    "SkillCategorizer",
    "SkillEvaluator",
    "ValidationIssue",
    "ValidationReport",
    "extract_filter_options",
    "normalize_salaries",
    "normalize_skills",
]
