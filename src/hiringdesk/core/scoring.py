"""Scoring engine: runs the component evaluators and weighs their results."""

from __future__ import annotations

import math
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Iterable, Sequence

import pendulum

from ..schemas import Candidate, CandidateScore, ScoreWeights
from .evaluators import (
    DiversityEvaluator,
    EducationEvaluator,
    ExperienceEvaluator,
    SalaryEvaluator,
    SkillEvaluator,
)

COMPONENTS: tuple[str, ...] = ("experience", "education", "skill", "salary", "diversity")


@dataclass(slots=True)
class EvaluationResult:
    """Normalized evaluator output."""

    method: str
    scores: dict[str, int]
    metadata: dict[str, Any] = field(default_factory=dict)


def build_pool_context(pool: Sequence[Candidate]) -> dict[str, Any]:
    """Pool-wide figures the pool-relative evaluators depend on."""
    return {
        "pool_size": len(pool),
        "location_counts": dict(Counter(candidate.location for candidate in pool)),
    }


class ScoringEngine:
    """Compute five component scores and a weighted total per candidate.

    Scores are a pure function of a candidate and the pool it belongs to;
    the whole score map must be rebuilt whenever pool membership changes.
    """

    def __init__(
        self,
        evaluators: Iterable[Any] | None = None,
        *,
        score_weights: dict[str, float] | ScoreWeights | None = None,
        now_provider: Callable[[], datetime] | None = None,
    ) -> None:
        self._evaluators = list(
            evaluators
            if evaluators is not None
            else (
                ExperienceEvaluator(),
                EducationEvaluator(),
                SkillEvaluator(),
                SalaryEvaluator(),
                DiversityEvaluator(),
            )
        )
        self._weights = self._resolve_weights(score_weights)
        self._now_provider = now_provider or pendulum.now

    @property
    def weights(self) -> ScoreWeights:
        return self._weights

    def score(self, candidate: Candidate, pool: Sequence[Candidate]) -> CandidateScore:
        return self._score_with_context(candidate, build_pool_context(pool))

    def score_pool(self, pool: Sequence[Candidate]) -> dict[str, CandidateScore]:
        context = build_pool_context(pool)
        return {
            candidate.id: self._score_with_context(candidate, context)
            for candidate in pool
        }

    def evaluate(
        self,
        candidate: Candidate,
        context: dict[str, Any],
    ) -> list[EvaluationResult]:
        """Run every evaluator and return the normalized results."""
        return [
            self._normalize_evaluation_result(evaluator.evaluate(candidate, context))
            for evaluator in self._evaluators
        ]

    def _score_with_context(
        self,
        candidate: Candidate,
        context: dict[str, Any],
    ) -> CandidateScore:
        components = dict.fromkeys(COMPONENTS, 0)
        for result in self.evaluate(candidate, context):
            for key, value in result.scores.items():
                if key in components:
                    components[key] = _clamp(components[key] + value)

        return CandidateScore(
            candidate_id=candidate.id,
            total_score=self.weighted_total(components),
            experience_score=components["experience"],
            education_score=components["education"],
            skill_score=components["skill"],
            salary_score=components["salary"],
            diversity_score=components["diversity"],
            scored_at=self._now_provider(),
        )

    def weighted_total(self, components: dict[str, int]) -> int:
        weights = self._weights.as_dict()
        total = sum(components.get(name, 0) * weight for name, weight in weights.items())
        return _clamp(round_half_up(total))

    @staticmethod
    def _normalize_evaluation_result(payload: dict[str, Any]) -> EvaluationResult:
        method = payload.get("method")
        scores = payload.get("scores") or {}
        metadata = payload.get("metadata") or {}
        if method is None:
            raise ValueError("Evaluator result must include 'method'.")
        if not isinstance(scores, dict):
            raise ValueError("Evaluator result 'scores' must be a mapping.")
        return EvaluationResult(
            method=str(method),
            scores={k: int(v) for k, v in scores.items()},
            metadata=dict(metadata),
        )

    @staticmethod
    def _resolve_weights(
        weights: dict[str, float] | ScoreWeights | None,
    ) -> ScoreWeights:
        if weights is None:
            return ScoreWeights()
        if isinstance(weights, ScoreWeights):
            return weights
        return ScoreWeights.model_validate(weights)


def _clamp(value: float) -> int:
    return int(max(0, min(100, value)))


def round_half_up(value: float) -> int:
    # Half-up like a spreadsheet; the epsilon absorbs float noise such as 84.49999999.
    return math.floor(value + 0.5 + 1e-9)
