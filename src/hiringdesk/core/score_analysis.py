"""Presentation-neutral interpretation of score cards."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Sequence

from ..schemas import CandidateScore, ScoreWeights

Grade = Literal["A+", "A", "B+", "B", "C+", "C", "D", "F"]
ScoreStatus = Literal["excellent", "good", "fair", "poor"]
ScoreColor = Literal["green", "yellow", "red"]

_GRADE_FLOORS: tuple[tuple[int, Grade], ...] = (
    (95, "A+"),
    (90, "A"),
    (85, "B+"),
    (80, "B"),
    (75, "C+"),
    (70, "C"),
    (60, "D"),
)

_LABELS: dict[str, str] = {
    "experience": "Experience",
    "education": "Education",
    "skill": "Skills",
    "salary": "Salary Fit",
    "diversity": "Diversity",
}

_DESCRIPTIONS: dict[str, str] = {
    "experience": "Work experience relevance and quality",
    "education": "Educational background and achievements",
    "skill": "Technical and soft skills alignment",
    "salary": "Alignment with salary expectations",
    "diversity": "Contribution to team diversity",
}


@dataclass(slots=True)
class BreakdownItem:
    component: str
    label: str
    score: int
    weight: float
    description: str


@dataclass(slots=True)
class ScoreAnalysis:
    total_score: int
    breakdown: list[BreakdownItem]
    grade: Grade
    status: ScoreStatus
    color: ScoreColor
    strengths: list[str] = field(default_factory=list)
    weaknesses: list[str] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)


@dataclass(slots=True)
class ScoreComparison:
    candidate_id: str
    percentile: int
    above_average: bool
    top_performer: bool


@dataclass(slots=True)
class ScoreCheck:
    is_valid: bool
    issues: list[str] = field(default_factory=list)


class ScoreAnalyzer:
    """Grade, compare and sanity-check score cards against one weighting."""

    STRENGTH_THRESHOLD = 80
    WEAKNESS_THRESHOLD = 50
    TOTAL_TOLERANCE = 5

    def __init__(self, weights: ScoreWeights | None = None) -> None:
        self._weights = weights or ScoreWeights()

    def breakdown(self, score: CandidateScore) -> list[BreakdownItem]:
        weights = self._weights.as_dict()
        return [
            BreakdownItem(
                component=component,
                label=_LABELS[component],
                score=value,
                weight=weights[component],
                description=_DESCRIPTIONS[component],
            )
            for component, value in score.components().items()
        ]

    def analyze(self, score: CandidateScore) -> ScoreAnalysis:
        breakdown = self.breakdown(score)
        status, color = self.status(score.total_score)
        strengths = [item.label for item in breakdown if item.score >= self.STRENGTH_THRESHOLD]
        weaknesses = [item.label for item in breakdown if item.score < self.WEAKNESS_THRESHOLD]
        return ScoreAnalysis(
            total_score=score.total_score,
            breakdown=breakdown,
            grade=self.grade(score.total_score),
            status=status,
            color=color,
            strengths=strengths,
            weaknesses=weaknesses,
            recommendations=self._recommendations(breakdown, strengths),
        )

    @staticmethod
    def grade(total: int) -> Grade:
        for floor, grade in _GRADE_FLOORS:
            if total >= floor:
                return grade
        return "F"

    @staticmethod
    def status(total: int) -> tuple[ScoreStatus, ScoreColor]:
        if total >= 80:
            return "excellent", "green"
        if total >= 60:
            return "good", "yellow"
        if total >= 40:
            return "fair", "yellow"
        return "poor", "red"

    @staticmethod
    def compare(score: CandidateScore, all_scores: Sequence[CandidateScore]) -> ScoreComparison:
        """Rank a score card within a pool of score cards (ties share the best rank)."""
        totals = sorted((item.total_score for item in all_scores), reverse=True)
        if not totals:
            return ScoreComparison(
                candidate_id=score.candidate_id,
                percentile=100,
                above_average=False,
                top_performer=True,
            )
        rank = totals.index(score.total_score) + 1 if score.total_score in totals else len(totals)
        percentile = round((len(totals) - rank + 1) / len(totals) * 100)
        average = sum(totals) / len(totals)
        return ScoreComparison(
            candidate_id=score.candidate_id,
            percentile=percentile,
            above_average=score.total_score > average,
            top_performer=percentile >= 90,
        )

    def validate(self, score: CandidateScore) -> ScoreCheck:
        issues: list[str] = []
        weights = self._weights.as_dict()
        expected = round(
            sum(value * weights[name] for name, value in score.components().items())
        )
        if abs(score.total_score - expected) > self.TOTAL_TOLERANCE:
            issues.append(
                f"Total score ({score.total_score}) doesn't match weighted components "
                f"(expected ~{expected})"
            )
        values = {"total": score.total_score, **score.components()}
        for name, value in values.items():
            if value < 0 or value > 100:
                issues.append(f"{name} score ({value}) is out of valid range (0-100)")
        return ScoreCheck(is_valid=not issues, issues=issues)

    @staticmethod
    def _recommendations(breakdown: list[BreakdownItem], strengths: list[str]) -> list[str]:
        recommendations: list[str] = []
        by_component = {item.component: item.score for item in breakdown}
        if by_component["experience"] < 50:
            recommendations.append("Explore depth of experience during interviews")
        if by_component["skill"] < 50:
            recommendations.append("Assess technical skills with a practical exercise")
        if by_component["education"] < 40:
            recommendations.append("Weigh practical experience over formal credentials")
        if by_component["salary"] <= 40:
            recommendations.append("Confirm salary expectations early in the process")
        if len(strengths) >= 3:
            recommendations.append("Strong all-round profile; consider fast-tracking")
        return recommendations
