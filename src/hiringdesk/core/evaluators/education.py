"""Education evaluation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ...schemas import Candidate, Degree


@dataclass
class EducationConfig:
    """Points per degree by school tier, plus GPA bucket bonuses."""

    top25_points: int = 30
    top50_points: int = 20
    other_points: int = 10
    high_gpa_points: int = 15
    mid_gpa_points: int = 10
    high_gpa_buckets: tuple[str, ...] = ("3.5-3.9", "4.0")
    mid_gpa_buckets: tuple[str, ...] = ("3.0-3.4",)


class EducationEvaluator:
    """Score degrees by institution tier and reported GPA bucket."""

    method = "education"

    def __init__(self, *, config: EducationConfig | None = None) -> None:
        self._config = config or EducationConfig()

    def evaluate(self, candidate: Candidate, context: dict[str, Any]) -> dict[str, Any]:
        per_degree = [self._degree_points(degree) for degree in candidate.education.degrees]
        total = sum(item["points"] for item in per_degree)

        return {
            "method": self.method,
            "scores": {"education": max(0, min(100, total))},
            "metadata": {
                "highest_level": candidate.education.highest_level,
                "per_degree": per_degree,
            },
        }

    def _degree_points(self, degree: Degree) -> dict[str, Any]:
        if degree.is_top25:
            tier, points = "top25", self._config.top25_points
        elif degree.is_top50:
            tier, points = "top50", self._config.top50_points
        else:
            tier, points = "other", self._config.other_points

        gpa_bonus = 0
        if any(bucket in degree.gpa for bucket in self._config.high_gpa_buckets):
            gpa_bonus = self._config.high_gpa_points
        elif any(bucket in degree.gpa for bucket in self._config.mid_gpa_buckets):
            gpa_bonus = self._config.mid_gpa_points

        return {
            "school": degree.school,
            "tier": tier,
            "gpa": degree.gpa,
            "points": points + gpa_bonus,
        }
