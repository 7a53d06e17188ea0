"""Work-history evaluation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ...schemas import Candidate


@dataclass
class ExperienceConfig:
    """Points awarded per role, per distinct employer and per senior role."""

    role_points: int = 10
    company_points: int = 5
    senior_role_points: int = 15
    senior_keywords: tuple[str, ...] = ("senior", "lead", "manager", "director")


class ExperienceEvaluator:
    """Score breadth and seniority of a candidate's work history."""

    method = "experience"

    def __init__(self, *, config: ExperienceConfig | None = None) -> None:
        self._config = config or ExperienceConfig()

    def evaluate(self, candidate: Candidate, context: dict[str, Any]) -> dict[str, Any]:
        experiences = candidate.work_experiences
        role_count = len(experiences)
        company_count = len({experience.company for experience in experiences})
        senior_roles = [
            experience.role_name
            for experience in experiences
            if self._is_senior(experience.role_name)
        ]

        raw_score = (
            role_count * self._config.role_points
            + company_count * self._config.company_points
            + len(senior_roles) * self._config.senior_role_points
        )

        return {
            "method": self.method,
            "scores": {"experience": min(100, raw_score)},
            "metadata": {
                "role_count": role_count,
                "unique_companies": company_count,
                "senior_roles": senior_roles,
            },
        }

    def _is_senior(self, role_name: str) -> bool:
        lowered = role_name.lower()
        return any(keyword in lowered for keyword in self._config.senior_keywords)
