"""Pool-relative diversity contribution."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ...schemas import Candidate


@dataclass
class DiversityConfig:
    location_share_threshold: float = 0.10
    location_points: int = 30
    background_points: int = 20
    technical_subject_keywords: tuple[str, ...] = ("computer", "engineering")


class DiversityEvaluator:
    """Reward under-represented locations and non-technical study subjects.

    Requires ``pool_size`` and ``location_counts`` in the evaluation context.
    The location bonus applies when the candidate's location holds fewer than
    ``location_share_threshold`` of the pool, or when nobody else shares it.
    """

    method = "diversity"

    def __init__(self, *, config: DiversityConfig | None = None) -> None:
        self._config = config or DiversityConfig()

    def evaluate(self, candidate: Candidate, context: dict[str, Any]) -> dict[str, Any]:
        pool_size = int(context.get("pool_size", 0))
        location_counts: dict[str, int] = context.get("location_counts") or {}

        in_location = max(1, location_counts.get(candidate.location, 1))
        rare_location = (
            in_location < pool_size * self._config.location_share_threshold
            or in_location == 1
        )

        keywords = self._config.technical_subject_keywords
        distinct_background = any(
            not any(keyword in degree.subject.lower() for keyword in keywords)
            for degree in candidate.education.degrees
        )

        score = 0
        if rare_location:
            score += self._config.location_points
        if distinct_background:
            score += self._config.background_points

        return {
            "method": self.method,
            "scores": {"diversity": max(0, min(100, score))},
            "metadata": {
                "pool_size": pool_size,
                "in_location": in_location,
                "rare_location": rare_location,
                "distinct_background": distinct_background,
            },
        }
