"""Skill inventory evaluation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ...schemas import Candidate


@dataclass
class SkillConfig:
    per_skill_points: int = 5
    tech_skill_points: int = 10
    tech_skills: tuple[str, ...] = (
        "React",
        "Node.js",
        "Python",
        "JavaScript",
        "TypeScript",
        "Docker",
        "AWS",
    )


class SkillEvaluator:
    """Score the size of a skill list and its overlap with a reference stack."""

    method = "skills"

    def __init__(self, *, config: SkillConfig | None = None) -> None:
        self._config = config or SkillConfig()
        self._tech_lower = tuple(tech.lower() for tech in self._config.tech_skills)

    def evaluate(self, candidate: Candidate, context: dict[str, Any]) -> dict[str, Any]:
        matched = [
            skill
            for skill in candidate.skills
            if any(tech in skill.lower() for tech in self._tech_lower)
        ]
        raw_score = (
            len(candidate.skills) * self._config.per_skill_points
            + len(matched) * self._config.tech_skill_points
        )

        return {
            "method": self.method,
            "scores": {"skill": min(100, raw_score)},
            "metadata": {
                "skill_count": len(candidate.skills),
                "matched_tech_skills": matched,
            },
        }
