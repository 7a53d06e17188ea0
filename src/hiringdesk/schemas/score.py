"""Score documents produced by the scoring engine."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ScoreWeights(BaseModel):
    """Weights applied to the five component scores."""

    experience: float = 0.30
    education: float = 0.25
    skill: float = 0.20
    salary: float = 0.15
    diversity: float = 0.10

    model_config = ConfigDict(frozen=True, extra="forbid")

    @model_validator(mode="after")
    def _check_non_negative(self) -> "ScoreWeights":
        for name, weight in self.as_dict().items():
            if weight < 0:
                raise ValueError(f"weight for {name!r} must not be negative")
        return self

    def as_dict(self) -> dict[str, float]:
        return self.model_dump()


class CandidateScore(BaseModel):
    """Per-candidate score card. Every value is an integer in [0, 100]."""

    candidate_id: str
    total_score: int = Field(ge=0, le=100)
    experience_score: int = Field(ge=0, le=100)
    education_score: int = Field(ge=0, le=100)
    skill_score: int = Field(ge=0, le=100)
    salary_score: int = Field(ge=0, le=100)
    diversity_score: int = Field(ge=0, le=100)
    scored_at: datetime

    model_config = ConfigDict(frozen=True, extra="forbid")

    def components(self) -> dict[str, int]:
        return {
            "experience": self.experience_score,
            "education": self.education_score,
            "skill": self.skill_score,
            "salary": self.salary_score,
            "diversity": self.diversity_score,
        }
