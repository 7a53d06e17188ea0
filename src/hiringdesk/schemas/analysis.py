"""Derived pool-level analysis documents."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

RiskLevel = Literal["low", "medium", "high"]


class DiversityMetrics(BaseModel):
    """Frequency snapshot over a candidate set."""

    location_counts: dict[str, int] = Field(default_factory=dict)
    education_level_counts: dict[str, int] = Field(default_factory=dict)
    experience_level_counts: dict[str, int] = Field(default_factory=dict)
    top_school_count: int = 0
    average_salary: int = 0

    model_config = ConfigDict(frozen=True)


class LocationBias(BaseModel):
    risk: RiskLevel = "low"
    dominant_locations: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)


class EducationBias(BaseModel):
    risk: RiskLevel = "low"
    top_schools_percentage: float = 0.0
    recommendations: list[str] = Field(default_factory=list)


class SkillsBias(BaseModel):
    risk: RiskLevel = "low"
    dominant_skills: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)


class BiasAnalysis(BaseModel):
    """Advisory over-concentration report."""

    overall_risk: RiskLevel
    location_bias: LocationBias
    education_bias: EducationBias
    skills_bias: SkillsBias
    recommendations: list[str] = Field(default_factory=list)


class TeamSkills(BaseModel):
    coverage: float = 0.0
    overlaps: list[str] = Field(default_factory=list)
    missing: list[str] = Field(default_factory=list)


class TeamExperience(BaseModel):
    average_roles: float = 0.0
    distribution: dict[str, int] = Field(
        default_factory=lambda: {"junior": 0, "mid": 0, "senior": 0}
    )


class TeamDiversity(BaseModel):
    location_spread: int = 0
    education_spread: int = 0
    skill_spread: int = 0


class TeamGaps(BaseModel):
    skill_gaps: list[str] = Field(default_factory=list)
    experience_gaps: list[str] = Field(default_factory=list)
    diversity_gaps: list[str] = Field(default_factory=list)


class TeamComposition(BaseModel):
    """Coverage and gap summary for the selected team."""

    current_size: int
    max_size: int
    skills: TeamSkills
    experience: TeamExperience
    diversity: TeamDiversity
    gaps: TeamGaps
    overall_score: int
    recommendations: list[str] = Field(default_factory=list)
