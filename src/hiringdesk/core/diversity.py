"""Diversity metrics, bias risk and team composition analysis."""

from __future__ import annotations

import math
from collections import Counter
from statistics import mean
from typing import Mapping, Sequence

from ..schemas import (
    BiasAnalysis,
    Candidate,
    CandidateScore,
    DiversityMetrics,
    EducationBias,
    LocationBias,
    SkillsBias,
    TeamComposition,
)
from ..schemas.analysis import (
    RiskLevel,
    TeamDiversity,
    TeamExperience,
    TeamGaps,
    TeamSkills,
)
from .filtering import full_time_salary
from .scoring import round_half_up

_RISK_CODES: dict[RiskLevel, int] = {"low": 1, "medium": 2, "high": 3}

ESSENTIAL_TEAM_SKILLS: tuple[str, ...] = (
    "javascript",
    "react",
    "node",
    "python",
    "sql",
    "aws",
    "git",
)
DESIRED_TEAM_SKILLS: tuple[str, ...] = (
    "leadership",
    "project management",
    "ui/ux",
    "devops",
    "data analysis",
)


def experience_level(candidate: Candidate) -> str:
    """Bucket by role count: Junior (<=2), Mid (3-5), Senior (>5)."""
    roles = candidate.role_count
    if roles > 5:
        return "Senior"
    if roles > 2:
        return "Mid"
    return "Junior"


def has_top_school(candidate: Candidate) -> bool:
    return any(degree.is_top_school for degree in candidate.education.degrees)


class DiversityAnalyzer:
    """Pool-level distribution and concentration analysis.

    Output is advisory only; nothing here changes reviewer state.
    """

    DOMINANT_LOCATION_SHARE = 0.30
    LOCATION_SCORE_SPREAD = 30
    TOP_SCHOOL_HIGH = 80
    TOP_SCHOOL_MEDIUM = 60
    TOP_SCHOOL_ADVICE = 70
    TOP_SCHOOL_SCORE_GAP = 20
    DOMINANT_SKILL_SHARE = 0.50
    TECH_ONLY_SHARE = 0.80
    MAX_RECOMMENDATIONS = 5
    TECH_ONLY_KEYWORDS: tuple[str, ...] = (
        "javascript",
        "react",
        "python",
        "java",
        "node",
        "docker",
        "aws",
        "git",
    )

    def metrics(self, candidates: Sequence[Candidate]) -> DiversityMetrics:
        if not candidates:
            return DiversityMetrics()
        total_salary = sum(full_time_salary(candidate) for candidate in candidates)
        return DiversityMetrics(
            location_counts=dict(Counter(c.location for c in candidates)),
            education_level_counts=dict(
                Counter(c.education.highest_level for c in candidates)
            ),
            experience_level_counts=dict(Counter(experience_level(c) for c in candidates)),
            top_school_count=sum(1 for c in candidates if has_top_school(c)),
            average_salary=round_half_up(total_salary / len(candidates)),
        )

    def analyze_bias(
        self,
        candidates: Sequence[Candidate],
        scores: Mapping[str, CandidateScore],
    ) -> BiasAnalysis:
        if not candidates:
            return BiasAnalysis(
                overall_risk="low",
                location_bias=LocationBias(),
                education_bias=EducationBias(),
                skills_bias=SkillsBias(),
            )

        location = self._location_bias(candidates, scores)
        education = self._education_bias(candidates, scores)
        skills = self._skills_bias(candidates)

        recommendations = [
            *location.recommendations,
            *education.recommendations,
            *skills.recommendations,
        ]
        return BiasAnalysis(
            overall_risk=overall_risk([location.risk, education.risk, skills.risk]),
            location_bias=location,
            education_bias=education,
            skills_bias=skills,
            recommendations=recommendations[: self.MAX_RECOMMENDATIONS],
        )

    def _location_bias(
        self,
        candidates: Sequence[Candidate],
        scores: Mapping[str, CandidateScore],
    ) -> LocationBias:
        total = len(candidates)
        by_location: dict[str, list[int]] = {}
        for candidate in candidates:
            by_location.setdefault(candidate.location, []).append(
                _total(scores, candidate.id)
            )

        dominant = [
            location
            for location, values in by_location.items()
            if len(values) / total > self.DOMINANT_LOCATION_SHARE
        ]
        recommendations: list[str] = []
        if dominant:
            recommendations.append(
                "Consider more geographic diversity - "
                f"{', '.join(dominant)} dominate the pool"
            )

        averages = [mean(values) for values in by_location.values()]
        if max(averages) - min(averages) > self.LOCATION_SCORE_SPREAD:
            recommendations.append(
                "Significant score variance by location detected - review scoring criteria"
            )

        risk: RiskLevel = "high" if len(dominant) > 1 else "medium" if dominant else "low"
        return LocationBias(
            risk=risk,
            dominant_locations=dominant,
            recommendations=recommendations,
        )

    def _education_bias(
        self,
        candidates: Sequence[Candidate],
        scores: Mapping[str, CandidateScore],
    ) -> EducationBias:
        top = [c for c in candidates if has_top_school(c)]
        others = [c for c in candidates if not has_top_school(c)]
        percentage = len(top) / len(candidates) * 100

        recommendations: list[str] = []
        if percentage > self.TOP_SCHOOL_ADVICE:
            recommendations.append(
                "Consider candidates from a wider range of educational institutions"
            )
        if top and others:
            top_average = mean(_total(scores, c.id) for c in top)
            other_average = mean(_total(scores, c.id) for c in others)
            if top_average - other_average > self.TOP_SCHOOL_SCORE_GAP:
                recommendations.append(
                    "Review if scoring criteria may favor prestigious school credentials"
                )

        risk: RiskLevel = (
            "high"
            if percentage > self.TOP_SCHOOL_HIGH
            else "medium"
            if percentage > self.TOP_SCHOOL_MEDIUM
            else "low"
        )
        return EducationBias(
            risk=risk,
            top_schools_percentage=percentage,
            recommendations=recommendations,
        )

    def _skills_bias(self, candidates: Sequence[Candidate]) -> SkillsBias:
        total = len(candidates)
        counts: Counter[str] = Counter()
        for candidate in candidates:
            counts.update(list(dict.fromkeys(skill.lower() for skill in candidate.skills)))

        dominant = [
            skill for skill, count in counts.items() if count / total > self.DOMINANT_SKILL_SHARE
        ][:3]

        recommendations: list[str] = []
        if len(dominant) > 2:
            recommendations.append(
                f"Skill pool may be too homogeneous - {', '.join(dominant)} are over-represented"
            )

        # A candidate without skills counts as tech-only.
        tech_only = sum(
            1
            for candidate in candidates
            if all(self._is_tech_keyword(skill) for skill in candidate.skills)
        )
        if tech_only / total > self.TECH_ONLY_SHARE:
            recommendations.append(
                "Consider candidates with complementary soft skills and domain expertise"
            )

        risk: RiskLevel = (
            "high" if len(dominant) > 2 else "medium" if len(dominant) > 1 else "low"
        )
        return SkillsBias(
            risk=risk,
            dominant_skills=dominant,
            recommendations=recommendations,
        )

    def _is_tech_keyword(self, skill: str) -> bool:
        lowered = skill.lower()
        return any(keyword in lowered for keyword in self.TECH_ONLY_KEYWORDS)

    def team_composition(
        self,
        selected: Sequence[Candidate],
        max_size: int = 5,
    ) -> TeamComposition:
        skills = _team_skills(selected)
        experience = _team_experience(selected)
        diversity = _team_diversity(selected)
        gaps = _team_gaps(selected, experience, diversity)
        return TeamComposition(
            current_size=len(selected),
            max_size=max_size,
            skills=skills,
            experience=experience,
            diversity=diversity,
            gaps=gaps,
            overall_score=_team_score(skills, experience, diversity),
            recommendations=_team_recommendations(gaps, len(selected), max_size),
        )


def overall_risk(risks: Sequence[RiskLevel]) -> RiskLevel:
    """Average the risk codes (low=1, medium=2, high=3) and map back."""
    if not risks:
        return "low"
    average = sum(_RISK_CODES[risk] for risk in risks) / len(risks)
    if average >= 2.5:
        return "high"
    if average >= 1.5:
        return "medium"
    return "low"


def _total(scores: Mapping[str, CandidateScore], candidate_id: str) -> int:
    score = scores.get(candidate_id)
    return score.total_score if score is not None else 0


def _lower_skills(candidates: Sequence[Candidate]) -> set[str]:
    return {skill.lower() for candidate in candidates for skill in candidate.skills}


def _team_skills(candidates: Sequence[Candidate]) -> TeamSkills:
    present = _lower_skills(candidates)
    counts: Counter[str] = Counter(
        skill.lower() for candidate in candidates for skill in candidate.skills
    )
    covered = [skill for skill in ESSENTIAL_TEAM_SKILLS if skill in present]
    overlap_floor = math.ceil(len(candidates) * 0.6)
    return TeamSkills(
        coverage=len(covered) / len(ESSENTIAL_TEAM_SKILLS) * 100,
        overlaps=[skill for skill, count in counts.items() if count > overlap_floor],
        missing=[skill for skill in ESSENTIAL_TEAM_SKILLS if skill not in present],
    )


def _team_experience(candidates: Sequence[Candidate]) -> TeamExperience:
    distribution = {"junior": 0, "mid": 0, "senior": 0}
    for candidate in candidates:
        distribution[experience_level(candidate).lower()] += 1
    average = (
        sum(candidate.role_count for candidate in candidates) / len(candidates)
        if candidates
        else 0.0
    )
    return TeamExperience(average_roles=average, distribution=distribution)


def _team_diversity(candidates: Sequence[Candidate]) -> TeamDiversity:
    return TeamDiversity(
        location_spread=len({c.location for c in candidates}),
        education_spread=len({c.education.highest_level for c in candidates}),
        skill_spread=len(_lower_skills(candidates)),
    )


def _team_gaps(
    candidates: Sequence[Candidate],
    experience: TeamExperience,
    diversity: TeamDiversity,
) -> TeamGaps:
    present = _lower_skills(candidates)
    skill_gaps = [
        skill
        for skill in DESIRED_TEAM_SKILLS
        if not any(skill.replace("/", "") in held for held in present)
    ]

    experience_gaps: list[str] = []
    if experience.distribution["senior"] == 0 and len(candidates) > 2:
        experience_gaps.append("senior leadership")
    if experience.distribution["junior"] == 0 and len(candidates) > 3:
        experience_gaps.append("junior talent for mentoring")

    diversity_gaps: list[str] = []
    if diversity.location_spread < min(3, len(candidates)):
        diversity_gaps.append("geographic diversity")
    if diversity.education_spread < 2 and len(candidates) > 2:
        diversity_gaps.append("educational background diversity")

    return TeamGaps(
        skill_gaps=skill_gaps,
        experience_gaps=experience_gaps,
        diversity_gaps=diversity_gaps,
    )


def _team_score(
    skills: TeamSkills,
    experience: TeamExperience,
    diversity: TeamDiversity,
) -> int:
    skills_score = min(100.0, skills.coverage - (10 if len(skills.overlaps) > 2 else 0))
    distribution = experience.distribution
    experience_score = 100 if distribution["senior"] > 0 and distribution["mid"] > 0 else 70
    diversity_score = min(100, diversity.location_spread * 20 + diversity.education_spread * 15)
    return round_half_up(skills_score * 0.4 + experience_score * 0.3 + diversity_score * 0.3)


def _team_recommendations(gaps: TeamGaps, current_size: int, max_size: int) -> list[str]:
    recommendations: list[str] = []
    if current_size < max_size:
        if gaps.skill_gaps:
            recommendations.append(
                f"Consider adding candidates with: {', '.join(gaps.skill_gaps[:3])}"
            )
        if gaps.experience_gaps:
            recommendations.append(f"Team needs: {', '.join(gaps.experience_gaps)}")
        if gaps.diversity_gaps:
            recommendations.append(f"Improve: {', '.join(gaps.diversity_gaps)}")
    if current_size >= max_size:
        recommendations.append(
            "Team is at capacity - consider if current composition meets all requirements"
        )
    return recommendations[:4]
