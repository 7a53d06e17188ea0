from __future__ import annotations

from typing import Any

import pendulum
import pytest

from hiringdesk.core.diversity import DiversityAnalyzer, experience_level, overall_risk
from hiringdesk.schemas import Candidate, CandidateScore


def build_degree(**kwargs: Any) -> dict[str, Any]:
    degree: dict[str, Any] = {
        "degree": "BSc",
        "subject": "Biology",
        "school": "State University",
        "gpa": "Unknown",
        "start_date": pendulum.datetime(2016, 1, 1),
        "end_date": pendulum.datetime(2020, 1, 1),
        "original_school": "State University",
        "is_top50": False,
    }
    degree.update(kwargs)
    return degree


def build_candidate(candidate_id: str, **kwargs: Any) -> Candidate:
    defaults: dict[str, Any] = {
        "id": candidate_id,
        "name": f"Candidate {candidate_id}",
        "email": f"{candidate_id.lower()}@example.com",
        "phone": "",
        "location": "Austin",
        "submitted_at": pendulum.datetime(2024, 1, 1),
        "work_availability": ["full-time"],
        "education": {"highest_level": "Bachelor's Degree", "degrees": []},
    }
    defaults.update(kwargs)
    return Candidate.model_validate(defaults)


def build_score(candidate_id: str, total: int) -> CandidateScore:
    return CandidateScore(
        candidate_id=candidate_id,
        total_score=total,
        experience_score=0,
        education_score=0,
        skill_score=0,
        salary_score=0,
        diversity_score=0,
        scored_at=pendulum.datetime(2024, 1, 1),
    )


def roles(count: int) -> list[dict[str, str]]:
    return [{"company": f"Co{i}", "role_name": "Engineer"} for i in range(count)]


@pytest.mark.parametrize(("count", "level"), [(0, "Junior"), (2, "Junior"), (3, "Mid"), (5, "Mid"), (6, "Senior")])
def test_experience_level_buckets(count, level):
    assert experience_level(build_candidate("X", work_experiences=roles(count))) == level


def test_metrics_on_empty_set():
    metrics = DiversityAnalyzer().metrics([])

    assert metrics.location_counts == {}
    assert metrics.top_school_count == 0
    assert metrics.average_salary == 0


def test_metrics_counts_and_average_salary():
    candidates = [
        build_candidate(
            "A",
            salary_expectation={"full-time": "$100,000"},
            work_experiences=roles(6),
            education={"highest_level": "Master's Degree", "degrees": [build_degree(is_top25=True)]},
        ),
        build_candidate("B", location="Boston", salary_expectation={"full-time": "$51,001"}),
        build_candidate("C", work_experiences=roles(3)),
    ]

    metrics = DiversityAnalyzer().metrics(candidates)

    assert metrics.location_counts == {"Austin": 2, "Boston": 1}
    assert metrics.education_level_counts == {"Master's Degree": 1, "Bachelor's Degree": 2}
    assert metrics.experience_level_counts == {"Senior": 1, "Junior": 1, "Mid": 1}
    assert metrics.top_school_count == 1
    # Missing salaries count as zero: 151001 / 3
    assert metrics.average_salary == 50334


def test_bias_on_empty_set_is_low():
    analysis = DiversityAnalyzer().analyze_bias([], {})

    assert analysis.overall_risk == "low"
    assert analysis.recommendations == []


def test_location_bias_flags_dominant_locations_and_spread():
    candidates = [
        build_candidate("A", location="Austin"),
        build_candidate("B", location="Austin"),
        build_candidate("C", location="Boston"),
        build_candidate("D", location="Boston"),
        build_candidate("E", location="Denver"),
    ]
    scores = {cid: build_score(cid, total) for cid, total in zip("ABCDE", [90, 90, 50, 50, 20])}

    analysis = DiversityAnalyzer().analyze_bias(candidates, scores)

    assert analysis.location_bias.dominant_locations == ["Austin", "Boston"]
    assert analysis.location_bias.risk == "high"
    assert len(analysis.location_bias.recommendations) == 2


def test_education_bias_thresholds():
    top = {"highest_level": "Bachelor's Degree", "degrees": [build_degree(is_top50=True)]}
    candidates = [build_candidate(f"T{i}", education=top, location=f"City{i}") for i in range(9)]
    candidates.append(build_candidate("O", location="Elsewhere"))
    scores = {c.id: build_score(c.id, 80) for c in candidates}
    scores["O"] = build_score("O", 40)

    analysis = DiversityAnalyzer().analyze_bias(candidates, scores)

    assert analysis.education_bias.top_schools_percentage == pytest.approx(90.0)
    assert analysis.education_bias.risk == "high"
    assert len(analysis.education_bias.recommendations) == 2


def test_skills_bias_counts_each_candidate_once():
    candidates = [
        build_candidate("A", skills=["Python", "python", "SQL", "Git", "Excel"], location="A1"),
        build_candidate("B", skills=["Python", "SQL", "Git"], location="B1"),
        build_candidate("C", skills=["Python", "SQL", "Git", "Excel"], location="C1"),
    ]

    analysis = DiversityAnalyzer().analyze_bias(candidates, {})

    assert analysis.skills_bias.dominant_skills == ["python", "sql", "git"]
    assert analysis.skills_bias.risk == "high"


def test_recommendations_are_capped():
    top = {"highest_level": "Bachelor's Degree", "degrees": [build_degree(is_top25=True)]}
    candidates = [
        build_candidate(cid, location=location, education=top, skills=["Python", "React", "AWS"])
        for cid, location in zip("ABCDEF", ["X", "X", "Y", "Y", "Z", "Z"])
    ]

    analysis = DiversityAnalyzer().analyze_bias(candidates, {})

    assert len(analysis.recommendations) <= 5
    assert analysis.overall_risk == "high"


@pytest.mark.parametrize(
    ("risks", "expected"),
    [
        (["low", "low", "low"], "low"),
        (["low", "low", "medium"], "low"),
        (["low", "medium", "medium"], "medium"),
        (["high", "high", "low"], "medium"),
        (["high", "high", "medium"], "high"),
    ],
)
def test_overall_risk_averages_codes(risks, expected):
    assert overall_risk(risks) == expected


def test_team_composition_for_empty_team():
    team = DiversityAnalyzer().team_composition([], max_size=5)

    assert team.current_size == 0
    assert team.skills.coverage == 0
    assert team.experience.average_roles == 0
    assert "javascript" in team.skills.missing


def test_team_composition_summarizes_selection():
    selected = [
        build_candidate("A", skills=["JavaScript", "React", "Leadership"], work_experiences=roles(6)),
        build_candidate("B", location="Boston", skills=["Python", "SQL", "Git"], work_experiences=roles(4)),
    ]

    team = DiversityAnalyzer().team_composition(selected, max_size=2)

    assert team.current_size == 2
    assert team.skills.missing == ["node", "aws"]
    assert team.skills.coverage == pytest.approx(5 / 7 * 100)
    assert team.experience.distribution == {"junior": 0, "mid": 1, "senior": 1}
    assert team.experience.average_roles == pytest.approx(5.0)
    assert team.diversity.location_spread == 2
    assert "leadership" not in team.gaps.skill_gaps
    assert team.recommendations == [
        "Team is at capacity - consider if current composition meets all requirements"
    ]


def test_average_salary_rounds_half_up():
    candidates = [
        build_candidate("A", salary_expectation={"full-time": "$45,001"}),
        build_candidate("B", salary_expectation={"full-time": "$45,000"}),
    ]

    assert DiversityAnalyzer().metrics(candidates).average_salary == 45001


TECH_ONLY_ADVICE = "Consider candidates with complementary soft skills and domain expertise"


@pytest.mark.parametrize(
    ("skills", "flagged"),
    [
        (["Git", "Docker"], True),
        (["JavaScript", "Node.js"], True),
        (["SQL"], False),
        (["Python", "Figma"], False),
        ([], True),
    ],
)
def test_tech_only_pool_uses_fixed_keywords(skills, flagged):
    candidates = [
        build_candidate(cid, location=location, skills=skills)
        for cid, location in zip("ABCDE", ["L1", "L2", "L3", "L4", "L5"])
    ]

    analysis = DiversityAnalyzer().analyze_bias(candidates, {})

    assert (TECH_ONLY_ADVICE in analysis.skills_bias.recommendations) is flagged
