from __future__ import annotations

from typing import Any

import pendulum
import pytest

from hiringdesk.core.filtering import FilterEngine, extract_filter_options, full_time_salary
from hiringdesk.schemas import Candidate, CandidateScore, FilterState, SortConfig, SortKey


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


@pytest.fixture
def pool() -> list[Candidate]:
    return [
        build_candidate(
            "C-1",
            name="Maria Lopez",
            location="Austin",
            salary_expectation={"full-time": "$90,000"},
            work_experiences=roles(4),
            skills=["Python", "SQL"],
            education={"highest_level": "Master's Degree"},
        ),
        build_candidate(
            "C-2",
            name="john smith",
            location="Boston",
            work_availability=["contract", "part-time"],
            work_experiences=roles(1),
            skills=["Figma"],
        ),
        build_candidate(
            "C-3",
            name="Ana Maria Costa",
            location="Austin",
            salary_expectation={"full-time": "$150,000"},
            work_experiences=roles(7),
            skills=["python", "Go"],
        ),
    ]


@pytest.fixture
def scores() -> dict[str, CandidateScore]:
    return {"C-1": build_score("C-1", 72), "C-2": build_score("C-2", 40), "C-3": build_score("C-3", 72)}


def apply(
    pool: list[Candidate],
    scores: dict[str, CandidateScore],
    filters: FilterState | None = None,
    sort: SortConfig | None = None,
    shortlisted: dict[str, Any] | None = None,
    selected: dict[str, Any] | None = None,
) -> list[str]:
    visible = FilterEngine().apply(
        pool,
        scores,
        filters or FilterState(),
        sort or SortConfig(),
        shortlisted or {},
        selected or {},
    )
    return [candidate.id for candidate in visible]


def test_no_filters_sorts_by_total_score_desc_stably(pool, scores):
    assert apply(pool, scores) == ["C-1", "C-3", "C-2"]


def test_ascending_sort_keeps_ties_in_pool_order(pool, scores):
    sort = SortConfig(key=SortKey.TOTAL_SCORE, direction="asc")

    assert apply(pool, scores, sort=sort) == ["C-2", "C-1", "C-3"]


def test_search_matches_name_case_insensitively(pool, scores):
    assert apply(pool, scores, FilterState(search="MARIA")) == ["C-1", "C-3"]
    assert apply(pool, scores, FilterState(search="example.com")) == []


def test_location_and_availability_filters(pool, scores):
    assert apply(pool, scores, FilterState(locations={"Boston"})) == ["C-2"]
    assert apply(pool, scores, FilterState(work_availability={"contract", "internship"})) == ["C-2"]


def test_min_experience_filter(pool, scores):
    assert apply(pool, scores, FilterState(min_experience=4)) == ["C-1", "C-3"]


def test_max_salary_treats_missing_as_zero(pool, scores):
    assert apply(pool, scores, FilterState(max_salary=100_000)) == ["C-1", "C-2"]


def test_education_and_skills_filters_ignore_case(pool, scores):
    assert apply(pool, scores, FilterState(education_levels={"master's degree"})) == ["C-1"]
    assert apply(pool, scores, FilterState(skills={"PYTHON"})) == ["C-1", "C-3"]


def test_ledger_membership_filters(pool, scores):
    shortlisted = {"C-2": object()}
    selected = {"C-3": object()}

    assert apply(pool, scores, FilterState(is_shortlisted=True), shortlisted=shortlisted) == ["C-2"]
    assert apply(pool, scores, FilterState(is_selected=False), selected=selected) == ["C-1", "C-2"]


def test_filters_are_conjunctive(pool, scores):
    filters = FilterState(locations={"Austin"}, max_salary=100_000)

    assert apply(pool, scores, filters) == ["C-1"]


@pytest.mark.parametrize(
    ("key", "direction", "expected"),
    [
        (SortKey.NAME, "asc", ["C-3", "C-2", "C-1"]),
        (SortKey.EXPERIENCE, "desc", ["C-3", "C-1", "C-2"]),
        (SortKey.SALARY, "asc", ["C-2", "C-1", "C-3"]),
        (SortKey.SKILLS, "asc", ["C-2", "C-1", "C-3"]),
        (SortKey.LOCATION, "asc", ["C-1", "C-3", "C-2"]),
    ],
)
def test_sort_keys(pool, scores, key, direction, expected):
    assert apply(pool, scores, sort=SortConfig(key=key, direction=direction)) == expected


def test_missing_score_sorts_as_zero(pool):
    assert apply(pool, {"C-2": build_score("C-2", 10)}) == ["C-2", "C-1", "C-3"]


def test_full_time_salary(pool):
    assert [full_time_salary(candidate) for candidate in pool] == [90000, 0, 150000]


def test_extract_filter_options(pool):
    options = extract_filter_options(pool)

    assert options.locations == ["Austin", "Boston"]
    assert options.skills == ["Figma", "Go", "Python", "SQL", "python"]
    assert options.education_levels == ["Bachelor's Degree", "Master's Degree"]
    assert options.work_availability == ["contract", "full-time", "part-time"]
    assert options.roles == ["Engineer"]


def distinct_pool() -> tuple[list[Candidate], dict[str, CandidateScore]]:
    pool = [
        build_candidate(
            "C-b",
            name="Bea Ortiz",
            phone="555-0002",
            location="Boston",
            submitted_at=pendulum.datetime(2024, 3, 1),
            salary_expectation={"full-time": "$70,000"},
            work_experiences=roles(3),
            skills=["Python", "SQL", "Go"],
            education={"highest_level": "Master's Degree"},
        ),
        build_candidate(
            "C-c",
            name="Carl Weber",
            phone="555-0003",
            location="Chicago",
            submitted_at=pendulum.datetime(2024, 1, 1),
            salary_expectation={"full-time": "$90,000"},
            work_experiences=roles(1),
            skills=["Figma"],
            education={"highest_level": "Doctorate"},
        ),
        build_candidate(
            "C-a",
            name="Ana Silva",
            phone="555-0001",
            location="Austin",
            submitted_at=pendulum.datetime(2024, 2, 1),
            salary_expectation={"full-time": "$50,000"},
            work_experiences=roles(5),
            skills=["Excel", "Git"],
            education={"highest_level": "Bachelor's Degree"},
        ),
    ]
    scores = {"C-a": build_score("C-a", 55), "C-b": build_score("C-b", 81), "C-c": build_score("C-c", 12)}
    return pool, scores


@pytest.mark.parametrize("key", list(SortKey))
def test_ascending_reversed_equals_descending(key):
    pool, scores = distinct_pool()

    ascending = apply(pool, scores, sort=SortConfig(key=key, direction="asc"))
    descending = apply(pool, scores, sort=SortConfig(key=key, direction="desc"))

    assert len(set(ascending)) == len(pool)
    assert list(reversed(ascending)) == descending
