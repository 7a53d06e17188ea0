from __future__ import annotations

from typing import Any

import pendulum
import pytest

from hiringdesk.core.normalization import (
    build_skill_map,
    normalize_salaries,
    normalize_salary_string,
    normalize_skills,
    parse_salary_amount,
)
from hiringdesk.schemas import Candidate


def build_candidate(candidate_id: str = "C-001", **kwargs: Any) -> Candidate:
    defaults: dict[str, Any] = {
        "id": candidate_id,
        "name": "Ada Lovelace",
        "email": f"{candidate_id.lower()}@example.com",
        "phone": "",
        "location": "London",
        "submitted_at": pendulum.datetime(2024, 1, 1),
        "work_availability": ["full-time"],
        "education": {"highest_level": "Bachelor's Degree"},
    }
    defaults.update(kwargs)
    return Candidate.model_validate(defaults)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("$45,000", "$45,000"),
        ("45000", "$45,000"),
        ("USD 120000", "$120,000"),
        ("", "$0"),
        (None, "$0"),
        ("negotiable", "$0"),
        ("$0", "$0"),
    ],
)
def test_normalize_salary_string(raw, expected):
    assert normalize_salary_string(raw) == expected


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("$45,000", 45000),
        ("160000", 160000),
        ("$85,000.50", 85000),
        ("$0", 0),
        ("", None),
        (None, None),
        ("negotiable", None),
    ],
)
def test_parse_salary_amount(raw, expected):
    assert parse_salary_amount(raw) == expected


def test_skill_map_only_covers_variants_present():
    candidates = [
        build_candidate("C-001", skills=["JS", "ReactJS"]),
        build_candidate("C-002", skills=["Postgres", "Figma"]),
    ]

    skill_map = build_skill_map(candidates)

    assert skill_map == {
        "js": "javascript",
        "reactjs": "react",
        "postgres": "postgresql",
    }


def test_normalize_skills_rewrites_synonyms_and_keeps_others():
    candidates = [
        build_candidate("C-001", skills=["JS", "Node.js", "Figma"]),
        build_candidate("C-002", skills=["amazon web services"]),
    ]

    normalized = normalize_skills(candidates)

    assert normalized[0].skills == ("javascript", "node", "Figma")
    assert normalized[1].skills == ("aws",)
    assert candidates[0].skills == ("JS", "Node.js", "Figma")


def test_normalize_salaries_formats_every_kind():
    candidate = build_candidate(
        salary_expectation={"full-time": "85000", "contract": "n/a"},
    )

    normalized = normalize_salaries([candidate])[0]

    assert normalized.salary_expectation.full_time == "$85,000"
    assert normalized.salary_expectation.contract == "$0"
    assert normalized.salary_expectation.part_time is None


@pytest.mark.parametrize(
    "skills",
    [
        ["SQL", "MySQL", "JS"],
        ["Py", "React.js", "Figma"],
        ["postgres", "psql", "Mongo", "amazon web services"],
        [],
    ],
)
def test_normalize_skills_is_idempotent(skills):
    candidates = [build_candidate("C-001", skills=skills), build_candidate("C-002", skills=["sql"])]

    once = normalize_skills(candidates)

    assert normalize_skills(once) == once


@pytest.mark.parametrize(
    "expectation",
    [
        {"full-time": "85000"},
        {"full-time": "$0", "part-time": ""},
        {"contract": "$45,000.75", "internship": "n/a"},
        {},
    ],
)
def test_normalize_salaries_is_idempotent(expectation):
    candidates = [build_candidate(salary_expectation=expectation)]

    once = normalize_salaries(candidates)

    assert normalize_salaries(once) == once
