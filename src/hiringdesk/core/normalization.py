"""Skill-name and salary-string canonicalization across a validated batch."""

from __future__ import annotations

import re
from typing import Iterable, Sequence

from ..schemas import Candidate

# First entry of each group is the canonical spelling.
SKILL_SYNONYM_GROUPS: tuple[tuple[str, ...], ...] = (
    ("javascript", "js", "ecmascript"),
    ("typescript", "ts"),
    ("react", "reactjs", "react.js"),
    ("node", "nodejs", "node.js"),
    ("python", "py"),
    ("docker", "containerization"),
    ("aws", "amazon web services"),
    ("gcp", "google cloud platform"),
    ("azure", "microsoft azure"),
    ("mongodb", "mongo"),
    ("postgresql", "postgres", "psql"),
    ("mysql", "sql"),
)

ZERO_SALARY = "$0"

_NON_DIGITS = re.compile(r"[^\d]")
_LEADING_INTEGER = re.compile(r"\s*(\d+)")


def build_skill_map(
    candidates: Iterable[Candidate],
    groups: Sequence[Sequence[str]] = SKILL_SYNONYM_GROUPS,
) -> dict[str, str]:
    """Map each synonym variant present in the batch to its canonical name."""
    vocabulary = {
        skill.lower() for candidate in candidates for skill in candidate.skills
    }
    skill_map: dict[str, str] = {}
    for group in groups:
        canonical = group[0]
        for variant in group:
            if variant in vocabulary:
                skill_map[variant] = canonical
    return skill_map


def normalize_skills(candidates: Sequence[Candidate]) -> list[Candidate]:
    skill_map = build_skill_map(candidates)
    return [
        candidate.model_copy(
            update={
                "skills": tuple(
                    skill_map.get(skill.lower(), skill) for skill in candidate.skills
                )
            }
        )
        for candidate in candidates
    ]


def normalize_salary_string(value: str | None) -> str:
    """Render a salary as ``$`` plus a comma-grouped integer.

    Every non-digit character is discarded before parsing; empty, digitless or
    zero amounts collapse to ``$0``.
    """
    if not value:
        return ZERO_SALARY
    digits = _NON_DIGITS.sub("", value)
    if not digits:
        return ZERO_SALARY
    amount = int(digits)
    if amount == 0:
        return ZERO_SALARY
    return f"${amount:,}"


def normalize_salaries(candidates: Sequence[Candidate]) -> list[Candidate]:
    normalized: list[Candidate] = []
    for candidate in candidates:
        expectation = candidate.salary_expectation
        updated = expectation.model_validate(
            {kind: normalize_salary_string(value) for kind, value in expectation.items()}
        )
        normalized.append(candidate.model_copy(update={"salary_expectation": updated}))
    return normalized


def parse_salary_amount(value: str | None) -> int | None:
    """Parse a salary display string such as ``"$45,000"`` into an integer.

    Currency symbols and grouping commas are dropped and the leading integer is
    read; anything after it (cents, ranges, suffixes) is ignored. Returns
    ``None`` when no integer can be read.
    """
    if not value:
        return None
    cleaned = value.replace("$", "").replace(",", "")
    match = _LEADING_INTEGER.match(cleaned)
    if match is None:
        return None
    return int(match.group(1))


__all__ = [
    "SKILL_SYNONYM_GROUPS",
    "build_skill_map",
    "normalize_salaries",
    "normalize_salary_string",
    "normalize_skills",
    "parse_salary_amount",
]
