"""Predicate filtering and single-key sorting of the candidate pool."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterable, Mapping, Sequence

from ..schemas import Candidate, CandidateScore, FilterState, SortConfig, SortKey
from .normalization import parse_salary_amount

Accessor = Callable[[Candidate, Mapping[str, CandidateScore]], Any]


def full_time_salary(candidate: Candidate) -> int:
    """Parsed full-time salary; a missing figure reads as 0."""
    return parse_salary_amount(candidate.full_time_salary) or 0


def _total_score(candidate: Candidate, scores: Mapping[str, CandidateScore]) -> int:
    score = scores.get(candidate.id)
    return score.total_score if score is not None else 0


SORT_ACCESSORS: dict[SortKey, Accessor] = {
    SortKey.TOTAL_SCORE: _total_score,
    SortKey.ID: lambda candidate, _: candidate.id,
    SortKey.NAME: lambda candidate, _: candidate.name,
    SortKey.EMAIL: lambda candidate, _: candidate.email,
    SortKey.PHONE: lambda candidate, _: candidate.phone,
    SortKey.LOCATION: lambda candidate, _: candidate.location,
    SortKey.SUBMITTED_AT: lambda candidate, _: candidate.submitted_at,
    SortKey.EXPERIENCE: lambda candidate, _: candidate.role_count,
    SortKey.SKILLS: lambda candidate, _: len(candidate.skills),
    SortKey.SALARY: lambda candidate, _: full_time_salary(candidate),
    SortKey.EDUCATION_LEVEL: lambda candidate, _: candidate.education.highest_level,
}


@dataclass(slots=True)
class FilterOptions:
    """Distinct facet values present in a pool, each sorted."""

    locations: list[str]
    skills: list[str]
    education_levels: list[str]
    work_availability: list[str]
    companies: list[str]
    roles: list[str]


class FilterEngine:
    """Produce the visible candidate list from filters, sorting and ledgers.

    All active predicates must hold. Search matches the candidate name only.
    Sorting is stable, so equal keys keep their pool order in both directions.
    """

    def apply(
        self,
        pool: Sequence[Candidate],
        scores: Mapping[str, CandidateScore],
        filters: FilterState,
        sort: SortConfig,
        shortlisted: Mapping[str, Any],
        selected: Mapping[str, Any],
    ) -> list[Candidate]:
        predicate = self.build_predicate(filters, shortlisted, selected)
        matched = [candidate for candidate in pool if predicate(candidate)]
        return self.sort(matched, scores, sort)

    def build_predicate(
        self,
        filters: FilterState,
        shortlisted: Mapping[str, Any],
        selected: Mapping[str, Any],
    ) -> Callable[[Candidate], bool]:
        search = filters.search.strip().lower()
        education_levels = {level.casefold() for level in filters.education_levels}
        skills = {skill.casefold() for skill in filters.skills}

        def matches(candidate: Candidate) -> bool:
            if search and search not in candidate.name.lower():
                return False
            if filters.locations and candidate.location not in filters.locations:
                return False
            if filters.work_availability and filters.work_availability.isdisjoint(
                candidate.work_availability
            ):
                return False
            if candidate.role_count < filters.min_experience:
                return False
            if filters.max_salary is not None and full_time_salary(candidate) > filters.max_salary:
                return False
            if (
                education_levels
                and candidate.education.highest_level.casefold() not in education_levels
            ):
                return False
            if skills and skills.isdisjoint(skill.casefold() for skill in candidate.skills):
                return False
            if (
                filters.is_shortlisted is not None
                and (candidate.id in shortlisted) != filters.is_shortlisted
            ):
                return False
            if (
                filters.is_selected is not None
                and (candidate.id in selected) != filters.is_selected
            ):
                return False
            return True

        return matches

    @staticmethod
    def sort(
        candidates: Iterable[Candidate],
        scores: Mapping[str, CandidateScore],
        sort: SortConfig,
    ) -> list[Candidate]:
        accessor = SORT_ACCESSORS.get(sort.key)
        if accessor is None:
            return list(candidates)

        def sort_key(candidate: Candidate) -> Any:
            value = accessor(candidate, scores)
            if isinstance(value, str):
                return (value.casefold(), value)
            return value

        return sorted(candidates, key=sort_key, reverse=sort.direction == "desc")


def extract_filter_options(pool: Iterable[Candidate]) -> FilterOptions:
    locations: set[str] = set()
    skills: set[str] = set()
    education_levels: set[str] = set()
    availability: set[str] = set()
    companies: set[str] = set()
    roles: set[str] = set()

    for candidate in pool:
        locations.add(candidate.location)
        education_levels.add(candidate.education.highest_level)
        skills.update(candidate.skills)
        availability.update(candidate.work_availability)
        for experience in candidate.work_experiences:
            companies.add(experience.company)
            roles.add(experience.role_name)

    return FilterOptions(
        locations=sorted(locations),
        skills=sorted(skills),
        education_levels=sorted(education_levels),
        work_availability=sorted(availability),
        companies=sorted(companies),
        roles=sorted(roles),
    )


__all__ = [
    "FilterEngine",
    "FilterOptions",
    "SORT_ACCESSORS",
    "extract_filter_options",
    "full_time_salary",
]
