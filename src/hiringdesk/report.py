"""Hiring report and CSV export over a review session."""

from __future__ import annotations

from statistics import mean
from typing import TYPE_CHECKING, Any, Mapping, Sequence

from .core.filtering import full_time_salary
from .core.normalization import parse_salary_amount
from .core.score_analysis import ScoreAnalyzer
from .core.scoring import round_half_up
from .core.skills import SkillCategorizer
from .schemas import Candidate, CandidateScore, SelectionEntry, ShortlistEntry

if TYPE_CHECKING:
    from .session import HiringSession

CSV_HEADERS: tuple[str, ...] = (
    "ID",
    "Name",
    "Email",
    "Phone",
    "Location",
    "Submitted At",
    "Work Availability",
    "Salary Expectation (Full-time)",
    "Total Experience",
    "Highest Education",
    "Skills Count",
    "Top Skills",
    "Total Score",
    "Experience Score",
    "Education Score",
    "Skill Score",
    "Shortlisted",
    "Selected",
)


def format_salary(value: str | None) -> str:
    amount = parse_salary_amount(value)
    if not amount:
        return "Not specified"
    return f"${amount:,}"


def export_candidates_csv(
    candidates: Sequence[Candidate],
    scores: Mapping[str, CandidateScore] | None = None,
    shortlisted: Mapping[str, ShortlistEntry] | None = None,
    selected: Mapping[str, SelectionEntry] | None = None,
) -> list[list[str]]:
    """Return CSV rows (header first) for the given candidates."""
    scores = scores or {}
    shortlisted = shortlisted or {}
    selected = selected or {}
    rows = [list(CSV_HEADERS)]
    for candidate in candidates:
        score = scores.get(candidate.id)
        rows.append(
            [
                candidate.id,
                candidate.name,
                candidate.email,
                candidate.phone,
                candidate.location,
                candidate.submitted_at.date().isoformat(),
                "; ".join(candidate.work_availability),
                format_salary(candidate.full_time_salary),
                str(candidate.role_count),
                candidate.education.highest_level,
                str(len(candidate.skills)),
                "; ".join(candidate.skills[:3]),
                str(score.total_score if score else 0),
                str(score.experience_score if score else 0),
                str(score.education_score if score else 0),
                str(score.skill_score if score else 0),
                "Yes" if candidate.id in shortlisted else "No",
                "Yes" if candidate.id in selected else "No",
            ]
        )
    return rows


def generate_hiring_report(
    session: "HiringSession",
    *,
    top: int = 10,
    score_analyzer: ScoreAnalyzer | None = None,
    categorizer: SkillCategorizer | None = None,
) -> dict[str, Any]:
    """Summarize a session as a JSON-ready document.

    ``score_analyzer`` should share the scoring engine's weights so that the
    per-candidate breakdown and consistency check match the reported totals.
    """
    state = session.state
    analyzer = score_analyzer or ScoreAnalyzer()
    pool_scores = list(state.scores.values())
    ranked = sorted(
        state.visible,
        key=lambda candidate: _total(state.scores, candidate.id),
        reverse=True,
    )
    selected = session.selected_candidates()

    return {
        "summary": {
            "total_candidates": len(state.pool),
            "visible_candidates": len(state.visible),
            "shortlisted_count": len(state.shortlisted),
            "selected_count": len(state.selected),
            "average_score": _average_score(state.pool, state.scores),
        },
        "top_candidates": [
            _candidate_entry(candidate, state.scores.get(candidate.id), analyzer, pool_scores)
            for candidate in ranked[:top]
        ],
        "selected_candidates": [
            {
                **_candidate_entry(candidate, state.scores.get(candidate.id), analyzer, pool_scores),
                "selection": state.selected[candidate.id].model_dump(mode="json"),
            }
            for candidate in selected
        ],
        "diversity_metrics": state.diversity.model_dump(mode="json"),
        "bias_analysis": session.bias_analysis().model_dump(mode="json"),
        "team_composition": session.team_composition().model_dump(mode="json"),
        "skills_analysis": skills_analysis(selected, categorizer),
        "salary_analysis": salary_analysis(selected),
    }


def skills_analysis(
    candidates: Sequence[Candidate],
    categorizer: SkillCategorizer | None = None,
) -> dict[str, Any]:
    categorizer = categorizer or SkillCategorizer()
    skills = [skill for candidate in candidates for skill in candidate.skills]
    stats = categorizer.stats(skills)
    counts: dict[str, int] = {}
    for skill in skills:
        counts[skill] = counts.get(skill, 0) + 1
    most_common = sorted(counts.items(), key=lambda item: (-item[1], item[0]))[:10]
    return {
        "total_skills": stats.total,
        "unique_skills": len(counts),
        "technical_skills": stats.technical,
        "category_counts": stats.category_counts,
        "top_category": stats.top_category,
        "most_common": [{"skill": skill, "count": count} for skill, count in most_common],
    }


def salary_analysis(candidates: Sequence[Candidate]) -> dict[str, Any]:
    amounts = [full_time_salary(c) for c in candidates if full_time_salary(c) > 0]
    if not amounts:
        return {"count": 0, "total": 0, "average": 0, "minimum": 0, "maximum": 0}
    return {
        "count": len(amounts),
        "total": sum(amounts),
        "average": round_half_up(mean(amounts)),
        "minimum": min(amounts),
        "maximum": max(amounts),
    }


def _candidate_entry(
    candidate: Candidate,
    score: CandidateScore | None,
    analyzer: ScoreAnalyzer,
    pool_scores: Sequence[CandidateScore],
) -> dict[str, Any]:
    entry: dict[str, Any] = {
        "id": candidate.id,
        "name": candidate.name,
        "location": candidate.location,
        "salary": format_salary(candidate.full_time_salary),
        "score": score.model_dump(mode="json") if score else None,
    }
    if score is not None:
        analysis = analyzer.analyze(score)
        comparison = analyzer.compare(score, pool_scores)
        entry["analysis"] = {
            "grade": analysis.grade,
            "status": analysis.status,
            "strengths": analysis.strengths,
            "weaknesses": analysis.weaknesses,
            "recommendations": analysis.recommendations,
            "breakdown": [
                {"component": item.component, "score": item.score, "weight": item.weight}
                for item in analysis.breakdown
            ],
            "percentile": comparison.percentile,
            "consistent": analyzer.validate(score).is_valid,
        }
    return entry


def _total(scores: Mapping[str, CandidateScore], candidate_id: str) -> int:
    score = scores.get(candidate_id)
    return score.total_score if score else 0


def _average_score(
    pool: Sequence[Candidate],
    scores: Mapping[str, CandidateScore],
) -> float:
    if not pool:
        return 0.0
    return round(mean(_total(scores, candidate.id) for candidate in pool), 1)
