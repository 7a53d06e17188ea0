"""Dependency injection container for the review engine."""

from __future__ import annotations

from dependency_injector import containers, providers

from .core import (
    CandidateValidator,
    DiversityAnalyzer,
    DiversityEvaluator,
    EducationEvaluator,
    ExperienceEvaluator,
    FilterEngine,
    SalaryEvaluator,
    ScoreAnalyzer,
    ScoringEngine,
    SkillCategorizer,
    SkillEvaluator,
)
from .core.evaluators import (
    DiversityConfig,
    EducationConfig,
    ExperienceConfig,
    SalaryConfig,
    SkillConfig,
)
from .pipeline import ReviewPipeline
from .session import HiringReducer, HiringSession

_EVALUATORS = {
    "experience": ("experience_evaluator", ExperienceEvaluator, ExperienceConfig),
    "education": ("education_evaluator", EducationEvaluator, EducationConfig),
    "skills": ("skill_evaluator", SkillEvaluator, SkillConfig),
    "salary": ("salary_evaluator", SalaryEvaluator, SalaryConfig),
    "diversity": ("diversity_evaluator", DiversityEvaluator, DiversityConfig),
}


class ReviewContainer(containers.DeclarativeContainer):
    """Dependency-injector container definition."""

    config = providers.Configuration()

    experience_evaluator = providers.Singleton(ExperienceEvaluator)
    education_evaluator = providers.Singleton(EducationEvaluator)
    skill_evaluator = providers.Singleton(SkillEvaluator)
    salary_evaluator = providers.Singleton(SalaryEvaluator)
    diversity_evaluator = providers.Singleton(DiversityEvaluator)

    evaluators = providers.List(
        experience_evaluator,
        education_evaluator,
        skill_evaluator,
        salary_evaluator,
        diversity_evaluator,
    )

    scoring_engine = providers.Singleton(
        ScoringEngine,
        evaluators=evaluators,
        score_weights=config.score_weights,
    )
    score_analyzer = providers.Singleton(
        ScoreAnalyzer,
        weights=scoring_engine.provided.weights,
    )

    filter_engine = providers.Singleton(FilterEngine)
    skill_categorizer = providers.Singleton(SkillCategorizer)
    diversity_analyzer = providers.Singleton(DiversityAnalyzer)
    validator = providers.Singleton(CandidateValidator)

    reducer = providers.Singleton(
        HiringReducer,
        scoring_engine=scoring_engine,
        filter_engine=filter_engine,
        analyzer=diversity_analyzer,
        team_size=config.team_size,
    )

    session = providers.Factory(
        HiringSession,
        reducer=reducer,
        validator=validator,
    )

    pipeline = providers.Factory(
        ReviewPipeline,
        session_factory=session.provider,
        score_analyzer=score_analyzer,
        skill_categorizer=skill_categorizer,
    )


def create_container(*, settings: dict | None = None) -> ReviewContainer:
    """Instantiate container with optional overrides."""

    container = ReviewContainer()

    if not settings:
        return container

    core_settings = settings.get("core", {}) if isinstance(settings, dict) else {}
    if core_settings:
        container.config.from_dict(core_settings)

    evaluator_settings = settings.get("evaluators", {}) if isinstance(settings, dict) else {}

    for name, (attribute, evaluator_cls, config_cls) in _EVALUATORS.items():
        if name not in evaluator_settings:
            continue
        evaluator_config = config_cls(**_tuplify(evaluator_settings[name]))
        getattr(container, attribute).override(
            providers.Singleton(evaluator_cls, config=evaluator_config)
        )

    return container


def _tuplify(values: dict) -> dict:
    # YAML yields lists; evaluator configs hold tuples.
    return {
        key: tuple(_tuplify_item(item) for item in value) if isinstance(value, list) else value
        for key, value in values.items()
    }


def _tuplify_item(item):
    return tuple(item) if isinstance(item, list) else item
