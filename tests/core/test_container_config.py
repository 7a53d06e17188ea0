from __future__ import annotations

import pendulum
import pytest
from pydantic import ValidationError

from hiringdesk.container import create_container
from hiringdesk.core import ScoreAnalyzer
from hiringdesk.schemas import CandidateScore
from hiringdesk.schemas.config import AppConfig, load_config
from hiringdesk.session import HiringSession


def test_create_container_defaults():
    container = create_container()

    engine = container.scoring_engine()
    session = container.session()

    assert engine.weights.experience == pytest.approx(0.30)
    assert isinstance(session, HiringSession)
    assert session.team_size == 5
    assert container.session() is not session


def test_create_container_with_overrides():
    container = create_container(
        settings={
            "core": {
                "score_weights": {"experience": 0.5, "education": 0.2, "skill": 0.1, "salary": 0.1, "diversity": 0.1},
                "team_size": 3,
            },
            "evaluators": {
                "experience": {"senior_keywords": ["principal", "staff"]},
                "salary": {"bands": [[60000, 90], [100000, 50]], "missing_points": 40},
                "diversity": {"location_points": 25},
            },
        }
    )

    experience = container.experience_evaluator()
    salary = container.salary_evaluator()
    diversity = container.diversity_evaluator()
    engine = container.scoring_engine()

    assert experience._config.senior_keywords == ("principal", "staff")
    assert salary._config.bands == ((60000, 90), (100000, 50))
    assert salary._config.missing_points == 40
    assert diversity._config.location_points == 25
    assert engine.weights.experience == pytest.approx(0.5)
    assert container.session().team_size == 3


def test_load_config_validation():
    data = {
        "core": {"score_weights": {"experience": 0.6}},
        "evaluators": {"skills": {"per_skill_points": 4}},
    }

    app_config = load_config(data)

    assert isinstance(app_config, AppConfig)
    settings = app_config.to_settings()
    assert settings["core"]["score_weights"]["experience"] == 0.6
    assert settings["evaluators"] == {"skills": {"per_skill_points": 4}}


def test_load_config_none_yields_defaults():
    assert load_config(None).to_settings() == {}


def test_load_config_rejects_bad_team_size():
    with pytest.raises(ValidationError):
        load_config({"core": {"team_size": 0}})


def test_score_analyzer_shares_engine_weights():
    container = create_container(
        settings={
            "core": {
                "score_weights": {"experience": 1.0, "education": 0, "skill": 0, "salary": 0, "diversity": 0},
            },
        }
    )
    engine = container.scoring_engine()
    analyzer = container.score_analyzer()
    score = CandidateScore(
        candidate_id="C-1",
        total_score=engine.weighted_total({"experience": 90, "skill": 40}),
        experience_score=90,
        education_score=0,
        skill_score=40,
        salary_score=0,
        diversity_score=0,
        scored_at=pendulum.datetime(2024, 1, 1),
    )

    weights = {item.component: item.weight for item in analyzer.breakdown(score)}

    assert weights == engine.weights.as_dict()
    assert score.total_score == 90
    assert analyzer.validate(score).is_valid
    assert not ScoreAnalyzer().validate(score).is_valid
    assert container.score_analyzer() is analyzer
