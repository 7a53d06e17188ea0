"""Pydantic configuration schema for CLI YAML input."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class CoreConfig(BaseModel):
    score_weights: dict[str, float] | None = None
    team_size: int | None = Field(default=None, ge=1)


class EvaluatorConfig(BaseModel):
    experience: dict[str, Any] | None = None
    education: dict[str, Any] | None = None
    skills: dict[str, Any] | None = None
    salary: dict[str, Any] | None = None
    diversity: dict[str, Any] | None = None


class AppConfig(BaseModel):
    core: CoreConfig = Field(default_factory=CoreConfig)
    evaluators: EvaluatorConfig = Field(default_factory=EvaluatorConfig)

    def to_settings(self) -> dict[str, Any]:
        settings: dict[str, Any] = {}
        core_settings = self.core.model_dump(exclude_none=True)
        if core_settings:
            settings["core"] = core_settings
        evaluator_settings = self.evaluators.model_dump(exclude_none=True)
        if evaluator_settings:
            settings["evaluators"] = evaluator_settings
        return settings


def load_config(raw: Any) -> AppConfig:
    """Validate a parsed YAML document; ``None`` yields the defaults."""
    if raw is None:
        return AppConfig()
    return AppConfig.model_validate(raw)
