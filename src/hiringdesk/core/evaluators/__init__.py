"""Component evaluators for the scoring engine."""

from .diversity import DiversityConfig, DiversityEvaluator
from .education import EducationConfig, EducationEvaluator
from .experience import ExperienceConfig, ExperienceEvaluator
from .salary import SalaryConfig, SalaryEvaluator
from .skills import SkillConfig, SkillEvaluator

__all__ = [
    "DiversityConfig",
    "DiversityEvaluator",
    "EducationConfig",
    "EducationEvaluator",
    "ExperienceConfig",
    "ExperienceEvaluator",
    "SalaryConfig",
    "SalaryEvaluator",
    "SkillConfig",
    "SkillEvaluator",
]
