"""Keyword-based skill categorization."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Sequence


@dataclass(frozen=True)
class SkillCategory:
    name: str
    keywords: tuple[str, ...]
    priority: int


@dataclass(slots=True)
class CategorizedSkill:
    skill: str
    categories: list[str] = field(default_factory=list)
    is_technical: bool = False
    priority: int = 0


@dataclass(slots=True)
class SkillStats:
    total: int
    technical: int
    non_technical: int
    category_counts: dict[str, int]
    top_category: str | None


DEFAULT_CATEGORIES: tuple[SkillCategory, ...] = (
    SkillCategory(
        "Frontend",
        ("react", "angular", "vue", "javascript", "typescript", "html", "css", "sass",
         "less", "webpack", "vite", "next", "nuxt"),
        9,
    ),
    SkillCategory(
        "Backend",
        ("node", "express", "fastapi", "django", "flask", "spring", "laravel", "rails",
         "asp.net", ".net", "php"),
        9,
    ),
    SkillCategory(
        "Programming Languages",
        ("python", "javascript", "typescript", "java", "c#", "go", "rust", "kotlin",
         "swift", "ruby", "php", "scala"),
        10,
    ),
    SkillCategory(
        "Cloud & DevOps",
        ("aws", "azure", "gcp", "google cloud", "docker", "kubernetes", "terraform",
         "ansible", "jenkins", "gitlab", "github actions"),
        8,
    ),
    SkillCategory(
        "Databases",
        ("mongodb", "postgresql", "mysql", "redis", "cassandra", "elasticsearch",
         "dynamodb", "sqlite", "oracle"),
        7,
    ),
    SkillCategory(
        "Mobile",
        ("react native", "flutter", "swift", "kotlin", "xamarin", "ionic", "cordova"),
        8,
    ),
    SkillCategory(
        "Data & AI",
        ("machine learning", "ml", "ai", "data science", "pandas", "numpy", "tensorflow",
         "pytorch", "scikit-learn"),
        9,
    ),
    SkillCategory(
        "Design",
        ("figma", "sketch", "adobe", "ui/ux", "photoshop", "illustrator", "design"),
        5,
    ),
    SkillCategory(
        "Project Management",
        ("agile", "scrum", "kanban", "jira", "trello", "asana", "project management"),
        4,
    ),
    SkillCategory(
        "Soft Skills",
        ("leadership", "communication", "teamwork", "problem solving", "critical thinking"),
        3,
    ),
)


class SkillCategorizer:
    """Assign skills to keyword categories (substring match, case-insensitive)."""

    TECHNICAL_PRIORITY = 6

    def __init__(self, categories: Sequence[SkillCategory] = DEFAULT_CATEGORIES) -> None:
        self._categories = tuple(categories)

    @property
    def categories(self) -> tuple[SkillCategory, ...]:
        return self._categories

    def categorize(self, skill: str) -> CategorizedSkill:
        lowered = skill.lower().strip()
        result = CategorizedSkill(skill=skill)
        for category in self._categories:
            if any(keyword in lowered for keyword in category.keywords):
                result.categories.append(category.name)
                result.priority = max(result.priority, category.priority)
                if category.priority >= self.TECHNICAL_PRIORITY:
                    result.is_technical = True
        return result

    def is_technical(self, skill: str) -> bool:
        return self.categorize(skill).is_technical

    def technical_skills(self, skills: Iterable[str]) -> list[str]:
        return [skill for skill in skills if self.is_technical(skill)]

    def group_by_category(self, skills: Iterable[str]) -> dict[str, list[str]]:
        grouped: dict[str, list[str]] = {}
        for skill in skills:
            categorized = self.categorize(skill)
            for name in categorized.categories or ["Other"]:
                grouped.setdefault(name, []).append(skill)
        return grouped

    def stats(self, skills: Sequence[str]) -> SkillStats:
        categorized = [self.categorize(skill) for skill in skills]
        counts: dict[str, int] = {}
        top_category: str | None = None
        for item in categorized:
            for name in item.categories:
                counts[name] = counts.get(name, 0) + 1
                if top_category is None or counts[name] > counts[top_category]:
                    top_category = name
        technical = sum(1 for item in categorized if item.is_technical)
        return SkillStats(
            total=len(categorized),
            technical=technical,
            non_technical=len(categorized) - technical,
            category_counts=counts,
            top_category=top_category,
        )
