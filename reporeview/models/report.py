"""Scores, categories and the consolidated report"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Mapping, Tuple


@dataclass(frozen=True)
class PartialScore:
    """One analyzer's result, always 0 <= score <= max_score"""
    score: int
    max_score: int
    issues: Tuple[str, ...] = ()

    def __post_init__(self):
        if self.max_score < 0:
            raise ValueError(f"max_score must be >= 0, got {self.max_score}")
        if not 0 <= self.score <= self.max_score:
            raise ValueError(f"score {self.score} outside [0, {self.max_score}]")
        object.__setattr__(self, "issues", tuple(self.issues))

    @property
    def ratio(self) -> float:
        if self.max_score == 0:
            return 0.0
        return self.score / self.max_score

    def to_dict(self) -> Dict:
        return {"score": self.score, "maxScore": self.max_score}


class Category(str, Enum):
    """Analyzer categories, declared in their fixed report order"""
    STRUCTURE = "structure"
    CODE_QUALITY = "code_quality"
    DOCUMENTATION = "documentation"
    VERSION_CONTROL = "version_control"
    TESTING = "testing"
    TECH_STACK = "tech_stack"
    REAL_WORLD = "real_world"
    SECURITY = "security"
    COMPLEXITY = "complexity"

    @property
    def label(self) -> str:
        return CATEGORY_LABELS[self]


CATEGORY_LABELS = {
    Category.STRUCTURE: "Structure",
    Category.CODE_QUALITY: "Code Quality",
    Category.DOCUMENTATION: "Documentation",
    Category.VERSION_CONTROL: "Version Control",
    Category.TESTING: "Testing",
    Category.TECH_STACK: "Tech Stack",
    Category.REAL_WORLD: "Real-World Applicability",
    Category.SECURITY: "Security",
    Category.COMPLEXITY: "Complexity",
}

CATEGORY_ORDER: Tuple[Category, ...] = tuple(Category)


class SkillLevel(str, Enum):
    EXPERT = "Expert"
    ADVANCED = "Advanced"
    INTERMEDIATE = "Intermediate"
    BEGINNER = "Beginner"
    NOVICE = "Novice"


class Badge(str, Enum):
    TROPHY = "🏆"
    SILVER = "🥈"
    BRONZE = "🥉"
    SEEDLING = "🌱"


# Display label -> analyzer category. The legacy table binds several labels
# to one analyzer; that rubric duplication is kept as the default.
LEGACY_DISPLAY_BINDINGS: Mapping[str, Category] = {
    "Code Quality": Category.CODE_QUALITY,
    "Project Structure": Category.DOCUMENTATION,
    "Documentation": Category.DOCUMENTATION,
    "Testing": Category.VERSION_CONTROL,
    "Git Practices": Category.VERSION_CONTROL,
    "Real-World Relevance": Category.REAL_WORLD,
    "Security": Category.CODE_QUALITY,
    "Code Complexity": Category.CODE_QUALITY,
}

DISTINCT_DISPLAY_BINDINGS: Mapping[str, Category] = {
    "Code Quality": Category.CODE_QUALITY,
    "Project Structure": Category.STRUCTURE,
    "Documentation": Category.DOCUMENTATION,
    "Testing": Category.TESTING,
    "Git Practices": Category.VERSION_CONTROL,
    "Real-World Relevance": Category.REAL_WORLD,
    "Security": Category.SECURITY,
    "Code Complexity": Category.COMPLEXITY,
    "Tech Stack": Category.TECH_STACK,
}

DISPLAY_BINDINGS = {
    "legacy": LEGACY_DISPLAY_BINDINGS,
    "distinct": DISTINCT_DISPLAY_BINDINGS,
}


@dataclass(frozen=True)
class Report:
    """Consolidated analysis result for one request"""
    overall_score: int
    skill_level: SkillLevel
    badge: Badge
    summary: str
    roadmap: Tuple[str, ...]
    scores: Mapping[str, PartialScore]
    partial_scores: Mapping[Category, PartialScore] = field(default_factory=dict)

    def to_dict(self) -> Dict:
        """Convert to dictionary for API response"""
        return {
            "overallScore": self.overall_score,
            "skillLevel": self.skill_level.value,
            "badge": self.badge.value,
            "summary": self.summary,
            "roadmap": list(self.roadmap),
            "scores": {label: score.to_dict() for label, score in self.scores.items()},
        }
