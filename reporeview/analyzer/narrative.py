"""Narrative summary generation"""

from typing import Dict, List, Mapping, Tuple

from reporeview.models import CATEGORY_ORDER, Category, PartialScore, SkillLevel

# (strong, adequate, weak) phrasing per category
PHRASES: Dict[Category, Tuple[str, str, str]] = {
    Category.STRUCTURE: (
        "a well-organized project structure",
        "a reasonable project structure",
        "a project structure that needs organizing",
    ),
    Category.CODE_QUALITY: (
        "a high level of code quality",
        "acceptable code quality",
        "room for improvement in code quality",
    ),
    Category.DOCUMENTATION: (
        "thorough documentation",
        "basic documentation",
        "limited documentation",
    ),
    Category.VERSION_CONTROL: (
        "strong version control practices",
        "adequate version control practices",
        "weak version control practices",
    ),
    Category.TESTING: (
        "solid test coverage",
        "some test coverage",
        "little or no test coverage",
    ),
    Category.TECH_STACK: (
        "a modern, well-tooled tech stack",
        "a recognizable tech stack",
        "a tech stack with little recognized tooling",
    ),
    Category.REAL_WORLD: (
        "strong real-world relevance",
        "moderate real-world relevance",
        "limited real-world relevance",
    ),
    Category.SECURITY: (
        "a clean dependency security record",
        "some dependency security concerns",
        "serious dependency security concerns",
    ),
    Category.COMPLEXITY: (
        "low code complexity",
        "moderate code complexity",
        "high code complexity",
    ),
}


def _phrase(category: Category, partial: PartialScore) -> str:
    strong, adequate, weak = PHRASES[category]
    if partial.ratio >= 0.8:
        return strong
    if partial.ratio >= 0.5:
        return adequate
    return weak


def _join(phrases: List[str]) -> str:
    if len(phrases) <= 1:
        return "".join(phrases)
    return ", ".join(phrases[:-1]) + ", and " + phrases[-1]


def generate_summary(
    overall_score: int,
    skill_level: SkillLevel,
    partials: Mapping[Category, PartialScore],
) -> str:
    """Render the summary in fixed category order; no randomness."""
    ordered = [category for category in CATEGORY_ORDER if category in partials]

    sentences = [
        f"This repository has an overall score of {overall_score}/100, "
        f"reflecting {skill_level.value.lower()} level development practices."
    ]
    phrases = [_phrase(category, partials[category]) for category in ordered]
    if phrases:
        sentences.append(f"It shows {_join(phrases)}.")

    issues = [issue for category in ordered for issue in partials[category].issues]
    if issues:
        sentences.append(f"Key areas that need attention: {'; '.join(issues)}.")

    return " ".join(sentences)
