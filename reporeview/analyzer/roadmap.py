"""Improvement roadmap generation"""

from dataclasses import dataclass
from typing import Callable, List, Mapping, Tuple

from reporeview.analyzer import complexity, documentation, structure, tech_stack, testing
from reporeview.models import Category, PartialScore

FALLBACK_RECOMMENDATION = "Repository is well-maintained! Keep up the good work!"
CI_CD_RECOMMENDATION = "Set up a CI/CD pipeline to run linting, tests and dependency audits on every change"

REC_ADD_README = "Add a README.md with a project overview, setup instructions and usage examples"
REC_SOURCE_DIR = "Organize application code under a dedicated source directory such as src/"
REC_ADD_MANIFEST = "Add a package manifest (e.g. package.json) that declares dependencies and scripts"
REC_EXPAND_DOCS = "Expand the README with installation, usage and contributing sections"
REC_ADD_TESTS = "Increase test coverage by adding unit and integration tests"
REC_COMMITS = "Commit smaller changes more frequently with descriptive commit messages"
REC_TOOLING = "Adopt established frameworks and tooling such as a linter, formatter and test runner"
REC_SECURITY = "Resolve dependency vulnerabilities (e.g. npm audit fix) and keep dependencies up to date"
REC_LINT = "Add code linting and formatting tools and fix the reported problems"
REC_REFACTOR = "Refactor complex functions into smaller, focused units"

LOW_RATIO = 0.5

Trigger = Callable[[PartialScore], bool]


def has_issue(text: str) -> Trigger:
    return lambda partial: text in partial.issues


def has_issue_prefix(template: str) -> Trigger:
    prefix = template.split("{", 1)[0]
    return lambda partial: any(issue.startswith(prefix) for issue in partial.issues)


def ratio_below(threshold: float) -> Trigger:
    return lambda partial: partial.ratio < threshold


def below_max() -> Trigger:
    return lambda partial: partial.score < partial.max_score


def any_of(*triggers: Trigger) -> Trigger:
    return lambda partial: any(trigger(partial) for trigger in triggers)


@dataclass(frozen=True)
class RoadmapRule:
    category: Category
    trigger: Trigger
    recommendation: str


# Declared in priority order
ROADMAP_RULES: Tuple[RoadmapRule, ...] = (
    RoadmapRule(Category.STRUCTURE, has_issue(structure.ISSUE_NO_README), REC_ADD_README),
    RoadmapRule(Category.STRUCTURE, has_issue(structure.ISSUE_NO_SOURCE_DIR), REC_SOURCE_DIR),
    RoadmapRule(Category.STRUCTURE, has_issue(structure.ISSUE_NO_MANIFEST), REC_ADD_MANIFEST),
    RoadmapRule(Category.DOCUMENTATION, has_issue(documentation.ISSUE_NO_README), REC_ADD_README),
    RoadmapRule(Category.DOCUMENTATION, ratio_below(LOW_RATIO), REC_EXPAND_DOCS),
    RoadmapRule(
        Category.TESTING,
        any_of(has_issue(testing.ISSUE_NO_TESTS), ratio_below(LOW_RATIO)),
        REC_ADD_TESTS,
    ),
    RoadmapRule(Category.VERSION_CONTROL, ratio_below(LOW_RATIO), REC_COMMITS),
    RoadmapRule(Category.TECH_STACK, has_issue(tech_stack.ISSUE_NO_MANIFEST), REC_ADD_MANIFEST),
    RoadmapRule(Category.TECH_STACK, has_issue(tech_stack.ISSUE_NO_RECOGNIZED), REC_TOOLING),
    RoadmapRule(Category.SECURITY, below_max(), REC_SECURITY),
    RoadmapRule(Category.CODE_QUALITY, ratio_below(LOW_RATIO), REC_LINT),
    RoadmapRule(Category.COMPLEXITY, has_issue_prefix(complexity.ISSUE_HIGH_COMPLEXITY), REC_REFACTOR),
)


def generate_roadmap(
    partials: Mapping[Category, PartialScore],
    rules: Tuple[RoadmapRule, ...] = ROADMAP_RULES,
) -> Tuple[str, ...]:
    """Return a non-empty, de-duplicated list of recommendations."""
    roadmap: List[str] = []
    for rule in rules:
        partial = partials.get(rule.category)
        if partial is None or not rule.trigger(partial):
            continue
        if rule.recommendation not in roadmap:
            roadmap.append(rule.recommendation)

    if not roadmap:
        return (FALLBACK_RECOMMENDATION,)

    if CI_CD_RECOMMENDATION not in roadmap:
        roadmap.append(CI_CD_RECOMMENDATION)
    return tuple(roadmap)
