"""Code Quality Analysis Module"""

import logging
from typing import List

from reporeview.analyzer.base import Analyzer
from reporeview.facts.filesystem import source_files
from reporeview.models import Category, PartialScore, RepositoryFacts

import config

logger = logging.getLogger(__name__)

ISSUE_NO_SOURCE_FILES = "No source files found to lint"
ISSUE_LINT_UNAVAILABLE = "Lint results were not available for this repository"
ISSUE_LINT_FAILED = "Linting failed: {error}"
ISSUE_LINT_ERRORS = "Linting reported {count} error(s)"
ISSUE_LINT_WARNINGS = "Linting reported {count} warning(s)"


class CodeQualityAnalyzer(Analyzer):
    """Scores lint results, subtracting a fixed penalty per diagnostic"""

    category = Category.CODE_QUALITY
    max_score = 20

    def __init__(self, error_penalty: float = None, warning_penalty: float = None):
        self.error_penalty = config.LINT_ERROR_PENALTY if error_penalty is None else error_penalty
        self.warning_penalty = config.LINT_WARNING_PENALTY if warning_penalty is None else warning_penalty

    @property
    def degraded_score(self) -> int:
        return self.max_score // 2

    def analyze(self, facts: RepositoryFacts) -> PartialScore:
        if not source_files(facts.files):
            return self._result(0, [ISSUE_NO_SOURCE_FILES])

        if facts.lint is None:
            return self._result(self.degraded_score, [ISSUE_LINT_UNAVAILABLE])

        if not facts.lint.ok:
            logger.warning(f"Lint engine failed: {facts.lint.error}")
            return self._result(self.degraded_score, [ISSUE_LINT_FAILED.format(error=facts.lint.error)])

        summary = facts.lint.value
        issues: List[str] = []
        if summary.error_count:
            issues.append(ISSUE_LINT_ERRORS.format(count=summary.error_count))
        if summary.warning_count:
            issues.append(ISSUE_LINT_WARNINGS.format(count=summary.warning_count))

        penalty = summary.error_count * self.error_penalty + summary.warning_count * self.warning_penalty
        return self._result(self.max_score - penalty, issues)
