"""Cyclomatic complexity banding"""

import logging

from reporeview.analyzer.base import Analyzer
from reporeview.models import Category, PartialScore, RepositoryFacts

logger = logging.getLogger(__name__)

ISSUE_COMPLEXITY_UNAVAILABLE = "Complexity measurements were not available for this repository"
ISSUE_COMPLEXITY_FAILED = "Complexity analysis failed: {error}"
ISSUE_HIGH_COMPLEXITY = "Average cyclomatic complexity is {average:.1f}; simplify complex functions"

# (upper bound exclusive, points); lower average scores higher
COMPLEXITY_BANDS = ((5, 15), (10, 10), (20, 5))


class ComplexityAnalyzer(Analyzer):
    category = Category.COMPLEXITY
    max_score = 15

    def analyze(self, facts: RepositoryFacts) -> PartialScore:
        if facts.complexity is None:
            return self._result(0, [ISSUE_COMPLEXITY_UNAVAILABLE])

        if not facts.complexity.ok:
            logger.warning(f"Complexity measurement failed: {facts.complexity.error}")
            return self._result(0, [ISSUE_COMPLEXITY_FAILED.format(error=facts.complexity.error)])

        measurements = facts.complexity.value
        if not measurements:
            return self._result(0, [])

        average = sum(m.cyclomatic for m in measurements) / len(measurements)
        score = 0
        for upper, points in COMPLEXITY_BANDS:
            if average < upper:
                score = points
                break

        issues = [] if average < 10 else [ISSUE_HIGH_COMPLEXITY.format(average=average)]
        return self._result(score, issues)
