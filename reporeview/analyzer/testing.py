"""Test presence analysis"""

from typing import List

from reporeview.analyzer.base import Analyzer
from reporeview.facts.filesystem import source_files, test_files
from reporeview.models import Category, PartialScore, RepositoryFacts

ISSUE_NO_TESTS = "No test files found"
ISSUE_LOW_TEST_RATIO = "Test files make up a small share of the source files"


class TestingAnalyzer(Analyzer):
    """Scores the ratio of test files to source files"""

    __test__ = False  # not a pytest class

    category = Category.TESTING
    max_score = 20

    def analyze(self, facts: RepositoryFacts) -> PartialScore:
        sources = source_files(facts.files)
        tests = test_files(facts.files)
        if not tests:
            return self._result(0, [ISSUE_NO_TESTS])

        ratio = len(tests) / len(sources)
        issues: List[str] = []
        if ratio > 0.5:
            score = 20
        elif ratio > 0.2:
            score = 15
        elif ratio > 0.1:
            score = 10
        else:
            score = 5

        if ratio <= 0.2:
            issues.append(ISSUE_LOW_TEST_RATIO)

        return self._result(score, issues)
