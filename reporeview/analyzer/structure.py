"""Project structure analysis"""

from typing import List

from reporeview.analyzer.base import Analyzer
from reporeview.facts.filesystem import find_manifest, find_readme, has_source_dir
from reporeview.models import Category, PartialScore, RepositoryFacts

ISSUE_NO_SOURCE_DIR = "No dedicated source directory (e.g. src/) found"
ISSUE_NO_MANIFEST = "No package manifest (e.g. package.json) found"
ISSUE_NO_README = "No README file found"


class StructureAnalyzer(Analyzer):
    """Awards a fixed share for each expected top-level element"""

    category = Category.STRUCTURE
    max_score = 15
    points_per_item = 5

    def analyze(self, facts: RepositoryFacts) -> PartialScore:
        score = 0
        issues: List[str] = []

        if has_source_dir(facts.files):
            score += self.points_per_item
        else:
            issues.append(ISSUE_NO_SOURCE_DIR)

        if find_manifest(facts.files):
            score += self.points_per_item
        else:
            issues.append(ISSUE_NO_MANIFEST)

        if find_readme(facts.files):
            score += self.points_per_item
        else:
            issues.append(ISSUE_NO_README)

        return self._result(score, issues)
