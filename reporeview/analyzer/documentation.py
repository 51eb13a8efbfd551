"""README documentation analysis"""

from typing import List

from reporeview.analyzer.base import Analyzer
from reporeview.models import Category, PartialScore, RepositoryFacts

ISSUE_NO_README = "README is missing or unreadable"
ISSUE_SHORT_README = "README is short; expand it with more detail"
ISSUE_MISSING_SECTION = "README lacks a {section} section"

DOC_SECTIONS = ("installation", "usage", "contributing")


class DocumentationAnalyzer(Analyzer):
    """Graduated points for README length and expected sections"""

    category = Category.DOCUMENTATION
    max_score = 40

    def analyze(self, facts: RepositoryFacts) -> PartialScore:
        readme = facts.readme
        if not readme or not readme.strip():
            return self._result(0, [ISSUE_NO_README])

        score = 0
        issues: List[str] = []

        length = len(readme)
        if length > 1000:
            score += 10
        elif length > 300:
            score += 5
            issues.append(ISSUE_SHORT_README)
        else:
            issues.append(ISSUE_SHORT_README)

        lowered = readme.lower()
        for section in DOC_SECTIONS:
            if section in lowered:
                score += 10
            else:
                issues.append(ISSUE_MISSING_SECTION.format(section=section))

        return self._result(score, issues)
