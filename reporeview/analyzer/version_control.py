"""Version control practice analysis"""

import logging
from typing import List

from reporeview.analyzer.base import Analyzer
from reporeview.models import Category, PartialScore, RepositoryFacts

logger = logging.getLogger(__name__)

ISSUE_HISTORY_UNAVAILABLE = "Commit history was not available for this repository"
ISSUE_HISTORY_FAILED = "Could not read commit history: {error}"
ISSUE_FEW_COMMITS = "Few commits; commit smaller changes more often"
ISSUE_TERSE_MESSAGES = "Commit messages are short; describe what each change does"


class VersionControlAnalyzer(Analyzer):
    """Scores commit volume and commit message length"""

    category = Category.VERSION_CONTROL
    max_score = 20

    def analyze(self, facts: RepositoryFacts) -> PartialScore:
        if facts.history is None:
            return self._result(0, [ISSUE_HISTORY_UNAVAILABLE])

        if not facts.history.ok:
            logger.warning(f"History reader failed: {facts.history.error}")
            return self._result(0, [ISSUE_HISTORY_FAILED.format(error=facts.history.error)])

        log = facts.history.value
        score = 0
        issues: List[str] = []

        if log.count > 50:
            score += 10
        elif log.count > 10:
            score += 5
        else:
            issues.append(ISSUE_FEW_COMMITS)

        average_length = log.average_message_length
        if average_length > 30:
            score += 10
        elif average_length > 10:
            score += 5
        else:
            issues.append(ISSUE_TERSE_MESSAGES)

        return self._result(score, issues)
