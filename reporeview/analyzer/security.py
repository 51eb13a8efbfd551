"""Dependency security analysis"""

import logging
from typing import Dict, List

from reporeview.analyzer.base import Analyzer
from reporeview.models import Category, PartialScore, RepositoryFacts

import config

logger = logging.getLogger(__name__)

ISSUE_AUDIT_UNAVAILABLE = "Dependency audit was not run for this repository"
ISSUE_AUDIT_FAILED = "Dependency audit failed: {error}"
ISSUE_VULNERABILITIES = "{count} {severity} severity vulnerabilit{suffix} in dependencies"


class SecurityAnalyzer(Analyzer):
    """Starts at full marks and subtracts severity-weighted penalties"""

    category = Category.SECURITY
    max_score = 20

    def __init__(self, penalties: Dict[str, int] = None):
        self.penalties = dict(penalties or config.AUDIT_SEVERITY_PENALTIES)

    def analyze(self, facts: RepositoryFacts) -> PartialScore:
        if facts.audit is None:
            # Nothing to audit without a manifest
            issues = [ISSUE_AUDIT_UNAVAILABLE] if facts.manifest is not None else []
            return self._result(self.max_score, issues)

        if not facts.audit.ok:
            logger.warning(f"Dependency audit failed: {facts.audit.error}")
            return self._result(self.max_score, [ISSUE_AUDIT_FAILED.format(error=facts.audit.error)])

        summary = facts.audit.value
        penalty = 0
        issues: List[str] = []
        for severity in ("critical", "high", "moderate"):
            count = getattr(summary, severity)
            if count:
                penalty += count * self.penalties.get(severity, 0)
                issues.append(ISSUE_VULNERABILITIES.format(
                    count=count, severity=severity, suffix="y" if count == 1 else "ies"
                ))

        return self._result(self.max_score - penalty, issues)
