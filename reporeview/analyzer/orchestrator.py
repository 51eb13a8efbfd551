"""Concurrent analyzer execution"""

import asyncio
import logging
from typing import Dict, Iterable, List, Optional

from reporeview.analyzer.base import Analyzer
from reporeview.analyzer.code_quality import CodeQualityAnalyzer
from reporeview.analyzer.complexity import ComplexityAnalyzer
from reporeview.analyzer.documentation import DocumentationAnalyzer
from reporeview.analyzer.real_world import RealWorldAnalyzer
from reporeview.analyzer.security import SecurityAnalyzer
from reporeview.analyzer.structure import StructureAnalyzer
from reporeview.analyzer.tech_stack import TechStackAnalyzer
from reporeview.analyzer.testing import TestingAnalyzer
from reporeview.analyzer.version_control import VersionControlAnalyzer
from reporeview.errors import AnalyzerDegradation
from reporeview.models import CATEGORY_ORDER, Category, PartialScore, RepositoryFacts

import config

logger = logging.getLogger(__name__)

ISSUE_ANALYZER_FAILED = "{label} analysis failed: {error}"
ISSUE_ANALYZER_TIMED_OUT = "{label} analysis timed out after {timeout:g}s"


def default_analyzers() -> List[Analyzer]:
    """One analyzer per category"""
    return [
        StructureAnalyzer(),
        CodeQualityAnalyzer(),
        DocumentationAnalyzer(),
        VersionControlAnalyzer(),
        TestingAnalyzer(),
        TechStackAnalyzer(),
        RealWorldAnalyzer(),
        SecurityAnalyzer(),
        ComplexityAnalyzer(),
    ]


class Orchestrator:
    """Runs every analyzer over one facts snapshot and joins the results"""

    def __init__(self, analyzers: Optional[Iterable[Analyzer]] = None, timeout: float = None):
        self.analyzers = list(analyzers) if analyzers is not None else default_analyzers()
        self.timeout = config.ANALYZER_TIMEOUT if timeout is None else timeout

        categories = [analyzer.category for analyzer in self.analyzers]
        if len(set(categories)) != len(categories):
            raise ValueError("Each category may only have one analyzer")

    async def _run_one(self, analyzer: Analyzer, facts: RepositoryFacts) -> PartialScore:
        return await asyncio.wait_for(asyncio.to_thread(analyzer.analyze, facts), timeout=self.timeout)

    def _degraded(self, analyzer: Analyzer, error: BaseException) -> PartialScore:
        label = analyzer.category.label
        if isinstance(error, asyncio.TimeoutError):
            issue = ISSUE_ANALYZER_TIMED_OUT.format(label=label, timeout=self.timeout)
        else:
            issue = ISSUE_ANALYZER_FAILED.format(label=label, error=str(error) or type(error).__name__)

        if isinstance(error, (asyncio.TimeoutError, AnalyzerDegradation)):
            logger.warning(issue)
        else:
            logger.error(issue, exc_info=error)
        return PartialScore(score=0, max_score=analyzer.max_score, issues=(issue,))

    async def run(self, facts: RepositoryFacts) -> Dict[Category, PartialScore]:
        """Start all analyzers together and wait for every one of them.

        Returns results keyed by category in the fixed category order,
        regardless of completion order. Analyzer exceptions and timeouts are
        converted into degraded scores.
        """
        outcomes = await asyncio.gather(
            *(self._run_one(analyzer, facts) for analyzer in self.analyzers),
            return_exceptions=True,
        )

        joined: Dict[Category, PartialScore] = {}
        for analyzer, outcome in zip(self.analyzers, outcomes):
            if isinstance(outcome, PartialScore):
                joined[analyzer.category] = outcome
            elif isinstance(outcome, Exception):
                joined[analyzer.category] = self._degraded(analyzer, outcome)
            elif isinstance(outcome, BaseException):
                raise outcome
            else:
                error = TypeError(f"returned {type(outcome).__name__} instead of a PartialScore")
                joined[analyzer.category] = self._degraded(analyzer, error)

        return {category: joined[category] for category in CATEGORY_ORDER if category in joined}
