"""End-to-end analysis pipeline for repositories."""

import asyncio
import logging
from contextlib import AsyncExitStack
from typing import Dict, Iterable, Mapping

from reporeview.analyzer.narrative import generate_summary
from reporeview.analyzer.orchestrator import Orchestrator
from reporeview.analyzer.roadmap import generate_roadmap
from reporeview.analyzer.scoring import ScoringEngine
from reporeview.errors import InfrastructureError
from reporeview.facts import FactProvider, get_fact_provider, parse_repo_url
from reporeview.models import DISPLAY_BINDINGS, Category, PartialScore, Report

import config

logger = logging.getLogger(__name__)


class AnalysisPipeline:
    """Orchestrates the full analysis of one repository.

    Pipeline stages:
    1. Parse and validate the repository reference
    2. Collect a facts snapshot (working area released on every exit path)
    3. Run all analyzers concurrently and join their scores
    4. Aggregate and classify
    5. Render the summary and the improvement roadmap
    """

    def __init__(
        self,
        provider: FactProvider = None,
        orchestrator: Orchestrator = None,
        binding_mode: str = None,
        provider_timeout: float = None,
        allowed_hosts: Iterable[str] = None,
    ):
        """Initialize the pipeline.

        Args:
            provider: Fact provider variant. Defaults to config.FACT_PROVIDER.
            orchestrator: Analyzer runner. Defaults to all nine analyzers.
            binding_mode: Display binding table, "legacy" or "distinct".
            provider_timeout: Deadline in seconds for collecting facts.
            allowed_hosts: Hosts accepted in repository references.
        """
        self.provider = provider or get_fact_provider()
        self.orchestrator = orchestrator or Orchestrator()
        mode = binding_mode or config.DISPLAY_BINDING_MODE
        if mode not in DISPLAY_BINDINGS:
            raise ValueError(f"Unknown display binding mode: {mode}")
        self.bindings: Mapping[str, Category] = DISPLAY_BINDINGS[mode]
        self.provider_timeout = config.FACT_PROVIDER_TIMEOUT if provider_timeout is None else provider_timeout
        self.allowed_hosts = allowed_hosts

    def _display_scores(self, partials: Mapping[Category, PartialScore]) -> Dict[str, PartialScore]:
        return {
            label: partials[category]
            for label, category in self.bindings.items()
            if category in partials
        }

    def build_report(self, partials: Mapping[Category, PartialScore]) -> Report:
        """Derive every report field from the joined analyzer results."""
        overall, level, badge = ScoringEngine.score_partials(partials)
        return Report(
            overall_score=overall,
            skill_level=level,
            badge=badge,
            summary=generate_summary(overall, level, partials),
            roadmap=generate_roadmap(partials),
            scores=self._display_scores(partials),
            partial_scores=dict(partials),
        )

    async def analyze(self, repo_url: str) -> Report:
        """Run the full analysis for a repository URL.

        Raises:
            InputError: missing or malformed URL.
            NotFoundError, RateLimitedError, InfrastructureError: facts could
                not be collected.
        """
        ref = parse_repo_url(repo_url, self.allowed_hosts)
        logger.info(f"Analyzing repository {ref}")

        async with AsyncExitStack() as stack:
            try:
                facts = await asyncio.wait_for(
                    stack.enter_async_context(self.provider.collect(ref)),
                    timeout=self.provider_timeout,
                )
            except asyncio.TimeoutError:
                logger.error(f"Collecting facts for {ref} timed out after {self.provider_timeout:g}s")
                raise InfrastructureError(details=f"collecting repository facts timed out after {self.provider_timeout:g}s")

            partials = await self.orchestrator.run(facts)

        report = self.build_report(partials)
        logger.info(f"Finished {ref}: {report.overall_score}/100, {len(report.roadmap)} roadmap items")
        return report
