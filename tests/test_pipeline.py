"""End-to-end tests for the analysis pipeline with an in-memory fact provider."""

from __future__ import annotations

import pytest

from reporeview.analyzer.pipeline import AnalysisPipeline
from reporeview.analyzer.roadmap import (
    CI_CD_RECOMMENDATION,
    FALLBACK_RECOMMENDATION,
    REC_ADD_TESTS,
    REC_EXPAND_DOCS,
    REC_SECURITY,
)
from reporeview.errors import InfrastructureError, InputError, NotFoundError
from reporeview.models import Badge, Category, SkillLevel
from tests._fixtures.builders import InMemoryFactProvider, scenario_facts


class TestAnalysisPipeline:
    @pytest.mark.asyncio
    async def test_reference_scenario(self):
        provider = InMemoryFactProvider(scenario_facts())
        pipeline = AnalysisPipeline(provider=provider, binding_mode="distinct")

        report = await pipeline.analyze("https://github.com/acme/widgets")

        assert report.partial_scores[Category.DOCUMENTATION].score == 30
        assert report.partial_scores[Category.SECURITY].score == 10
        assert report.partial_scores[Category.COMPLEXITY].score == 15
        assert REC_EXPAND_DOCS not in report.roadmap
        assert REC_ADD_TESTS not in report.roadmap
        assert report.roadmap == (REC_SECURITY, CI_CD_RECOMMENDATION)
        assert report.scores["Security"].score == 10
        assert report.scores["Documentation"].max_score == 40

    @pytest.mark.asyncio
    async def test_report_fields(self):
        pipeline = AnalysisPipeline(provider=InMemoryFactProvider())

        report = await pipeline.analyze("https://github.com/acme/widgets")

        # 170 / 175
        assert report.overall_score == 97
        assert report.skill_level == SkillLevel.EXPERT
        assert report.badge == Badge.TROPHY
        assert report.roadmap == (FALLBACK_RECOMMENDATION,)
        assert report.summary.startswith("This repository has an overall score of 97/100")

    @pytest.mark.asyncio
    async def test_legacy_bindings_duplicate_scores(self):
        pipeline = AnalysisPipeline(provider=InMemoryFactProvider(scenario_facts()), binding_mode="legacy")

        report = await pipeline.analyze("https://github.com/acme/widgets")
        payload = report.to_dict()

        assert set(payload["scores"]) == {
            "Code Quality", "Project Structure", "Documentation", "Testing",
            "Git Practices", "Real-World Relevance", "Security", "Code Complexity",
        }
        assert payload["scores"]["Project Structure"] == {"score": 30, "maxScore": 40}
        assert payload["scores"]["Testing"] == payload["scores"]["Git Practices"]
        assert payload["scores"]["Security"] == payload["scores"]["Code Quality"]

    @pytest.mark.asyncio
    async def test_deterministic(self):
        provider = InMemoryFactProvider(scenario_facts())
        pipeline = AnalysisPipeline(provider=provider)

        first = await pipeline.analyze("https://github.com/acme/widgets")
        second = await pipeline.analyze("https://github.com/acme/widgets")

        assert first.to_dict() == second.to_dict()

    @pytest.mark.asyncio
    async def test_working_area_released_on_success(self):
        provider = InMemoryFactProvider()

        await AnalysisPipeline(provider=provider).analyze("https://github.com/acme/widgets")

        assert provider.acquired == provider.released == 1
        assert str(provider.refs[0]) == "github.com/acme/widgets"

    @pytest.mark.asyncio
    async def test_provider_error_propagates_and_releases(self):
        provider = InMemoryFactProvider(error=NotFoundError())

        with pytest.raises(NotFoundError):
            await AnalysisPipeline(provider=provider).analyze("https://github.com/acme/missing")

        assert provider.released == 1

    @pytest.mark.asyncio
    async def test_provider_timeout_is_infrastructure_error(self):
        provider = InMemoryFactProvider(delay=5)
        pipeline = AnalysisPipeline(provider=provider, provider_timeout=0.05)

        with pytest.raises(InfrastructureError):
            await pipeline.analyze("https://github.com/acme/slow")

        assert provider.released == 1

    @pytest.mark.asyncio
    async def test_zero_provider_timeout_is_not_replaced_by_default(self):
        provider = InMemoryFactProvider(delay=0.5)
        pipeline = AnalysisPipeline(provider=provider, provider_timeout=0)

        assert pipeline.provider_timeout == 0
        with pytest.raises(InfrastructureError) as excinfo:
            await pipeline.analyze("https://github.com/acme/slow")

        assert "timed out after 0s" in excinfo.value.details

    @pytest.mark.asyncio
    @pytest.mark.parametrize("url", [None, "", "   ", "not a url", "https://github.com/onlyowner"])
    async def test_invalid_input_never_reaches_provider(self, url):
        provider = InMemoryFactProvider()

        with pytest.raises(InputError):
            await AnalysisPipeline(provider=provider).analyze(url)

        assert provider.acquired == 0

    def test_unknown_binding_mode(self):
        with pytest.raises(ValueError):
            AnalysisPipeline(provider=InMemoryFactProvider(), binding_mode="fancy")
