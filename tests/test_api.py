"""Tests for the HTTP surface."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

import config
from reporeview.analyzer.pipeline import AnalysisPipeline
from reporeview.api.routes import get_pipeline
from reporeview.analyzer.roadmap import CI_CD_RECOMMENDATION, REC_SECURITY
from reporeview.errors import NotFoundError, RateLimitedError
from reporeview.main import app
from tests._fixtures.builders import InMemoryFactProvider, scenario_facts


@pytest.fixture
def client_for():
    """Build a TestClient whose pipeline uses the given in-memory provider."""

    def build(provider: InMemoryFactProvider) -> TestClient:
        app.dependency_overrides[get_pipeline] = lambda: AnalysisPipeline(provider=provider, binding_mode="legacy")
        return TestClient(app)

    yield build
    app.dependency_overrides.clear()


class TestHealth:
    def test_health(self):
        response = TestClient(app).get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "version": config.VERSION}


class TestAnalyzeEndpoint:
    def test_success_payload(self, client_for):
        client = client_for(InMemoryFactProvider(scenario_facts()))

        response = client.post("/api/analyze", json={"repoUrl": "https://github.com/acme/widgets"})

        assert response.status_code == 200
        body = response.json()
        assert set(body) == {"overallScore", "skillLevel", "badge", "summary", "roadmap", "scores"}
        assert 0 <= body["overallScore"] <= 100
        assert body["roadmap"] == [REC_SECURITY, CI_CD_RECOMMENDATION]
        assert body["scores"]["Documentation"] == {"score": 30, "maxScore": 40}
        assert body["scores"]["Security"] == body["scores"]["Code Quality"]

    @pytest.mark.parametrize(
        "payload",
        [{}, {"repoUrl": ""}, {"repoUrl": None}, {"repoUrl": 42}, {"repoUrl": "https://example.com/a/b"}],
    )
    def test_bad_input(self, client_for, payload):
        provider = InMemoryFactProvider()
        client = client_for(provider)

        response = client.post("/api/analyze", json=payload)

        assert response.status_code == 400
        assert "error" in response.json()
        assert provider.acquired == 0

    def test_malformed_body(self, client_for):
        client = client_for(InMemoryFactProvider())

        response = client.post(
            "/api/analyze", content="not json", headers={"Content-Type": "application/json"}
        )

        assert response.status_code == 400
        assert "error" in response.json()

    @pytest.mark.parametrize(
        "error,status",
        [(NotFoundError(), 404), (RateLimitedError(), 429)],
    )
    def test_provider_errors(self, client_for, error, status):
        provider = InMemoryFactProvider(error=error)
        client = client_for(provider)

        response = client.post("/api/analyze", json={"repoUrl": "https://github.com/acme/widgets"})

        assert response.status_code == status
        assert response.json()["error"] == error.message
        assert provider.released == 1

    def test_unexpected_error_is_generic_500(self, client_for):
        client = client_for(InMemoryFactProvider(error=RuntimeError("disk on fire")))

        response = client.post("/api/analyze", json={"repoUrl": "https://github.com/acme/widgets"})

        assert response.status_code == 500
        assert response.json() == {
            "error": "Failed to analyze the repository. Please check the URL and try again."
        }
