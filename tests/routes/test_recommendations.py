"""
Tests for POST /recommendations and GET /health.

The pipeline dependency is overridden with stage doubles, so no request
leaves the process.
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from recommender import __version__
from recommender.config import Settings
from recommender.errors import (
    ConfigurationError,
    NoMatchFound,
    ProviderError,
    ResponseShapeError,
)
from recommender.main import app
from recommender.routes import recommendations as recommendations_routes
from recommender.routes.recommendations import get_pipeline
from recommender.services.pipeline import RecommendationPipeline
from tests.conftest import EPISODE, QUERY


@pytest.fixture
def client():
    """Create test client for FastAPI app."""
    return TestClient(app)


@pytest.fixture(autouse=True)
def fresh_shared_pipeline():
    """Each test starts without a cached production pipeline."""
    recommendations_routes._shared_pipeline.cache_clear()
    yield
    recommendations_routes._shared_pipeline.cache_clear()


@pytest.fixture
def stub_pipeline(stub_embedder, stub_matcher, echo_responder):
    """Serve the stubbed pipeline instead of the production one."""
    pipeline = RecommendationPipeline(stub_embedder, stub_matcher, echo_responder)
    app.dependency_overrides[get_pipeline] = lambda: pipeline

    yield pipeline

    # Clean up after test
    app.dependency_overrides.clear()


@pytest.fixture
def failing_pipeline(stub_embedder, stub_matcher):
    """Pipeline whose responder raises whatever the test configures."""
    responder = MagicMock()
    responder.respond = AsyncMock()
    pipeline = RecommendationPipeline(stub_embedder, stub_matcher, responder)
    app.dependency_overrides[get_pipeline] = lambda: pipeline

    yield responder

    app.dependency_overrides.clear()


class TestHealth:

    def test_health_reports_service_and_configuration(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {
            "status": "ok",
            "service": "episode-recommender",
            "version": __version__,
            "configured": True,
            "match_function": "match_documents",
        }

    def test_health_stays_up_when_unconfigured(self, client, monkeypatch):
        monkeypatch.delenv("SUPABASE_KEY", raising=False)

        with patch("recommender.routes.health.settings", Settings()):
            response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "ok"
        assert response.json()["configured"] is False


class TestRecommendationsHappyPath:

    def test_returns_recommendation_and_context(self, client, stub_pipeline):
        response = client.post("/recommendations", json={"query": QUERY})

        assert response.status_code == 200
        body = response.json()
        assert body["query"] == QUERY
        assert body["context"] == EPISODE
        assert body["recommendation"] == f"Context: {EPISODE} Question: {QUERY}"

    def test_query_is_forwarded_untrimmed(self, client, stub_pipeline):
        response = client.post("/recommendations", json={"query": f"  {QUERY} "})

        assert response.status_code == 200
        assert response.json()["query"] == f"  {QUERY} "


class TestRecommendationsErrors:
    """Every failure uses the top-level {"error", "details"} body."""

    def test_no_match_is_404(self, client, failing_pipeline):
        failing_pipeline.respond.side_effect = NoMatchFound(0.5, 1)

        response = client.post("/recommendations", json={"query": QUERY})

        assert response.status_code == 404
        assert response.json() == {
            "error": "no_match",
            "details": str(NoMatchFound(0.5, 1)),
        }

    def test_provider_error_is_502(self, client, failing_pipeline):
        failing_pipeline.respond.side_effect = ProviderError("completion", "overloaded", 503)

        response = client.post("/recommendations", json={"query": QUERY})

        assert response.status_code == 502
        body = response.json()
        assert body["error"] == "provider_error"
        assert "overloaded" in body["details"]
        assert "detail" not in body

    def test_shape_error_is_502(self, client, failing_pipeline):
        failing_pipeline.respond.side_effect = ResponseShapeError("no candidates")

        response = client.post("/recommendations", json={"query": QUERY})

        assert response.status_code == 502
        assert response.json()["error"] == "bad_provider_response"

    @pytest.mark.parametrize("query", ["", "   "])
    def test_empty_or_blank_query_is_validation_error(self, client, stub_pipeline, query):
        response = client.post("/recommendations", json={"query": query})

        assert response.status_code == 422
        assert response.json()["error"] == "validation_error"
        assert stub_pipeline.embedder.calls == []

    def test_missing_query_is_validation_error(self, client, stub_pipeline):
        response = client.post("/recommendations", json={})

        assert response.status_code == 422
        assert response.json()["error"] == "validation_error"

    def test_unconfigured_service_is_503(self, client):
        with patch(
            "recommender.routes.recommendations.build_pipeline",
            side_effect=ConfigurationError("Missing required environment variables: GOOGLE_API_KEY."),
        ):
            response = client.post("/recommendations", json={"query": QUERY})

        assert response.status_code == 503
        body = response.json()
        assert body["error"] == "not_configured"
        assert "GOOGLE_API_KEY" in body["details"]


class TestSharedPipeline:
    """The production pipeline and its SDK clients are built once per process."""

    def test_pipeline_is_built_once(self):
        with patch("recommender.routes.recommendations.build_pipeline") as factory:
            first = get_pipeline()
            second = get_pipeline()

        factory.assert_called_once_with()
        assert first is second

    def test_configuration_error_is_not_cached(self):
        pipeline = MagicMock()
        with patch(
            "recommender.routes.recommendations.build_pipeline",
            side_effect=[ConfigurationError("missing SUPABASE_URL"), pipeline],
        ) as factory:
            with pytest.raises(ConfigurationError):
                get_pipeline()
            assert get_pipeline() is pipeline

        assert factory.call_count == 2

    def test_requests_share_one_pipeline(self, client, stub_embedder, stub_matcher, echo_responder):
        pipeline = RecommendationPipeline(stub_embedder, stub_matcher, echo_responder)
        with patch(
            "recommender.routes.recommendations.build_pipeline", return_value=pipeline
        ) as factory:
            client.post("/recommendations", json={"query": QUERY})
            client.post("/recommendations", json={"query": QUERY})

        factory.assert_called_once()
        assert stub_embedder.calls == [QUERY, QUERY]
