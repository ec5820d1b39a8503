"""
Pytest configuration for recommender tests.

Sets up the test environment and shared fixtures: SDK client mocks and
in-memory stage doubles for the pipeline.
"""
import os
from typing import Dict, List, Sequence, Tuple
from unittest.mock import MagicMock

import pytest

# Disable config validation during tests
# This allows tests to run without requiring real environment variables
os.environ["VALIDATE_CONFIG"] = "false"

# Set test environment variables
os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("GOOGLE_API_KEY", "test-google-api-key")
os.environ.setdefault("SUPABASE_URL", "http://localhost:54321")
os.environ.setdefault("SUPABASE_KEY", "test-supabase-key")

from recommender.errors import NoMatchFound  # noqa: E402


QUERY = "An episode Elon Musk would enjoy"
VECTOR = [0.1, 0.2, 0.3]
EPISODE = "Episode 42: Mars and Memes"


# =============================================================================
# STAGE DOUBLES
# =============================================================================

class StubEmbedder:
    """Returns a fixed vector and records every call."""

    def __init__(self, vector: Sequence[float] = VECTOR):
        self.vector = list(vector)
        self.calls: List[str] = []

    async def embed(self, text: str) -> List[float]:
        self.calls.append(text)
        return list(self.vector)


class StubMatcher:
    """Looks the vector up in a dict; unknown vectors mean no match."""

    def __init__(self, documents: Dict[Tuple[float, ...], str]):
        self.documents = documents
        self.calls: List[List[float]] = []

    async def match(self, embedding: Sequence[float]) -> str:
        self.calls.append(list(embedding))
        try:
            return self.documents[tuple(embedding)]
        except KeyError:
            raise NoMatchFound(0.5, 1)


class EchoResponder:
    """Echoes its inputs so tests can see exactly what it received."""

    def __init__(self):
        self.calls: List[Tuple[str, str]] = []

    async def respond(self, context: str, query: str) -> str:
        self.calls.append((context, query))
        return f"Context: {context} Question: {query}"


@pytest.fixture
def stub_embedder():
    return StubEmbedder()


@pytest.fixture
def stub_matcher():
    return StubMatcher({tuple(VECTOR): EPISODE})


@pytest.fixture
def echo_responder():
    return EchoResponder()


# =============================================================================
# SDK CLIENT MOCKS
# =============================================================================

@pytest.fixture
def supabase_client():
    """
    Mock Supabase client for testing RPC functions.
    Returns a MagicMock whose rpc().execute() yields one matching document.
    """
    mock_client = MagicMock()
    mock_response = MagicMock()
    mock_response.data = [
        {"id": 42, "content": EPISODE, "similarity": 0.83},
        {"id": 7, "content": "Episode 7: Rockets for Beginners", "similarity": 0.61},
    ]
    mock_client.rpc.return_value.execute.return_value = mock_response
    return mock_client


@pytest.fixture
def empty_supabase_client():
    """Mock Supabase client whose similarity search finds nothing."""
    mock_client = MagicMock()
    mock_response = MagicMock()
    mock_response.data = []
    mock_client.rpc.return_value.execute.return_value = mock_response
    return mock_client


def make_completion_response(text):
    """Build a mock generate_content response with a single text part."""
    part = MagicMock()
    part.text = text
    candidate = MagicMock()
    candidate.content.parts = [part]
    response = MagicMock()
    response.candidates = [candidate]
    response.text = text
    return response


@pytest.fixture
def genai_client():
    """Mock Gen AI client answering both embedding and completion calls."""
    mock_client = MagicMock()

    embedding = MagicMock()
    embedding.values = list(VECTOR)
    embed_response = MagicMock()
    embed_response.embeddings = [embedding]
    mock_client.models.embed_content.return_value = embed_response

    mock_client.models.generate_content.return_value = make_completion_response(
        "You'll love Episode 42: Mars and Memes!"
    )
    return mock_client
