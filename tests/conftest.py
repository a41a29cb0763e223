"""Shared pytest fixtures.

Run with: pytest tests/ -v
"""

from unittest.mock import Mock

import pytest

from mmr_rerank.config.embedding.models import EmbeddingConfig
from mmr_rerank.models.content import Content, EmbeddingMatch
from mmr_rerank.services.embedder.providers.mock_provider import DeterministicEmbeddingProvider


@pytest.fixture
def make_match():
    """Factory for matches whose payload is the text itself."""

    def _make(score, text, vector, embedding_id=None):
        return EmbeddingMatch(
            score=score,
            embedding_id=embedding_id or f"id-{text}",
            embedding=tuple(vector),
            embedded=text,
        )

    return _make


# =============================================================================
# PROVIDER FIXTURES
# =============================================================================

@pytest.fixture
def vector_table():
    """Text -> vector lookup used by the fake provider."""
    return {
        "what is mmr": (1.0, 0.0),
        "alpha": (1.0, 0.0),
        "beta": (0.99, 0.14),
        "gamma": (0.0, 1.0),
        "delta": (0.6, 0.8),
    }


@pytest.fixture
def fake_provider(vector_table):
    """Provider double returning fixed vectors; records every call."""
    provider = Mock()
    provider.embed = Mock(side_effect=lambda text: vector_table[text])
    provider.embed_all = Mock(side_effect=lambda texts: [vector_table[t] for t in texts])
    return provider


@pytest.fixture
def deterministic_provider():
    return DeterministicEmbeddingProvider(
        EmbeddingConfig(provider="mock", model="deterministic-sha256", dimension=16)
    )


# =============================================================================
# CONTENT FIXTURES
# =============================================================================

@pytest.fixture
def plain_contents():
    """Contents without any embeddings."""
    return [Content(text="alpha"), Content(text="beta"), Content(text="gamma")]


@pytest.fixture
def embedded_contents():
    """Contents that all carry document embeddings; the first also carries the query embedding."""
    return [
        Content(text="alpha", embedding=(1.0, 0.0), query_embedding=(1.0, 0.0)),
        Content(text="beta", embedding=(0.99, 0.14)),
        Content(text="gamma", embedding=(0.0, 1.0)),
    ]


@pytest.fixture
def mixed_contents():
    """Two contents with document embeddings, two without, interleaved."""
    return [
        Content(text="alpha", embedding=(1.0, 0.0)),
        Content(text="beta"),
        Content(text="gamma", embedding=(0.0, 1.0)),
        Content(text="delta"),
    ]
