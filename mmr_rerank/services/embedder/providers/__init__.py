"""Embedding provider implementations."""

from functools import lru_cache

from mmr_rerank.config.embedding.models import EmbeddingConfig
from mmr_rerank.config.embedding.static import resolve_embedding_config
from mmr_rerank.config.settings import get_settings
from mmr_rerank.services.embedder.base import BaseEmbeddingProvider
from mmr_rerank.services.embedder.providers.mock_provider import DeterministicEmbeddingProvider
from mmr_rerank.services.embedder.providers.sentence_transformers_provider import (
    SentenceTransformersEmbeddingProvider,
)

PROVIDER_REGISTRY: dict[str, type[BaseEmbeddingProvider]] = {
    "mock": DeterministicEmbeddingProvider,
    "sentence_transformers": SentenceTransformersEmbeddingProvider,
}


def get_embedding_provider(config: EmbeddingConfig) -> BaseEmbeddingProvider:
    """Return a provider instance for config.provider. Raises ValueError for unknown names."""
    cls = PROVIDER_REGISTRY.get(config.provider)
    if cls is None:
        raise ValueError(f"Unknown embedding provider: {config.provider!r}")
    return cls(config)


@lru_cache
def get_default_embedding_provider() -> BaseEmbeddingProvider:
    """Shared provider for the profile named by settings.embedding_profile, built once per process."""
    return get_embedding_provider(resolve_embedding_config(get_settings().embedding_profile))
