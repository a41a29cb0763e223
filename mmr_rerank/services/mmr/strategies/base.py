"""Embedding strategy contract shared by Generate, UseExisting and Hybrid."""

from abc import ABC, abstractmethod
from collections.abc import Sequence

from mmr_rerank.models.content import Content, Embedding, EmbeddingMatch
from mmr_rerank.services.embedder.base import EmbeddingProvider
from mmr_rerank.services.embedder.similarity import cosine_similarity
from mmr_rerank.utils.ids import resolve_embedding_id


class MissingEmbeddingError(RuntimeError):
    """Content was expected to carry an embedding but did not."""


class BaseEmbeddingStrategy(ABC):
    """
    Decides where the query embedding and each content embedding come from.
    Strategies hold no state; the same instance may serve concurrent calls.
    """

    @property
    @abstractmethod
    def strategy_name(self) -> str:
        """Registry name, e.g. 'generate'."""
        ...

    @abstractmethod
    def process_query_embedding(
        self,
        query: str,
        contents: Sequence[Content],
        provider: EmbeddingProvider | None,
    ) -> Embedding:
        """Return the embedding representing query. Does not modify contents."""
        ...

    @abstractmethod
    def process_contents(
        self,
        contents: Sequence[Content],
        query_embedding: Embedding,
        provider: EmbeddingProvider | None,
    ) -> list[EmbeddingMatch[Content]]:
        """Return one match per content, scored by cosine similarity to query_embedding."""
        ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


def build_match(content: Content, embedding: Embedding, query_embedding: Embedding) -> EmbeddingMatch[Content]:
    return EmbeddingMatch(
        score=cosine_similarity(embedding, query_embedding),
        embedding_id=resolve_embedding_id(content),
        embedding=embedding,
        embedded=content,
    )


def embed_contents(
    contents: Sequence[Content],
    query_embedding: Embedding,
    provider: EmbeddingProvider,
) -> list[EmbeddingMatch[Content]]:
    """Embed all contents with one embed_all call and score them against the query."""
    embeddings = provider.embed_all([c.text for c in contents])
    return [build_match(c, tuple(e), query_embedding) for c, e in zip(contents, embeddings, strict=True)]


def require_provider(provider: EmbeddingProvider | None, strategy_name: str) -> EmbeddingProvider:
    if provider is None:
        raise ValueError(f"Strategy {strategy_name!r} needs an embedding provider")
    return provider
