"""Embed the query and every content from scratch."""

from collections.abc import Sequence

from mmr_rerank.config.logging import get_logger
from mmr_rerank.models.content import Content, Embedding, EmbeddingMatch
from mmr_rerank.services.embedder.base import EmbeddingProvider
from mmr_rerank.services.mmr.strategies.base import BaseEmbeddingStrategy, embed_contents, require_provider

logger = get_logger(__name__)


class GenerateEmbeddings(BaseEmbeddingStrategy):
    """Used when no content carries an embedding, or when generation is forced."""

    @property
    def strategy_name(self) -> str:
        return "generate"

    def process_query_embedding(
        self,
        query: str,
        contents: Sequence[Content],
        provider: EmbeddingProvider | None,
    ) -> Embedding:
        provider = require_provider(provider, self.strategy_name)
        logger.debug("Generating query embedding", extra={"query_preview": query[:50]})
        return tuple(provider.embed(query))

    def process_contents(
        self,
        contents: Sequence[Content],
        query_embedding: Embedding,
        provider: EmbeddingProvider | None,
    ) -> list[EmbeddingMatch[Content]]:
        if not contents:
            return []
        provider = require_provider(provider, self.strategy_name)
        logger.debug("Generating content embeddings", extra={"content_count": len(contents)})
        return embed_contents(contents, query_embedding, provider)
