"""Reuse embeddings where contents carry them, generate the rest."""

from collections.abc import Sequence

from mmr_rerank.config.logging import get_logger
from mmr_rerank.models.content import Content, Embedding, EmbeddingMatch
from mmr_rerank.services.embedder.base import EmbeddingProvider
from mmr_rerank.services.mmr.strategies.base import (
    BaseEmbeddingStrategy,
    build_match,
    embed_contents,
    require_provider,
)
from mmr_rerank.utils.embedding_metadata import extract_document_embedding, extract_query_embedding

logger = get_logger(__name__)


class HybridEmbeddings(BaseEmbeddingStrategy):
    """
    Used for mixed pools. Output lists the contents that had embeddings first, then the
    generated ones; each group keeps input order.
    """

    @property
    def strategy_name(self) -> str:
        return "hybrid"

    def process_query_embedding(
        self,
        query: str,
        contents: Sequence[Content],
        provider: EmbeddingProvider | None,
    ) -> Embedding:
        for content in contents:
            existing = extract_query_embedding(content)
            if existing is not None:
                logger.debug("Using existing query embedding from content")
                return existing
        logger.debug("Generating query embedding as none was attached to content")
        return tuple(require_provider(provider, self.strategy_name).embed(query))

    def process_contents(
        self,
        contents: Sequence[Content],
        query_embedding: Embedding,
        provider: EmbeddingProvider | None,
    ) -> list[EmbeddingMatch[Content]]:
        existing: list[tuple[Content, Embedding]] = []
        missing: list[Content] = []
        for content in contents:
            embedding = extract_document_embedding(content)
            if embedding is None:
                missing.append(content)
            else:
                existing.append((content, embedding))

        matches = [build_match(c, e, query_embedding) for c, e in existing]
        if missing:
            provider = require_provider(provider, self.strategy_name)
            matches.extend(embed_contents(missing, query_embedding, provider))

        logger.debug(
            "Processed contents",
            extra={"content_count": len(contents), "existing_count": len(existing), "generated_count": len(missing)},
        )
        return matches
