"""Take every embedding from the contents themselves; never call the provider."""

from collections.abc import Sequence

from mmr_rerank.config.logging import get_logger
from mmr_rerank.models.content import Content, Embedding, EmbeddingMatch
from mmr_rerank.services.embedder.base import EmbeddingProvider
from mmr_rerank.services.mmr.strategies.base import BaseEmbeddingStrategy, MissingEmbeddingError, build_match
from mmr_rerank.utils.embedding_metadata import extract_document_embedding, extract_query_embedding

logger = get_logger(__name__)


class UseExistingEmbeddings(BaseEmbeddingStrategy):
    """
    Used when every content already carries a document embedding. The query embedding
    is read from the first content, which the retriever is expected to have enriched.
    """

    @property
    def strategy_name(self) -> str:
        return "use_existing"

    def process_query_embedding(
        self,
        query: str,
        contents: Sequence[Content],
        provider: EmbeddingProvider | None,
    ) -> Embedding:
        if not contents:
            raise MissingEmbeddingError("Cannot extract query embedding from empty content list")
        query_embedding = extract_query_embedding(contents[0])
        if query_embedding is None:
            raise MissingEmbeddingError(
                "Query embedding not found; content was not properly enriched. "
                "Attach query embeddings when retrieving (see enrich_content_with_embeddings)."
            )
        logger.debug("Using existing query embedding from content")
        return query_embedding

    def process_contents(
        self,
        contents: Sequence[Content],
        query_embedding: Embedding,
        provider: EmbeddingProvider | None,
    ) -> list[EmbeddingMatch[Content]]:
        logger.debug("Processing contents with existing embeddings", extra={"content_count": len(contents)})
        matches: list[EmbeddingMatch[Content]] = []
        for content in contents:
            embedding = extract_document_embedding(content)
            if embedding is None:
                raise MissingEmbeddingError(
                    "Content must have a document embedding for MMR processing. "
                    f"Content: {content.text[:100]!r}"
                )
            matches.append(build_match(content, embedding, query_embedding))
        return matches
