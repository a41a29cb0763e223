"""Candidate content and embedding match records flowing through re-ranking."""

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

Embedding = tuple[float, ...]

T = TypeVar("T")


class Content(BaseModel):
    """
    A retrieved candidate. Document and query embeddings are optional and independent:
    a retriever may attach either, both, or neither. Immutable once built.
    """

    model_config = ConfigDict(frozen=True)

    text: str = Field(..., description="Segment text; what the provider embeds")
    metadata: dict[str, Any] = Field(default_factory=dict)
    embedding: Embedding | None = Field(default=None, description="Precomputed document embedding")
    query_embedding: Embedding | None = Field(
        default=None, description="Embedding of the query that retrieved this content"
    )
    score: float | None = Field(default=None, description="Relevance score from the retriever")
    embedding_id: str | None = Field(default=None, description="Store id of the embedding, if known")


@dataclass(frozen=True)
class EmbeddingMatch(Generic[T]):
    """Scored embedding of one payload. Never mutated after creation."""

    score: float
    embedding_id: str
    embedding: Embedding
    embedded: T
