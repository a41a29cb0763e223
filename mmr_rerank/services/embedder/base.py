"""Embedding provider contract and the shared preprocess/embed/normalize flow."""

from abc import ABC, abstractmethod
from typing import Protocol, runtime_checkable

from mmr_rerank.config.embedding.models import EmbeddingConfig
from mmr_rerank.config.logging import get_logger
from mmr_rerank.models.content import Embedding
from mmr_rerank.services.embedder.normalization import apply_normalization
from mmr_rerank.services.embedder.preprocessing import preprocess_texts

logger = get_logger(__name__)


@runtime_checkable
class EmbeddingProvider(Protocol):
    """What the re-ranking strategies need from an embedding model."""

    def embed(self, text: str) -> Embedding: ...

    def embed_all(self, texts: list[str]) -> list[Embedding]: ...


class BaseEmbeddingProvider(ABC):
    """
    Abstract embedding provider. Subclasses implement _embed_batch only; preprocessing,
    the one-vector-per-text check and normalization happen here.
    """

    def __init__(self, config: EmbeddingConfig) -> None:
        self.config = config

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Provider identifier, e.g. 'mock', 'sentence_transformers'."""
        ...

    @abstractmethod
    def _embed_batch(self, texts: list[str]) -> list[list[float]]:
        """Embed already preprocessed texts. Returns one vector per text in the same order."""
        ...

    def embed_all(self, texts: list[str]) -> list[Embedding]:
        if not texts:
            return []
        prepared = preprocess_texts(texts, self.config.preprocessing)
        vectors = self._embed_batch(prepared)
        if len(vectors) != len(prepared):
            raise ValueError(f"Provider returned {len(vectors)} vectors but expected {len(prepared)}")
        norm_type = self.config.normalization_type if self.config.normalize else "none"
        logger.debug(
            "Embedded batch",
            extra={"provider": self.provider_name, "count": len(vectors), "norm_type": norm_type},
        )
        return apply_normalization(vectors, norm_type)

    def embed(self, text: str) -> Embedding:
        return self.embed_all([text])[0]
