"""Sentence Transformers (local) embedding provider."""

from typing import TYPE_CHECKING

from mmr_rerank.config.embedding.models import EmbeddingConfig
from mmr_rerank.services.embedder.base import BaseEmbeddingProvider

if TYPE_CHECKING:
    from sentence_transformers import SentenceTransformer


class SentenceTransformersEmbeddingProvider(BaseEmbeddingProvider):
    """
    Local Sentence Transformers. Default model: sentence-transformers/all-MiniLM-L6-v2.
    The model is loaded on first use; install the 'local' extra to use this provider.
    """

    def __init__(self, config: EmbeddingConfig) -> None:
        super().__init__(config)
        self._model: "SentenceTransformer | None" = None

    @property
    def provider_name(self) -> str:
        return "sentence_transformers"

    def _get_model(self) -> "SentenceTransformer":
        if self._model is None:
            from sentence_transformers import SentenceTransformer

            self._model = SentenceTransformer(self.config.model)
        return self._model

    def _embed_batch(self, texts: list[str]) -> list[list[float]]:
        model = self._get_model()
        vectors = model.encode(
            texts,
            batch_size=self.config.batch_size,
            show_progress_bar=False,
            convert_to_numpy=True,
        )
        return [v.tolist() for v in vectors]
