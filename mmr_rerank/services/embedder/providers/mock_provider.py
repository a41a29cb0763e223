"""Deterministic embedding provider for tests and offline runs."""

import hashlib

from mmr_rerank.services.embedder.base import BaseEmbeddingProvider


class DeterministicEmbeddingProvider(BaseEmbeddingProvider):
    """
    Fake embeddings derived from SHA-256 of the text: the same text always maps to the
    same vector, in every process. Dimension comes from config.dimension.
    """

    @property
    def provider_name(self) -> str:
        return "mock"

    def _embed_batch(self, texts: list[str]) -> list[list[float]]:
        dim = self.config.dimension
        result: list[list[float]] = []
        for t in texts:
            h = int.from_bytes(hashlib.sha256(t.encode("utf-8")).digest()[:8], "big")
            # Offset by one so no component is zero and the norm never vanishes
            result.append([float((h + j * 7919) % 1000 + 1) / 1000.0 for j in range(dim)])
        return result
