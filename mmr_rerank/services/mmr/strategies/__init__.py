"""Embedding strategy implementations and automatic selection."""

from collections.abc import Sequence
from enum import Enum

from mmr_rerank.config.logging import get_logger
from mmr_rerank.models.content import Content
from mmr_rerank.services.mmr.strategies.base import BaseEmbeddingStrategy, MissingEmbeddingError
from mmr_rerank.services.mmr.strategies.generate import GenerateEmbeddings
from mmr_rerank.services.mmr.strategies.hybrid import HybridEmbeddings
from mmr_rerank.services.mmr.strategies.use_existing import UseExistingEmbeddings
from mmr_rerank.utils.embedding_metadata import has_document_embedding

logger = get_logger(__name__)


class StrategyKind(str, Enum):
    GENERATE = "generate"
    USE_EXISTING = "use_existing"
    HYBRID = "hybrid"


STRATEGY_REGISTRY: dict[StrategyKind, type[BaseEmbeddingStrategy]] = {
    StrategyKind.GENERATE: GenerateEmbeddings,
    StrategyKind.USE_EXISTING: UseExistingEmbeddings,
    StrategyKind.HYBRID: HybridEmbeddings,
}


def get_embedding_strategy(strategy_name: str) -> BaseEmbeddingStrategy | None:
    """Return an instance of the embedding strategy for the given name, or None."""
    try:
        kind = StrategyKind(strategy_name)
    except ValueError:
        return None
    return STRATEGY_REGISTRY[kind]()


def classify_contents(contents: Sequence[Content], force_generate: bool = False) -> StrategyKind:
    """Pick the strategy kind from how many contents already carry a document embedding."""
    if force_generate or not contents:
        return StrategyKind.GENERATE
    embedded_count = sum(1 for c in contents if has_document_embedding(c))
    if embedded_count == 0:
        return StrategyKind.GENERATE
    if embedded_count == len(contents):
        return StrategyKind.USE_EXISTING
    return StrategyKind.HYBRID


def select_strategy(contents: Sequence[Content], force_generate: bool = False) -> BaseEmbeddingStrategy:
    """
    Generate when forced, when contents is empty, or when nothing is embedded;
    UseExisting when everything is; Hybrid otherwise. Never fails.
    """
    kind = classify_contents(contents, force_generate)
    logger.debug(
        "Selected embedding strategy",
        extra={"strategy": kind.value, "content_count": len(contents), "force_generate": force_generate},
    )
    return STRATEGY_REGISTRY[kind]()


__all__ = [
    "BaseEmbeddingStrategy",
    "GenerateEmbeddings",
    "HybridEmbeddings",
    "MissingEmbeddingError",
    "STRATEGY_REGISTRY",
    "StrategyKind",
    "UseExistingEmbeddings",
    "classify_contents",
    "get_embedding_strategy",
    "select_strategy",
]
