"""
MMR content aggregation: fuse retrieved lists, embed per the selected strategy, filter,
then pick a diverse subset.
"""

from collections.abc import Callable, Mapping, Sequence

from mmr_rerank.config.logging import get_logger
from mmr_rerank.config.mmr.models import MmrConfig
from mmr_rerank.config.settings import Settings
from mmr_rerank.models.content import Content
from mmr_rerank.services.embedder.base import EmbeddingProvider
from mmr_rerank.services.mmr.fusion import reciprocal_rank_fuse
from mmr_rerank.services.mmr.selector import select
from mmr_rerank.services.mmr.strategies import (
    BaseEmbeddingStrategy,
    get_embedding_strategy,
    select_strategy,
)

logger = get_logger(__name__)

QueryToContents = Mapping[str, Sequence[Sequence[Content]]]
QuerySelector = Callable[[QueryToContents], str]

DEFAULT_LAMBDA = 0.7
# Below this multiple of max_results, MMR has little room to diversify
RECOMMENDED_POOL_FACTOR = 5


def default_query_selector(query_to_contents: QueryToContents) -> str:
    """Return the only query. More than one makes MMR ambiguous."""
    if len(query_to_contents) > 1:
        raise ValueError(
            f"The 'query_to_contents' contains {len(query_to_contents)} queries, making MMR ambiguous. "
            "Please provide a 'query_selector'."
        )
    return next(iter(query_to_contents))


class MmrContentAggregator:
    """
    Aggregates retrieved contents into a relevant, non-redundant result list.

    Strategy precedence: an explicit strategy, then force_embedding_generation,
    then automatic selection from the contents' embedding availability.
    """

    def __init__(
        self,
        provider: EmbeddingProvider | None,
        *,
        query_selector: QuerySelector | None = None,
        min_score: float | None = None,
        max_results: int | None = None,
        lambda_mult: float = DEFAULT_LAMBDA,
        force_embedding_generation: bool = False,
        strategy: BaseEmbeddingStrategy | None = None,
    ) -> None:
        if provider is None and not (force_embedding_generation or strategy is not None):
            raise ValueError("provider is required unless a strategy or forced generation is configured")
        config = MmrConfig(
            lambda_mult=lambda_mult,
            max_results=max_results,
            min_score=min_score,
            force_embedding_generation=force_embedding_generation,
        )
        self.provider = provider
        self.query_selector = query_selector or default_query_selector
        self.min_score = config.min_score
        self.max_results = config.max_results
        self.lambda_mult = config.lambda_mult
        self.force_embedding_generation = config.force_embedding_generation
        self.strategy = strategy

        if force_embedding_generation and strategy is not None:
            logger.warning(
                "Both force_embedding_generation and strategy provided. Explicit strategy takes precedence."
            )
        if strategy is not None:
            logger.info("MMR configured with explicit strategy", extra={"strategy": strategy.strategy_name})
        elif force_embedding_generation:
            logger.info("MMR configured to always generate embeddings")
        else:
            logger.info("MMR configured to select the embedding strategy from content")

    @classmethod
    def from_settings(
        cls,
        provider: EmbeddingProvider | None,
        settings: Settings | None = None,
        query_selector: QuerySelector | None = None,
    ) -> "MmrContentAggregator":
        """Build from environment settings. Unknown strategy names raise ValueError."""
        config = MmrConfig.from_settings(settings)
        strategy = None
        if config.strategy:
            strategy = get_embedding_strategy(config.strategy)
            if strategy is None:
                raise ValueError(f"Unknown embedding strategy: {config.strategy!r}")
        return cls(
            provider,
            query_selector=query_selector,
            min_score=config.min_score,
            max_results=config.max_results,
            lambda_mult=config.lambda_mult,
            force_embedding_generation=config.force_embedding_generation,
            strategy=strategy,
        )

    def aggregate(self, query_to_contents: QueryToContents) -> list[Content]:
        if not query_to_contents:
            return []
        query = self.query_selector(query_to_contents)
        fused_per_query = [reciprocal_rank_fuse(lists) for lists in query_to_contents.values()]
        contents = reciprocal_rank_fuse(fused_per_query)
        if not contents:
            return []

        if self.max_results is not None and len(contents) < RECOMMENDED_POOL_FACTOR * self.max_results:
            logger.warning(
                "Pre-MMR candidate count is lower than recommended",
                extra={
                    "candidate_count": len(contents),
                    "recommended_min": RECOMMENDED_POOL_FACTOR * self.max_results,
                },
            )
        return self._apply_mmr(contents, query)

    def _resolve_strategy(self, contents: Sequence[Content]) -> BaseEmbeddingStrategy:
        if self.strategy is not None:
            return self.strategy
        return select_strategy(contents, self.force_embedding_generation)

    def _apply_mmr(self, contents: list[Content], query: str) -> list[Content]:
        strategy = self._resolve_strategy(contents)
        query_embedding = strategy.process_query_embedding(query, contents, self.provider)
        matches = strategy.process_contents(contents, query_embedding, self.provider)

        if self.min_score is not None:
            matches = [m for m in matches if m.score >= self.min_score]

        limit = len(matches) if self.max_results is None else min(self.max_results, len(matches))
        selected = select(query_embedding, matches, limit, self.lambda_mult)
        logger.debug(
            "MMR aggregation complete",
            extra={"strategy": strategy.strategy_name, "candidate_count": len(matches), "selected_count": len(selected)},
        )
        return [m.embedded for m in selected]
