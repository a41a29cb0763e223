"""MMR aggregation configuration model. Read-only; no business logic."""

from pydantic import BaseModel, Field

from mmr_rerank.config.settings import Settings, get_settings


class MmrConfig(BaseModel):
    """Validated parameters for MmrContentAggregator."""

    lambda_mult: float = Field(default=0.7, ge=0.0, le=1.0, description="1.0 = relevance only, 0.0 = diversity only")
    max_results: int | None = Field(default=None, ge=0, description="None means no limit")
    min_score: float | None = Field(default=None, description="Filter applied before MMR selection")
    force_embedding_generation: bool = Field(default=False)
    strategy: str | None = Field(default=None, description="generate|use_existing|hybrid")

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "MmrConfig":
        """Build from environment settings (defaults to the cached instance)."""
        s = settings or get_settings()
        return cls(
            lambda_mult=s.mmr_lambda,
            max_results=s.mmr_max_results,
            min_score=s.mmr_min_score,
            force_embedding_generation=s.mmr_force_embedding_generation,
            strategy=s.mmr_strategy,
        )
