"""Embedding provider configuration models. Read-only; no business logic."""

from typing import Literal

from pydantic import BaseModel, Field


class EmbeddingPreprocessing(BaseModel):
    """Text preprocessing applied before the provider backend is called."""

    lowercase: bool = Field(default=False)
    remove_punctuation: bool = Field(default=False)
    max_length: int = Field(default=8192, ge=1)


class EmbeddingConfig(BaseModel):
    """Embedding provider and parameters."""

    provider: str = Field(..., description="mock|sentence_transformers")
    model: str = Field(..., description="Model identifier")
    normalize: bool = Field(default=True)
    normalization_type: Literal["L2", "L1", "none"] = Field(default="L2")
    preprocessing: EmbeddingPreprocessing = Field(default_factory=EmbeddingPreprocessing)
    batch_size: int = Field(default=32, ge=1)
    dimension: int = Field(default=384, ge=1, description="Vector size for the mock provider")
