"""Vector normalization applied to provider output (L2, L1, none)."""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import Literal

from mmr_rerank.models.content import Embedding

NormType = Literal["L2", "L1", "none"]


def _l2_norm(vec: Sequence[float]) -> float:
    return math.sqrt(sum(x * x for x in vec)) or 1.0


def _l1_norm(vec: Sequence[float]) -> float:
    return sum(abs(x) for x in vec) or 1.0


def normalize_vector(vec: Sequence[float], norm_type: NormType) -> Embedding:
    """
    Return a normalized copy of vec as an immutable embedding.
    For 'none' the values are copied unchanged. A zero vector stays zero.
    """
    if norm_type == "L2":
        n = _l2_norm(vec)
    elif norm_type == "L1":
        n = _l1_norm(vec)
    else:
        return tuple(float(x) for x in vec)
    return tuple(float(x) / n for x in vec)


def apply_normalization(vectors: Sequence[Sequence[float]], norm_type: NormType) -> list[Embedding]:
    """Normalize each vector."""
    return [normalize_vector(v, norm_type) for v in vectors]
