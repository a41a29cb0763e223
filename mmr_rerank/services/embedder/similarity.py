"""Cosine similarity between embeddings."""

import math
from collections.abc import Sequence


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """
    Dot product of a and b divided by the product of their magnitudes.
    Raises ValueError when lengths differ or either vector has zero magnitude;
    callers must hand in non-zero vectors of equal dimension.
    """
    if len(a) != len(b):
        raise ValueError(f"Embedding dimensions differ: {len(a)} != {len(b)}")
    dot = 0.0
    norm_a = 0.0
    norm_b = 0.0
    for x, y in zip(a, b):
        dot += x * y
        norm_a += x * x
        norm_b += y * y
    if norm_a == 0.0 or norm_b == 0.0:
        raise ValueError("Cannot compute cosine similarity of a zero-magnitude embedding")
    return dot / (math.sqrt(norm_a) * math.sqrt(norm_b))
