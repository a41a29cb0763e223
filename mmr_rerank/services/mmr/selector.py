"""
Maximal Marginal Relevance (MMR) selection over scored embedding matches.

    MMR = lambda * relevance(candidate, query) - (1 - lambda) * max sim(candidate, selected)

Greedy: each round scores every remaining candidate against the picks so far, so the cost
is O(max_results * len(candidates)) similarity evaluations.
"""

from collections.abc import Sequence
from typing import TypeVar

from mmr_rerank.models.content import Embedding, EmbeddingMatch
from mmr_rerank.services.embedder.similarity import cosine_similarity

T = TypeVar("T")

INITIAL_MMR_SCORE = -1.0
INITIAL_DIVERSITY_SCORE = 0.0
MIN_LAMBDA = 0.0
MAX_LAMBDA = 1.0


def _validate(query_embedding: Embedding | None, max_results: int, lambda_mult: float) -> None:
    if query_embedding is None:
        raise ValueError("Query embedding cannot be None")
    if not MIN_LAMBDA <= lambda_mult <= MAX_LAMBDA:
        raise ValueError(f"Lambda must be between {MIN_LAMBDA} and {MAX_LAMBDA} (inclusive), got: {lambda_mult}")
    if max_results < 0:
        raise ValueError(f"Max results cannot be negative, got: {max_results}")


def _relevance(candidate: EmbeddingMatch[T], query_embedding: Embedding) -> float:
    # Non-positive scores are recomputed from the embeddings
    if candidate.score > 0:
        return candidate.score
    return cosine_similarity(candidate.embedding, query_embedding)


def _diversity(candidate: EmbeddingMatch[T], selected: list[EmbeddingMatch[T]]) -> float:
    if not selected:
        return INITIAL_DIVERSITY_SCORE
    return max(cosine_similarity(candidate.embedding, s.embedding) for s in selected)


def _best_candidate_index(
    query_embedding: Embedding,
    remaining: list[EmbeddingMatch[T]],
    selected: list[EmbeddingMatch[T]],
    lambda_mult: float,
) -> int | None:
    best_score = INITIAL_MMR_SCORE
    best_index = None
    for i, candidate in enumerate(remaining):
        relevance = _relevance(candidate, query_embedding)
        diversity = _diversity(candidate, selected)
        score = lambda_mult * relevance - (1.0 - lambda_mult) * diversity
        if score > best_score:
            best_score = score
            best_index = i
    return best_index


def select(
    query_embedding: Embedding | None,
    candidates: Sequence[EmbeddingMatch[T]] | None,
    max_results: int,
    lambda_mult: float,
) -> list[EmbeddingMatch[T]]:
    """
    Select up to max_results candidates balancing relevance and diversity.

    Args:
        query_embedding: Embedding of the query; required.
        candidates: Scored matches to choose from.
        max_results: Upper bound on the result size; 0 yields [].
        lambda_mult: In [0, 1]. 1.0 ranks by relevance alone, 0.0 by diversity alone.

    Returns:
        A new list in selection order. When there are no more candidates than
        max_results, all of them are returned in input order.

    Raises:
        ValueError: query_embedding is None, lambda_mult is outside [0, 1],
            or max_results is negative.
    """
    _validate(query_embedding, max_results, lambda_mult)
    if not candidates or max_results == 0:
        return []
    if len(candidates) <= max_results:
        return list(candidates)

    # sorted() is stable, so equal scores keep input order
    remaining = sorted(candidates, key=lambda m: m.score, reverse=True)
    selected: list[EmbeddingMatch[T]] = []
    while len(selected) < max_results and remaining:
        best = _best_candidate_index(query_embedding, remaining, selected, lambda_mult)
        # Nothing beat the floor: fall back to the most relevant remaining candidate
        selected.append(remaining.pop(0 if best is None else best))
    return selected
