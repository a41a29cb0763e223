"""Reciprocal rank fusion of several ranked content lists."""

from collections.abc import Sequence

from mmr_rerank.models.content import Content
from mmr_rerank.utils.ids import compute_content_hash

DEFAULT_RRF_K = 60


def reciprocal_rank_fuse(lists: Sequence[Sequence[Content]], k: int = DEFAULT_RRF_K) -> list[Content]:
    """
    Merge ranked lists into one. Each content scores sum(1 / (k + rank)) over the lists it
    appears in (rank starts at 1). Contents are identified by text and metadata; the first
    instance seen is the one returned, so a content appears once even when a single list
    repeats it. Ties keep first-seen order.
    """
    if k < 1:
        raise ValueError(f"k must be at least 1, got: {k}")

    scores: dict[str, float] = {}
    first_seen: dict[str, Content] = {}
    for ranked in lists:
        for rank, content in enumerate(ranked, start=1):
            key = compute_content_hash(content)
            first_seen.setdefault(key, content)
            scores[key] = scores.get(key, 0.0) + 1.0 / (k + rank)

    ordered = sorted(scores, key=lambda key: scores[key], reverse=True)
    return [first_seen[key] for key in ordered]
