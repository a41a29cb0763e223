"""Text preprocessing applied to candidate and query texts before the provider backend."""

import re
from collections.abc import Callable, Sequence

from mmr_rerank.config.embedding.models import EmbeddingPreprocessing
from mmr_rerank.config.logging import get_logger

logger = get_logger(__name__)

_PUNCTUATION = re.compile(r"[^\w\s]", flags=re.UNICODE)

Step = Callable[[str], str]


def _steps(opts: EmbeddingPreprocessing) -> list[Step]:
    """Build the transformation chain once per batch. Truncation always runs last."""
    steps: list[Step] = []
    if opts.lowercase:
        steps.append(str.lower)
    if opts.remove_punctuation:
        steps.append(lambda s: _PUNCTUATION.sub("", s))
    steps.append(lambda s: s[: opts.max_length])
    return steps


def _apply(text: str, steps: list[Step]) -> str:
    for step in steps:
        text = step(text)
    return text


def preprocess_text(text: str, opts: EmbeddingPreprocessing) -> str:
    """Preprocess a single text, e.g. a query."""
    return _apply(text or "", _steps(opts))


def preprocess_texts(texts: Sequence[str], opts: EmbeddingPreprocessing) -> list[str]:
    """Preprocess a batch in order. Texts longer than max_length are cut to max_length characters."""
    steps = _steps(opts)
    truncated = sum(1 for t in texts if len(t) > opts.max_length)
    if truncated:
        logger.debug(
            "Truncating texts before embedding",
            extra={"truncated_count": truncated, "max_length": opts.max_length},
        )
    return [_apply(t or "", steps) for t in texts]
