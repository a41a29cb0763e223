"""
Embeddings carried on Content, either as typed fields or in string-only metadata.

Some stores only round-trip string metadata, so embeddings can also travel as Base64 of
big-endian float32 under the 'embedding' and 'queryEmbedding' keys. Typed fields win.
"""

import base64
import struct

from mmr_rerank.config.logging import get_logger
from mmr_rerank.models.content import Content, Embedding

logger = get_logger(__name__)

DOCUMENT_EMBEDDING_KEY = "embedding"
QUERY_EMBEDDING_KEY = "queryEmbedding"


def embedding_to_base64(embedding: Embedding) -> str:
    packed = struct.pack(f">{len(embedding)}f", *embedding)
    return base64.b64encode(packed).decode("ascii")


def base64_to_embedding(encoded: str) -> Embedding:
    """Decode a stored embedding. Raises ValueError unless it is whole big-endian float32 values."""
    raw = base64.b64decode(encoded, validate=True)
    if not raw or len(raw) % 4:
        raise ValueError(f"Encoded embedding is {len(raw)} bytes, not a whole number of float32 values")
    return struct.unpack(f">{len(raw) // 4}f", raw)


def enrich_content_with_embeddings(
    content: Content,
    query_embedding: Embedding | None,
    document_embedding: Embedding | None,
) -> Content:
    """
    Return a copy of content carrying the given embeddings both as typed fields and as
    encoded metadata. A None argument leaves that side as it was.
    """
    metadata = dict(content.metadata)
    update: dict = {}
    if document_embedding is not None:
        metadata[DOCUMENT_EMBEDDING_KEY] = embedding_to_base64(document_embedding)
        update["embedding"] = tuple(document_embedding)
    if query_embedding is not None:
        metadata[QUERY_EMBEDDING_KEY] = embedding_to_base64(query_embedding)
        update["query_embedding"] = tuple(query_embedding)
    update["metadata"] = metadata
    return content.model_copy(update=update)


def _extract(content: Content, typed: Embedding | None, key: str) -> Embedding | None:
    if typed is not None:
        return typed
    stored = content.metadata.get(key)
    if not isinstance(stored, str) or not stored:
        return None
    logger.debug("Decoding embedding from metadata", extra={"metadata_key": key})
    try:
        return base64_to_embedding(stored)
    except ValueError as e:
        # binascii.Error subclasses ValueError
        logger.warning(
            "Ignoring metadata value that is not an encoded embedding",
            extra={"metadata_key": key, "error": str(e)},
        )
        return None


def extract_document_embedding(content: Content) -> Embedding | None:
    return _extract(content, content.embedding, DOCUMENT_EMBEDDING_KEY)


def extract_query_embedding(content: Content) -> Embedding | None:
    return _extract(content, content.query_embedding, QUERY_EMBEDDING_KEY)


def has_document_embedding(content: Content) -> bool:
    return extract_document_embedding(content) is not None


def has_query_embedding(content: Content) -> bool:
    return extract_query_embedding(content) is not None
