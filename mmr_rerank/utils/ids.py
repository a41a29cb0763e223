"""Id resolution for embedding matches. Deterministic so repeated runs agree."""

import hashlib
import json

from mmr_rerank.models.content import Content

CONTENT_ID_PREFIX = "mmr-content-"
EMBEDDING_ID_KEY = "embedding_id"


def compute_content_hash(content: Content) -> str:
    """SHA-256 of the content text plus its metadata in canonical JSON form."""
    metadata_canonical = json.dumps(content.metadata, sort_keys=True, default=str)
    payload = f"{content.text}|{metadata_canonical}"
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()


def generate_content_id(content: Content) -> str:
    """Synthesize a stable id, e.g. mmr-content-<24 hex chars>."""
    return f"{CONTENT_ID_PREFIX}{compute_content_hash(content)[:24]}"


def resolve_embedding_id(content: Content) -> str:
    """
    Explicit content.embedding_id wins, then a non-blank string under the embedding_id
    metadata key, then a synthesized id.
    """
    if content.embedding_id and content.embedding_id.strip():
        return content.embedding_id
    stored = content.metadata.get(EMBEDDING_ID_KEY)
    if isinstance(stored, str) and stored.strip():
        return stored
    return generate_content_id(content)
