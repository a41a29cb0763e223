"""Static embedding profile loader. Read-only; no business logic."""

import json
from functools import lru_cache
from pathlib import Path
from typing import Any

from mmr_rerank.config.embedding.models import EmbeddingConfig

_config_dir = Path(__file__).resolve().parent
_config_path = _config_dir / "static.json"

_PROVIDER_TO_PROFILE: dict[str, str] = {
    "mock": "mock_default",
    "sentence_transformers": "sentence_default",
}


@lru_cache
def _load_raw_data() -> dict[str, Any]:
    raw = _config_path.read_text(encoding="utf-8")
    return json.loads(raw)


def load_embedding_profiles() -> dict[str, EmbeddingConfig]:
    """Load embedding profiles from static.json. Keys are profile names."""
    profiles = _load_raw_data().get("profiles", {})
    return {k: EmbeddingConfig.model_validate(v) for k, v in profiles.items()}


def get_active_profile_name() -> str:
    """Return the profile name marked as active in static.json. Defaults to 'mock_default'."""
    return _load_raw_data().get("active", "mock_default")


def get_embedding_config(profile_name: str) -> EmbeddingConfig | None:
    """Return embedding config for the given profile, or None if missing."""
    return load_embedding_profiles().get(profile_name)


def resolve_embedding_config(
    profile_name: str,
    inline_config: dict[str, Any] | None = None,
) -> EmbeddingConfig:
    """
    Resolve embedding config by profile name and optional inline overrides.
    'active' resolves to the profile marked active in static.json; provider names
    ('mock', 'sentence_transformers') map to their default profiles.
    Inline overrides are merged over the profile and re-validated.
    Raises ValueError if the profile is unknown.
    """
    if profile_name == "active":
        name = get_active_profile_name()
    else:
        name = _PROVIDER_TO_PROFILE.get(profile_name, profile_name)
    base = get_embedding_config(name)
    if base is None:
        raise ValueError(f"Unknown embedding profile: {name!r}")
    if not inline_config:
        return base
    merged = {**base.model_dump(), **inline_config}
    return EmbeddingConfig.model_validate(merged)
