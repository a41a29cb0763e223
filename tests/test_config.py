"""Tests for settings, embedding profiles, MMR config and logging setup."""

import logging
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from mmr_rerank.config.embedding.static import (
    get_active_profile_name,
    load_embedding_profiles,
    resolve_embedding_config,
)
from mmr_rerank.config.logging import configure_logging, get_logger
from mmr_rerank.config.mmr.models import MmrConfig
from mmr_rerank.config.settings import Settings


class TestSettings:

    def test_defaults(self):
        settings = Settings(_env_file=None)
        assert settings.mmr_lambda == 0.7
        assert settings.mmr_max_results is None
        assert settings.mmr_force_embedding_generation is False

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("MMR_LAMBDA", "0.4")
        monkeypatch.setenv("MMR_MAX_RESULTS", "3")
        settings = Settings(_env_file=None)
        assert settings.mmr_lambda == 0.4
        assert settings.mmr_max_results == 3

    def test_rejects_lambda_out_of_range(self, monkeypatch):
        monkeypatch.setenv("MMR_LAMBDA", "2")
        with pytest.raises(ValidationError):
            Settings(_env_file=None)


class TestEmbeddingProfiles:

    def test_profiles_loaded(self):
        assert {"mock_default", "sentence_default"} <= set(load_embedding_profiles())

    def test_active_profile(self):
        assert get_active_profile_name() == "mock_default"
        assert resolve_embedding_config("active").provider == "mock"

    def test_provider_alias(self):
        assert resolve_embedding_config("sentence_transformers").provider == "sentence_transformers"

    def test_inline_override(self):
        config = resolve_embedding_config("mock_default", {"dimension": 8, "normalize": False})
        assert config.dimension == 8
        assert config.normalize is False

    def test_unknown_profile(self):
        with pytest.raises(ValueError, match="Unknown embedding profile"):
            resolve_embedding_config("missing")

    def test_invalid_override(self):
        with pytest.raises(ValidationError):
            resolve_embedding_config("mock_default", {"normalization_type": "L3"})


class TestMmrConfig:

    @pytest.mark.parametrize("kwargs", [{"lambda_mult": 1.1}, {"lambda_mult": -0.5}, {"max_results": -2}])
    def test_validation(self, kwargs):
        with pytest.raises(ValidationError):
            MmrConfig(**kwargs)

    def test_from_settings(self):
        settings = Settings(_env_file=None, mmr_lambda=0.2, mmr_min_score=0.1, mmr_strategy="hybrid")
        config = MmrConfig.from_settings(settings)
        assert config.lambda_mult == 0.2
        assert config.min_score == 0.1
        assert config.strategy == "hybrid"


class TestLogging:

    def test_configure_sets_level(self):
        root = logging.getLogger()
        saved_handlers, saved_level = list(root.handlers), root.level
        try:
            with patch("mmr_rerank.config.logging.get_settings", return_value=Settings(log_level="debug")):
                configure_logging()
            assert root.level == logging.DEBUG
            assert len(root.handlers) == 1
        finally:
            root.handlers[:] = saved_handlers
            root.setLevel(saved_level)

    def test_helpers(self):
        assert get_logger("mmr_rerank.test").name == "mmr_rerank.test"
