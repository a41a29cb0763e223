"""Tests for embeddings carried on content fields and string metadata."""

import logging

import pytest

from mmr_rerank.models.content import Content
from mmr_rerank.utils.embedding_metadata import (
    DOCUMENT_EMBEDDING_KEY,
    QUERY_EMBEDDING_KEY,
    base64_to_embedding,
    embedding_to_base64,
    enrich_content_with_embeddings,
    extract_document_embedding,
    extract_query_embedding,
    has_document_embedding,
    has_query_embedding,
)


class TestBase64Encoding:

    def test_big_endian_float32(self):
        # 1.0f == 0x3F800000
        assert embedding_to_base64((1.0,)) == "P4AAAA=="

    def test_decode(self):
        assert base64_to_embedding("P4AAAA==") == (1.0,)

    @pytest.mark.parametrize("encoded", ["text-embedding-3-small", "P4AA", ""])
    def test_decode_rejects_non_float32(self, encoded):
        with pytest.raises(ValueError):
            base64_to_embedding(encoded)


class TestEnrich:

    def test_sets_fields_and_metadata(self):
        original = Content(text="x", metadata={"page": 3})
        enriched = enrich_content_with_embeddings(original, (1.0, 0.0), (0.5, 0.25))

        assert enriched.embedding == (0.5, 0.25)
        assert enriched.query_embedding == (1.0, 0.0)
        assert enriched.metadata["page"] == 3
        assert isinstance(enriched.metadata[DOCUMENT_EMBEDDING_KEY], str)
        assert isinstance(enriched.metadata[QUERY_EMBEDDING_KEY], str)
        # original untouched
        assert original.embedding is None
        assert original.metadata == {"page": 3}

    def test_none_leaves_side_untouched(self):
        content = Content(text="x", embedding=(0.0, 1.0))
        enriched = enrich_content_with_embeddings(content, (1.0, 0.0), None)

        assert enriched.embedding == (0.0, 1.0)
        assert DOCUMENT_EMBEDDING_KEY not in enriched.metadata
        assert has_query_embedding(enriched)


class TestExtract:

    def test_typed_field_wins(self):
        encoded = embedding_to_base64((9.0, 9.0))
        content = Content(text="x", embedding=(1.0, 0.0), metadata={DOCUMENT_EMBEDDING_KEY: encoded})
        assert extract_document_embedding(content) == (1.0, 0.0)

    def test_metadata_fallback(self):
        content = Content(text="x", metadata={QUERY_EMBEDDING_KEY: embedding_to_base64((0.5, -2.0))})
        assert extract_query_embedding(content) == pytest.approx((0.5, -2.0))

    @pytest.mark.parametrize("stored", [None, "", 42, [1.0, 2.0]])
    def test_absent_or_unsupported(self, stored):
        content = Content(text="x", metadata={DOCUMENT_EMBEDDING_KEY: stored})
        assert extract_document_embedding(content) is None
        assert not has_document_embedding(content)

    @pytest.mark.parametrize("stored", ["text-embedding-3-small", "P4AA"])
    def test_undecodable_string_ignored(self, stored, caplog):
        content = Content(text="x", metadata={DOCUMENT_EMBEDDING_KEY: stored})
        with caplog.at_level(logging.WARNING):
            assert extract_document_embedding(content) is None
            assert not has_document_embedding(content)
        assert "not an encoded embedding" in caplog.text

    def test_document_and_query_independent(self):
        content = Content(text="x", query_embedding=(1.0, 0.0))
        assert has_query_embedding(content)
        assert not has_document_embedding(content)
