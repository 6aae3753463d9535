"""Tests for token-aware splitting and the character fallback."""

from unittest.mock import patch

import pytest
import tiktoken
from langchain_core.documents import Document

from standup_digest.core.exceptions import InvalidChunkConfigError
from standup_digest.core.summarization.text_splitter import (
    DocumentSplitter,
    split_documents,
    validate_chunk_config,
)

UNKNOWN_ENCODING = "unknown-test-encoding"

LONG_TEXT = "\n\n".join(
    f"Update {index}: worked on issue #{index} and reviewed PR #{index + 100}." for index in range(40)
)


class TestValidateChunkConfig:
    """Tests for chunk configuration validation."""

    @pytest.mark.parametrize("size,overlap", [(0, 0), (-5, 0), (100, -1), (100, 100), (100, 150)])
    def test_invalid_pairs_rejected(self, size: int, overlap: int) -> None:
        """Size must be positive and overlap in [0, size)."""
        with pytest.raises(InvalidChunkConfigError):
            validate_chunk_config(size, overlap)

    def test_valid_pair_accepted(self) -> None:
        """A positive size with smaller overlap passes."""
        validate_chunk_config(100, 99)

    def test_splitter_rejects_invalid_config(self) -> None:
        """Construction validates before building any splitter."""
        with pytest.raises(InvalidChunkConfigError):
            DocumentSplitter(chunk_size=10, chunk_overlap=10, encoding_name=UNKNOWN_ENCODING)


class TestCharacterFallback:
    """Tests for the fallback path (unknown tiktoken encoding)."""

    def test_unknown_encoding_falls_back(self) -> None:
        """Unknown encodings degrade to character splitting."""
        splitter = DocumentSplitter(chunk_size=200, encoding_name=UNKNOWN_ENCODING)
        assert not splitter.is_token_aware

    def test_fallback_covers_full_text(self) -> None:
        """Chunks are non-empty and reconstruct the input words in order."""
        chunks = split_documents(
            [Document(page_content=LONG_TEXT)],
            chunk_size=200,
            encoding_name=UNKNOWN_ENCODING,
        )
        assert len(chunks) > 1
        assert all(chunk.page_content for chunk in chunks)
        rebuilt = " ".join(chunk.page_content for chunk in chunks).split()
        assert rebuilt == LONG_TEXT.split()

    def test_fallback_respects_character_budget(self) -> None:
        """Character chunks stay within chunk_size."""
        chunks = split_documents(
            [Document(page_content=LONG_TEXT)],
            chunk_size=200,
            encoding_name=UNKNOWN_ENCODING,
        )
        assert all(len(chunk.page_content) <= 200 for chunk in chunks)

    def test_short_document_single_chunk(self) -> None:
        """A document shorter than chunk_size yields exactly one chunk."""
        chunks = split_documents(
            [Document(page_content="standup: shipped search")],
            chunk_size=200,
            encoding_name=UNKNOWN_ENCODING,
        )
        assert [chunk.page_content for chunk in chunks] == ["standup: shipped search"]

    def test_empty_input(self) -> None:
        """No documents, no chunks."""
        assert split_documents([], chunk_size=200, encoding_name=UNKNOWN_ENCODING) == []

    def test_metadata_copied_to_chunks(self) -> None:
        """Every chunk carries its parent's metadata."""
        doc = Document(page_content=LONG_TEXT, metadata={"source": "slack", "channel_name": "proj"})
        chunks = split_documents([doc], chunk_size=200, encoding_name=UNKNOWN_ENCODING)
        assert all(chunk.metadata == doc.metadata for chunk in chunks)

    def test_documents_kept_in_order(self) -> None:
        """Chunks of earlier documents come first."""
        docs = [Document(page_content="first document"), Document(page_content="second document")]
        chunks = split_documents(docs, chunk_size=200, encoding_name=UNKNOWN_ENCODING)
        assert [chunk.page_content for chunk in chunks] == ["first document", "second document"]


class TestTokenAwareSplitting:
    """Tests for the tiktoken-backed path."""

    @pytest.fixture
    def byte_encoding(self) -> tiktoken.Encoding:
        """Offline encoding with one token per byte."""
        return tiktoken.Encoding(
            "byte-test-encoding",
            pat_str=r"\S+|\s+",
            mergeable_ranks={bytes([value]): value for value in range(256)},
            special_tokens={},
        )

    def test_token_splitter_used_when_encoding_loads(self, byte_encoding) -> None:
        """Chunks are cut at exactly chunk_size tokens and rebuild the input."""
        with patch("tiktoken.get_encoding", return_value=byte_encoding) as get_encoding:
            splitter = DocumentSplitter(chunk_size=50, encoding_name="byte-test-encoding")

        get_encoding.assert_called_once_with("byte-test-encoding")
        assert splitter.is_token_aware

        doc = Document(page_content=LONG_TEXT, metadata={"source": "slack"})
        chunks = splitter.split([doc])

        assert all(len(byte_encoding.encode(chunk.page_content)) <= 50 for chunk in chunks)
        assert all(len(chunk.page_content) == 50 for chunk in chunks[:-1])
        assert "".join(chunk.page_content for chunk in chunks) == LONG_TEXT
        assert all(chunk.metadata == {"source": "slack"} for chunk in chunks)

    def test_overlap_repeats_tail_tokens(self, byte_encoding) -> None:
        with patch("tiktoken.get_encoding", return_value=byte_encoding):
            splitter = DocumentSplitter(chunk_size=20, chunk_overlap=5, encoding_name="byte-test-encoding")

        chunks = splitter.split([Document(page_content=LONG_TEXT)])

        assert chunks[1].page_content[:5] == chunks[0].page_content[-5:]

    @pytest.mark.network
    def test_chunks_within_cl100k_budget(self) -> None:
        """Every chunk encodes to at most chunk_size tokens."""
        splitter = DocumentSplitter(chunk_size=50, encoding_name="cl100k_base")
        if not splitter.is_token_aware:
            pytest.skip("cl100k_base encoding unavailable")

        encoding = tiktoken.get_encoding("cl100k_base")
        chunks = splitter.split([Document(page_content=LONG_TEXT)])
        assert len(chunks) > 1
        assert all(len(encoding.encode(chunk.page_content)) <= 50 for chunk in chunks)
