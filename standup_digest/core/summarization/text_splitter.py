"""
Token-aware document splitting with a character-based fallback.

TokenTextSplitter is preferred; if its tiktoken encoding cannot be built the
splitter degrades to RecursiveCharacterTextSplitter with the same numbers
read as characters.

Dependencies: langchain_text_splitters, tiktoken
System role: First stage of the map-reduce pipeline
"""

import logging

from langchain_core.documents import Document
from langchain_text_splitters import (
    RecursiveCharacterTextSplitter,
    TextSplitter,
    TokenTextSplitter,
)

from standup_digest.core.exceptions import InvalidChunkConfigError

logger = logging.getLogger(__name__)

DEFAULT_ENCODING = "cl100k_base"


def validate_chunk_config(chunk_size: int, chunk_overlap: int) -> None:
    """
    Reject chunk settings that cannot produce forward progress.

    Raises:
        InvalidChunkConfigError: Unless chunk_size > 0 and 0 <= chunk_overlap < chunk_size
    """
    if chunk_size <= 0 or chunk_overlap < 0 or chunk_overlap >= chunk_size:
        raise InvalidChunkConfigError(chunk_size, chunk_overlap)


class DocumentSplitter:
    """Split documents into chunks bounded by a token budget."""

    def __init__(
        self,
        chunk_size: int,
        chunk_overlap: int = 0,
        encoding_name: str = DEFAULT_ENCODING,
    ) -> None:
        """
        Build the underlying splitter.

        Args:
            chunk_size: Maximum chunk size in tokens (characters on fallback)
            chunk_overlap: Overlap between consecutive chunks
            encoding_name: tiktoken encoding for token-aware splitting

        Raises:
            InvalidChunkConfigError: If the size/overlap pair is invalid
        """
        validate_chunk_config(chunk_size, chunk_overlap)
        self._chunk_size = chunk_size
        self._chunk_overlap = chunk_overlap
        self._splitter, self._token_aware = self._build(encoding_name)

    def _build(self, encoding_name: str) -> tuple[TextSplitter, bool]:
        try:
            splitter = TokenTextSplitter(
                encoding_name=encoding_name,
                chunk_size=self._chunk_size,
                chunk_overlap=self._chunk_overlap,
            )
            return splitter, True
        except Exception as e:
            logger.warning(
                "%s:_build - token splitter unavailable for encoding=%s (%s: %s), "
                "falling back to character splitting",
                __name__, encoding_name, type(e).__name__, e,
            )

        splitter = RecursiveCharacterTextSplitter(
            chunk_size=self._chunk_size,
            chunk_overlap=self._chunk_overlap,
            length_function=len,
        )
        return splitter, False

    @property
    def is_token_aware(self) -> bool:
        return self._token_aware

    def split(self, documents: list[Document]) -> list[Document]:
        """
        Split documents into ordered chunks.

        Every chunk carries a copy of its parent document's metadata.

        Args:
            documents: Documents to split

        Returns:
            list[Document]: Chunks in input order
        """
        chunks = self._splitter.split_documents(documents)
        logger.debug(
            "%s:split - %d documents -> %d chunks (token_aware=%s)",
            __name__, len(documents), len(chunks), self._token_aware,
        )
        return chunks


def split_documents(
    documents: list[Document],
    chunk_size: int,
    chunk_overlap: int = 0,
    encoding_name: str = DEFAULT_ENCODING,
) -> list[Document]:
    """Convenience wrapper building a DocumentSplitter for a single call."""
    return DocumentSplitter(chunk_size, chunk_overlap, encoding_name).split(documents)
