"""
Token counting over the configured chat model's tokenizer.

get_num_tokens is synchronous and, for some providers (Gemini), a network
round-trip, so every count runs in a worker thread.

Dependencies: asyncio, langchain_core.language_models, langchain_core.documents
System role: Token accounting for algorithm selection and collapse decisions
"""

import asyncio
import logging
from collections.abc import Iterable

from langchain_core.documents import Document
from langchain_core.language_models import BaseLanguageModel

from standup_digest.core.exceptions import TokenizerUnavailableError

logger = logging.getLogger(__name__)


class TokenCounter:
    """Counts tokens with the model's own tokenizer.

    There is no approximate fallback: a tokenizer that fails is reported as
    TokenizerUnavailableError, a configuration error.
    """

    def __init__(self, model: BaseLanguageModel) -> None:
        self._model = model

    async def count(self, text: str) -> int:
        """
        Token count of a single text, computed off the event loop.

        Raises:
            TokenizerUnavailableError: If the model's tokenizer fails
        """
        try:
            return await asyncio.to_thread(self._model.get_num_tokens, text)
        except Exception as e:
            raise TokenizerUnavailableError(
                f"Tokenizer unavailable for model: {type(e).__name__}: {e}",
                {"model": type(self._model).__name__},
            ) from e

    async def count_each(self, documents: Iterable[Document]) -> list[int]:
        """Per-document token counts, in input order."""
        return list(await asyncio.gather(*(self.count(doc.page_content) for doc in documents)))

    async def count_all(self, documents: Iterable[Document]) -> int:
        """Sum of per-document token counts (no cross-document dedup)."""
        return sum(await self.count_each(documents))
