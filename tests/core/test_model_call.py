"""Tests for the single model-call boundary."""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest
from langchain_core.messages import AIMessage
from langchain_core.prompts import PromptTemplate

from standup_digest.core.exceptions import ModelInvocationError
from standup_digest.core.summarization.model_call import (
    content_to_text,
    format_prompt,
    invoke_model,
)

PROMPT = PromptTemplate.from_template("Summarize: {context}")


def make_model(**ainvoke_kwargs) -> MagicMock:
    model = MagicMock()
    model.model_name = "fake-model"
    model.ainvoke = AsyncMock(**ainvoke_kwargs)
    return model


# ============================================================================
# content_to_text / format_prompt
# ============================================================================


class TestContentToText:
    """Tests for AIMessage content normalization."""

    def test_plain_string(self) -> None:
        assert content_to_text("done") == "done"

    def test_list_of_parts(self) -> None:
        """Strings and text parts concatenate in order."""
        content = ["a", {"type": "text", "text": "b"}, "c"]
        assert content_to_text(content) == "abc"

    def test_structured_content_serialized(self) -> None:
        """Non-text payloads become JSON."""
        assert content_to_text({"summary": "x"}) == '{"summary": "x"}'


class TestFormatPrompt:
    """Tests for input filtering."""

    def test_extra_inputs_ignored(self) -> None:
        """Inputs the prompt does not declare are dropped."""
        value = format_prompt(PROMPT, context="notes", format_instructions="ignored")
        assert value.to_string() == "Summarize: notes"


# ============================================================================
# invoke_model
# ============================================================================


class TestInvokeModel:
    """Tests for invoke_model."""

    @pytest.mark.asyncio
    async def test_returns_text(self) -> None:
        """The model output is returned as text."""
        model = make_model(return_value=AIMessage(content="summary"))

        result = await invoke_model(model, format_prompt(PROMPT, context="x"), stage="map")

        assert result == "summary"
        model.ainvoke.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_provider_error_wrapped_with_stage(self) -> None:
        """Provider failures become ModelInvocationError carrying the stage."""
        model = make_model(side_effect=RuntimeError("rate limited"))

        with pytest.raises(ModelInvocationError) as exc_info:
            await invoke_model(model, format_prompt(PROMPT, context="x"), stage="reduce")

        assert exc_info.value.stage == "reduce"
        assert "rate limited" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_timeout_is_invocation_error(self) -> None:
        """A call exceeding the timeout fails with ModelInvocationError."""

        async def slow(_prompt):
            await asyncio.sleep(1)
            return AIMessage(content="late")

        model = make_model(side_effect=slow)

        with pytest.raises(ModelInvocationError) as exc_info:
            await invoke_model(model, format_prompt(PROMPT, context="x"), stage="final", timeout=0.01)

        assert "timed out" in exc_info.value.message
        assert exc_info.value.stage == "final"

    @pytest.mark.asyncio
    async def test_empty_output_rejected(self) -> None:
        """Whitespace-only output is treated as a failed call."""
        model = make_model(return_value=AIMessage(content="   "))

        with pytest.raises(ModelInvocationError, match="empty output"):
            await invoke_model(model, format_prompt(PROMPT, context="x"), stage="map")
