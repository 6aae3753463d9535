"""Tests for QuickAskService."""

from unittest.mock import MagicMock

import pytest

from standup_digest.application.services.quick_ask_service import QuickAskService
from standup_digest.core.exceptions import ModelInvocationError
from standup_digest.core.model_factory import ModelProvider
from standup_digest.models.quick_ask import QuickAskRequest


class TestQuickAskService:
    """Tests for single-question answering."""

    @pytest.mark.asyncio
    async def test_answer_with_defaults(self, chat_model_factory, settings, disabled_tracer) -> None:
        """Omitted provider/model fall back to the configured defaults."""
        prompts: list[str] = []

        def responder(prompt: str) -> str:
            prompts.append(prompt)
            return "Standups are short daily syncs."

        model = chat_model_factory(responder)
        factory = MagicMock(return_value=model)
        service = QuickAskService(settings=settings, tracer=disabled_tracer, model_factory=factory)

        response = await service.ask(QuickAskRequest(user_query="What is a standup?"))

        assert response.answer == "Standups are short daily syncs."
        assert response.provider is ModelProvider.GOOGLE
        assert response.model == settings.llm.name
        factory.assert_called_once_with("google", settings.llm.name, settings.llm.temperature)
        assert "What is a standup?" in prompts[0]

    @pytest.mark.asyncio
    async def test_request_model_used(self, chat_model_factory, settings, disabled_tracer) -> None:
        model = chat_model_factory(lambda prompt: "answer")
        factory = MagicMock(return_value=model)
        service = QuickAskService(settings=settings, tracer=disabled_tracer, model_factory=factory)

        response = await service.ask(
            QuickAskRequest(user_query="hi", provider="openai", model="gpt-4", temperature=0.0)
        )

        factory.assert_called_once_with("openai", "gpt-4", 0.0)
        assert response.provider is ModelProvider.OPENAI

    @pytest.mark.asyncio
    async def test_model_failure_propagates(self, chat_model_factory, settings, disabled_tracer) -> None:
        def responder(prompt: str) -> str:
            raise RuntimeError("quota exceeded")

        model = chat_model_factory(responder)
        service = QuickAskService(
            settings=settings, tracer=disabled_tracer, model_factory=lambda *args: model
        )

        with pytest.raises(ModelInvocationError) as exc_info:
            await service.ask(QuickAskRequest(user_query="hi"))

        assert exc_info.value.stage == "quick-ask"
