"""
Shared test fixtures and configuration for entire test suite.

Provides: scripted chat models, report payloads, settings, singleton resets
Dependencies: pytest, langchain_core, unittest.mock
System role: Test infrastructure and fixture management
"""

import inspect
import json
from collections.abc import Callable
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
from langchain_core.messages import AIMessage

from standup_digest.configs.settings import Settings
from standup_digest.observability.prompt_registry.registry import get_prompt_registry
from standup_digest.observability.tracing import LangfuseTracer, TraceContext

# Unknown to tiktoken, so splitters fall back to character splitting offline.
TEST_ENCODING = "unknown-test-encoding"


def count_words(text: str) -> int:
    """Whitespace token count used by the scripted models."""
    return len(text.split())


@pytest.fixture(autouse=True)
def reset_singletons() -> None:
    """Reset the Langfuse tracer and prompt registry before each test."""
    LangfuseTracer._instance = None
    LangfuseTracer._client = None
    LangfuseTracer._enabled = False
    get_prompt_registry.cache_clear()


@pytest.fixture
def chat_model_factory() -> Callable[..., MagicMock]:
    """
    Build a chat model double driven by a responder.

    The responder receives the formatted prompt text and returns the output
    text (or an awaitable of it, or raises). get_num_tokens counts words.

    Returns:
        Callable: responder -> model mock with ainvoke/get_num_tokens
    """

    def _factory(responder: Callable[[str], Any]) -> MagicMock:
        model = MagicMock()
        model.model_name = "fake-model"
        model.get_num_tokens.side_effect = count_words

        async def _ainvoke(prompt_value, *args, **kwargs) -> AIMessage:
            result = responder(prompt_value.to_string())
            if inspect.isawaitable(result):
                result = await result
            return AIMessage(content=result)

        model.ainvoke = AsyncMock(side_effect=_ainvoke)
        return model

    return _factory


@pytest.fixture
def report_payload() -> dict[str, Any]:
    """Valid structured report as the model returns it."""
    return {
        "summary": "Sprint on track.\n\nSearch API shipped.",
        "riskBlockerActionNeeded": "No explicit blockers reported.",
        "taskDetails": {
            "completed": "Search API: endpoint delivered\n\t PR #42 merged",
            "inProgress": "Dashboard: charts\n\t filters in progress",
            "inReview": "Nothing is in review.",
        },
    }


@pytest.fixture
def report_json(report_payload: dict[str, Any]) -> str:
    """Valid structured report serialized to JSON."""
    return json.dumps(report_payload)


@pytest.fixture
def settings() -> Settings:
    """Default settings with tracing and every integration switched off."""
    settings = Settings()
    settings.observability.enable_tracing = False
    settings.observability.use_prompt_registry = False
    settings.summarization.encoding_name = TEST_ENCODING
    return settings


@pytest.fixture
def disabled_tracer() -> MagicMock:
    """Tracer double whose traces are no-ops."""
    tracer = MagicMock(spec=LangfuseTracer)
    tracer.start_trace.return_value = TraceContext.disabled()
    return tracer
