"""Tests for Langfuse tracing wrappers."""

from unittest.mock import MagicMock, patch

import pytest

from standup_digest.observability.correlation import correlation_scope
from standup_digest.observability.tracing import LangfuseTracer, SpanHandle, TraceContext

SETTINGS_TARGET = "standup_digest.observability.tracing.get_settings"
LANGFUSE_TARGET = "standup_digest.observability.tracing.Langfuse"


@pytest.fixture
def mock_settings() -> MagicMock:
    settings = MagicMock()
    settings.observability.enable_tracing = True
    settings.observability.langfuse_public_key = "pk-test"
    settings.observability.langfuse_secret_key = "sk-test"
    settings.observability.langfuse_host = "http://localhost:3000"
    return settings


class TestSpanHandle:
    def test_end_once(self) -> None:
        observation = MagicMock()
        handle = SpanHandle(observation)

        handle.end(output="a")
        handle.end(output="b")

        observation.end.assert_called_once_with(output="a")

    def test_end_failure_swallowed(self) -> None:
        """Tracing errors never reach the pipeline."""
        observation = MagicMock()
        observation.end.side_effect = RuntimeError("network down")

        SpanHandle(observation).end()


class TestTraceContext:
    """Tests for the per-request trace handle."""

    def test_disabled_context_is_noop(self) -> None:
        trace = TraceContext.disabled()

        with trace.span("map-reduce-map") as span:
            span.end(output={"summaries": 3})
        trace.generation("map-generation").end(output="x")
        trace.update(output={})
        trace.flush()

        assert not trace.is_enabled
        assert trace.trace_id is None

    def test_span_records_error_and_reraises(self) -> None:
        langfuse_trace = MagicMock()
        trace = TraceContext(trace=langfuse_trace, client=MagicMock())

        with pytest.raises(ValueError):
            with trace.span("map-reduce-final"):
                raise ValueError("bad output")

        span = langfuse_trace.span.return_value
        assert span.end.call_args.kwargs["level"] == "ERROR"

    def test_span_closed_on_success(self) -> None:
        langfuse_trace = MagicMock()
        trace = TraceContext(trace=langfuse_trace, client=MagicMock())

        with trace.span("map-reduce-split", input={"documents": 2}):
            pass

        langfuse_trace.span.assert_called_once_with(
            name="map-reduce-split", input={"documents": 2}, metadata=None
        )
        langfuse_trace.span.return_value.end.assert_called_once()

    def test_generation_passes_model(self) -> None:
        langfuse_trace = MagicMock()
        trace = TraceContext(trace=langfuse_trace)

        trace.generation("map-generation", model="gemini-2.0-flash", input="prompt")

        assert langfuse_trace.generation.call_args.kwargs["model"] == "gemini-2.0-flash"

    def test_flush_failure_swallowed(self) -> None:
        client = MagicMock()
        client.flush.side_effect = RuntimeError("timeout")

        TraceContext(trace=MagicMock(), client=client).flush()


class TestLangfuseTracer:
    """Tests for the tracer singleton."""

    def test_disabled_returns_noop_trace(self, mock_settings: MagicMock) -> None:
        mock_settings.observability.enable_tracing = False
        with patch(SETTINGS_TARGET, return_value=mock_settings):
            tracer = LangfuseTracer()

        assert not tracer.is_enabled
        assert not tracer.start_trace("summarization-auto").is_enabled

    def test_start_trace_creates_new_context_per_call(self, mock_settings: MagicMock) -> None:
        client = MagicMock()
        with patch(SETTINGS_TARGET, return_value=mock_settings), patch(
            LANGFUSE_TARGET, return_value=client
        ):
            tracer = LangfuseTracer()

        with correlation_scope("req-7"):
            first = tracer.start_trace("summarization-auto", metadata={"model": "gpt-4"})
        second = tracer.start_trace("summarization-stuff")

        assert first is not second
        assert first.is_enabled
        client.trace.assert_any_call(
            name="summarization-auto", metadata={"model": "gpt-4"}, session_id="req-7"
        )
        client.trace.assert_any_call(name="summarization-stuff", metadata={}, session_id=None)

    def test_trace_start_failure_degrades(self, mock_settings: MagicMock) -> None:
        client = MagicMock()
        client.trace.side_effect = RuntimeError("auth failed")
        with patch(SETTINGS_TARGET, return_value=mock_settings), patch(
            LANGFUSE_TARGET, return_value=client
        ):
            tracer = LangfuseTracer()

        assert not tracer.start_trace("summarization-auto").is_enabled
