"""
Langfuse tracing integration.

LangfuseTracer owns the read-only Langfuse client and starts one trace per
summarization request. The returned TraceContext is passed explicitly into
every pipeline stage; nothing request-scoped is stored on the tracer.

Tracing is best effort: failures are logged and never abort a run.

Dependencies: langfuse, standup_digest.configs
System role: Distributed tracing for summarization runs
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from langfuse import Langfuse

from standup_digest.configs import get_settings
from standup_digest.configs.observability import ObservabilitySettings
from standup_digest.observability.correlation import get_correlation_id

logger = logging.getLogger(__name__)


class SpanHandle:
    """Thin wrapper over a Langfuse span or generation."""

    def __init__(self, observation: Any | None) -> None:
        self._observation = observation
        self._ended = False

    def end(self, output: Any = None, **kwargs: Any) -> None:
        """End the observation once; later calls are ignored."""
        if self._ended or self._observation is None:
            return
        self._ended = True
        try:
            self._observation.end(output=output, **kwargs)
        except Exception as e:
            logger.warning("Failed to end trace observation: %s: %s", type(e).__name__, e)


class TraceContext:
    """Per-request trace handle threaded through the pipeline.

    A context built without a Langfuse trace is a no-op, so callers never
    need to branch on whether tracing is enabled.
    """

    def __init__(self, trace: Any | None = None, client: Langfuse | None = None) -> None:
        self._trace = trace
        self._client = client

    @classmethod
    def disabled(cls) -> "TraceContext":
        """Build a no-op trace context."""
        return cls()

    @property
    def is_enabled(self) -> bool:
        return self._trace is not None

    @property
    def trace_id(self) -> str | None:
        if self._trace is None:
            return None
        return getattr(self._trace, "id", None)

    def _start(self, kind: str, **kwargs: Any) -> SpanHandle:
        if self._trace is None:
            return SpanHandle(None)
        try:
            return SpanHandle(getattr(self._trace, kind)(**kwargs))
        except Exception as e:
            logger.warning("Failed to start trace %s %s: %s", kind, kwargs.get("name"), e)
            return SpanHandle(None)

    @contextmanager
    def span(
        self,
        name: str,
        input: Any = None,
        metadata: dict[str, Any] | None = None,
    ) -> Iterator[SpanHandle]:
        """
        Open a span around a pipeline stage.

        The span is closed on exit; an exception marks it as an error and
        propagates unchanged.

        Args:
            name: Span name (e.g. "map-reduce-collapse")
            input: Optional span input payload
            metadata: Optional span metadata

        Yields:
            SpanHandle: Handle whose end() records the stage output
        """
        handle = self._start("span", name=name, input=input, metadata=metadata)
        try:
            yield handle
        except Exception as e:
            handle.end(level="ERROR", status_message=f"{type(e).__name__}: {e}")
            raise
        handle.end()

    def generation(
        self,
        name: str,
        model: str | None = None,
        input: Any = None,
        model_parameters: dict[str, Any] | None = None,
        metadata: dict[str, Any] | None = None,
        prompt: Any = None,
    ) -> SpanHandle:
        """Start a generation observation for a single model call."""
        kwargs: dict[str, Any] = {
            "name": name,
            "model": model,
            "input": input,
            "model_parameters": model_parameters,
            "metadata": metadata,
        }
        if prompt is not None:
            kwargs["prompt"] = prompt
        return self._start("generation", **kwargs)

    def update(self, **kwargs: Any) -> None:
        """Update trace-level fields such as output or tags."""
        if self._trace is None:
            return
        try:
            self._trace.update(**kwargs)
        except Exception as e:
            logger.warning("Failed to update trace: %s", e)

    def flush(self) -> None:
        """Flush buffered events to Langfuse."""
        if self._client is None:
            return
        try:
            self._client.flush()
        except Exception as e:
            logger.warning("Failed to flush Langfuse events: %s", e)


def build_langfuse_client(obs_settings: ObservabilitySettings) -> Langfuse | None:
    """
    Create a Langfuse client for the tracer or the prompt registry.

    Args:
        obs_settings: Observability settings

    Returns:
        Langfuse | None: Client, or None when tracing is off or keys are missing
    """
    if not obs_settings.enable_tracing:
        logger.info("Langfuse tracing disabled")
        return None
    if not obs_settings.langfuse_public_key or not obs_settings.langfuse_secret_key:
        logger.warning("Langfuse keys not configured, tracing inactive")
        return None

    client = Langfuse(
        public_key=obs_settings.langfuse_public_key,
        secret_key=obs_settings.langfuse_secret_key,
        host=obs_settings.langfuse_host,
    )
    logger.info("Langfuse client initialized: host=%s", obs_settings.langfuse_host)
    return client


class LangfuseTracer:
    """Langfuse tracer singleton.

    Holds only the shared client; each call to start_trace returns a new,
    request-scoped TraceContext.
    """

    _instance: "LangfuseTracer | None" = None
    _client: Langfuse | None = None
    _enabled: bool = False

    def __new__(cls) -> "LangfuseTracer":
        """Singleton pattern for tracer instance."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialize()
        return cls._instance

    def _initialize(self) -> None:
        self._client = build_langfuse_client(get_settings().observability)
        self._enabled = self._client is not None

    @property
    def is_enabled(self) -> bool:
        return self._enabled

    def start_trace(self, name: str, metadata: dict[str, Any] | None = None) -> TraceContext:
        """
        Start a new trace for one request.

        Args:
            name: Trace name (e.g. "summarization-map-reduce")
            metadata: Request metadata (provider, model, temperature)

        Returns:
            TraceContext: Request-scoped context, no-op when tracing is off
        """
        if not self._enabled or self._client is None:
            return TraceContext.disabled()
        try:
            trace = self._client.trace(
                name=name,
                metadata=metadata or {},
                session_id=get_correlation_id() or None,
            )
        except Exception as e:
            logger.warning("Failed to start Langfuse trace %s: %s", name, e)
            return TraceContext.disabled()
        return TraceContext(trace=trace, client=self._client)
