"""
Observability module.

Provides structured logging, correlation ID tracking, Langfuse tracing,
and prompt version management.
"""

from standup_digest.observability.prompt_registry import ModelConfig, PromptRegistry
from standup_digest.observability.tracing import LangfuseTracer, TraceContext

__all__ = ["LangfuseTracer", "ModelConfig", "PromptRegistry", "TraceContext"]
