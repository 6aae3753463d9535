"""
Single model invocation used by every summarization stage.

Applies the per-call timeout, records a Langfuse generation, normalizes
message content to text and wraps failures as ModelInvocationError.

Dependencies: asyncio, langchain_core
System role: Model-call boundary for the stuff and map-reduce summarizers
"""

import asyncio
import json
import logging
from typing import Any

from langchain_core.language_models import BaseChatModel
from langchain_core.prompt_values import PromptValue
from langchain_core.prompts import BasePromptTemplate

from standup_digest.core.exceptions import ModelInvocationError
from standup_digest.observability.tracing import TraceContext

logger = logging.getLogger(__name__)


def content_to_text(content: Any) -> str:
    """
    Normalize AIMessage content to a plain string.

    Providers may return a string, a list of content parts (strings or
    {"type": "text", "text": ...} dicts) or a structured object.
    """
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for item in content:
            if isinstance(item, str):
                parts.append(item)
            elif isinstance(item, dict) and "text" in item:
                parts.append(str(item["text"]))
            else:
                parts.append(json.dumps(item, default=str))
        return "".join(parts)
    return json.dumps(content, default=str)


def format_prompt(prompt: BasePromptTemplate, **inputs: Any) -> PromptValue:
    """Format a prompt with the subset of inputs it declares."""
    return prompt.format_prompt(
        **{key: value for key, value in inputs.items() if key in prompt.input_variables}
    )


async def invoke_model(
    model: BaseChatModel,
    prompt_value: PromptValue,
    stage: str,
    timeout: float | None = None,
    trace: TraceContext | None = None,
    metadata: dict[str, Any] | None = None,
) -> str:
    """
    Invoke the model once and return its text output.

    Args:
        model: Chat model
        prompt_value: Formatted prompt
        stage: Pipeline stage name (map, reduce, final, stuff)
        timeout: Wall-clock timeout in seconds (None disables it)
        trace: Request trace context
        metadata: Extra generation metadata

    Returns:
        str: Model output text

    Raises:
        ModelInvocationError: On provider error, timeout or empty output
    """
    trace = trace or TraceContext.disabled()
    generation = trace.generation(
        name=f"{stage}-generation",
        model=getattr(model, "model_name", None) or getattr(model, "model", None),
        input=prompt_value.to_string(),
        metadata={"stage": stage, **(metadata or {})},
    )

    try:
        if timeout is None:
            response = await model.ainvoke(prompt_value)
        else:
            response = await asyncio.wait_for(model.ainvoke(prompt_value), timeout=timeout)
    except asyncio.TimeoutError as e:
        generation.end(level="ERROR", status_message="timeout")
        logger.error("%s:invoke_model - stage=%s timed out after %ss", __name__, stage, timeout)
        raise ModelInvocationError(
            f"Model call timed out after {timeout}s",
            stage=stage,
        ) from e
    except Exception as e:
        generation.end(level="ERROR", status_message=f"{type(e).__name__}: {e}")
        logger.error("%s:invoke_model - stage=%s failed: %s: %s", __name__, stage, type(e).__name__, e)
        raise ModelInvocationError(
            f"Model call failed: {type(e).__name__}: {e}",
            stage=stage,
        ) from e

    text = content_to_text(response.content)
    generation.end(output=text)

    if not text.strip():
        raise ModelInvocationError("Model returned empty output", stage=stage)

    return text
