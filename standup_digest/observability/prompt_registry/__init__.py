"""
Langfuse prompt registry module.

Versions the summarization prompts in Langfuse with the model configuration
they were written for, and resolves them back into LangChain templates.

Dependencies: langfuse, langchain_core, pydantic
System role: Prompt version management and LangChain integration
"""

from standup_digest.observability.prompt_registry.models import ModelConfig
from standup_digest.observability.prompt_registry.registry import (
    PromptRegistry,
    get_prompt_registry,
)

__all__ = ["PromptRegistry", "ModelConfig", "get_prompt_registry"]
