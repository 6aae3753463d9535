"""
Langfuse prompt registry.

Versions the summarization prompts in Langfuse together with the model they
were tuned for, and resolves them back into LangChain templates at request
time. Every lookup degrades to the caller's local template, so a Langfuse
outage never blocks a summarization.

Dependencies: langfuse, langchain_core, standup_digest.observability.tracing
System role: Prompt version control and retrieval
"""

import logging
from functools import lru_cache
from typing import TYPE_CHECKING, Any

from langchain_core.prompts import BasePromptTemplate, ChatPromptTemplate, PromptTemplate
from langfuse import Langfuse

from standup_digest.configs import get_settings
from standup_digest.observability.prompt_registry.converter import (
    convert_chat_template,
    convert_text_template,
)
from standup_digest.observability.prompt_registry.models import ModelConfig
from standup_digest.observability.tracing import build_langfuse_client

if TYPE_CHECKING:
    from langfuse.api.resources.prompts.types import Prompt

logger = logging.getLogger(__name__)


def to_langchain_template(prompt: "Prompt") -> BasePromptTemplate:
    """
    Convert a fetched Langfuse prompt into a LangChain template.

    Chat prompts become ChatPromptTemplate, text prompts PromptTemplate. The
    Langfuse prompt rides along in the template metadata so generations can
    be linked to the prompt version.
    """
    body = prompt.get_langchain_prompt()
    if isinstance(body, str):
        template: BasePromptTemplate = PromptTemplate.from_template(body)
    else:
        template = ChatPromptTemplate.from_messages(body)
    template.metadata = {"langfuse_prompt": prompt}
    return template


class PromptRegistry:
    """
    Prompt versions stored in Langfuse.

    Registering a template under an existing name creates a new version.
    Without a client the registry is inactive: registration is skipped and
    lookups return the fallback.

    Example:
        >>> registry = get_prompt_registry()
        >>> registry.register(
        ...     "standup-summary-map",
        ...     MAP_PROMPT,
        ...     ModelConfig(model="gemini-2.0-flash", temperature=0.7),
        ...     labels=["production"],
        ... )
    """

    def __init__(self, client: Langfuse | None = None) -> None:
        self._client = client

    @property
    def is_enabled(self) -> bool:
        return self._client is not None

    def register(
        self,
        name: str,
        template: BasePromptTemplate,
        config: ModelConfig,
        labels: list[str] | None = None,
    ) -> "Prompt | None":
        """
        Store a template as the next version of a named prompt.

        Args:
            name: Prompt name
            template: ChatPromptTemplate or PromptTemplate
            config: Model the template is tuned for
            labels: Labels for the new version (e.g. ["production"])

        Returns:
            Prompt: Created version, or None when the registry is inactive

        Raises:
            ValueError: If the template is neither a chat nor a text template
        """
        if self._client is None:
            logger.debug("Prompt registry inactive, skipping registration: name=%s", name)
            return None

        if isinstance(template, ChatPromptTemplate):
            prompt_type, body = "chat", convert_chat_template(template)
        elif isinstance(template, PromptTemplate):
            prompt_type, body = "text", convert_text_template(template)
        else:
            raise ValueError(f"Unsupported template type: {type(template).__name__}")

        labels = labels or []
        prompt = self._client.create_prompt(
            name=name,
            type=prompt_type,
            prompt=body,
            config=config.to_langfuse_config(),
            labels=labels,
        )
        logger.info(
            "Registered %s prompt: name=%s version=%s labels=%s",
            prompt_type, name, prompt.version, labels,
        )
        return prompt

    def fetch(
        self,
        name: str,
        label: str | None = None,
        version: int | None = None,
    ) -> "Prompt | None":
        """
        Fetch one prompt version.

        Args:
            name: Prompt name
            label: Label to select (e.g. "production")
            version: Exact version number

        Returns:
            Prompt: Fetched version, or None when inactive, missing or unreachable
        """
        if self._client is None:
            return None

        kwargs: dict[str, Any] = {"name": name}
        if label:
            kwargs["label"] = label
        if version is not None:
            kwargs["version"] = version

        try:
            return self._client.get_prompt(**kwargs)
        except Exception as e:
            logger.warning("Prompt fetch failed: name=%s error=%s: %s", name, type(e).__name__, e)
            return None

    def resolve(
        self,
        name: str,
        fallback: BasePromptTemplate,
        label: str | None = None,
    ) -> BasePromptTemplate:
        """
        Registry template for a prompt name, or the fallback.

        Args:
            name: Prompt name
            fallback: Local template used when no registry version is available
            label: Label to select

        Returns:
            BasePromptTemplate: Registry template or fallback
        """
        prompt = self.fetch(name, label=label)
        if prompt is None:
            logger.debug("Using local template: name=%s", name)
            return fallback
        logger.debug("Using registry template: name=%s version=%s", name, prompt.version)
        return to_langchain_template(prompt)

    def get_config(self, name: str, label: str | None = None) -> dict[str, Any] | None:
        """Model config stored with a prompt version, or None."""
        prompt = self.fetch(name, label=label)
        return prompt.config if prompt is not None else None


@lru_cache
def get_prompt_registry() -> PromptRegistry:
    """Process-wide registry backed by the configured Langfuse project."""
    return PromptRegistry(build_langfuse_client(get_settings().observability))
