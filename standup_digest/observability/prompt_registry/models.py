"""
Model configuration stored next to each prompt version in Langfuse.

Dependencies: pydantic, standup_digest.core.model_factory
System role: Configuration validation for prompt-model pairs
"""

from typing import Any

from pydantic import BaseModel, Field

from standup_digest.configs.model import ModelSettings
from standup_digest.core.model_factory import ModelProvider


class ModelConfig(BaseModel):
    """
    The model a prompt version was written and tested against.

    Attributes:
        model: Model name (e.g. "gemini-2.0-flash", "gpt-4o-mini")
        provider: Provider of the model
        temperature: Sampling temperature, same range the model factory accepts
        max_tokens: Response token cap
        extra: Provider-specific parameters merged into the stored config
    """

    model: str
    provider: ModelProvider | None = None
    temperature: float | None = Field(default=None, ge=0.0, le=1.0)
    max_tokens: int | None = Field(default=None, gt=0)
    extra: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_model_settings(cls, settings: ModelSettings) -> "ModelConfig":
        """Config for the deployment's default model."""
        return cls(
            model=settings.name,
            provider=settings.provider,
            temperature=settings.temperature,
        )

    def to_langfuse_config(self) -> dict[str, Any]:
        """Flat config dict for Langfuse; unset fields are left out."""
        config = self.model_dump(mode="json", exclude_none=True, exclude={"extra"})
        config.update(self.extra)
        return config
