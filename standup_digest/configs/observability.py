"""
Observability configuration settings.

Langfuse credentials plus the switches for tracing and prompt versioning.

Dependencies: pydantic_settings
System role: Observability configuration for tracing and logging
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ObservabilitySettings(BaseSettings):
    """Langfuse connection and prompt registry switches."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    langfuse_public_key: str | None = Field(default=None, description="Langfuse public key")
    langfuse_secret_key: str | None = Field(default=None, description="Langfuse secret key")
    langfuse_host: str = Field(default="http://localhost:3000", description="Langfuse server URL")
    enable_tracing: bool = Field(default=True, description="Trace summarization runs in Langfuse")
    use_prompt_registry: bool = Field(
        default=False,
        description="Resolve map/reduce/final prompts from Langfuse before local templates",
    )
    prompt_label: str | None = Field(
        default=None,
        description="Label used when fetching prompts from the registry",
    )
    register_prompts_on_startup: bool = Field(
        default=False,
        description="Push the local prompts to Langfuse as a new version at startup",
    )

    @property
    def langfuse_enabled(self) -> bool:
        """Tracing is switched on and both keys are present."""
        return bool(self.enable_tracing and self.langfuse_public_key and self.langfuse_secret_key)
