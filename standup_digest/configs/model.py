"""
Default chat model configuration.

Dependencies: pydantic_settings
System role: Defaults applied when a request omits provider/model/temperature
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ModelSettings(BaseSettings):
    """Default provider, model and temperature."""

    model_config = SettingsConfigDict(
        env_prefix="MODEL_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    provider: str = Field(default="google", description="Default model provider (openai, google)")
    name: str = Field(default="gemini-2.0-flash", description="Default model name")
    temperature: float = Field(default=0.7, ge=0.0, le=1.0, description="Default temperature")
