"""
Application settings.

Nests every config group under one Settings object so services receive a
single dependency.

Dependencies: pydantic_settings, standup_digest.configs
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from pydantic import Field

from standup_digest.configs.base import BaseSettings
from standup_digest.configs.model import ModelSettings
from standup_digest.configs.observability import ObservabilitySettings
from standup_digest.configs.sources import GitHubSettings, GoogleDocsSettings, SlackSettings
from standup_digest.configs.summarization import SummarizationSettings


class Settings(BaseSettings):
    """
    Service settings plus one nested group per concern.

    Each group reads its own env prefix (MODEL_, SUMMARIZATION_, SLACK_,
    GITHUB_, GOOGLE_DOCS_; Langfuse keys are unprefixed).
    """

    llm: ModelSettings = Field(default_factory=ModelSettings)
    summarization: SummarizationSettings = Field(default_factory=SummarizationSettings)
    observability: ObservabilitySettings = Field(default_factory=ObservabilitySettings)
    slack: SlackSettings = Field(default_factory=SlackSettings)
    github: GitHubSettings = Field(default_factory=GitHubSettings)
    google_docs: GoogleDocsSettings = Field(default_factory=GoogleDocsSettings)


@lru_cache
def get_settings() -> Settings:
    """Settings read once per process."""
    return Settings()
