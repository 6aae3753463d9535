"""
Source and publisher integration settings.

Credentials and endpoints for Slack, GitHub and Google Docs.

Dependencies: pydantic_settings
System role: Configuration for the document sources and the publisher
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class SlackSettings(BaseSettings):
    """Slack Web API configuration."""

    model_config = SettingsConfigDict(
        env_prefix="SLACK_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    bot_token: str | None = Field(default=None, description="Slack bot token (xoxb-...)")
    api_base_url: str = Field(default="https://slack.com/api", description="Slack Web API base URL")
    standup_username: str = Field(
        default="Daily Standup",
        description="Bot username marking standup parent messages",
    )
    default_channel: str = Field(default="proj-ai-internal", description="Channel used when none is given")


class GitHubSettings(BaseSettings):
    """GitHub GraphQL configuration."""

    model_config = SettingsConfigDict(
        env_prefix="GITHUB_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    token: str | None = Field(default=None, description="GitHub personal access token")
    graphql_endpoint: str = Field(
        default="https://api.github.com/graphql",
        description="GitHub GraphQL endpoint",
    )
    page_size: int = Field(default=50, gt=0, le=100, description="Issues per GraphQL page")


class GoogleDocsSettings(BaseSettings):
    """Google Docs publisher configuration."""

    model_config = SettingsConfigDict(
        env_prefix="GOOGLE_DOCS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    access_token: str | None = Field(default=None, description="OAuth access token for Drive/Docs")
    template_document_id: str | None = Field(
        default=None,
        description="Document copied for every report",
    )
    folder_id: str | None = Field(default=None, description="Drive folder receiving generated reports")
    drive_api_url: str = Field(default="https://www.googleapis.com/drive/v3", description="Drive API base")
    docs_api_url: str = Field(default="https://docs.googleapis.com/v1", description="Docs API base")
    tag_prefix: str = Field(default="rtai-", description="Prefix inside template placeholder tags")
    tag_suffix: str = Field(default="-rtai", description="Suffix inside template placeholder tags")

    @property
    def is_configured(self) -> bool:
        """Whether enough settings exist to publish documents."""
        return bool(self.access_token and self.template_document_id)
