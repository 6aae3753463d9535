"""Summarization API request/response models.

Request DTOs describe which sources to read and how to label the report;
the response carries the template replacements ready for publishing.

Dependencies: pydantic
System role: API data models for the summarize endpoint
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator

from standup_digest.core.model_factory import ModelProvider
from standup_digest.core.summarization.algorithm import Algorithm

DEFAULT_DOC_NAME = "Generated Document"


class ProjectStatus(str, Enum):
    GREEN = "Green"
    AMBER = "Amber"
    RED = "Red"


class ReportMetadata(BaseModel):
    """Report labelling and the activity window."""

    project_name: str | None = Field(
        default=None,
        description="Project name shown in the report",
        examples=["AI Internal"],
    )
    start_date: datetime = Field(description="Start of the activity window (ISO format)")
    end_date: datetime = Field(description="End of the activity window (ISO format)")
    doc_name: str = Field(
        default=DEFAULT_DOC_NAME,
        min_length=1,
        description="Name of the generated document",
    )
    project_status: ProjectStatus = Field(
        default=ProjectStatus.GREEN,
        description="Project RAG status",
    )

    @model_validator(mode="after")
    def _check_window(self) -> "ReportMetadata":
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be earlier than start_date")
        return self


class SlackQuery(BaseModel):
    """Slack standup source options."""

    enabled: bool = Field(default=True, description="Read standups from Slack")
    channel_name: str | None = Field(
        default=None,
        description="Channel name, with or without '#' (defaults to the configured channel)",
        examples=["proj-ai-internal"],
    )


class GitHubQuery(BaseModel):
    """GitHub issues source options."""

    enabled: bool = Field(default=False, description="Read issues from GitHub")
    owner: str | None = Field(default=None, max_length=50, description="Repository owner")
    repo: str | None = Field(default=None, max_length=50, description="Repository name")
    since: datetime | None = Field(default=None, description="Only issues updated since this time")
    fetch_body: bool = Field(default=False, description="Include issue bodies")
    fetch_comments: bool = Field(default=False, description="Include issue comments")

    @model_validator(mode="after")
    def _check_enabled_fields(self) -> "GitHubQuery":
        if self.enabled:
            missing = [name for name in ("owner", "repo", "since") if getattr(self, name) is None]
            if missing:
                raise ValueError(f"GitHub source enabled but missing: {', '.join(missing)}")
        return self


class SummarizeRequest(BaseModel):
    """Request to summarize project activity into a status report."""

    provider: ModelProvider | None = Field(
        default=None,
        description="Model provider (defaults to the configured provider)",
    )
    model: str | None = Field(
        default=None,
        description="Model name (defaults to the configured model)",
        examples=["gemini-2.0-flash"],
    )
    temperature: float | None = Field(
        default=None,
        ge=0.0,
        le=1.0,
        description="Sampling temperature (defaults to the configured temperature)",
    )
    algorithm: Algorithm = Field(
        default=Algorithm.AUTO,
        description="Summarization algorithm: stuff, map-reduce or auto (by token count)",
    )
    metadata: ReportMetadata
    slack_data: SlackQuery = Field(default_factory=SlackQuery)
    github_data: GitHubQuery = Field(default_factory=GitHubQuery)
    publish: bool = Field(default=True, description="Publish the report to Google Docs")


class ReportReplacements(BaseModel):
    """Values substituted into the report template."""

    model_config = ConfigDict(populate_by_name=True)

    project_name: str | None = Field(default=None, alias="projectName")
    from_date: str = Field(alias="from")
    to_date: str = Field(alias="to")
    project_status: ProjectStatus = Field(alias="projectStatus")
    summary: str = ""
    risk_blocker_action_needed: str = Field(default="", alias="riskBlockerActionNeeded")
    completed: str = ""
    in_progress: str = Field(default="", alias="inProgress")
    in_review: str = Field(default="", alias="inReview")

    def as_template_values(self) -> dict[str, str]:
        """Template keys (camelCase) mapped to strings; missing values become ''."""
        values = self.model_dump(by_alias=True, mode="json")
        return {key: "" if value is None else str(value) for key, value in values.items()}


class SummarizeResponse(BaseModel):
    """Structured report plus run metadata."""

    replacements: ReportReplacements
    doc_name: str
    algorithm: Algorithm = Field(description="Algorithm actually run (never auto)")
    total_tokens: int = Field(ge=0, description="Input token count driving the selection")
    schema_version: str = Field(description="Report schema version")
    document_url: str | None = Field(default=None, description="Published document URL")
