"""
Document sources.

Exports: DocumentSource, SlackStandupSource, GitHubIssuesSource

Dependencies: httpx, langchain_core
System role: Activity inputs for the summarization orchestrator
"""

from standup_digest.boundary.sources.base import DocumentSource, to_document
from standup_digest.boundary.sources.github_client import GitHubIssuesSource
from standup_digest.boundary.sources.slack_client import SlackStandupSource

__all__ = ["DocumentSource", "to_document", "GitHubIssuesSource", "SlackStandupSource"]
