"""
API data models.

Pydantic DTOs for the HTTP surface.

Dependencies: pydantic
System role: Request/response contracts
"""

from standup_digest.models.common import ErrorResponse
from standup_digest.models.quick_ask import QuickAskRequest, QuickAskResponse
from standup_digest.models.summarize import (
    GitHubQuery,
    ProjectStatus,
    ReportMetadata,
    ReportReplacements,
    SlackQuery,
    SummarizeRequest,
    SummarizeResponse,
)

__all__ = [
    "ErrorResponse",
    "QuickAskRequest",
    "QuickAskResponse",
    "GitHubQuery",
    "ProjectStatus",
    "ReportMetadata",
    "ReportReplacements",
    "SlackQuery",
    "SummarizeRequest",
    "SummarizeResponse",
]
