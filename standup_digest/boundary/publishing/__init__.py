"""
Report publishers.

Exports: DocumentPublisher, PublishResult, GoogleDocsPublisher

Dependencies: httpx, pydantic
System role: Report destinations for the summarization orchestrator
"""

from standup_digest.boundary.publishing.base import DocumentPublisher, PublishResult
from standup_digest.boundary.publishing.google_docs import GoogleDocsPublisher

__all__ = ["DocumentPublisher", "PublishResult", "GoogleDocsPublisher"]
