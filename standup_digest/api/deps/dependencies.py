"""
Dependency injection container.

Factory functions for FastAPI dependencies. Integrations are built lazily
from settings and shared across requests; an integration without
credentials is left as None and the service reports it when requested.

Dependencies: standup_digest.configs, standup_digest.application, standup_digest.boundary
System role: DI container for service injection
"""

import logging

from fastapi import Depends

from standup_digest.application.services import QuickAskService, SummarizationService
from standup_digest.boundary.publishing import GoogleDocsPublisher
from standup_digest.boundary.sources import GitHubIssuesSource, SlackStandupSource
from standup_digest.configs import Settings, get_settings

logger = logging.getLogger(__name__)


class ServiceCache:
    """Container for cached integration clients."""

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings
        self._slack_source: SlackStandupSource | None = None
        self._github_source: GitHubIssuesSource | None = None
        self._publisher: GoogleDocsPublisher | None = None

    @property
    def settings(self) -> Settings:
        return self._settings or get_settings()

    @property
    def slack_source(self) -> SlackStandupSource | None:
        """Get cached Slack source (None without a bot token)."""
        slack = self.settings.slack
        if self._slack_source is None and slack.bot_token:
            self._slack_source = SlackStandupSource(
                bot_token=slack.bot_token,
                base_url=slack.api_base_url,
                standup_username=slack.standup_username,
                default_channel=slack.default_channel,
            )
        return self._slack_source

    @property
    def github_source(self) -> GitHubIssuesSource | None:
        """Get cached GitHub source (None without a token)."""
        github = self.settings.github
        if self._github_source is None and github.token:
            self._github_source = GitHubIssuesSource(
                token=github.token,
                endpoint=github.graphql_endpoint,
                page_size=github.page_size,
            )
        return self._github_source

    @property
    def publisher(self) -> GoogleDocsPublisher | None:
        """Get cached Google Docs publisher (None unless configured)."""
        docs = self.settings.google_docs
        if self._publisher is None and docs.is_configured:
            self._publisher = GoogleDocsPublisher(
                access_token=docs.access_token,
                template_document_id=docs.template_document_id,
                folder_id=docs.folder_id,
                drive_api_url=docs.drive_api_url,
                docs_api_url=docs.docs_api_url,
                tag_prefix=docs.tag_prefix,
                tag_suffix=docs.tag_suffix,
            )
        return self._publisher

    async def aclose(self) -> None:
        """Close HTTP clients and clear cached instances."""
        for client in (self._slack_source, self._github_source, self._publisher):
            if client is not None:
                await client.close()
        self._slack_source = None
        self._github_source = None
        self._publisher = None


# Global service cache
_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


def get_settings_dependency() -> Settings:
    """Get settings singleton."""
    return get_settings()


def get_summarization_service(
    cache: ServiceCache = Depends(get_service_cache),
    settings: Settings = Depends(get_settings_dependency),
) -> SummarizationService:
    """
    Get summarization service instance.

    Args:
        cache: Shared integration clients
        settings: Application settings

    Returns:
        SummarizationService: Service wired to the configured sources and publisher
    """
    return SummarizationService(
        slack_source=cache.slack_source,
        github_source=cache.github_source,
        publisher=cache.publisher,
        settings=settings,
    )


def get_quick_ask_service(
    settings: Settings = Depends(get_settings_dependency),
) -> QuickAskService:
    """Get quick-ask service instance."""
    return QuickAskService(settings=settings)
