"""
Test suite for dependency injection container.

Verifies that integration clients are built only when configured and that
the service factories wire them into the services.

System role: Verification of DI container
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from standup_digest.api.deps import (
    ServiceCache,
    get_quick_ask_service,
    get_summarization_service,
)
from standup_digest.application.services import QuickAskService, SummarizationService
from standup_digest.boundary.publishing import GoogleDocsPublisher
from standup_digest.boundary.sources import GitHubIssuesSource, SlackStandupSource


class TestServiceCache:
    """Test suite for lazily built integration clients."""

    def test_unconfigured_integrations_are_none(self, settings) -> None:
        """Without credentials nothing is built."""
        settings.slack.bot_token = None
        settings.github.token = None
        settings.google_docs.access_token = None
        cache = ServiceCache(settings)

        assert cache.slack_source is None
        assert cache.github_source is None
        assert cache.publisher is None

    def test_configured_integrations_built_once(self, settings) -> None:
        settings.slack.bot_token = "xoxb-test"
        settings.github.token = "ghp-test"
        settings.google_docs.access_token = "ya29-test"
        settings.google_docs.template_document_id = "template-1"
        cache = ServiceCache(settings)

        assert isinstance(cache.slack_source, SlackStandupSource)
        assert isinstance(cache.github_source, GitHubIssuesSource)
        assert isinstance(cache.publisher, GoogleDocsPublisher)
        assert cache.slack_source is cache.slack_source

    def test_publisher_needs_template(self, settings) -> None:
        settings.google_docs.access_token = "ya29-test"
        settings.google_docs.template_document_id = None

        assert ServiceCache(settings).publisher is None

    @pytest.mark.asyncio
    async def test_aclose_closes_clients(self, settings) -> None:
        settings.slack.bot_token = "xoxb-test"
        cache = ServiceCache(settings)
        source = cache.slack_source
        source.close = AsyncMock()

        await cache.aclose()

        source.close.assert_awaited_once()
        assert cache._slack_source is None


class TestServiceFactories:
    """Test suite for the FastAPI service factories."""

    def test_get_summarization_service(self, settings) -> None:
        cache = MagicMock()

        service = get_summarization_service(cache=cache, settings=settings)

        assert isinstance(service, SummarizationService)
        assert service._slack_source is cache.slack_source
        assert service._publisher is cache.publisher

    def test_get_quick_ask_service(self, settings) -> None:
        assert isinstance(get_quick_ask_service(settings=settings), QuickAskService)
