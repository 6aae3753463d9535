"""
Slack standup source.

Reads a channel's "Daily Standup" bot threads through the Slack Web API and
formats the replies as {iso_timestamp: [{name, user, standup}]}.

Flow: channel name -> id (conversations.list) -> history in the window
(conversations.history) -> standup parents -> thread replies
(conversations.replies) -> reply authors (users.info, cached per fetch).

Dependencies: httpx, langchain_core.documents
System role: Slack adapter feeding the summarization orchestrator
"""

import logging
from datetime import datetime
from typing import Any

import httpx
from langchain_core.documents import Document

from standup_digest.boundary.sources.base import to_document
from standup_digest.core.exceptions import SourceFetchError, ValidationError
from standup_digest.core.formatting import format_date, to_iso_timestamp

logger = logging.getLogger(__name__)

SOURCE_NAME = "slack"
HISTORY_PAGE_LIMIT = 999
LIST_PAGE_LIMIT = 1000
REPLIES_PAGE_LIMIT = 100


class SlackStandupSource:
    """
    Async Slack Web API client for standup threads.

    Uses httpx with a lazily created client; pass a client to share a
    connection pool or to inject a mock transport.
    """

    def __init__(
        self,
        bot_token: str,
        base_url: str = "https://slack.com/api",
        standup_username: str = "Daily Standup",
        default_channel: str | None = None,
        timeout: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Initialize Slack source.

        Args:
            bot_token: Slack bot token
            base_url: Web API base URL
            standup_username: Substring identifying standup bot messages
            default_channel: Channel used when a query omits one
            timeout: HTTP timeout in seconds
            client: Optional preconfigured httpx client
        """
        self.base_url = base_url.rstrip("/")
        self.standup_username = standup_username
        self.default_channel = default_channel
        self.timeout = timeout
        self._token = bot_token
        self._client = client

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client (lazy init)."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout)
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "SlackStandupSource":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def _call(self, method: str, params: dict[str, Any]) -> dict[str, Any]:
        """Call a Web API method; HTTP errors and ok=false raise SourceFetchError."""
        client = await self._get_client()
        try:
            response = await client.get(
                f"{self.base_url}/{method}",
                params={key: value for key, value in params.items() if value is not None},
                headers={"Authorization": f"Bearer {self._token}"},
            )
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as e:
            logger.error(f"{__name__}:_call - {method} failed: {e}")
            raise SourceFetchError(
                f"Slack request failed: {e}",
                source=SOURCE_NAME,
                details={"method": method},
            ) from e

        if not data.get("ok"):
            error = data.get("error", "unknown_error")
            logger.error(f"{__name__}:_call - {method} returned error={error}")
            raise SourceFetchError(
                f"Slack API error: {error}",
                source=SOURCE_NAME,
                details={"method": method},
            )
        return data

    async def get_channel_id(self, channel_name: str) -> str:
        """
        Resolve a channel name (with or without '#') to its id.

        Raises:
            SourceFetchError: If the channel does not exist or the API fails
        """
        clean_name = channel_name.lstrip("#")
        cursor: str | None = None

        while True:
            data = await self._call(
                "conversations.list",
                {
                    "limit": LIST_PAGE_LIMIT,
                    "cursor": cursor,
                    "exclude_archived": "true",
                    "types": "public_channel,private_channel",
                },
            )
            for channel in data.get("channels", []):
                if channel.get("name") == clean_name and channel.get("id"):
                    logger.debug(f"{__name__}:get_channel_id - #{clean_name} -> {channel['id']}")
                    return channel["id"]

            cursor = (data.get("response_metadata") or {}).get("next_cursor")
            if not cursor:
                break

        raise SourceFetchError(
            f"Channel #{clean_name} not found",
            source=SOURCE_NAME,
            details={"channel_name": clean_name},
        )

    async def get_messages(
        self,
        channel_id: str,
        start_date: datetime | None = None,
        end_date: datetime | None = None,
    ) -> list[dict[str, Any]]:
        """Fetch every channel message in the window, following cursors."""
        messages: list[dict[str, Any]] = []
        cursor: str | None = None

        while True:
            data = await self._call(
                "conversations.history",
                {
                    "channel": channel_id,
                    "cursor": cursor,
                    "oldest": str(start_date.timestamp()) if start_date else None,
                    "latest": str(end_date.timestamp()) if end_date else None,
                    "limit": HISTORY_PAGE_LIMIT,
                },
            )
            messages.extend(data.get("messages", []))

            cursor = (data.get("response_metadata") or {}).get("next_cursor")
            if not cursor:
                break

        logger.debug(f"{__name__}:get_messages - {len(messages)} messages from {channel_id}")
        return messages

    def extract_standup_messages(self, messages: list[dict[str, Any]]) -> list[dict[str, Any]]:
        """Keep bot messages posted under the standup username."""
        return [
            msg
            for msg in messages
            if msg.get("subtype") == "bot_message"
            and self.standup_username in (msg.get("username") or "")
        ]

    async def get_user_name(self, user_id: str, cache: dict[str, str]) -> str:
        """Real name of a user, memoized in the caller's cache."""
        if user_id not in cache:
            data = await self._call("users.info", {"user": user_id})
            user = data.get("user") or {}
            cache[user_id] = user.get("real_name") or user.get("name") or ""
        return cache[user_id]

    async def get_replies(
        self,
        channel_id: str,
        thread_ts: str,
        user_cache: dict[str, str],
    ) -> list[dict[str, Any]]:
        """Thread replies (parent excluded) with author names resolved."""
        replies: list[dict[str, Any]] = []
        cursor: str | None = None

        while True:
            data = await self._call(
                "conversations.replies",
                {
                    "channel": channel_id,
                    "ts": thread_ts,
                    "cursor": cursor,
                    "limit": REPLIES_PAGE_LIMIT,
                },
            )
            for msg in data.get("messages", []):
                if msg.get("ts") == thread_ts:
                    continue
                user_id = msg.get("user")
                replies.append({
                    "user": user_id,
                    "ts": msg.get("ts"),
                    "text": msg.get("text"),
                    "name": await self.get_user_name(user_id, user_cache) if user_id else "",
                })

            cursor = (data.get("response_metadata") or {}).get("next_cursor")
            if not cursor:
                break

        return replies

    @staticmethod
    def format_standups(threads: list[tuple[dict[str, Any], list[dict[str, Any]]]]) -> dict[str, list[dict[str, str]]]:
        """
        Group replies by parent timestamp.

        Replies without text, author name or user id are dropped, and so are
        threads left with no entries.
        """
        formatted: dict[str, list[dict[str, str]]] = {}
        for parent, replies in threads:
            if not parent.get("ts"):
                continue
            entries = [
                {"name": reply["name"], "user": reply["user"], "standup": reply["text"]}
                for reply in replies
                if reply.get("text") and reply.get("name") and reply.get("user")
            ]
            if entries:
                formatted.setdefault(to_iso_timestamp(parent["ts"]), []).extend(entries)
        return formatted

    async def fetch_standups(
        self,
        channel_name: str | None = None,
        start_date: datetime | None = None,
        end_date: datetime | None = None,
    ) -> dict[str, list[dict[str, str]]]:
        """
        Fetch and format the standups posted in a channel within a window.

        Args:
            channel_name: Channel name (defaults to default_channel)
            start_date: Window start
            end_date: Window end

        Returns:
            dict: {iso_timestamp: [{name, user, standup}]}

        Raises:
            SourceFetchError: On any Slack API failure
            ValidationError: If no channel is given and no default is configured
        """
        channel_name = channel_name or self.default_channel
        if not channel_name:
            raise ValidationError("channel_name is required", field="slack_data.channel_name")

        logger.info(f"{__name__}:fetch_standups - START channel={channel_name}")

        channel_id = await self.get_channel_id(channel_name)
        messages = await self.get_messages(channel_id, start_date, end_date)
        parents = self.extract_standup_messages(messages)

        user_cache: dict[str, str] = {}
        threads = []
        for parent in parents:
            if not parent.get("ts"):
                continue
            replies = await self.get_replies(channel_id, parent["ts"], user_cache)
            logger.debug(f"{__name__}:fetch_standups - {len(replies)} replies for {parent['ts']}")
            threads.append((parent, replies))

        standups = self.format_standups(threads)
        logger.info(f"{__name__}:fetch_standups - END threads={len(standups)}")
        return standups

    async def fetch_documents(
        self,
        channel_name: str | None = None,
        start_date: datetime | None = None,
        end_date: datetime | None = None,
    ) -> list[Document]:
        """Standups as a single JSON document tagged with the query."""
        channel_name = channel_name or self.default_channel
        standups = await self.fetch_standups(channel_name, start_date, end_date)
        metadata = {"source": SOURCE_NAME, "channel_name": channel_name or ""}
        if start_date:
            metadata["start_date"] = format_date(start_date)
        if end_date:
            metadata["end_date"] = format_date(end_date)
        return [to_document(standups, metadata)]
