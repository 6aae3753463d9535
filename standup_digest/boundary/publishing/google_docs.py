"""
Google Docs publisher.

Copies a template document, optionally moves the copy into an output folder,
and replaces every placeholder tag with its report value in one batchUpdate.

Placeholder tags look like {{{rtai-summary-rtai}}}: the replacement key
wrapped in a configurable prefix/suffix and triple braces.

Dependencies: httpx
System role: Report destination for the summarization orchestrator
"""

import logging
from typing import Any

import httpx

from standup_digest.boundary.publishing.base import PublishResult
from standup_digest.core.exceptions import PublishingError

logger = logging.getLogger(__name__)

DOCUMENT_URL_TEMPLATE = "https://docs.google.com/document/d/{document_id}/edit"


def template_tag(key: str, prefix: str = "rtai-", suffix: str = "-rtai") -> str:
    """Placeholder text for a replacement key inside the template document."""
    return "{{{" + f"{prefix}{key}{suffix}" + "}}}"


def build_replace_requests(
    replacements: dict[str, str | list[str]],
    prefix: str = "rtai-",
    suffix: str = "-rtai",
) -> list[dict[str, Any]]:
    """One replaceAllText request per key; list values are joined by newlines."""
    requests = []
    for key, value in replacements.items():
        text = "\n".join(value) if isinstance(value, list) else value
        requests.append({
            "replaceAllText": {
                "containsText": {"text": template_tag(key, prefix, suffix), "matchCase": True},
                "replaceText": text,
            }
        })
    return requests


class GoogleDocsPublisher:
    """Publishes reports by filling a Google Docs template through the REST APIs."""

    def __init__(
        self,
        access_token: str,
        template_document_id: str,
        folder_id: str | None = None,
        drive_api_url: str = "https://www.googleapis.com/drive/v3",
        docs_api_url: str = "https://docs.googleapis.com/v1",
        tag_prefix: str = "rtai-",
        tag_suffix: str = "-rtai",
        timeout: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Initialize publisher.

        Args:
            access_token: OAuth access token with Drive and Docs scopes
            template_document_id: Document copied for every report
            folder_id: Optional Drive folder for generated documents
            drive_api_url: Drive API base URL
            docs_api_url: Docs API base URL
            tag_prefix: Placeholder prefix
            tag_suffix: Placeholder suffix
            timeout: HTTP timeout in seconds
            client: Optional preconfigured httpx client
        """
        self.template_document_id = template_document_id
        self.folder_id = folder_id
        self.drive_api_url = drive_api_url.rstrip("/")
        self.docs_api_url = docs_api_url.rstrip("/")
        self.tag_prefix = tag_prefix
        self.tag_suffix = tag_suffix
        self.timeout = timeout
        self._token = access_token
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

    @property
    def _headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self._token}"}

    async def _copy_template(self, client: httpx.AsyncClient, output_name: str) -> dict[str, Any]:
        response = await client.post(
            f"{self.drive_api_url}/files/{self.template_document_id}/copy",
            params={"fields": "id,parents", "supportsAllDrives": "true"},
            json={"name": output_name},
            headers=self._headers,
        )
        response.raise_for_status()
        return response.json()

    async def _move_to_folder(
        self,
        client: httpx.AsyncClient,
        document_id: str,
        parents: list[str],
    ) -> None:
        response = await client.patch(
            f"{self.drive_api_url}/files/{document_id}",
            params={
                "addParents": self.folder_id,
                "removeParents": ",".join(parents),
                "fields": "id,parents",
                "supportsAllDrives": "true",
            },
            headers=self._headers,
        )
        response.raise_for_status()

    async def publish(self, replacements: dict[str, str], output_name: str) -> PublishResult:
        """
        Create a document from the template and fill in the replacements.

        Args:
            replacements: Template key -> value
            output_name: Name of the new document

        Returns:
            PublishResult: Edit URL and id of the new document

        Raises:
            PublishingError: If any Drive or Docs call fails
        """
        logger.info(f"{__name__}:publish - START name={output_name}")
        client = await self._get_client()

        try:
            copied = await self._copy_template(client, output_name)
            document_id = copied.get("id")
            if not document_id:
                raise PublishingError("Failed to create document copy - no document ID returned")
            logger.info(f"{__name__}:publish - template copied: {document_id}")

            if self.folder_id:
                await self._move_to_folder(client, document_id, copied.get("parents") or [])

            response = await client.post(
                f"{self.docs_api_url}/documents/{document_id}:batchUpdate",
                json={
                    "requests": build_replace_requests(
                        replacements, self.tag_prefix, self.tag_suffix
                    )
                },
                headers=self._headers,
            )
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error(f"{__name__}:publish - Google API call failed: {e}")
            raise PublishingError(
                f"Google Docs publishing failed: {e}",
                {"output_name": output_name},
            ) from e

        url = DOCUMENT_URL_TEMPLATE.format(document_id=document_id)
        logger.info(f"{__name__}:publish - END url={url}")
        return PublishResult(url=url, document_id=document_id)
