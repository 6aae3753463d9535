"""Tests for the Google Docs publisher."""

import json

import httpx
import pytest

from standup_digest.boundary.publishing.google_docs import (
    GoogleDocsPublisher,
    build_replace_requests,
    template_tag,
)
from standup_digest.core.exceptions import PublishingError

REPLACEMENTS = {"projectName": "AI Internal", "summary": "Sprint on track."}


def google_api(requests: list, copy_response: dict | None = None, fail_on: str | None = None) -> httpx.AsyncClient:
    """AsyncClient recording Drive/Docs calls."""

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        path = request.url.path
        if fail_on and fail_on in path:
            return httpx.Response(500, json={"error": "backend"})
        if path.endswith("/copy"):
            return httpx.Response(200, json=copy_response or {"id": "doc-1", "parents": ["root-folder"]})
        return httpx.Response(200, json={})

    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


class TestTemplateTags:
    def test_default_tag(self) -> None:
        assert template_tag("summary") == "{{{rtai-summary-rtai}}}"

    def test_custom_affixes(self) -> None:
        assert template_tag("from", prefix="x-", suffix="") == "{{{x-from}}}"

    def test_list_values_joined(self) -> None:
        requests = build_replace_requests({"completed": ["a", "b"]})
        assert requests[0]["replaceAllText"]["replaceText"] == "a\nb"
        assert requests[0]["replaceAllText"]["containsText"] == {
            "text": "{{{rtai-completed-rtai}}}",
            "matchCase": True,
        }


class TestPublish:
    """Tests for the copy, move and fill sequence."""

    @pytest.mark.asyncio
    async def test_copy_and_fill(self) -> None:
        requests: list = []
        publisher = GoogleDocsPublisher("ya29-test", "template-1", client=google_api(requests))

        result = await publisher.publish(REPLACEMENTS, "AI Internal - Week 33")

        assert result.url == "https://docs.google.com/document/d/doc-1/edit"
        assert result.document_id == "doc-1"
        assert len(requests) == 2

        copy, batch = requests
        assert copy.url.path == "/drive/v3/files/template-1/copy"
        assert json.loads(copy.content) == {"name": "AI Internal - Week 33"}
        assert copy.headers["Authorization"] == "Bearer ya29-test"
        assert batch.url.path == "/v1/documents/doc-1:batchUpdate"
        body = json.loads(batch.content)
        assert len(body["requests"]) == 2

    @pytest.mark.asyncio
    async def test_moves_into_folder(self) -> None:
        requests: list = []
        publisher = GoogleDocsPublisher(
            "ya29-test", "template-1", folder_id="reports", client=google_api(requests)
        )

        await publisher.publish(REPLACEMENTS, "Week 33")

        move = requests[1]
        assert move.method == "PATCH"
        assert move.url.params["addParents"] == "reports"
        assert move.url.params["removeParents"] == "root-folder"

    @pytest.mark.asyncio
    async def test_copy_without_id(self) -> None:
        publisher = GoogleDocsPublisher(
            "ya29-test", "template-1", client=google_api([], copy_response={"parents": []})
        )

        with pytest.raises(PublishingError, match="no document ID"):
            await publisher.publish(REPLACEMENTS, "Week 33")

    @pytest.mark.asyncio
    async def test_batch_update_failure(self) -> None:
        publisher = GoogleDocsPublisher(
            "ya29-test", "template-1", client=google_api([], fail_on="batchUpdate")
        )

        with pytest.raises(PublishingError) as exc_info:
            await publisher.publish(REPLACEMENTS, "Week 33")

        assert exc_info.value.details["output_name"] == "Week 33"
