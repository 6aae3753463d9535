"""
GitHub issues source.

Pages through repository issues updated since a given time using the GitHub
GraphQL API. Each issue carries labels, milestone, cross-referenced PRs and
project board field values; body and comments are opt-in.

Dependencies: httpx, langchain_core.documents
System role: GitHub adapter feeding the summarization orchestrator
"""

import logging
from datetime import datetime
from typing import Any

import httpx
from langchain_core.documents import Document

from standup_digest.boundary.sources.base import to_document
from standup_digest.core.exceptions import SourceFetchError

logger = logging.getLogger(__name__)

SOURCE_NAME = "github"

_COMMENTS_FRAGMENT = """
        comments(first: 100) {
          nodes {
            author { login }
            body
            createdAt
            updatedAt
            url
          }
        }"""


def build_issues_query(fetch_body: bool = False, fetch_comments: bool = False) -> str:
    """GraphQL query for one page of issues, optionally with body and comments."""
    return f"""
query ($owner: String!, $repo: String!, $since: DateTime!, $first: Int!, $after: String) {{
  repository(owner: $owner, name: $repo) {{
    issues(
      first: $first
      after: $after
      orderBy: {{ field: UPDATED_AT, direction: ASC }}
      filterBy: {{ since: $since }}
      states: [OPEN, CLOSED]
    ) {{
      pageInfo {{
        hasNextPage
        endCursor
      }}
      nodes {{
        issue_id: number
        title
        state
        {"body" if fetch_body else ""}
        url
        updatedAt
        closedAt
        labels(first: 50) {{ nodes {{ name }} }}
        milestone {{ title dueOn state }}
        crossReferencedPRs: timelineItems(first: 100, itemTypes: [CROSS_REFERENCED_EVENT]) {{
          nodes {{
            ... on CrossReferencedEvent {{
              source {{
                ... on PullRequest {{ pr_id: number title url }}
              }}
            }}
          }}
        }}
        projectItems(first: 10) {{
          nodes {{
            id
            project {{ title number }}
            fieldValues(first: 20) {{
              nodes {{
                ... on ProjectV2ItemFieldSingleSelectValue {{
                  name
                  field {{ ... on ProjectV2SingleSelectField {{ name }} }}
                }}
              }}
            }}
          }}
        }}{_COMMENTS_FRAGMENT if fetch_comments else ""}
      }}
    }}
  }}
}}
"""


class GitHubIssuesSource:
    """Async GitHub GraphQL client for repository issues."""

    def __init__(
        self,
        token: str,
        endpoint: str = "https://api.github.com/graphql",
        page_size: int = 50,
        timeout: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Initialize GitHub source.

        Args:
            token: GitHub token with repo read access
            endpoint: GraphQL endpoint URL
            page_size: Issues requested per page (max 100)
            timeout: HTTP timeout in seconds
            client: Optional preconfigured httpx client
        """
        self.endpoint = endpoint
        self.page_size = page_size
        self.timeout = timeout
        self._token = token
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

    async def __aenter__(self) -> "GitHubIssuesSource":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def _post(self, query: str, variables: dict[str, Any]) -> dict[str, Any]:
        client = await self._get_client()
        try:
            response = await client.post(
                self.endpoint,
                json={"query": query, "variables": variables},
                headers={"Authorization": f"Bearer {self._token}"},
            )
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPError as e:
            logger.error(f"{__name__}:_post - GraphQL request failed: {e}")
            raise SourceFetchError(f"GitHub request failed: {e}", source=SOURCE_NAME) from e

        if payload.get("errors"):
            raise SourceFetchError(
                "GitHub GraphQL error",
                source=SOURCE_NAME,
                details={"errors": payload["errors"]},
            )
        return payload.get("data") or {}

    async def fetch_issues(
        self,
        owner: str,
        repo: str,
        since: datetime,
        fetch_body: bool = False,
        fetch_comments: bool = False,
    ) -> list[dict[str, Any]]:
        """
        Fetch every issue updated since a point in time.

        Args:
            owner: Repository owner
            repo: Repository name
            since: Lower bound on updatedAt
            fetch_body: Include issue bodies
            fetch_comments: Include issue comments

        Returns:
            list[dict]: Issue nodes in ascending update order

        Raises:
            SourceFetchError: On HTTP or GraphQL errors
        """
        logger.info(f"{__name__}:fetch_issues - START repo={owner}/{repo}, since={since.isoformat()}")

        query = build_issues_query(fetch_body, fetch_comments)
        variables: dict[str, Any] = {
            "owner": owner,
            "repo": repo,
            "since": since.isoformat(),
            "first": self.page_size,
            "after": None,
        }
        issues: list[dict[str, Any]] = []

        while True:
            data = await self._post(query, variables)
            repository = data.get("repository")
            if not repository:
                break

            page = repository["issues"]
            issues.extend(page.get("nodes") or [])

            page_info = page.get("pageInfo") or {}
            if not page_info.get("hasNextPage"):
                break
            variables["after"] = page_info.get("endCursor")

        logger.info(f"{__name__}:fetch_issues - END issues={len(issues)}")
        return issues

    async def fetch_documents(
        self,
        owner: str,
        repo: str,
        since: datetime,
        fetch_body: bool = False,
        fetch_comments: bool = False,
    ) -> list[Document]:
        """Issues as a single JSON document tagged with the query."""
        issues = await self.fetch_issues(owner, repo, since, fetch_body, fetch_comments)
        return [
            to_document(
                issues,
                {"source": SOURCE_NAME, "owner": owner, "repo": repo, "since": since.isoformat()},
            )
        ]
