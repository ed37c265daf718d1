"""GitHub integration.

This module provides a client for the GitHub REST API, covering the
pull request, review, check run and search endpoints used by the status
queries.
"""

from __future__ import annotations

from typing import Any

from .base import IntegrationClient
from .models import SEARCH_RESULT_LIMIT

# Primary rate limit for authenticated requests
GITHUB_REQUESTS_PER_HOUR = 5000


class GitHubClient(IntegrationClient):
    """Client for GitHub REST API (pull requests).

    Provides retrieval of pull request metadata, reviews and check runs
    with rate limiting and retry logic.
    """

    API_BASE = "https://api.github.com"

    def __init__(
        self,
        token: str,
        api_base: str = API_BASE,
        max_retries: int = 2,
        timeout: float = 30.0,
    ):
        """Initialize GitHub client.

        Args:
            token: GitHub token, supplied by the caller's configuration
            api_base: REST API root (override for GitHub Enterprise)
            max_retries: Maximum retry attempts
            timeout: Per-request timeout in seconds
        """
        super().__init__(
            api_key=token,
            max_retries=max_retries,
            requests_per_minute=GITHUB_REQUESTS_PER_HOUR // 60,
            timeout=timeout,
        )

        self._api_base = api_base.rstrip("/")
        self._session.headers.update(
            {
                "Authorization": f"Bearer {token}",
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": "2022-11-28",
                "User-Agent": "project-agent",
            }
        )

    @property
    def service(self) -> str:
        return "GitHub"

    @property
    def api_base(self) -> str:
        return self._api_base

    @property
    def repos_url_prefix(self) -> str:
        """Prefix of ``repository_url`` values in search results."""
        return f"{self._api_base}/repos/"

    def get_pull_request(self, repo: str, number: int) -> dict[str, Any]:
        """Fetch pull request metadata.

        Args:
            repo: Repository in "owner/name" form
            number: Pull request number
        """
        return self._request("GET", f"/repos/{repo}/pulls/{number}")

    def get_reviews(self, repo: str, number: int) -> list[dict[str, Any]]:
        """Fetch all reviews submitted on a pull request."""
        data = self._request(
            "GET", f"/repos/{repo}/pulls/{number}/reviews", {"per_page": 100}
        )
        return data if isinstance(data, list) else []

    def get_check_runs(self, repo: str, sha: str) -> list[dict[str, Any]]:
        """Fetch check runs for a commit."""
        data = self._request(
            "GET", f"/repos/{repo}/commits/{sha}/check-runs", {"per_page": 100}
        )
        return data.get("check_runs") or []

    def search_issues(
        self, query: str, limit: int = SEARCH_RESULT_LIMIT
    ) -> list[dict[str, Any]]:
        """Run an issue search and return the top hits.

        Args:
            query: Full search query, qualifiers included
            limit: Maximum results (single page)
        """
        data = self._request(
            "GET", "/search/issues", {"q": query, "per_page": min(limit, 100)}
        )
        items = data.get("items", []) if isinstance(data, dict) else []
        return items[:limit]
