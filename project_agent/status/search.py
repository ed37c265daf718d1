"""Pull request search normalization."""

from __future__ import annotations

from typing import Any

from ..integrations.errors import call_with_policy
from ..integrations.github import GitHubClient
from ..integrations.models import SEARCH_RESULT_LIMIT, SearchHit

PULL_REQUEST_QUALIFIER = "is:pr"


def to_search_hit(item: dict[str, Any], repos_url_prefix: str) -> SearchHit:
    """Project a raw search result onto a SearchHit.

    Args:
        item: Search result from the issues search endpoint
        repos_url_prefix: API prefix stripped from ``repository_url``
    """
    repository_url = item.get("repository_url") or ""
    if repository_url.startswith(repos_url_prefix):
        repository_url = repository_url[len(repos_url_prefix) :]

    return SearchHit(
        number=item.get("number", 0),
        title=item.get("title", ""),
        author=(item.get("user") or {}).get("login", ""),
        repo=repository_url,
        state=item.get("state", ""),
    )


def search_pull_requests(
    github: GitHubClient, query: str, limit: int = SEARCH_RESULT_LIMIT
) -> list[SearchHit]:
    """Search pull requests only, returning the top ``limit`` hits."""
    items = call_with_policy(
        "search_pull_requests",
        lambda: github.search_issues(f"{PULL_REQUEST_QUALIFIER} {query}", limit),
        fallback=list,
    )
    return [to_search_hit(item, github.repos_url_prefix) for item in items[:limit]]
