"""Jira Cloud integration.

This module provides a client for the Jira REST, Agile and
development-status APIs. It only fetches raw documents; projection into
the data model happens in the status components.
"""

from __future__ import annotations

from typing import Any

from .base import IntegrationClient

ISSUE_FIELDS = "summary,status,assignee,priority"
SPRINT_ISSUE_FIELDS = "summary,status,assignee"


class JiraClient(IntegrationClient):
    """Client for the Jira Cloud REST API.

    Authenticates with an account email and API token over basic auth.
    """

    def __init__(
        self,
        base_url: str,
        email: str,
        api_token: str,
        max_retries: int = 2,
        timeout: float = 30.0,
    ):
        """Initialize Jira client.

        Args:
            base_url: Site URL (e.g., "https://acme.atlassian.net")
            email: Account email paired with the API token
            api_token: Jira API token
            max_retries: Maximum retry attempts
            timeout: Per-request timeout in seconds
        """
        super().__init__(
            api_key=api_token,
            max_retries=max_retries,
            requests_per_minute=100,
            timeout=timeout,
        )

        self.base_url = base_url.rstrip("/")
        self._session.auth = (email, api_token)
        self._session.headers.update({"Accept": "application/json"})

    @property
    def service(self) -> str:
        return "Jira"

    @property
    def api_base(self) -> str:
        return self.base_url

    def get_issue(self, issue_key: str) -> dict[str, Any]:
        """Fetch an issue with the fields the status view needs."""
        return self._request(
            "GET", f"/rest/api/3/issue/{issue_key}", {"fields": ISSUE_FIELDS}
        )

    def get_dev_panel(self, issue_id: str) -> dict[str, Any]:
        """Fetch the development panel's pull request details for an issue.

        Args:
            issue_id: Numeric issue id (not the key)

        Returns:
            Development panel document with a ``detail`` list
        """
        params = {
            "issueId": issue_id,
            "applicationType": "GitHub",
            "dataType": "pullrequest",
        }
        return self._request("GET", "/rest/dev-status/1.0/issue/detail", params)

    def get_boards(self, project_key: str) -> list[dict[str, Any]]:
        """List boards associated with a project."""
        data = self._request(
            "GET", "/rest/agile/1.0/board", {"projectKeyOrId": project_key}
        )
        return data.get("values") or []

    def get_active_sprints(self, board_id: int | str) -> list[dict[str, Any]]:
        """List active sprints on a board (usually zero or one)."""
        data = self._request(
            "GET", f"/rest/agile/1.0/board/{board_id}/sprint", {"state": "active"}
        )
        return data.get("values") or []

    def get_sprint_issues(self, sprint_id: int | str) -> list[dict[str, Any]]:
        """List issues in a sprint."""
        data = self._request(
            "GET",
            f"/rest/agile/1.0/sprint/{sprint_id}/issue",
            {"fields": SPRINT_ISSUE_FIELDS},
        )
        return data.get("issues") or []
