"""Shared fixtures for status component tests."""

from unittest.mock import MagicMock

import pytest

from project_agent.integrations.github import GitHubClient
from project_agent.integrations.jira import JiraClient


@pytest.fixture
def jira():
    """Jira client with every fetch mocked."""
    return MagicMock(spec=JiraClient)


@pytest.fixture
def github():
    """Real GitHub client with fetch methods replaced by mocks."""
    client = GitHubClient(token="test-token")
    client.get_pull_request = MagicMock()
    client.get_reviews = MagicMock(return_value=[])
    client.get_check_runs = MagicMock(return_value=[])
    client.search_issues = MagicMock(return_value=[])
    return client


@pytest.fixture
def make_pr():
    """Factory for raw GitHub pull request documents."""

    def _make_pr(**overrides):
        pr = {
            "number": 42,
            "title": "Add widgets",
            "user": {"login": "dev"},
            "state": "open",
            "draft": False,
            "mergeable": True,
            "mergeable_state": "clean",
            "additions": 120,
            "deletions": 30,
            "changed_files": 4,
            "head": {"sha": "abc123"},
        }
        pr.update(overrides)
        return pr

    return _make_pr
