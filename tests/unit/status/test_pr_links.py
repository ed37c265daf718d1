"""Tests for linked pull request resolution."""

import pytest
import requests

from project_agent.integrations.errors import TransportFault
from project_agent.integrations.models import LinkedPR
from project_agent.status.pr_links import (
    LinkedPRResolver,
    parse_pull_request_url,
    resolve_linked_prs,
)


def panel(*references):
    return {"detail": [{"pullRequests": list(references)}]}


class TestParsePullRequestUrl:
    """Test the pull request URL grammar."""

    def test_valid_url(self):
        """Test a canonical pull request URL."""
        parsed = parse_pull_request_url("https://github.com/acme/widgets/pull/42")
        assert parsed.ok
        assert parsed.repo == "acme/widgets"
        assert parsed.number == 42

    def test_trailing_path_and_query(self):
        """Test sub-pages, queries and fragments are ignored."""
        parsed = parse_pull_request_url(
            "https://github.com/acme/widgets/pull/42/files?w=1#diff-1"
        )
        assert parsed.ok
        assert (parsed.repo, parsed.number) == ("acme/widgets", 42)

    @pytest.mark.parametrize(
        "url,reason",
        [
            (None, "missing url"),
            ("", "missing url"),
            ("https://gitlab.com/acme/widgets/pull/42", "not a github.com url"),
            ("https://github.com/acme", "missing owner or repository"),
            ("https://github.com//widgets/pull/1", "missing owner or repository"),
            ("https://github.com/acme/widgets/issues/42", "not a pull request url"),
            ("https://github.com/acme/widgets/pull/", "missing pull request number"),
            ("https://github.com/acme/widgets/pull/abc", "missing pull request number"),
            ("https://github.com/acme/widgets/pull/٤٢", "missing pull request number"),
            ("https://github.com/acme/widgets/pull/²", "missing pull request number"),
        ],
    )
    def test_malformed(self, url, reason):
        """Test malformed URLs are reported as failures."""
        parsed = parse_pull_request_url(url)
        assert not parsed.ok
        assert parsed.error == reason


class TestResolveLinkedPRs:
    """Test extraction from development panel documents."""

    def test_single_open_pr(self):
        """Test a single open pull request."""
        result = resolve_linked_prs(
            panel({"url": "https://github.com/acme/widgets/pull/42", "status": "OPEN"})
        )
        assert result == [LinkedPR(repo="acme/widgets", number=42, state="open")]
        assert [pr.to_dict() for pr in result] == [
            {"repo": "acme/widgets", "number": 42, "state": "open"}
        ]

    def test_missing_status_is_unknown(self):
        """Test missing status falls back to unknown."""
        result = resolve_linked_prs(panel({"url": "https://github.com/a/b/pull/1"}))
        assert result[0].state == "unknown"

    def test_malformed_references_dropped(self):
        """Test malformed or missing URLs are dropped without raising."""
        result = resolve_linked_prs(
            panel(
                {"status": "OPEN"},
                {"url": "not a url", "status": "MERGED"},
                {"url": "https://github.com/a/b/pull/7", "status": "MERGED"},
            )
        )
        assert result == [LinkedPR("a/b", 7, "merged")]

    def test_non_ascii_digits_end_the_number(self):
        """Test only ASCII digits are read as the pull request number."""
        result = resolve_linked_prs(
            panel({"url": "https://github.com/acme/widgets/pull/4²", "status": "OPEN"})
        )
        assert result == [LinkedPR("acme/widgets", 4, "open")]

    @pytest.mark.parametrize(
        "document",
        [
            None,
            {"detail": None},
            {"detail": "oops"},
            {"detail": [None, 3]},
            {"detail": [{"pullRequests": [None, "x"]}]},
            {"detail": [{"pullRequests": {"url": "https://github.com/a/b/pull/1"}}]},
            {"detail": [{"pullRequests": [{"url": 42, "status": "OPEN"}]}]},
        ],
    )
    def test_malformed_panel_shapes(self, document):
        """Test unexpected panel shapes yield no pull requests."""
        assert resolve_linked_prs(document) == []

    def test_non_string_status_is_unknown(self):
        """Test a non-string status falls back to unknown."""
        result = resolve_linked_prs(
            panel({"url": "https://github.com/a/b/pull/1", "status": {"name": "OPEN"}})
        )
        assert result == [LinkedPR("a/b", 1, "unknown")]

    def test_multiple_details(self):
        """Test pull requests across several detail groups keep order."""
        document = {
            "detail": [
                {"pullRequests": [{"url": "https://github.com/a/b/pull/1"}]},
                {"pullRequests": []},
                {},
                {"pullRequests": [{"url": "https://github.com/c/d/pull/2"}]},
            ]
        }
        assert [pr.number for pr in resolve_linked_prs(document)] == [1, 2]

    def test_empty_panel(self):
        """Test a panel without details yields nothing."""
        assert resolve_linked_prs({}) == []
        assert resolve_linked_prs({"detail": None}) == []


class TestLinkedPRResolver:
    """Test fetch and soft failure handling."""

    def test_resolve(self, jira):
        """Test the panel is fetched by issue id."""
        jira.get_dev_panel.return_value = panel(
            {"url": "https://github.com/acme/widgets/pull/42", "status": "OPEN"}
        )
        assert LinkedPRResolver(jira).resolve("10001") == [
            LinkedPR("acme/widgets", 42, "open")
        ]
        jira.get_dev_panel.assert_called_once_with("10001")

    def test_non_success_returns_empty(self, jira, caplog):
        """Test an upstream error degrades to an empty list and is logged."""
        jira.get_dev_panel.side_effect = TransportFault(403, "no dev-status access")
        with caplog.at_level("WARNING", logger="project_agent"):
            assert LinkedPRResolver(jira).resolve("10001") == []
        assert "fetch_linked_pr_panel failed" in caplog.text

    def test_transport_exception_returns_empty(self, jira):
        """Test a thrown network error degrades to an empty list."""
        jira.get_dev_panel.side_effect = requests.Timeout("timed out")
        assert LinkedPRResolver(jira).resolve("10001") == []
