"""Linked pull request resolution.

Jira's development panel lists pull requests as free-form URL and status
strings. This module parses those URLs with a small explicit grammar and
turns the panel into LinkedPR records, dropping anything malformed.
"""

from __future__ import annotations

import string
from dataclasses import dataclass
from typing import Any
from urllib.parse import urlsplit

from ..agent_logging import get_logger
from ..integrations.errors import call_with_policy
from ..integrations.jira import JiraClient
from ..integrations.models import UNKNOWN_PR_STATE, LinkedPR

logger = get_logger("status.pr_links")

GITHUB_HOST_MARKER = "github.com/"
PULL_SEGMENT = "pull"


@dataclass(frozen=True)
class PullRequestUrlParse:
    """Result of parsing a pull request URL.

    Exactly one of ``repo``/``number`` (success) or ``error`` (failure)
    is meaningful.
    """

    owner: str = ""
    name: str = ""
    number: int = 0
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def repo(self) -> str:
        return f"{self.owner}/{self.name}"

    @classmethod
    def failure(cls, reason: str) -> PullRequestUrlParse:
        return cls(error=reason)


def parse_pull_request_url(url: str | None) -> PullRequestUrlParse:
    """Parse ``.../github.com/<owner>/<repo>/pull/<number>``.

    Anything after the number (a sub-page, query or fragment) is ignored.

    Args:
        url: Pull request URL as reported by the tracker

    Returns:
        Parse result; check ``ok`` before reading the fields
    """
    if not url:
        return PullRequestUrlParse.failure("missing url")

    marker = url.find(GITHUB_HOST_MARKER)
    if marker < 0:
        return PullRequestUrlParse.failure("not a github.com url")

    path = urlsplit(url[marker + len(GITHUB_HOST_MARKER) :]).path
    segments = path.split("/")

    if len(segments) < 2 or not segments[0] or not segments[1]:
        return PullRequestUrlParse.failure("missing owner or repository")

    if len(segments) < 3 or segments[2] != PULL_SEGMENT:
        return PullRequestUrlParse.failure("not a pull request url")

    digits = ""
    if len(segments) > 3:
        for char in segments[3]:
            if char not in string.digits:
                break
            digits += char
    if not digits:
        return PullRequestUrlParse.failure("missing pull request number")

    return PullRequestUrlParse(
        owner=segments[0], name=segments[1], number=int(digits)
    )


def _dicts(value: Any) -> list[dict[str, Any]]:
    if not isinstance(value, list):
        return []
    return [entry for entry in value if isinstance(entry, dict)]


def _text(value: Any) -> str | None:
    return value if isinstance(value, str) else None


def resolve_linked_prs(panel: dict[str, Any]) -> list[LinkedPR]:
    """Extract linked pull requests from a development panel document.

    Args:
        panel: Development panel document (``detail[].pullRequests[]``)

    Returns:
        LinkedPR records in panel order; malformed references are dropped
    """
    prs: list[LinkedPR] = []

    for detail in _dicts(panel.get("detail") if isinstance(panel, dict) else None):
        for reference in _dicts(detail.get("pullRequests")):
            url = _text(reference.get("url"))
            parsed = parse_pull_request_url(url)
            if not parsed.ok:
                logger.debug(
                    f"Skipping pull request reference {url!r}: {parsed.error}"
                )
                continue

            status = _text(reference.get("status"))
            prs.append(
                LinkedPR(
                    repo=parsed.repo,
                    number=parsed.number,
                    state=status.lower() if status else UNKNOWN_PR_STATE,
                )
            )

    return prs


class LinkedPRResolver:
    """Resolves the pull requests linked to a Jira issue.

    The lookup is best effort: a failed panel fetch yields an empty list
    so it never blocks an otherwise successful issue query.
    """

    def __init__(self, jira: JiraClient):
        self.jira = jira

    def resolve(self, issue_id: str) -> list[LinkedPR]:
        """Fetch the development panel for an issue and extract its PRs."""
        panel = call_with_policy(
            "fetch_linked_pr_panel",
            lambda: self.jira.get_dev_panel(issue_id),
            fallback=dict,
        )
        return resolve_linked_prs(panel)
