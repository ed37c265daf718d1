"""Data models for tracker and source-control status queries.

This module defines the normalized records returned to the bot front end,
along with the named default policies applied while building them.
Every record serializes with ``to_dict()`` using the camelCase keys the
front end expects.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

# Default policies applied when upstream data omits a value
UNKNOWN_PR_STATE = "unknown"
NO_ASSIGNEE: str | None = None
NO_GOAL: str | None = None
NO_ACTIVE_SPRINT_MESSAGE = "No active sprint"
GHOST_REVIEWER = "ghost"  # GitHub's placeholder for deleted accounts
SEARCH_RESULT_LIMIT = 10

# Review verdicts
APPROVED = "APPROVED"
CHANGES_REQUESTED = "CHANGES_REQUESTED"

# Check run values
CHECK_SUCCESS = "success"
CHECK_COMPLETED = "completed"

# Mergeable state reported for pull requests with conflicts
MERGEABLE_STATE_DIRTY = "dirty"

# Pending reviews carry no timestamp and sort before any submitted review
EARLIEST_TIMESTAMP = datetime.min.replace(tzinfo=timezone.utc)


def parse_timestamp(value: str | None) -> datetime | None:
    """Parse an ISO-8601 timestamp as returned by Jira or GitHub.

    Args:
        value: Timestamp string, possibly with a trailing "Z"

    Returns:
        Timezone-aware datetime, or None if value is empty
    """
    if not value:
        return None
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


@dataclass(frozen=True)
class LinkedPR:
    """A pull request linked to a tracker issue."""

    repo: str  # "owner/name"
    number: int
    state: str  # lowercased

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {"repo": self.repo, "number": self.number, "state": self.state}


@dataclass(frozen=True)
class Issue:
    """Read-only projection of a tracker issue."""

    key: str
    summary: str
    status: str | None
    assignee: str | None = NO_ASSIGNEE
    prs: tuple[LinkedPR, ...] = field(default_factory=tuple)

    @classmethod
    def from_jira(
        cls, data: dict[str, Any], prs: tuple[LinkedPR, ...] = ()
    ) -> Issue:
        """Project a raw Jira issue document.

        Args:
            data: Issue document with a ``fields`` object
            prs: Linked pull requests already resolved for the issue

        Returns:
            Parsed Issue
        """
        fields = data.get("fields") or {}

        status = None
        if fields.get("status"):
            status = fields["status"].get("name")

        assignee = NO_ASSIGNEE
        if fields.get("assignee"):
            assignee = fields["assignee"].get("displayName") or NO_ASSIGNEE

        return cls(
            key=data.get("key", ""),
            summary=fields.get("summary", ""),
            status=status,
            assignee=assignee,
            prs=tuple(prs),
        )

    def to_summary_dict(self) -> dict[str, Any]:
        """Convert to the compact form used in sprint issue lists."""
        return {
            "key": self.key,
            "summary": self.summary,
            "status": self.status,
            "assignee": self.assignee,
        }

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        result = self.to_summary_dict()
        result["prs"] = [pr.to_dict() for pr in self.prs]
        return result


@dataclass(frozen=True)
class Sprint:
    """Active sprint summary.

    A sprint with no name represents the "no active sprint" outcome, which
    is a valid answer rather than an error.
    """

    name: str | None
    goal: str | None = NO_GOAL
    days_remaining: int | None = None
    issues: tuple[Issue, ...] = field(default_factory=tuple)
    message: str | None = None

    @classmethod
    def none_active(cls) -> Sprint:
        """Return the result reported when a board has no active sprint."""
        return cls(name=None, message=NO_ACTIVE_SPRINT_MESSAGE)

    @property
    def is_active(self) -> bool:
        return self.name is not None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        if not self.is_active:
            return {"name": None, "message": self.message, "issues": []}
        return {
            "name": self.name,
            "goal": self.goal,
            "daysRemaining": self.days_remaining,
            "issues": [issue.to_summary_dict() for issue in self.issues],
        }


@dataclass(frozen=True)
class Review:
    """A single code-review event."""

    reviewer: str
    state: str
    submitted_at: datetime | None

    @classmethod
    def from_github(cls, data: dict[str, Any]) -> Review:
        """Parse a GitHub pull request review."""
        reviewer = GHOST_REVIEWER
        if data.get("user"):
            reviewer = data["user"].get("login") or GHOST_REVIEWER

        return cls(
            reviewer=reviewer,
            state=data.get("state", ""),
            submitted_at=parse_timestamp(data.get("submitted_at")),
        )

    @property
    def sort_timestamp(self) -> datetime:
        return self.submitted_at or EARLIEST_TIMESTAMP


@dataclass(frozen=True)
class ReviewVerdict:
    """Latest review state for one reviewer."""

    reviewer: str
    state: str
    submitted_at: datetime | None


@dataclass(frozen=True)
class ReviewPartition:
    """Reviewers grouped by their latest blocking or approving verdict."""

    approved: tuple[str, ...] = field(default_factory=tuple)
    changes_requested: tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "approved": list(self.approved),
            "changesRequested": list(self.changes_requested),
        }


@dataclass(frozen=True)
class CheckRun:
    """A single CI check result for a commit."""

    name: str
    status: str
    conclusion: str | None = None

    @classmethod
    def from_github(cls, data: dict[str, Any]) -> CheckRun:
        """Parse a GitHub check run."""
        return cls(
            name=data.get("name", ""),
            status=data.get("status", ""),
            conclusion=data.get("conclusion") or None,
        )


@dataclass(frozen=True)
class CheckSummary:
    """Aggregated CI check counts.

    ``failed`` and ``pending`` can overlap: a run that has not completed but
    already reports a non-success conclusion is counted in both.
    """

    total: int = 0
    passed: int = 0
    failed: int = 0
    pending: int = 0
    failed_names: tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "total": self.total,
            "passed": self.passed,
            "failed": self.failed,
            "pending": self.pending,
            "failedNames": list(self.failed_names),
        }


@dataclass(frozen=True)
class PRStatus:
    """Combined status of a single pull request."""

    number: int
    title: str
    author: str
    state: str
    draft: bool
    mergeable: bool | None
    merge_conflicts: bool
    additions: int
    deletions: int
    files: int
    reviews: ReviewPartition
    checks: CheckSummary

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "number": self.number,
            "title": self.title,
            "author": self.author,
            "state": self.state,
            "draft": self.draft,
            "mergeable": self.mergeable,
            "mergeConflicts": self.merge_conflicts,
            "additions": self.additions,
            "deletions": self.deletions,
            "files": self.files,
            "reviews": self.reviews.to_dict(),
            "checks": self.checks.to_dict(),
        }


@dataclass(frozen=True)
class SearchHit:
    """A pull request returned by search."""

    number: int
    title: str
    author: str
    repo: str
    state: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "number": self.number,
            "title": self.title,
            "author": self.author,
            "repo": self.repo,
            "state": self.state,
        }
