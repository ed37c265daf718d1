"""Active sprint status."""

from __future__ import annotations

import math
from datetime import datetime, timedelta, timezone
from typing import Callable

from ..agent_logging import get_logger
from ..integrations.errors import NotFoundFault, TransportFault, call_with_policy
from ..integrations.jira import JiraClient
from ..integrations.models import Issue, Sprint, parse_timestamp

logger = get_logger("status.sprints")

ONE_DAY = timedelta(days=1)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def compute_days_remaining(end_date: datetime | None, now: datetime) -> int | None:
    """Whole days left until a sprint ends, rounded up.

    Args:
        end_date: Sprint end, or None if the sprint has no end date
        now: Current instant

    Returns:
        Days remaining (never negative), or None when the end is unknown
    """
    if end_date is None:
        return None
    return max(0, math.ceil((end_date - now) / ONE_DAY))


class SprintStatusComputer:
    """Finds a project's active sprint and summarizes it."""

    def __init__(self, jira: JiraClient, now: Callable[[], datetime] = utc_now):
        """Initialize the computer.

        Args:
            jira: Jira transport
            now: Clock returning the current timezone-aware instant
        """
        self.jira = jira
        self.now = now

    def get_active_sprint(self, project_key: str) -> Sprint:
        """Summarize the active sprint on the project's first board.

        Args:
            project_key: Jira project key or id

        Returns:
            Sprint summary, or ``Sprint.none_active()`` if nothing is active

        Raises:
            NotFoundFault: If the project has no board
            TransportFault: If the sprint's issues cannot be fetched
        """
        try:
            boards = call_with_policy(
                "fetch_boards",
                lambda: self.jira.get_boards(project_key),
                fallback=list,
            )
        except TransportFault as e:
            raise NotFoundFault("board", project_key) from e
        if not boards:
            raise NotFoundFault("board", project_key)
        board = boards[0]

        sprints = call_with_policy(
            "fetch_active_sprints",
            lambda: self.jira.get_active_sprints(board["id"]),
            fallback=list,
        )
        if not sprints:
            logger.info(f"No active sprint on board {board['id']} for {project_key}")
            return Sprint.none_active()
        sprint = sprints[0]

        raw_issues = call_with_policy(
            "fetch_sprint_issues",
            lambda: self.jira.get_sprint_issues(sprint["id"]),
            fallback=list,
        )

        return Sprint(
            name=sprint.get("name") or "",
            goal=sprint.get("goal") or None,
            days_remaining=compute_days_remaining(
                parse_timestamp(sprint.get("endDate")), self.now()
            ),
            issues=tuple(Issue.from_jira(issue) for issue in raw_issues),
        )
