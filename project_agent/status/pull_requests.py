"""Pull request status aggregation.

Combines pull request metadata, deduplicated reviews, a CI check rollup
and a merge conflict flag into one PRStatus record.
"""

from __future__ import annotations

from concurrent.futures import FIRST_EXCEPTION, Future, ThreadPoolExecutor, wait
from typing import Any, Callable

from ..agent_logging import get_logger
from ..integrations.errors import call_with_policy
from ..integrations.github import GitHubClient
from ..integrations.models import (
    MERGEABLE_STATE_DIRTY,
    CheckRun,
    PRStatus,
    Review,
)
from .checks import rollup_checks
from .reviews import partition_reviews

logger = get_logger("status.pull_requests")


def has_merge_conflicts(mergeable: bool | None, mergeable_state: str | None) -> bool:
    """Derive a single conflict flag from GitHub's two merge signals.

    Only an explicit ``mergeable: false`` or a "dirty" mergeable state
    count. While GitHub is still computing mergeability (``mergeable`` is
    null) the result is False.
    """
    return mergeable is False or mergeable_state == MERGEABLE_STATE_DIRTY


def fetch_all_or_nothing(*calls: Callable[[], Any]) -> list[Any]:
    """Run independent fetches concurrently and join them.

    If any fetch fails, its error is raised as soon as it is known. Fetches
    still waiting are cancelled. A fetch already running cannot be
    interrupted: its worker thread finishes in the background and the
    result is thrown away.

    Args:
        *calls: Zero-argument callables

    Returns:
        Results in the order the calls were given
    """
    executor = ThreadPoolExecutor(
        max_workers=len(calls), thread_name_prefix="pr-status"
    )
    try:
        futures: list[Future] = [executor.submit(call) for call in calls]
        done, _ = wait(futures, return_when=FIRST_EXCEPTION)
        for future in futures:
            if future in done and future.exception() is not None:
                raise future.exception()
        return [future.result() for future in futures]
    finally:
        executor.shutdown(wait=False, cancel_futures=True)


class PRStatusAggregator:
    """Builds the status view of a single pull request."""

    def __init__(self, github: GitHubClient):
        self.github = github

    def get_status(self, repo: str, number: int) -> PRStatus:
        """Fetch and aggregate the status of a pull request.

        Metadata and reviews are fetched concurrently; check runs follow
        once the head commit is known.

        Args:
            repo: Repository in "owner/name" form
            number: Pull request number

        Returns:
            Aggregated PRStatus

        Raises:
            TransportFault: If any of the three fetches fails
        """
        pr, raw_reviews = fetch_all_or_nothing(
            lambda: call_with_policy(
                "fetch_pull_request",
                lambda: self.github.get_pull_request(repo, number),
                fallback=dict,
            ),
            lambda: call_with_policy(
                "fetch_reviews",
                lambda: self.github.get_reviews(repo, number),
                fallback=list,
            ),
        )

        head_sha = pr["head"]["sha"]
        raw_checks = call_with_policy(
            "fetch_check_runs",
            lambda: self.github.get_check_runs(repo, head_sha),
            fallback=list,
        )

        reviews = partition_reviews(Review.from_github(r) for r in raw_reviews)
        checks = rollup_checks([CheckRun.from_github(c) for c in raw_checks])

        logger.info(
            f"{repo}#{number}: {len(reviews.approved)} approved, "
            f"{checks.failed} failed checks, {checks.pending} pending"
        )

        return PRStatus(
            number=pr["number"],
            title=pr.get("title", ""),
            author=(pr.get("user") or {}).get("login", ""),
            state=pr.get("state", ""),
            draft=bool(pr.get("draft", False)),
            mergeable=pr.get("mergeable"),
            merge_conflicts=has_merge_conflicts(
                pr.get("mergeable"), pr.get("mergeable_state")
            ),
            additions=pr.get("additions", 0),
            deletions=pr.get("deletions", 0),
            files=pr.get("changed_files", 0),
            reviews=reviews,
            checks=checks,
        )
