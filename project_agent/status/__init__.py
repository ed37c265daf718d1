"""Status components: linked PRs, sprints, reviews, checks and search."""

from .checks import rollup_checks
from .pr_links import (
    LinkedPRResolver,
    PullRequestUrlParse,
    parse_pull_request_url,
    resolve_linked_prs,
)
from .pull_requests import PRStatusAggregator, fetch_all_or_nothing, has_merge_conflicts
from .reviews import latest_verdicts, partition_reviews
from .search import search_pull_requests, to_search_hit
from .service import ProjectAgent
from .sprints import SprintStatusComputer, compute_days_remaining

__all__ = [
    "ProjectAgent",
    "LinkedPRResolver",
    "PullRequestUrlParse",
    "parse_pull_request_url",
    "resolve_linked_prs",
    "SprintStatusComputer",
    "compute_days_remaining",
    "latest_verdicts",
    "partition_reviews",
    "rollup_checks",
    "PRStatusAggregator",
    "fetch_all_or_nothing",
    "has_merge_conflicts",
    "search_pull_requests",
    "to_search_hit",
]
