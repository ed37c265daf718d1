"""Code review deduplication."""

from __future__ import annotations

from typing import Iterable

from ..integrations.models import (
    APPROVED,
    CHANGES_REQUESTED,
    EARLIEST_TIMESTAMP,
    Review,
    ReviewPartition,
    ReviewVerdict,
)


def latest_verdicts(reviews: Iterable[Review]) -> dict[str, ReviewVerdict]:
    """Keep each reviewer's most recent review.

    A stored verdict is replaced only by a strictly later timestamp, so on a
    tie the first review seen wins. Reviewers keep first-seen order.

    Args:
        reviews: Review events in upstream order

    Returns:
        Mapping of reviewer to latest verdict
    """
    verdicts: dict[str, ReviewVerdict] = {}
    for review in reviews:
        existing = verdicts.get(review.reviewer)
        if existing is not None:
            existing_at = existing.submitted_at or EARLIEST_TIMESTAMP
            if review.sort_timestamp <= existing_at:
                continue
        verdicts[review.reviewer] = ReviewVerdict(
            reviewer=review.reviewer,
            state=review.state,
            submitted_at=review.submitted_at,
        )
    return verdicts


def partition_reviews(reviews: Iterable[Review]) -> ReviewPartition:
    """Group reviewers by their latest approving or blocking verdict.

    Reviewers whose latest review is neither (e.g., a comment) are left out.
    """
    verdicts = latest_verdicts(reviews)
    return ReviewPartition(
        approved=tuple(v.reviewer for v in verdicts.values() if v.state == APPROVED),
        changes_requested=tuple(
            v.reviewer for v in verdicts.values() if v.state == CHANGES_REQUESTED
        ),
    )
