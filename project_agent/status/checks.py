"""CI check run rollup."""

from __future__ import annotations

from typing import Sequence

from ..integrations.models import CHECK_COMPLETED, CHECK_SUCCESS, CheckRun, CheckSummary


def rollup_checks(runs: Sequence[CheckRun]) -> CheckSummary:
    """Summarize check runs into pass/fail/pending counts.

    ``failed`` counts any run with a non-success conclusion and ``pending``
    any run not yet completed, independently of each other. Upstream can
    transiently report an incomplete run with a failing conclusion; such a
    run is counted in both, and ``total`` stays the number of runs.

    Args:
        runs: Check runs for one commit

    Returns:
        Aggregated CheckSummary
    """
    failed = [run for run in runs if run.conclusion and run.conclusion != CHECK_SUCCESS]

    return CheckSummary(
        total=len(runs),
        passed=sum(1 for run in runs if run.conclusion == CHECK_SUCCESS),
        failed=len(failed),
        pending=sum(1 for run in runs if run.status != CHECK_COMPLETED),
        failed_names=tuple(run.name for run in failed),
    )
