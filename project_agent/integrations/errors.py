"""Fault taxonomy and failure policy for status queries.

Hard faults abort the query and reach the caller unchanged. Soft failures
belong to best-effort secondary lookups: they are logged at the component
boundary that owns them and degrade to a fallback value.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, TypeVar

import requests

from ..agent_logging import get_logger

logger = get_logger("errors")

T = TypeVar("T")


class ProjectAgentError(Exception):
    """Base class for all project agent faults."""


class ConfigurationFault(ProjectAgentError, ValueError):
    """A required credential or setting is missing."""

    def __init__(self, setting: str, remediation: str):
        self.setting = setting
        self.remediation = remediation
        super().__init__(f"{setting} not configured. {remediation}")


class NotFoundFault(ProjectAgentError):
    """A required upstream entity (issue, board) does not exist."""

    MESSAGES = {
        "issue": "Issue not found: {identifier}",
        "board": "No board found for project: {identifier}",
    }

    def __init__(self, entity: str, identifier: str):
        self.entity = entity
        self.identifier = identifier
        template = self.MESSAGES.get(entity, "{entity} not found: {identifier}")
        super().__init__(template.format(entity=entity, identifier=identifier))


class TransportFault(ProjectAgentError):
    """Upstream responded with a non-success status, or could not be reached.

    Attributes:
        status: HTTP status code, or None when no response was received
        body: Response body (or transport error text) for diagnosis
        url: Requested URL
        service: Upstream service name used in the message
    """

    def __init__(
        self,
        status: int | None,
        body: str,
        url: str = "",
        service: str = "Upstream",
    ):
        self.status = status
        self.body = body
        self.url = url
        self.service = service
        if status is None:
            message = f"{service} request failed: {body}"
        else:
            message = f"{service} API error {status}: {body}"
        super().__init__(message)

    @classmethod
    def from_response(
        cls, response: requests.Response, service: str
    ) -> TransportFault:
        """Build a fault from a non-success HTTP response."""
        return cls(
            status=response.status_code,
            body=response.text,
            url=response.url,
            service=service,
        )


@dataclass(frozen=True)
class SoftFailure:
    """Record of a best-effort lookup that failed and was degraded."""

    operation: str
    cause: Exception

    def __str__(self) -> str:
        return f"{self.operation} failed: {self.cause}"


class FailurePolicy(Enum):
    """How a failed fetch is treated."""

    HARD = "hard"
    SOFT = "soft"


# Single table mapping each upstream fetch to its failure category
OPERATION_POLICIES: dict[str, FailurePolicy] = {
    "fetch_issue": FailurePolicy.HARD,
    "fetch_linked_pr_panel": FailurePolicy.SOFT,
    "fetch_boards": FailurePolicy.HARD,
    "fetch_active_sprints": FailurePolicy.SOFT,
    "fetch_sprint_issues": FailurePolicy.HARD,
    "fetch_pull_request": FailurePolicy.HARD,
    "fetch_reviews": FailurePolicy.HARD,
    "fetch_check_runs": FailurePolicy.HARD,
    "search_pull_requests": FailurePolicy.HARD,
}


def call_with_policy(
    operation: str,
    fetch: Callable[[], T],
    fallback: Callable[[], T],
) -> T:
    """Run a fetch under the failure policy registered for its operation.

    Args:
        operation: Key in OPERATION_POLICIES
        fetch: Zero-argument callable performing the fetch
        fallback: Produces the degraded value for soft failures

    Returns:
        The fetched value, or the fallback value after a soft failure

    Raises:
        KeyError: If the operation has no registered policy
        TransportFault: If a hard operation fails
    """
    policy = OPERATION_POLICIES[operation]
    try:
        return fetch()
    except (TransportFault, requests.RequestException) as e:
        if policy is FailurePolicy.HARD:
            raise
        logger.warning(str(SoftFailure(operation, e)))
        return fallback()
