"""Upstream integrations for the project agent.

This package provides the Jira and GitHub transports, the normalized data
model and the fault taxonomy shared by the status components.
"""

from .base import IntegrationClient
from .errors import (
    OPERATION_POLICIES,
    ConfigurationFault,
    FailurePolicy,
    NotFoundFault,
    ProjectAgentError,
    SoftFailure,
    TransportFault,
    call_with_policy,
)
from .github import GitHubClient
from .jira import JiraClient
from .models import (
    CheckRun,
    CheckSummary,
    Issue,
    LinkedPR,
    PRStatus,
    Review,
    ReviewPartition,
    ReviewVerdict,
    SearchHit,
    Sprint,
)

__all__ = [
    # Clients
    "IntegrationClient",
    "JiraClient",
    "GitHubClient",
    # Errors
    "ProjectAgentError",
    "ConfigurationFault",
    "NotFoundFault",
    "TransportFault",
    "SoftFailure",
    "FailurePolicy",
    "OPERATION_POLICIES",
    "call_with_policy",
    # Models
    "Issue",
    "LinkedPR",
    "Sprint",
    "Review",
    "ReviewVerdict",
    "ReviewPartition",
    "CheckRun",
    "CheckSummary",
    "PRStatus",
    "SearchHit",
]
