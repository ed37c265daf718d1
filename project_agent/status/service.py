"""Status queries combining Jira and GitHub.

ProjectAgent is the single entry point used by the action handlers. Each
query is an independent read-and-aggregate pass; nothing is cached
between calls.
"""

from __future__ import annotations

from datetime import datetime
from typing import Callable

from ..agent_logging import get_logger
from ..config.models import AgentConfig
from ..integrations.errors import NotFoundFault, TransportFault, call_with_policy
from ..integrations.github import GitHubClient
from ..integrations.jira import JiraClient
from ..integrations.models import Issue, PRStatus, SearchHit, Sprint
from .pr_links import LinkedPRResolver
from .pull_requests import PRStatusAggregator
from .search import search_pull_requests
from .sprints import SprintStatusComputer, utc_now

logger = get_logger("status.service")


class ProjectAgent:
    """Answers issue, sprint, pull request and search queries.

    Clients may be injected directly; otherwise they are built from the
    configuration on first use, so a missing GitHub token only fails
    GitHub queries.
    """

    def __init__(
        self,
        config: AgentConfig | None = None,
        jira: JiraClient | None = None,
        github: GitHubClient | None = None,
        now: Callable[[], datetime] = utc_now,
    ):
        """Initialize the agent.

        Args:
            config: Settings used to build clients that were not injected
            jira: Pre-built Jira client
            github: Pre-built GitHub client
            now: Clock used for sprint time remaining
        """
        self.config = config or AgentConfig()
        self._jira = jira
        self._github = github
        self._now = now

    @property
    def jira(self) -> JiraClient:
        """Jira client, created from config on first access.

        Raises:
            ConfigurationFault: If Jira credentials are missing
        """
        if self._jira is None:
            base_url, email, api_token = self.config.require_jira_credentials()
            self._jira = JiraClient(
                base_url,
                email,
                api_token,
                max_retries=self.config.max_retries,
                timeout=self.config.request_timeout,
            )
        return self._jira

    @property
    def github(self) -> GitHubClient:
        """GitHub client, created from config on first access.

        Raises:
            ConfigurationFault: If no GitHub token is configured
        """
        if self._github is None:
            self._github = GitHubClient(
                self.config.require_github_token(),
                api_base=self.config.github_api_url,
                max_retries=self.config.max_retries,
                timeout=self.config.request_timeout,
            )
        return self._github

    def get_issue(self, issue_key: str) -> Issue:
        """Look up an issue and the pull requests linked to it.

        Raises:
            NotFoundFault: If the issue cannot be fetched
        """
        logger.info(f"Fetching issue {issue_key}")
        try:
            data = call_with_policy(
                "fetch_issue",
                lambda: self.jira.get_issue(issue_key),
                fallback=dict,
            )
        except TransportFault as e:
            raise NotFoundFault("issue", issue_key) from e

        prs = LinkedPRResolver(self.jira).resolve(str(data.get("id", "")))
        return Issue.from_jira(data, prs=tuple(prs))

    def get_sprint(self, project_key: str) -> Sprint:
        """Summarize the active sprint for a project."""
        logger.info(f"Fetching active sprint for {project_key}")
        return SprintStatusComputer(self.jira, now=self._now).get_active_sprint(
            project_key
        )

    def get_pr_status(self, repo: str, number: int) -> PRStatus:
        """Aggregate review, check and conflict status of a pull request."""
        logger.info(f"Fetching status of {repo}#{number}")
        return PRStatusAggregator(self.github).get_status(repo, number)

    def search_prs(self, query: str) -> list[SearchHit]:
        """Search pull requests matching free text."""
        logger.info(f"Searching pull requests: {query!r}")
        return search_pull_requests(self.github, query, self.config.search_limit)
