"""Configuration model for the project agent.

This module provides the Pydantic configuration model holding upstream
endpoints, credentials and transport settings. The model is passed
explicitly to the clients that need it.
"""

from pydantic import BaseModel, Field

from ..integrations.errors import ConfigurationFault


class AgentConfig(BaseModel):
    """Settings for the Jira and GitHub integrations."""

    jira_base_url: str | None = Field(
        default=None, description="Jira site URL (e.g., https://acme.atlassian.net)"
    )
    jira_email: str | None = Field(
        default=None, description="Account email paired with the Jira API token"
    )
    jira_api_token: str | None = Field(default=None, description="Jira API token")
    github_token: str | None = Field(default=None, description="GitHub bearer token")
    github_api_url: str = Field(
        default="https://api.github.com", description="GitHub REST API root"
    )

    search_limit: int = Field(
        default=10, ge=1, le=100, description="Maximum pull request search hits"
    )
    request_timeout: float = Field(
        default=30.0, gt=0, description="Per-request timeout in seconds"
    )
    max_retries: int = Field(
        default=2, ge=0, le=10, description="Transport retry attempts"
    )
    log_level: str = Field(default="INFO", description="Logging level name")

    class Config:
        extra = "ignore"

    def require_github_token(self) -> str:
        """Return the GitHub token.

        Raises:
            ConfigurationFault: If no token is configured
        """
        if not self.github_token:
            raise ConfigurationFault(
                "GITHUB_TOKEN",
                "Set the GITHUB_TOKEN environment variable or add "
                '"github_token" to the config file.',
            )
        return self.github_token

    def require_jira_credentials(self) -> tuple[str, str, str]:
        """Return (base_url, email, api_token) for Jira.

        Raises:
            ConfigurationFault: If any Jira setting is missing
        """
        required = {
            "JIRA_BASE_URL": self.jira_base_url,
            "JIRA_EMAIL": self.jira_email,
            "JIRA_API_TOKEN": self.jira_api_token,
        }
        for env_var, value in required.items():
            if not value:
                raise ConfigurationFault(
                    env_var,
                    f"Set the {env_var} environment variable or add "
                    f'"{env_var.lower()}" to the config file.',
                )
        return self.jira_base_url, self.jira_email, self.jira_api_token
