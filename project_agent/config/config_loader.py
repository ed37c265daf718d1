"""Configuration loading.

Precedence (highest to lowest):
1. Explicit overrides
2. Environment variables
3. Config file (PROJECT_AGENT_CONFIG or ~/.project-agent/config.json)
4. Defaults
"""

import json
import os
from pathlib import Path
from typing import Any

from ..agent_logging import get_logger
from .models import AgentConfig

logger = get_logger("config")

CONFIG_PATH_ENV = "PROJECT_AGENT_CONFIG"
DEFAULT_CONFIG_PATH = Path.home() / ".project-agent" / "config.json"

# Environment variable -> config field
ENV_MAPPINGS = {
    "JIRA_BASE_URL": "jira_base_url",
    "JIRA_EMAIL": "jira_email",
    "JIRA_API_TOKEN": "jira_api_token",
    "GITHUB_TOKEN": "github_token",
    "GITHUB_API_URL": "github_api_url",
    "PROJECT_AGENT_LOG_LEVEL": "log_level",
}


class ConfigLoader:
    """Loads AgentConfig from overrides, environment and a JSON file."""

    def __init__(self, config_file: Path | None = None):
        """Initialize the configuration loader.

        Args:
            config_file: Explicit config file path. Defaults to the path in
                PROJECT_AGENT_CONFIG, then ~/.project-agent/config.json.
        """
        if config_file is None and os.environ.get(CONFIG_PATH_ENV):
            config_file = Path(os.environ[CONFIG_PATH_ENV])
        self.config_file = Path(config_file) if config_file else DEFAULT_CONFIG_PATH

    def load(self, **overrides: Any) -> AgentConfig:
        """Load configuration from all sources.

        Returns:
            AgentConfig with settings from all sources merged.
        """
        values: dict[str, Any] = {}
        values.update(self._load_file())
        values.update(self._load_env())
        values.update({k: v for k, v in overrides.items() if v is not None})
        return AgentConfig(**values)

    def _load_file(self) -> dict[str, Any]:
        if not self.config_file.exists():
            logger.debug(f"No config file at {self.config_file}")
            return {}

        try:
            with open(self.config_file) as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            logger.error(f"Invalid JSON in config file {self.config_file}: {e}")
            return {}
        except OSError as e:
            logger.error(f"Failed to read config file {self.config_file}: {e}")
            return {}

        if not isinstance(data, dict):
            logger.error(f"Config file {self.config_file} must contain a JSON object")
            return {}

        logger.debug(f"Loaded {len(data)} settings from {self.config_file}")
        return data

    def _load_env(self) -> dict[str, Any]:
        return {
            field: os.environ[env_var]
            for env_var, field in ENV_MAPPINGS.items()
            if os.environ.get(env_var)
        }


def load_config(config_file: Path | None = None, **overrides: Any) -> AgentConfig:
    """Load AgentConfig using the standard precedence."""
    return ConfigLoader(config_file).load(**overrides)
