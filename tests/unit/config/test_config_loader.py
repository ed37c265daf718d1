"""Tests for configuration loading."""

import json
import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from project_agent.config.config_loader import ConfigLoader, load_config
from project_agent.config.models import AgentConfig
from project_agent.integrations.errors import ConfigurationFault


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(
        json.dumps(
            {
                "github_token": "file-token",
                "jira_base_url": "https://file.atlassian.net",
                "search_limit": 5,
            }
        )
    )
    return path


class TestAgentConfig:
    """Test AgentConfig defaults and validation."""

    def test_defaults(self):
        """Test default values."""
        config = AgentConfig()
        assert config.github_api_url == "https://api.github.com"
        assert config.search_limit == 10
        assert config.github_token is None

    def test_search_limit_bounds(self):
        """Test search limit must stay within one page."""
        with pytest.raises(ValidationError):
            AgentConfig(search_limit=0)
        with pytest.raises(ValidationError):
            AgentConfig(search_limit=101)

    def test_require_github_token(self):
        """Test a configured token is returned."""
        assert AgentConfig(github_token="abc").require_github_token() == "abc"

    def test_require_github_token_missing(self):
        """Test a missing token raises with remediation."""
        with pytest.raises(ConfigurationFault) as exc_info:
            AgentConfig().require_github_token()
        assert exc_info.value.setting == "GITHUB_TOKEN"
        assert "environment variable" in str(exc_info.value)

    def test_require_jira_credentials_names_missing_setting(self):
        """Test the first missing Jira setting is named."""
        config = AgentConfig(jira_base_url="https://x.atlassian.net")
        with pytest.raises(ConfigurationFault, match="JIRA_EMAIL"):
            config.require_jira_credentials()


class TestConfigLoader:
    """Test precedence across sources."""

    def test_missing_file_uses_defaults(self, tmp_path):
        """Test a missing file is not an error."""
        with patch.dict(os.environ, {}, clear=True):
            config = load_config(tmp_path / "nope.json")
        assert config == AgentConfig()

    def test_file_values(self, config_file):
        """Test values are read from the config file."""
        with patch.dict(os.environ, {}, clear=True):
            config = load_config(config_file)
        assert config.github_token == "file-token"
        assert config.search_limit == 5

    def test_env_overrides_file(self, config_file):
        """Test environment variables take precedence over the file."""
        with patch.dict(os.environ, {"GITHUB_TOKEN": "env-token"}, clear=True):
            config = load_config(config_file)
        assert config.github_token == "env-token"
        assert config.jira_base_url == "https://file.atlassian.net"

    def test_overrides_win(self, config_file):
        """Test explicit overrides take precedence over everything."""
        with patch.dict(os.environ, {"GITHUB_TOKEN": "env-token"}, clear=True):
            config = load_config(config_file, github_token="override", search_limit=None)
        assert config.github_token == "override"
        assert config.search_limit == 5

    def test_config_path_from_env(self, config_file):
        """Test PROJECT_AGENT_CONFIG selects the file."""
        with patch.dict(
            os.environ, {"PROJECT_AGENT_CONFIG": str(config_file)}, clear=True
        ):
            loader = ConfigLoader()
            assert loader.config_file == config_file
            assert loader.load().github_token == "file-token"

    def test_invalid_json_ignored(self, tmp_path, caplog):
        """Test a corrupt file is logged and ignored."""
        path = tmp_path / "config.json"
        path.write_text("{not json")
        with patch.dict(os.environ, {}, clear=True):
            config = load_config(path)
        assert config.github_token is None
        assert "Invalid JSON" in caplog.text

    def test_non_object_ignored(self, tmp_path):
        """Test a JSON file that is not an object is ignored."""
        path = tmp_path / "config.json"
        path.write_text("[1, 2]")
        with patch.dict(os.environ, {}, clear=True):
            assert load_config(path) == AgentConfig()
