"""Configuration for the project agent."""

from .config_loader import ConfigLoader, load_config
from .models import AgentConfig

__all__ = ["AgentConfig", "ConfigLoader", "load_config"]
