"""Project Agent - issue, sprint and pull request status for chat bots

Combines Jira issues and sprints with GitHub pull requests, reviews and
CI checks into compact, pre-aggregated answers.
"""

__version__ = "1.0.0"
__description__ = "Jira and GitHub status aggregation for conversational front ends"

from .actions import ACTIONS, create_agent, dispatch
from .config import AgentConfig, load_config
from .status import ProjectAgent

__all__ = [
    "ACTIONS",
    "AgentConfig",
    "ProjectAgent",
    "create_agent",
    "dispatch",
    "load_config",
]
