"""Payload-style action handlers for the bot front end.

Each handler takes the payload dict sent by the front end and returns a
plain dict (or list of dicts) ready to serialize.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable

from .agent_logging import setup_logging
from .config import load_config
from .status.service import ProjectAgent

Payload = dict[str, Any]


def _require(payload: Payload, field: str) -> Any:
    value = payload.get(field)
    if value in (None, ""):
        raise ValueError(f"Missing required payload field: {field}")
    return value


def get_issue(payload: Payload, agent: ProjectAgent) -> dict[str, Any]:
    """Handle ``{"issue": "KEY-1"}``."""
    return agent.get_issue(_require(payload, "issue")).to_dict()


def get_sprint(payload: Payload, agent: ProjectAgent) -> dict[str, Any]:
    """Handle ``{"project": "KEY"}``."""
    return agent.get_sprint(_require(payload, "project")).to_dict()


def get_pr_status(payload: Payload, agent: ProjectAgent) -> dict[str, Any]:
    """Handle ``{"repo": "owner/name", "number": 42}``."""
    repo = _require(payload, "repo")
    number = _require(payload, "number")
    try:
        number = int(number)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Invalid pull request number: {number!r}") from e
    return agent.get_pr_status(repo, number).to_dict()


def search_prs(payload: Payload, agent: ProjectAgent) -> list[dict[str, Any]]:
    """Handle ``{"query": "free text"}``."""
    return [hit.to_dict() for hit in agent.search_prs(_require(payload, "query"))]


ACTIONS: dict[str, Callable[[Payload, ProjectAgent], Any]] = {
    "get-issue": get_issue,
    "get-sprint": get_sprint,
    "get-pr-status": get_pr_status,
    "search-prs": search_prs,
}


def dispatch(action: str, payload: Payload, agent: ProjectAgent) -> Any:
    """Run a named action.

    Raises:
        KeyError: If the action is unknown
    """
    try:
        handler = ACTIONS[action]
    except KeyError:
        raise KeyError(f"Unknown action: {action}") from None
    return handler(payload, agent)


def create_agent(config_file: Path | None = None, **overrides: Any) -> ProjectAgent:
    """Load configuration, set up logging and build a ProjectAgent."""
    config = load_config(config_file, **overrides)
    setup_logging(config.log_level)
    return ProjectAgent(config)
