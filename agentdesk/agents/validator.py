"""Checks an agent is complete enough to be saved."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from agentdesk.agents.catalog import DEFAULT_CATALOG, ToolCatalog
from agentdesk.agents.codec import split_tools
from agentdesk.agents.models import Agent
from agentdesk.errors import AgentValidationError


class ValidationCode(str, Enum):
    EMPTY_NAME = "empty_name"
    EMPTY_BODY = "empty_body"
    UNKNOWN_CAPABILITY = "unknown_capability"


@dataclass(frozen=True)
class ValidationIssue:
    code: ValidationCode
    message: str
    value: str = ""

    def __str__(self) -> str:
        return self.message


class AgentValidator:
    def __init__(self, catalog: ToolCatalog = DEFAULT_CATALOG) -> None:
        self._catalog = catalog

    def validate(self, agent: Agent) -> list[ValidationIssue]:
        """Return every problem found; an empty list means the agent is savable."""
        issues: list[ValidationIssue] = []

        if not agent.name.strip():
            issues.append(
                ValidationIssue(ValidationCode.EMPTY_NAME, "Agent name is required.")
            )
        if not agent.system_prompt.strip():
            issues.append(
                ValidationIssue(ValidationCode.EMPTY_BODY, "System prompt is required.")
            )
        for tool in split_tools(agent.tools):
            if not self._catalog.has_tool(tool):
                issues.append(
                    ValidationIssue(
                        ValidationCode.UNKNOWN_CAPABILITY,
                        f"Unknown tool in profile: '{tool}'.",
                        value=tool,
                    )
                )
        return issues

    def validate_strict(self, agent: Agent) -> None:
        """Raise AgentValidationError carrying all issues, if any."""
        issues = self.validate(agent)
        if issues:
            raise AgentValidationError(agent.name, issues)
