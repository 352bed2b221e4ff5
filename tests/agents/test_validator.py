import pytest

from agentdesk.agents.models import Agent
from agentdesk.agents.validator import AgentValidator, ValidationCode
from agentdesk.errors import AgentValidationError


def test_complete_agent_has_no_issues() -> None:
    agent = Agent(name="reviewer", system_prompt="Review code.", tools="Read, Grep")
    assert AgentValidator().validate(agent) == []


def test_missing_name_and_body_are_reported() -> None:
    issues = AgentValidator().validate(Agent(name="  ", system_prompt="\n"))
    assert [issue.code for issue in issues] == [
        ValidationCode.EMPTY_NAME,
        ValidationCode.EMPTY_BODY,
    ]
    assert str(issues[0]) == "Agent name is required."


def test_unknown_tools_are_reported_by_name() -> None:
    agent = Agent(name="future", system_prompt="Body.", tools="Read, Teleport, Warp")
    issues = AgentValidator().validate(agent)
    assert [issue.value for issue in issues] == ["Teleport", "Warp"]
    assert all(issue.code == ValidationCode.UNKNOWN_CAPABILITY for issue in issues)


def test_validate_strict_raises_with_all_issues() -> None:
    with pytest.raises(AgentValidationError) as excinfo:
        AgentValidator().validate_strict(Agent(name="", tools="Teleport"))
    assert len(excinfo.value.issues) == 3
    assert "<unnamed>" in str(excinfo.value)
