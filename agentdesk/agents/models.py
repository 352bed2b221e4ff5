"""Agent data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class AgentModel(str, Enum):
    INHERIT = "inherit"
    OPUS = "opus"
    SONNET = "sonnet"
    HAIKU = "haiku"


class AgentColor(str, Enum):
    RED = "Red"
    BLUE = "Blue"
    GREEN = "Green"
    YELLOW = "Yellow"
    PURPLE = "Purple"
    ORANGE = "Orange"
    PINK = "Pink"
    CYAN = "Cyan"


class AgentScope(str, Enum):
    USER = "user"
    PROJECT = "project"


DEFAULT_MODEL = AgentModel.INHERIT
DEFAULT_COLOR = AgentColor.BLUE


@dataclass(frozen=True)
class Agent:
    name: str
    system_prompt: str = ""
    description: str = ""
    color: AgentColor = DEFAULT_COLOR
    model: AgentModel = DEFAULT_MODEL
    tools: str = ""
    icon: str = ""

    def __post_init__(self) -> None:
        # Header fields never carry surrounding whitespace.
        for key in ("name", "description", "icon"):
            object.__setattr__(self, key, getattr(self, key).strip())

    @property
    def identity(self) -> str:
        return self.name.strip().casefold()


@dataclass(frozen=True)
class AgentRecord:
    """A decoded agent together with where it is stored."""

    agent: Agent
    scope: AgentScope
    source_path: Path
    created_at: str = ""
    updated_at: str = ""

    @property
    def name(self) -> str:
        return self.agent.name


@dataclass(frozen=True)
class DecodeFailure:
    path: Path
    error: str


@dataclass
class AgentListing:
    records: list[AgentRecord] = field(default_factory=list)
    failures: list[DecodeFailure] = field(default_factory=list)

    @property
    def agents(self) -> list[Agent]:
        return [record.agent for record in self.records]

    def names(self) -> list[str]:
        return [record.name for record in self.records]
