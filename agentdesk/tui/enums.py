from enum import Enum

from agentdesk.agents.models import AgentColor


class UIStyle(str, Enum):
    BLUE = "blue"
    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"
    CYAN = "cyan"
    MAGENTA = "magenta"
    DIM = "dim"
    WHITE = "white"


AGENT_COLOR_STYLE = {
    AgentColor.RED: "red",
    AgentColor.BLUE: "blue",
    AgentColor.GREEN: "green",
    AgentColor.YELLOW: "yellow",
    AgentColor.PURPLE: "purple",
    AgentColor.ORANGE: "dark_orange",
    AgentColor.PINK: "hot_pink",
    AgentColor.CYAN: "cyan",
}
