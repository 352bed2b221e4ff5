from agentdesk.tui.renderers import AgentConsoleUI

__all__ = ["AgentConsoleUI"]
