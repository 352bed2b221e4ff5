from agentdesk.agents.catalog import ALL_CATEGORY, DEFAULT_CATALOG, ToolCatalog
from agentdesk.agents.codec import canonical_tools, decode_agent, encode_agent
from agentdesk.agents.models import (
    Agent,
    AgentColor,
    AgentListing,
    AgentModel,
    AgentRecord,
    AgentScope,
    DecodeFailure,
)
from agentdesk.agents.repository import AgentRepository, AgentStore
from agentdesk.agents.selector import ToolSelector
from agentdesk.agents.validator import AgentValidator

__all__ = [
    "ALL_CATEGORY",
    "DEFAULT_CATALOG",
    "Agent",
    "AgentColor",
    "AgentListing",
    "AgentModel",
    "AgentRecord",
    "AgentRepository",
    "AgentScope",
    "AgentStore",
    "AgentValidator",
    "DecodeFailure",
    "ToolCatalog",
    "ToolSelector",
    "canonical_tools",
    "decode_agent",
    "encode_agent",
]
