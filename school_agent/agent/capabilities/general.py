"""
General capability: the default for anything the specialists don't claim.
"""
from school_agent.agent.capabilities.base import AgentCapability
from school_agent.agent.prompts import GENERAL_INSTRUCTIONS
from school_agent.agent.tools.registry import CATEGORIES


class GeneralCapability(AgentCapability):
    name = "general"
    description = "General questions about the school and the guardian's children"
    # Only chosen as the fallback
    keywords = []
    categories = list(CATEGORIES)
    instructions = GENERAL_INSTRUCTIONS
