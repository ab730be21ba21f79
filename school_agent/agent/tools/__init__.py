"""
Tools for the school agent.

Exports tool access functions from the registry.
"""
# Import tools to register them with the registry
from school_agent.agent.tools import school_tools  # noqa: F401

from school_agent.agent.tools.registry import registry


def get_tools(categories: list[str]) -> list:
    """Get registered tools for the given categories."""
    return registry.get_tools(categories)


def get_tool_map() -> dict:
    """Get tool name -> tool mapping."""
    return registry.get_tool_map()


def get_tool_docs(categories: list[str] | None = None) -> str:
    """Get auto-generated tool documentation for prompts."""
    return registry.generate_tool_docs(categories)
