"""
Tool Registry for the school agent.

Single source of truth for tool registration. Tools use @registry.register()
to register themselves with metadata; capabilities pick tools by category.
"""
from dataclasses import dataclass
from typing import Callable
from langchain_core.tools import BaseTool, tool as langchain_tool


CATEGORIES = ["profile", "grades", "events", "announcements"]


@dataclass
class ToolMetadata:
    """Metadata about a registered tool."""
    name: str
    description: str
    category: str  # one of CATEGORIES


class ToolRegistry:
    """
    Registry for all tools available to capabilities.

    Usage:
        @registry.register(category="grades")
        def get_recent_grades(student_id: int) -> list[dict]:
            '''Get recent grades for a student.'''
            ...
    """

    def __init__(self):
        self._tools: dict[str, BaseTool] = {}
        self._metadata: dict[str, ToolMetadata] = {}

    def register(self, category: str = "profile"):
        """
        Decorator to register a tool with the registry.

        Args:
            category: Tool category used to assemble capability toolsets
        """
        if category not in CATEGORIES:
            raise ValueError(f"Unknown tool category: {category}")

        def decorator(func: Callable) -> BaseTool:
            lc_tool = langchain_tool(func)

            # First non-empty docstring line becomes the short description
            description = ""
            if func.__doc__:
                for line in func.__doc__.split('\n'):
                    stripped = line.strip()
                    if stripped:
                        description = stripped
                        break

            self._tools[func.__name__] = lc_tool
            self._metadata[func.__name__] = ToolMetadata(
                name=func.__name__,
                description=description,
                category=category,
            )

            return lc_tool
        return decorator

    def get_tools(self, categories: list[str]) -> list[BaseTool]:
        """Get tools belonging to any of the given categories, in registration order."""
        return [
            self._tools[name]
            for name, meta in self._metadata.items()
            if meta.category in categories
        ]

    def get_tool_map(self) -> dict[str, BaseTool]:
        """Get tool name -> tool mapping."""
        return self._tools.copy()

    def generate_tool_docs(self, categories: list[str] | None = None) -> str:
        """
        Auto-generate tool documentation for prompts.

        Groups tools by category with descriptions.
        """
        sections = {
            "profile": "### Student Tools\nLook up a student's grade level and activities by id.",
            "grades": "### Grade Tools\nRecent graded assignments. Require a student id.",
            "events": "### Event Tools\nUpcoming school events, optionally filtered by activity.",
            "announcements": "### Announcement Tools\nRecent school-wide announcements.",
        }

        lines = []
        for category in categories or CATEGORIES:
            tools_in_cat = [m for m in self._metadata.values() if m.category == category]
            if tools_in_cat:
                lines.append(sections[category])
                for meta in tools_in_cat:
                    lines.append(f"- `{meta.name}`: {meta.description}")
                lines.append("")

        return "\n".join(lines)


# Global registry instance
registry = ToolRegistry()
