"""
Conversion between LangChain messages and routed messages.
"""
from typing import Any
from langchain_core.messages import AIMessage, BaseMessage, HumanMessage
from school_agent.agent.state import Message, Part, RoutedMessage


ROLE_BY_TYPE = {
    "human": "user",
    "ai": "agent",
    "tool": "tool",
    "system": "system",
}


def content_to_parts(content: str | list[Any]) -> list[Part]:
    """
    Split LangChain message content into tagged parts.

    Content is either a plain string or a list of provider content blocks
    (text, tool_use, ...).
    """
    if isinstance(content, str):
        return [Part(text=content)] if content else []

    parts = []
    for block in content:
        if isinstance(block, str):
            if block:
                parts.append(Part(text=block))
        elif isinstance(block, dict):
            block_type = block.get("type")
            if block_type == "text":
                if block.get("text"):
                    parts.append(Part(text=block["text"]))
            elif block_type == "tool_use":
                parts.append(Part(tool_request={
                    "id": block.get("id"),
                    "name": block.get("name"),
                    "input": block.get("input") or block.get("partial_json"),
                }))
            elif block_type == "tool_result":
                parts.append(Part(tool_response=block))
            else:
                parts.append(Part(data=block))
    return parts


def to_routed_message(message: BaseMessage) -> RoutedMessage:
    """Convert a LangChain message into a RoutedMessage."""
    role = ROLE_BY_TYPE.get(message.type, "agent")
    parts = content_to_parts(message.content)

    if role == "tool":
        # Tool output is payload, never answer text
        parts = [Part(tool_response={
            "name": getattr(message, "name", None),
            "tool_call_id": getattr(message, "tool_call_id", None),
            "content": message.content,
        })]
    elif isinstance(message, AIMessage) and message.tool_calls:
        if not any(p.tool_request is not None for p in parts):
            parts.extend(
                Part(tool_request={"id": tc.get("id"), "name": tc.get("name"), "input": tc.get("args")})
                for tc in message.tool_calls
            )

    return RoutedMessage(role=role, content=parts)


def history_to_messages(history: list[Message]) -> list[BaseMessage]:
    """Render committed session history as LangChain chat messages."""
    return [
        HumanMessage(content=m.content) if m.role == "user" else AIMessage(content=m.content)
        for m in history
    ]
