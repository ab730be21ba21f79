"""
Logging utilities for agent debugging.

Provides colored console output to trace a turn through routing, the chosen
capability and response assembly.
"""
import json
from datetime import datetime
from typing import Any

# ANSI color codes
COLORS = {
    "reset": "\033[0m",
    "bold": "\033[1m",
    "dim": "\033[2m",
    # Node colors
    "router": "\033[94m",        # Blue
    "grades": "\033[95m",        # Magenta
    "events": "\033[96m",        # Cyan
    "announcements": "\033[93m",  # Yellow
    "general": "\033[97m",       # White
    "assembler": "\033[92m",     # Green
    # Status colors
    "success": "\033[92m",
    "error": "\033[91m",
    "warning": "\033[93m",
    "info": "\033[97m",
}


def _colorize(text: str, color: str) -> str:
    """Apply color to text."""
    return f"{COLORS.get(color, '')}{text}{COLORS['reset']}"


def _timestamp() -> str:
    return datetime.now().strftime("%H:%M:%S.%f")[:-3]


def _node_color(node_name: str) -> str:
    color = node_name.lower().replace("_", "").replace(" ", "")
    return color if color in COLORS else "info"


def _format_value(value: Any, max_length: int = 200) -> str:
    """Format a value for display, truncating if necessary."""
    if value is None:
        return "None"

    if isinstance(value, (dict, list)):
        try:
            formatted = json.dumps(value, indent=2, default=str)
        except (TypeError, ValueError):
            formatted = str(value)
    else:
        formatted = str(value)

    if len(formatted) > max_length:
        return formatted[:max_length] + "..."
    return formatted


def log_header(title: str):
    """Log a section header."""
    print(f"\n{'='*60}")
    print(_colorize(f"  {title}", "bold"))
    print(f"{'='*60}")


def log_turn_start(node_name: str, utterance: str | None = None):
    """Log when a node starts handling a turn."""
    print(f"\n{_timestamp()} {_colorize(f'[{node_name.upper()}]', _node_color(node_name))} {_colorize('Starting...', 'dim')}")
    if utterance:
        print(f"  Query: {_colorize(utterance[:100] + '...' if len(utterance) > 100 else utterance, 'info')}")


def log_node_result(node_name: str, result: dict, key_fields: list[str] | None = None):
    """Log the result of a node."""
    print(f"{_timestamp()} {_colorize(f'[{node_name.upper()}]', _node_color(node_name))} {_colorize('Completed', 'success')}")

    fields = key_fields or list(result.keys())
    for field in fields:
        if field in result:
            print(f"  {field}: {_format_value(result[field])}")


def log_decision(decision: str, reason: str | None = None):
    """Log a routing decision."""
    print(f"  {_colorize('→ Decision:', 'bold')} {decision}")
    if reason:
        print(f"    Reason: {_colorize(reason, 'dim')}")


def log_tool_call(tool_name: str, params: dict):
    """Log a tool call."""
    print(f"  {_colorize('🔧 Tool:', 'warning')} {tool_name}")
    print(f"    Params: {_format_value(params, 150)}")


def log_error(message: str, exception: BaseException | None = None):
    """Log an error."""
    print(f"{_timestamp()} {_colorize('[ERROR]', 'error')} {message}")
    if exception:
        print(f"  Exception: {_colorize(f'{type(exception).__name__}: {exception}', 'error')}")


def log_flow_complete(response_preview: str | None = None):
    """Log that the turn is complete."""
    print(f"\n{_timestamp()} {_colorize('[COMPLETE]', 'success')} Turn finished")
    if response_preview:
        preview = response_preview[:150] + "..." if len(response_preview) > 150 else response_preview
        print(f"  Response: {preview}")
    print(f"{'='*60}\n")


def log_session_state(session):
    """Log detailed session state for debugging."""
    print(f"\n{_colorize('━━━ SESSION STATE ━━━', 'bold')}")
    print(f"  {_colorize('Session:', 'info')} {session.session_id}")

    context = session.context
    print(f"  {_colorize('Guardian:', 'info')} {context.subject_name} ({context.subject_id})")
    for dependent in context.dependents:
        activities = ", ".join(dependent.activities) or "(none)"
        print(f"    - {dependent.name} (grade {dependent.grade_level}): {activities}")

    if session.history:
        print(f"  {_colorize('Conversation History:', 'info')} {len(session.history)} messages")
    else:
        print(f"  {_colorize('Conversation History:', 'dim')} (none)")

    print(f"{_colorize('━━━━━━━━━━━━━━━━━━━━━', 'dim')}\n")
