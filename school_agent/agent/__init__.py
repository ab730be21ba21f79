"""
School agent: multi-agent chat orchestration.

Session → RoutingAgent → Capability → ResponseAssembler

Usage:
    from school_agent.agent import create_session, send_turn

    session = create_session(context)
    answer = await send_turn(session, "How is Evelyn doing in Biology?")
"""
from school_agent.agent.assembler import NO_RESPONSE, ResponseAssembler
from school_agent.agent.errors import (
    AgentError,
    CapabilityFailure,
    InputError,
    RoutingFailure,
    validate_utterance,
)
from school_agent.agent.router import RoutingAgent
from school_agent.agent.session import Session, create_session, send_turn
from school_agent.agent.state import (
    ContextStore,
    Dependent,
    Invocation,
    Message,
    Part,
    RoutedMessage,
    RoutedResponse,
)

__all__ = [
    "NO_RESPONSE",
    "AgentError",
    "CapabilityFailure",
    "ContextStore",
    "Dependent",
    "InputError",
    "Invocation",
    "Message",
    "Part",
    "ResponseAssembler",
    "RoutedMessage",
    "RoutedResponse",
    "RoutingAgent",
    "RoutingFailure",
    "Session",
    "create_session",
    "send_turn",
    "validate_utterance",
]
