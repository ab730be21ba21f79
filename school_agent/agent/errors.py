"""
Errors raised by the chat orchestration layer.

The transport maps these to HTTP responses; nothing here retries.
"""


class AgentError(Exception):
    """Base class for orchestration errors."""


class InputError(AgentError):
    """The user utterance is missing, not a string, or blank."""


class RoutingFailure(AgentError):
    """No capability could be resolved for the utterance."""


class CapabilityFailure(AgentError):
    """A capability raised while streaming or resolving its final message."""

    def __init__(self, capability: str, cause: BaseException):
        super().__init__(str(cause) or cause.__class__.__name__)
        self.capability = capability
        self.cause = cause


def validate_utterance(value: object) -> str:
    """Return the utterance unchanged, or raise InputError if unusable."""
    if not isinstance(value, str) or not value.strip():
        raise InputError("Message is required")
    return value
