"""
State definitions for the school agent.

ContextStore is the read-only snapshot that seeds a session. Message is one
committed history entry. Part / RoutedMessage / RoutedResponse describe what a
capability produces for a single turn, and Invocation pairs its two output
channels.
"""
from dataclasses import dataclass
from typing import Any, AsyncIterator, Awaitable, Literal
from pydantic import BaseModel, ConfigDict, Field, NonNegativeInt, field_validator, model_validator


class Dependent(BaseModel):
    """A student the guardian is responsible for."""
    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    grade_level: NonNegativeInt
    # Order-preserving set of activity names
    activities: tuple[str, ...] = ()

    @field_validator("activities", mode="before")
    @classmethod
    def _dedupe_activities(cls, value: Any) -> Any:
        if value is None:
            return ()
        if isinstance(value, (list, tuple, set, frozenset)):
            return tuple(dict.fromkeys(value))
        return value


class ContextStore(BaseModel):
    """
    Immutable snapshot of the requesting guardian and their students.

    Frozen once constructed; dependent ids must be unique.
    """
    model_config = ConfigDict(frozen=True)

    subject_id: int
    subject_name: str
    dependents: tuple[Dependent, ...] = ()

    @model_validator(mode="after")
    def _unique_dependent_ids(self) -> "ContextStore":
        seen = set()
        for dependent in self.dependents:
            if dependent.id in seen:
                raise ValueError(f"duplicate dependent id: {dependent.id}")
            seen.add(dependent.id)
        return self

    def dependent(self, dependent_id: int) -> Dependent | None:
        """Look up a dependent by id."""
        for dependent in self.dependents:
            if dependent.id == dependent_id:
                return dependent
        return None

    def find_dependent(self, name: str) -> Dependent | None:
        """Find the first dependent whose name contains `name` (case-insensitive)."""
        needle = name.strip().lower()
        if not needle:
            return None
        for dependent in self.dependents:
            if needle in dependent.name.lower():
                return dependent
        return None


class Message(BaseModel):
    """A single committed conversation turn entry."""
    role: Literal["user", "agent"]
    content: str


class Part(BaseModel):
    """
    One tagged piece of a routed message.

    Exactly one payload is expected to be set; only `text` parts contribute
    to the final answer.
    """
    text: str | None = None
    tool_request: dict[str, Any] | None = None
    tool_response: dict[str, Any] | None = None
    data: Any = None

    @property
    def kind(self) -> str:
        if self.text is not None:
            return "text"
        if self.tool_request is not None:
            return "tool_request"
        if self.tool_response is not None:
            return "tool_response"
        return "data"


class RoutedMessage(BaseModel):
    """A message exchanged between the router and a capability."""
    role: Literal["user", "agent", "tool", "system"]
    content: list[Part] = Field(default_factory=list)

    @property
    def text(self) -> str | None:
        """First text part of the message, if any."""
        for part in self.content:
            if part.text:
                return part.text
        return None


class RoutedResponse(BaseModel):
    """Final structured output of a capability for one turn."""
    capability: str = ""
    messages: list[RoutedMessage] = Field(default_factory=list)

    def last_agent_message(self) -> RoutedMessage | None:
        for message in reversed(self.messages):
            if message.role == "agent":
                return message
        return None


@dataclass
class Invocation:
    """
    The two output channels of an invoked capability.

    `fragments` yields text parts in emission order; `final` resolves to the
    complete RoutedResponse once the capability finishes.
    """
    capability: str
    fragments: AsyncIterator[Part]
    final: Awaitable[RoutedResponse]
