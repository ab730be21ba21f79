"""
Shared fixtures: a small guardian context and scripted capabilities that
never touch a model.
"""
import asyncio

import pytest

from school_agent.agent.capabilities import Capability, CapabilityRegistry
from school_agent.agent.router import RoutingAgent
from school_agent.agent.state import (
    ContextStore,
    Dependent,
    Invocation,
    Part,
    RoutedMessage,
    RoutedResponse,
)


class ScriptedCapability(Capability):
    """
    Capability that replays a fixed script.

    Yields `fragments` as text parts, then resolves `final` (unless
    resolve_final is False). If `error` is set it is raised after
    `fail_after` fragments.
    """

    def __init__(
        self,
        name: str,
        keywords: list[str] | None = None,
        fragments: list | None = None,
        final: RoutedResponse | None = None,
        error: Exception | None = None,
        fail_after: int = 0,
        resolve_final: bool = True,
    ):
        self.name = name
        self.keywords = keywords or []
        self.fragments = fragments or []
        self.final = final if final is not None else RoutedResponse(capability=name)
        self.error = error
        self.fail_after = fail_after
        self.resolve_final = resolve_final
        self.calls: list[tuple[int, str]] = []
        self.last_final: asyncio.Future | None = None
        self.closed = False

    def invoke(self, session, utterance):
        self.calls.append((len(session.history), utterance))
        final = asyncio.get_running_loop().create_future()
        self.last_final = final
        return Invocation(self.name, self._fragments(final), final)

    async def _fragments(self, final):
        try:
            for index, fragment in enumerate(self.fragments):
                if self.error is not None and index == self.fail_after:
                    raise self.error
                yield fragment if isinstance(fragment, Part) else Part(text=fragment)
            if self.error is not None:
                raise self.error
            if self.resolve_final:
                final.set_result(self.final)
        finally:
            self.closed = True


def agent_reply(*parts: Part) -> RoutedResponse:
    """Final response holding a user entry and one agent entry."""
    return RoutedResponse(messages=[
        RoutedMessage(role="user", content=[Part(text="question")]),
        RoutedMessage(role="agent", content=list(parts)),
    ])


@pytest.fixture
def context() -> ContextStore:
    return ContextStore(
        subject_id=4112,
        subject_name="Francis Smith",
        dependents=[
            Dependent(id=3734, name="Evelyn Smith", grade_level=9, activities=["Choir", "Drama Club"]),
            Dependent(id=9433, name="Evan Smith", grade_level=11, activities=["Chess Club"]),
        ],
    )


@pytest.fixture
def make_router():
    def _make(*capabilities: Capability, default: str = "general") -> RoutingAgent:
        return RoutingAgent(CapabilityRegistry(list(capabilities)), default=default)
    return _make
