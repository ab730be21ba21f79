"""
Session: a stateful conversation handle.

A Session owns a private ContextStore snapshot and an append-only history.
A turn commits atomically: the user entry and the agent entry are appended
together once the answer is assembled, so a failed or abandoned turn leaves
history untouched.

Turns on one Session must be serialized by the caller.
"""
import uuid
from contextlib import aclosing
from typing import AsyncIterator
from school_agent.agent.assembler import ResponseAssembler
from school_agent.agent.errors import validate_utterance
from school_agent.agent.logging import log_flow_complete, log_header, log_session_state
from school_agent.agent.router import RoutingAgent
from school_agent.agent.state import ContextStore, Message


class Session:
    """One conversation bound to one context snapshot."""

    def __init__(self, context: ContextStore, router: RoutingAgent, session_id: str | None = None):
        self.session_id = session_id or uuid.uuid4().hex
        # Private snapshot; the caller's copy is never shared
        self.context = context.model_copy(deep=True)
        self.router = router
        self.history: list[Message] = []
        self.last_capability: str | None = None

    @property
    def turns(self) -> int:
        return len(self.history) // 2

    async def stream_turn(self, utterance: str) -> AsyncIterator[str]:
        """
        Run one turn, yielding answer text as it is assembled.

        History is committed only after the final chunk, so closing the
        iterator early or hitting an error commits nothing.
        """
        utterance = validate_utterance(utterance)
        log_header(f"TURN {self.turns + 1} [{self.session_id[:8]}]: {utterance[:40]}{'...' if len(utterance) > 40 else ''}")
        log_session_state(self)

        invocation = self.router.dispatch(self, utterance)
        assembler = ResponseAssembler(invocation)
        async with aclosing(assembler.stream()) as chunks:
            async for text in chunks:
                yield text

        self._commit(utterance, assembler.answer)
        self.last_capability = invocation.capability
        log_flow_complete(assembler.answer)

    async def send_turn(self, utterance: str) -> str:
        """Run one turn and return the final answer."""
        chunks = []
        async for text in self.stream_turn(utterance):
            chunks.append(text)
        return "".join(chunks)

    def _commit(self, utterance: str, answer: str) -> None:
        self.history.extend([
            Message(role="user", content=utterance),
            Message(role="agent", content=answer),
        ])


def create_session(
    context: ContextStore,
    router: RoutingAgent | None = None,
    session_id: str | None = None,
) -> Session:
    """Create a Session with empty history, using the default router if none is given."""
    if router is None:
        router = default_router()
    return Session(context, router, session_id=session_id)


async def send_turn(session: Session, utterance: str) -> str:
    """Run one conversational turn on `session` and return the answer."""
    return await session.send_turn(utterance)


_default_router: RoutingAgent | None = None


def default_router() -> RoutingAgent:
    """Router over the default capability registry, built once per process."""
    global _default_router
    if _default_router is None:
        from school_agent.agent.capabilities import build_default_registry
        _default_router = RoutingAgent(build_default_registry())
    return _default_router
