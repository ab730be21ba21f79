"""
Capability base classes.

A capability answers a narrow class of utterances. invoke() returns an
Invocation: an async iterator of text fragments plus a future that resolves to
the complete RoutedResponse. AgentCapability implements this with a LangGraph
ReAct agent over Claude, using the tools of its categories.
"""
import asyncio
import json
import re
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, AsyncIterator
from langchain_anthropic import ChatAnthropic
from langchain_core.language_models import BaseChatModel
from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage
from langgraph.prebuilt import create_react_agent
from school_agent.config import Settings, get_settings
from school_agent.agent.logging import log_tool_call
from school_agent.agent.messages import content_to_parts, history_to_messages, to_routed_message
from school_agent.agent.prompts import format_capability_prompt
from school_agent.agent.state import ContextStore, Invocation, Part, RoutedResponse

if TYPE_CHECKING:
    from school_agent.agent.session import Session


class Capability(ABC):
    """Base class for the specialized agents the router dispatches to."""

    name: str = ""
    description: str = ""
    # Regex patterns matched against the lower-cased utterance
    keywords: list[str] = []

    def score(self, context: ContextStore, utterance: str) -> int:
        """Count keyword matches; higher means a better fit."""
        text = utterance.lower()
        return sum(1 for pattern in self.keywords if re.search(pattern, text))

    @abstractmethod
    def invoke(self, session: "Session", utterance: str) -> Invocation:
        """Start answering the utterance; must be called from a running event loop."""


async def no_fragments() -> AsyncIterator[Part]:
    """Fragment channel of a capability that does not stream."""
    return
    yield


def answer_parts(pending: list[Part], message: AIMessage) -> list[Part]:
    """Buffered text parts of `message`, cut where they stop being a prefix of its answer text."""
    answer = to_routed_message(message).text or ""
    emitted = ""
    parts = []
    for part in pending:
        if not answer.startswith(emitted + part.text):
            break
        emitted += part.text
        parts.append(part)
    return parts


def _log_tool_calls(messages: list[BaseMessage]) -> None:
    """Log tool calls made by the agent during a turn."""
    tool_count = 0
    for msg in messages:
        if isinstance(msg, AIMessage) and msg.tool_calls:
            for tc in msg.tool_calls:
                tool_count += 1
                log_tool_call(tc.get("name", "unknown"), tc.get("args", {}))
    if tool_count:
        print(f"  [CAPABILITY] Made {tool_count} tool calls")


class AgentCapability(Capability):
    """
    Capability backed by a ReAct agent.

    Subclasses set `name`, `keywords`, `categories` (tool categories) and
    `instructions` (role text for the system prompt).
    """

    categories: list[str] = []
    instructions: str = ""

    def __init__(self, settings: Settings | None = None, llm: BaseChatModel | None = None):
        self.settings = settings or get_settings()
        self._llm = llm
        self._agent = None

    @property
    def tools(self) -> list:
        from school_agent.agent.tools import get_tools
        return get_tools(self.categories)

    def _get_agent(self):
        """Create the ReAct agent on first use."""
        if self._agent is None:
            llm = self._llm or ChatAnthropic(
                model=self.settings.AGENT_MODEL,
                api_key=self.settings.ANTHROPIC_API_KEY,
                max_tokens=self.settings.MAX_TOKENS,
            )
            self._agent = create_react_agent(llm, self.tools)
        return self._agent

    def build_messages(self, session: "Session", utterance: str) -> list[BaseMessage]:
        """System prompt, prior history, then the new utterance."""
        from school_agent.agent.tools import get_tool_docs

        system_prompt = format_capability_prompt(
            session.context,
            self.instructions,
            get_tool_docs(self.categories),
        )
        return [
            SystemMessage(content=system_prompt),
            *history_to_messages(session.history),
            HumanMessage(content=utterance),
        ]

    def invoke(self, session: "Session", utterance: str) -> Invocation:
        agent = self._get_agent()
        messages = self.build_messages(session, utterance)
        # Tools look students up in the session's context
        config = {"configurable": {"context": session.context}}

        if self.settings.STREAM_RESPONSES:
            final = asyncio.get_running_loop().create_future()
            return Invocation(self.name, self._stream(agent, messages, config, final), final)

        return Invocation(self.name, no_fragments(), asyncio.ensure_future(self._complete(agent, messages, config)))

    def _to_response(self, messages: list[BaseMessage]) -> RoutedResponse:
        return RoutedResponse(
            capability=self.name,
            messages=[to_routed_message(m) for m in messages if not isinstance(m, SystemMessage)],
        )

    async def _stream(
        self,
        agent,
        messages: list[BaseMessage],
        config: dict,
        final: asyncio.Future,
    ) -> AsyncIterator[Part]:
        """
        Yield answer text as the agent produces it, then resolve `final`.

        Text from a model call is held until the call ends. If that call asked
        for tools, its text (e.g. "Let me look that up.") is dropped; only the
        answering call's text is emitted.
        """
        print(f"  [{self.name.upper()}] Streaming with {self.settings.AGENT_MODEL}...")

        snapshot: dict = {"messages": messages}
        pending: list[Part] = []
        streamed = 0
        try:
            async for mode, payload in agent.astream(
                {"messages": messages},
                config=config,
                stream_mode=["messages", "values"],
            ):
                if mode == "values":
                    snapshot = payload
                    last = payload["messages"][-1] if payload["messages"] else None
                    if not isinstance(last, AIMessage):
                        continue
                    if not last.tool_calls:
                        for part in answer_parts(pending, last):
                            streamed += len(part.text)
                            yield part
                    pending = []
                    continue

                chunk, _metadata = payload
                if isinstance(chunk, AIMessage):
                    pending.extend(p for p in content_to_parts(chunk.content) if p.text)

            _log_tool_calls(snapshot["messages"])
            print(f"  [{self.name.upper()}] Streamed {streamed} chars")
            final.set_result(self._to_response(snapshot["messages"]))
        finally:
            if not final.done():
                final.cancel()

    async def _complete(self, agent, messages: list[BaseMessage], config: dict) -> RoutedResponse:
        """Run the agent to completion without streaming."""
        print(f"  [{self.name.upper()}] Invoking {self.settings.AGENT_MODEL}...")

        result = await agent.ainvoke({"messages": messages}, config=config)
        result_messages = result.get("messages", [])
        _log_tool_calls(result_messages)

        response = self._to_response(result_messages)
        last = response.last_agent_message()
        print(f"  [{self.name.upper()}] Final message: {json.dumps(last.text if last else None)[:80]}")
        return response
