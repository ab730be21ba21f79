"""
AgentCapability against scripted chat models (no network).
"""
from langchain_core.language_models import BaseChatModel
from langchain_core.language_models.fake_chat_models import GenericFakeChatModel
from langchain_core.messages import AIMessage, HumanMessage, SystemMessage, ToolMessage
from langchain_core.outputs import ChatGeneration, ChatResult

from school_agent.agent import create_session, send_turn
from school_agent.agent.capabilities import CapabilityRegistry, build_default_registry
from school_agent.agent.capabilities.grades import GradesCapability
from school_agent.agent.router import RoutingAgent
from school_agent.agent.state import ContextStore, Dependent, Message
from school_agent.config import Settings


class ScriptedChatModel(GenericFakeChatModel):
    """Fake chat model that accepts tools without using them."""

    def bind_tools(self, tools, **kwargs):
        return self


def grades_capability(reply: str, streaming: bool) -> GradesCapability:
    settings = Settings()
    settings.STREAM_RESPONSES = streaming
    return GradesCapability(settings, llm=ScriptedChatModel(messages=iter([AIMessage(content=reply)])))


def test_default_registry():
    registry = build_default_registry(Settings())
    assert registry.names() == ["grades", "events", "announcements", "general"]
    assert "general" in registry
    assert "sports" not in registry
    assert [t.name for t in registry.get("announcements").tools] == ["list_announcements"]
    assert len(registry.get("general").tools) == 4


def test_build_messages_includes_context_history_and_utterance(context):
    capability = grades_capability("unused", streaming=False)
    session = create_session(context, router=RoutingAgent(build_default_registry(Settings())))
    session.history.extend([Message(role="user", content="hi"), Message(role="agent", content="hello")])

    messages = capability.build_messages(session, "How are Evan's grades?")

    assert isinstance(messages[0], SystemMessage)
    assert "Evan Smith (student id 9433), grade 11" in messages[0].content
    assert "get_recent_grades" in messages[0].content
    assert [type(m) for m in messages[1:]] == [HumanMessage, AIMessage, HumanMessage]
    assert messages[-1].content == "How are Evan's grades?"


async def test_streaming_capability_emits_fragments_matching_final(context):
    reply = "Evan earned an A on his Gatsby analysis."
    capability = grades_capability(reply, streaming=True)
    session = create_session(context, router=RoutingAgent(build_default_registry(Settings())))

    invocation = capability.invoke(session, "How is Evan doing?")
    fragments = [part.text async for part in invocation.fragments]
    final = await invocation.final

    assert "".join(fragments) == reply
    assert final.capability == "grades"
    assert final.last_agent_message().text == reply


async def test_non_streaming_capability_only_resolves_final(context):
    reply = "Evelyn is doing well in Biology."
    capability = grades_capability(reply, streaming=False)
    session = create_session(context, router=RoutingAgent(build_default_registry(Settings())))

    invocation = capability.invoke(session, "How is Evelyn doing?")
    fragments = [part async for part in invocation.fragments]
    final = await invocation.final

    assert fragments == []
    assert [m.role for m in final.messages] == ["user", "agent"]
    assert final.last_agent_message().text == reply


class LookupThenAnswerModel(BaseChatModel):
    """Chat model that announces a grade lookup, calls the tool, then answers."""

    student_id: int = 3734
    answer: str = "Evelyn has an A- in Biology."

    @property
    def _llm_type(self) -> str:
        return "lookup-then-answer"

    def bind_tools(self, tools, **kwargs):
        return self

    def _generate(self, messages, stop=None, run_manager=None, **kwargs) -> ChatResult:
        if not any(isinstance(m, ToolMessage) for m in messages):
            call = {"id": "call_1", "name": "get_recent_grades", "args": {"student_id": self.student_id}}
            message = AIMessage(
                content=[
                    {"type": "text", "text": "Let me look that up."},
                    {"type": "tool_use", "id": "call_1", "name": "get_recent_grades", "input": call["args"]},
                ],
                tool_calls=[call],
            )
        else:
            message = AIMessage(content=self.answer)
        return ChatResult(generations=[ChatGeneration(message=message)])


def lookup_capability(model: LookupThenAnswerModel, streaming: bool) -> GradesCapability:
    settings = Settings()
    settings.STREAM_RESPONSES = streaming
    return GradesCapability(settings, llm=model)


def tool_results(response) -> list[str]:
    return [
        part.tool_response["content"]
        for message in response.messages if message.role == "tool"
        for part in message.content
    ]


async def test_text_before_a_tool_call_is_not_streamed(context):
    model = LookupThenAnswerModel()
    capability = lookup_capability(model, streaming=True)
    session = create_session(context, router=RoutingAgent(CapabilityRegistry([capability]), default="grades"))

    invocation = capability.invoke(session, "How is Evelyn doing?")
    fragments = [part.text async for part in invocation.fragments]
    final = await invocation.final

    assert "".join(fragments) == model.answer
    assert final.last_agent_message().text == model.answer
    assert [m.role for m in final.messages] == ["user", "agent", "tool", "agent"]


async def test_streamed_lookup_turn_commits_only_the_answer(context):
    model = LookupThenAnswerModel()
    capability = lookup_capability(model, streaming=True)
    session = create_session(context, router=RoutingAgent(CapabilityRegistry([capability]), default="grades"))

    assert await send_turn(session, "How is Evelyn doing?") == model.answer
    assert session.history[-1].content == model.answer


async def test_tools_see_the_session_context(context):
    capability = lookup_capability(LookupThenAnswerModel(student_id=3734), streaming=False)
    session = create_session(context, router=RoutingAgent(CapabilityRegistry([capability]), default="grades"))

    final = await capability.invoke(session, "How is Evelyn doing?").final

    [result] = tool_results(final)
    assert "Biology" in result
    assert "error" not in result


async def test_tools_reject_students_outside_the_session_context():
    only_evelyn = ContextStore(
        subject_id=77,
        subject_name="Pat Jones",
        dependents=[Dependent(id=3734, name="Evelyn Smith", grade_level=9)],
    )
    capability = lookup_capability(LookupThenAnswerModel(student_id=9433), streaming=True)
    session = create_session(only_evelyn, router=RoutingAgent(CapabilityRegistry([capability]), default="grades"))

    invocation = capability.invoke(session, "How is Evan doing?")
    [part async for part in invocation.fragments]
    final = await invocation.final

    [result] = tool_results(final)
    assert "Student 9433 not found" in result
