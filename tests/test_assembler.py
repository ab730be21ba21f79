import asyncio

import pytest

from school_agent.agent.assembler import NO_RESPONSE, AssemblyState, ResponseAssembler
from school_agent.agent.errors import CapabilityFailure
from school_agent.agent.state import Invocation, Part, RoutedMessage, RoutedResponse

from tests.conftest import agent_reply


def make_invocation(fragments, final=None, error=None):
    """Invocation over a list of parts; `final` may be a response or a future."""
    loop = asyncio.get_running_loop()
    if isinstance(final, asyncio.Future):
        future = final
    else:
        future = loop.create_future()
        if final is not None:
            future.set_result(final)
    state = {"closed": False}

    async def gen():
        try:
            for fragment in fragments:
                yield fragment
            if error is not None:
                raise error
        finally:
            state["closed"] = True

    return Invocation("test", gen(), future), state


async def test_streamed_text_is_concatenated_in_order():
    invocation, _ = make_invocation(
        [Part(text="Evelyn "), Part(text="has an "), Part(text="A.")],
        final=agent_reply(Part(text="something else entirely")),
    )
    assembler = ResponseAssembler(invocation)

    assert await assembler.assemble() == "Evelyn has an A."
    assert assembler.source == "stream"
    assert assembler.state == AssemblyState.DONE


async def test_stream_wins_without_waiting_for_final():
    pending = asyncio.get_running_loop().create_future()
    invocation, _ = make_invocation([Part(text="done")], final=pending)

    answer = await asyncio.wait_for(ResponseAssembler(invocation).assemble(), timeout=1)

    assert answer == "done"
    assert pending.cancelled()


async def test_non_text_fragments_are_ignored():
    invocation, _ = make_invocation(
        [Part(tool_request={"name": "search_events"}), Part(text="Concert on the 24th"), Part(text="")],
    )
    assert await ResponseAssembler(invocation).assemble() == "Concert on the 24th"


async def test_falls_back_to_final_message_when_nothing_streamed():
    invocation, _ = make_invocation([], final=agent_reply(Part(text="X")))
    assembler = ResponseAssembler(invocation)

    assert await assembler.assemble() == "X"
    assert assembler.source == "final_message"


async def test_fallback_uses_most_recent_agent_entry_and_first_text_part():
    final = RoutedResponse(messages=[
        RoutedMessage(role="agent", content=[Part(text="older")]),
        RoutedMessage(role="agent", content=[
            Part(tool_request={"name": "list_announcements"}),
            Part(text="newest"),
            Part(text="ignored"),
        ]),
    ])
    invocation, _ = make_invocation([], final=final)
    assert await ResponseAssembler(invocation).assemble() == "newest"


@pytest.mark.parametrize("final", [
    RoutedResponse(),
    RoutedResponse(messages=[RoutedMessage(role="user", content=[Part(text="hello?")])]),
    agent_reply(Part(tool_request={"name": "get_recent_grades"})),
    agent_reply(),
])
async def test_sentinel_when_no_text_anywhere(final):
    invocation, _ = make_invocation([], final=final)
    assembler = ResponseAssembler(invocation)

    assert await assembler.assemble() == NO_RESPONSE
    assert assembler.source == "sentinel"


async def test_stream_yields_fallback_text_once():
    invocation, _ = make_invocation([], final=agent_reply(Part(text="from final")))
    chunks = [chunk async for chunk in ResponseAssembler(invocation).stream()]
    assert chunks == ["from final"]


async def test_mid_stream_failure_discards_partial_text():
    invocation, state = make_invocation(
        [Part(text="one "), Part(text="two ")],
        error=RuntimeError("provider went away"),
    )
    assembler = ResponseAssembler(invocation)

    with pytest.raises(CapabilityFailure) as excinfo:
        await assembler.assemble()

    assert str(excinfo.value) == "provider went away"
    assert excinfo.value.capability == "test"
    assert assembler.state == AssemblyState.FAILED
    assert assembler.answer is None
    assert state["closed"]


async def test_final_message_failure_is_propagated():
    failed = asyncio.get_running_loop().create_future()
    failed.set_exception(ValueError("bad final"))
    invocation, _ = make_invocation([], final=failed)
    assembler = ResponseAssembler(invocation)

    with pytest.raises(CapabilityFailure):
        await assembler.assemble()
    assert assembler.state == AssemblyState.FAILED


async def test_closing_early_closes_fragments_and_discards_final():
    pending = asyncio.get_running_loop().create_future()
    invocation, state = make_invocation([Part(text="a"), Part(text="b")], final=pending)
    assembler = ResponseAssembler(invocation)

    stream = assembler.stream()
    assert await stream.__anext__() == "a"
    await stream.aclose()

    assert state["closed"]
    assert pending.cancelled()
    assert assembler.state == AssemblyState.FAILED
    assert assembler.answer is None


async def test_assembler_is_single_use():
    invocation, _ = make_invocation([Part(text="once")])
    assembler = ResponseAssembler(invocation)
    await assembler.assemble()

    with pytest.raises(RuntimeError):
        await assembler.assemble()
