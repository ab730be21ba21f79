"""
Response Assembler

Reduces a capability's two output channels into one answer string:

1. Drain the fragment stream, concatenating text in arrival order.
2. Any streamed text is the answer; the final message is discarded unread.
3. Otherwise await the final message and use the first text part of its
   most recent agent entry.
4. If neither yields text, answer NO_RESPONSE.
"""
import asyncio
from enum import Enum
from typing import AsyncIterator
from school_agent.agent.errors import AgentError, CapabilityFailure
from school_agent.agent.logging import log_error, log_node_result
from school_agent.agent.state import Invocation


NO_RESPONSE = "No response generated"


class AssemblyState(str, Enum):
    """Per-turn assembly state."""
    AWAITING_STREAM = "awaiting_stream"
    STREAM_COMPLETE = "stream_complete"
    AWAITING_FINAL_MESSAGE = "awaiting_final_message"
    DONE = "done"
    FAILED = "failed"


class ResponseAssembler:
    """Assembles the answer for a single turn. Not reusable across turns."""

    def __init__(self, invocation: Invocation):
        self.invocation = invocation
        self.state = AssemblyState.AWAITING_STREAM
        self.source: str | None = None  # "stream", "final_message" or "sentinel"
        self.answer: str | None = None
        self._accumulator: list[str] = []

    async def stream(self) -> AsyncIterator[str]:
        """
        Yield answer text as it becomes available.

        Streamed fragments are yielded as they arrive. If none carried text,
        the fallback text (or NO_RESPONSE) is yielded once. The yielded chunks
        always join to `answer`.
        """
        if self.state != AssemblyState.AWAITING_STREAM:
            raise RuntimeError(f"Assembler already used (state: {self.state.value})")

        try:
            async for fragment in self.invocation.fragments:
                text = getattr(fragment, "text", None)
                if text:
                    self._accumulator.append(text)
                    yield text
            self.state = AssemblyState.STREAM_COMPLETE

            if self._accumulator:
                self._finish("".join(self._accumulator), "stream")
                return

            self.state = AssemblyState.AWAITING_FINAL_MESSAGE
            response = await self.invocation.final
            message = response.last_agent_message() if response is not None else None
            text = message.text if message is not None else None

            if text:
                self._finish(text, "final_message")
            else:
                self._finish(NO_RESPONSE, "sentinel")
            yield self.answer
        except AgentError:
            self._fail()
            raise
        except Exception as e:
            self._fail()
            log_error(f"Capability '{self.invocation.capability}' failed", e)
            raise CapabilityFailure(self.invocation.capability, e) from e
        except BaseException:
            # Cancelled or closed by the consumer
            self._fail()
            raise
        finally:
            await self._close()

    async def assemble(self) -> str:
        """Drain the invocation and return the final answer."""
        async for _ in self.stream():
            pass
        return self.answer

    def _finish(self, answer: str, source: str) -> None:
        self.answer = answer
        self.source = source
        self.state = AssemblyState.DONE
        log_node_result("ASSEMBLER", {"source": source, "length": len(answer)})

    def _fail(self) -> None:
        self.state = AssemblyState.FAILED
        self.answer = None
        self._accumulator.clear()

    async def _close(self) -> None:
        """Stop the fragment stream and discard an unread final message."""
        aclose = getattr(self.invocation.fragments, "aclose", None)
        if aclose is not None:
            await aclose()

        final = self.invocation.final
        if isinstance(final, asyncio.Future):
            if not final.done():
                final.cancel()
        elif asyncio.iscoroutine(final):
            final.close()
