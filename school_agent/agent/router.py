"""
Routing Agent

Decides which capability answers an utterance and invokes it.

Selection is rule-based and deterministic: every capability scores the
utterance (keyword matches, plus context signals such as a student's
activities) and the single best score wins. No match, or a tie for the best
score, falls back to the default capability.
"""
from typing import TYPE_CHECKING
from school_agent.agent.capabilities.base import Capability
from school_agent.agent.capabilities.registry import CapabilityRegistry
from school_agent.agent.errors import CapabilityFailure, RoutingFailure
from school_agent.agent.logging import log_decision, log_node_result, log_turn_start
from school_agent.agent.state import Invocation

if TYPE_CHECKING:
    from school_agent.agent.session import Session


DEFAULT_CAPABILITY = "general"


class RoutingAgent:
    """Dispatcher over a fixed registry of capabilities."""

    def __init__(self, registry: CapabilityRegistry, default: str = DEFAULT_CAPABILITY):
        self.registry = registry
        self.default = default

    def _default_capability(self, reason: str) -> Capability:
        if self.default not in self.registry:
            raise RoutingFailure(f"No capability for utterance ({reason}) and default '{self.default}' is not registered")
        return self.registry.get(self.default)

    def select(self, session: "Session", utterance: str) -> tuple[Capability, str]:
        """
        Pick the capability for an utterance.

        Returns:
            Tuple of (capability, reason)
        """
        if not len(self.registry):
            raise RoutingFailure("No capabilities registered")

        scores = {c.name: c.score(session.context, utterance) for c in self.registry}
        best = max(scores.values())

        if best <= 0:
            return self._default_capability("no routing signal"), "no routing signal"

        leaders = sorted(name for name, score in scores.items() if score == best)
        if len(leaders) > 1:
            reason = f"tie between {', '.join(leaders)}"
            return self._default_capability(reason), reason

        return self.registry.get(leaders[0]), f"score {best}"

    def dispatch(self, session: "Session", utterance: str) -> Invocation:
        """Select a capability and invoke it."""
        log_turn_start("ROUTER", utterance)

        capability, reason = self.select(session, utterance)
        log_node_result("ROUTER", {"capability": capability.name, "reason": reason})
        log_decision(f"Routing to {capability.name}", reason)

        try:
            return capability.invoke(session, utterance)
        except Exception as e:
            raise CapabilityFailure(capability.name, e) from e
