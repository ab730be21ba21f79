"""
Capability registry.

Lookup table of capabilities keyed by name (the routing signal), in
registration order.
"""
from typing import Iterator
from school_agent.config import Settings
from school_agent.agent.capabilities.base import Capability


class CapabilityRegistry:
    """
    Registry of the capabilities available to the router.

    Usage:
        capabilities = CapabilityRegistry()
        capabilities.register(GradesCapability())
        capabilities.get("grades")
    """

    def __init__(self, capabilities: list[Capability] | None = None):
        self._capabilities: dict[str, Capability] = {}
        for capability in capabilities or []:
            self.register(capability)

    def register(self, capability: Capability) -> Capability:
        """Register a capability under its name; names must be unique."""
        if not capability.name:
            raise ValueError(f"{type(capability).__name__} has no name")
        if capability.name in self._capabilities:
            raise ValueError(f"Capability already registered: {capability.name}")
        self._capabilities[capability.name] = capability
        return capability

    def get(self, name: str) -> Capability | None:
        return self._capabilities.get(name)

    def names(self) -> list[str]:
        return list(self._capabilities)

    def __contains__(self, name: str) -> bool:
        return name in self._capabilities

    def __iter__(self) -> Iterator[Capability]:
        return iter(list(self._capabilities.values()))

    def __len__(self) -> int:
        return len(self._capabilities)


def build_default_registry(settings: Settings | None = None) -> CapabilityRegistry:
    """Register the grades, events, announcements and general capabilities."""
    from school_agent.agent.capabilities.announcements import AnnouncementsCapability
    from school_agent.agent.capabilities.events import EventsCapability
    from school_agent.agent.capabilities.general import GeneralCapability
    from school_agent.agent.capabilities.grades import GradesCapability

    return CapabilityRegistry([
        GradesCapability(settings),
        EventsCapability(settings),
        AnnouncementsCapability(settings),
        GeneralCapability(settings),
    ])
