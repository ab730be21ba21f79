"""
Capabilities the routing agent dispatches to.

Concrete capabilities are imported by build_default_registry().
"""
from school_agent.agent.capabilities.base import AgentCapability, Capability
from school_agent.agent.capabilities.registry import CapabilityRegistry, build_default_registry

__all__ = [
    "AgentCapability",
    "Capability",
    "CapabilityRegistry",
    "build_default_registry",
]
