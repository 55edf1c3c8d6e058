"""Capabilities – Resource, Collection and ClassTimestamp markers per model."""
from cache_map.capabilities.registry import (
    Capability,
    CapabilityFlags,
    CapabilityRegistry,
    InMemoryCapabilityRegistry,
)

__all__ = [
    "Capability",
    "CapabilityFlags",
    "CapabilityRegistry",
    "InMemoryCapabilityRegistry",
]
