"""Capabilities – side-table of capability flags keyed by model identity."""
from __future__ import annotations

import dataclasses
import enum
import logging
from typing import Any, Protocol, runtime_checkable

__all__ = [
    "Capability",
    "CapabilityFlags",
    "CapabilityRegistry",
    "InMemoryCapabilityRegistry",
]

logger = logging.getLogger(__name__)


class Capability(str, enum.Enum):
    RESOURCE = "resource"
    COLLECTION = "collection"
    CLASS_TIMESTAMP = "class_timestamp"


@dataclasses.dataclass(frozen=True)
class CapabilityFlags:
    """Which capabilities a model currently carries."""

    has_resource: bool = False
    has_collection: bool = False
    has_timestamp: bool = False

    def has(self, capability: Capability) -> bool:
        return getattr(self, _FLAG_FIELDS[capability])

    def with_capability(self, capability: Capability) -> CapabilityFlags:
        return dataclasses.replace(self, **{_FLAG_FIELDS[capability]: True})


_FLAG_FIELDS: dict[Capability, str] = {
    Capability.RESOURCE: "has_resource",
    Capability.COLLECTION: "has_collection",
    Capability.CLASS_TIMESTAMP: "has_timestamp",
}


@runtime_checkable
class CapabilityRegistry(Protocol):
    def has(self, model: Any, capability: Capability) -> bool: ...
    def attach(self, model: Any, capability: Capability) -> bool: ...  # True if newly attached


class InMemoryCapabilityRegistry:
    """Process-local :class:`CapabilityRegistry`; attaching twice is a no-op."""

    def __init__(self) -> None:
        self._flags: dict[Any, CapabilityFlags] = {}

    def flags(self, model: Any) -> CapabilityFlags:
        return self._flags.get(model, CapabilityFlags())

    def has(self, model: Any, capability: Capability) -> bool:
        return self.flags(model).has(capability)

    def attach(self, model: Any, capability: Capability) -> bool:
        current = self.flags(model)
        if current.has(capability):
            return False
        self._flags[model] = current.with_capability(capability)
        logger.debug(
            "capability.attached model=%s capability=%s",
            getattr(model, "__qualname__", model),
            capability.value,
        )
        return True

    def models_with(self, capability: Capability) -> list[Any]:
        return [model for model, flags in self._flags.items() if flags.has(capability)]
