"""Graph – value types produced by a cache-map declaration run."""
from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any

from cache_map.kernel.errors import InvalidOptionError

__all__ = ["DependencyRecord", "ResourceEntry", "TriggerEvent", "model_name"]


def model_name(model: Any) -> str:
    return getattr(model, "__qualname__", None) or repr(model)


class TriggerEvent(str, enum.Enum):
    """Lifecycle moment on which a collection change invalidates its resources."""

    AFTER_SAVE = "after_save"
    AFTER_CREATE = "after_create"
    AFTER_UPDATE = "after_update"
    AFTER_DESTROY = "after_destroy"
    AFTER_COMMIT = "after_commit"

    @classmethod
    def parse(cls, value: TriggerEvent | str) -> TriggerEvent:
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise InvalidOptionError(
                "on", value, f"expected one of {sorted(t.value for t in cls)}"
            ) from None


@dataclass(frozen=True)
class ResourceEntry:
    """Cache bookkeeping owned by a resource model.

    ``scopes`` and ``cached_collections`` only ever grow across repeated
    declarations of the same model.
    """

    model: Any
    scopes: frozenset[str] = frozenset()
    timestamp_enabled: bool = False
    cached_collections: frozenset[str] = frozenset()

    def to_dict(self) -> dict[str, Any]:
        return {
            "model": model_name(self.model),
            "scopes": sorted(self.scopes),
            "timestamp_enabled": self.timestamp_enabled,
            "cached_collections": sorted(self.cached_collections),
        }


@dataclass(frozen=True)
class DependencyRecord:
    """Links a collection's target model to the resource it invalidates."""

    target_model: Any
    owner_resource: Any
    association_name: str
    scopes: frozenset[str] = frozenset()
    trigger: TriggerEvent = TriggerEvent.AFTER_SAVE
    members: tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        return {
            "target_model": model_name(self.target_model),
            "owner_resource": model_name(self.owner_resource),
            "association_name": self.association_name,
            "scopes": sorted(self.scopes),
            "trigger": self.trigger.value,
            "members": list(self.members),
        }
