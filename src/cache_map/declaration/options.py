"""Declaration – option defaults and normalisation."""
from __future__ import annotations

import enum
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from cache_map.config.settings import CacheMapSettings
from cache_map.graph.models import TriggerEvent
from cache_map.kernel.errors import InvalidOptionError

__all__ = [
    "UNSET",
    "UnsetType",
    "CollectionOptions",
    "ResourceOptions",
    "normalize_names",
    "normalize_scopes",
]


class UnsetType(enum.Enum):
    UNSET = "UNSET"

    def __repr__(self) -> str:
        return "UNSET"


UNSET = UnsetType.UNSET
"""Marker for an option the caller did not pass; ``None`` and ``()`` are explicit values."""

ScopesOption = str | Iterable[str] | None


def normalize_scopes(scopes: ScopesOption) -> frozenset[str]:
    """``"active"`` → ``{"active"}``; iterables are flattened; ``None`` → empty."""
    if scopes is None:
        return frozenset()
    if isinstance(scopes, str):
        return frozenset({_checked_name("scopes", scopes)})
    return frozenset(_checked_name("scopes", scope) for scope in scopes)


def normalize_names(option: str, names: Iterable[Any]) -> tuple[str, ...]:
    """Deduplicate *names*, keeping the first occurrence order."""
    return tuple(dict.fromkeys(_checked_name(option, name) for name in names))


def _checked_name(option: str, name: Any) -> str:
    if not isinstance(name, str) or not name:
        raise InvalidOptionError(option, name, "expected a non-empty string")
    return name


@dataclass(frozen=True)
class ResourceOptions:
    timestamp: bool
    scopes: frozenset[str]

    @classmethod
    def merge(
        cls,
        settings: CacheMapSettings,
        *,
        timestamp: bool | UnsetType = UNSET,
        scopes: ScopesOption | UnsetType = UNSET,
    ) -> ResourceOptions:
        # explicit values always win, defaults only fill what is missing
        return cls(
            timestamp=settings.default_timestamp if timestamp is UNSET else bool(timestamp),
            scopes=normalize_scopes(settings.default_scopes if scopes is UNSET else scopes),
        )


@dataclass(frozen=True)
class CollectionOptions:
    on: TriggerEvent
    scopes: frozenset[str]

    @classmethod
    def merge(
        cls,
        settings: CacheMapSettings,
        *,
        on: TriggerEvent | str | UnsetType = UNSET,
        scopes: ScopesOption | UnsetType = UNSET,
    ) -> CollectionOptions:
        return cls(
            on=TriggerEvent.parse(settings.default_trigger if on is UNSET else on),
            scopes=normalize_scopes(settings.default_scopes if scopes is UNSET else scopes),
        )
