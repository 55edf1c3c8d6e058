"""Graph – ModelRegistry, the append-only set of declared resource models."""
from __future__ import annotations

from collections.abc import Iterator
from typing import Any

__all__ = ["ModelRegistry"]


class ModelRegistry:
    """Ordered, append-only set of every resource model ever declared.

    There is no module-level instance: declaration runs that should share
    registrations are given the same registry object.
    """

    def __init__(self) -> None:
        self._models: dict[Any, None] = {}

    def add(self, model: Any) -> bool:
        """Union *model* in; returns ``True`` when it was not yet registered."""
        if model in self._models:
            return False
        self._models[model] = None
        return True

    @property
    def models(self) -> frozenset[Any]:
        return frozenset(self._models)

    def __contains__(self, model: object) -> bool:
        return model in self._models

    def __iter__(self) -> Iterator[Any]:
        return iter(tuple(self._models))

    def __len__(self) -> int:
        return len(self._models)

    def __repr__(self) -> str:
        return f"ModelRegistry({[getattr(m, '__qualname__', m) for m in self._models]!r})"
