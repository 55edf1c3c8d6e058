"""Declaration – BuilderScope nesting state machine."""
from __future__ import annotations

import contextlib
import enum
from collections.abc import Callable, Iterator
from typing import Any, TypeVar

from cache_map.kernel.errors import ScopeViolationError

__all__ = ["BuilderScope", "ScopeStateMachine"]

R = TypeVar("R")


class BuilderScope(str, enum.Enum):
    ROOT = "root"
    RESOURCE = "resource"
    COLLECTION = "collection"
    MEMBER = "member"


_TRANSITIONS: frozenset[tuple[BuilderScope, BuilderScope]] = frozenset(
    {
        (BuilderScope.ROOT, BuilderScope.RESOURCE),
        (BuilderScope.RESOURCE, BuilderScope.COLLECTION),
        (BuilderScope.COLLECTION, BuilderScope.MEMBER),
    }
)


class ScopeStateMachine:
    """Tracks where a declaration run currently is: root → resource → collection → member."""

    def __init__(self) -> None:
        self._current = BuilderScope.ROOT

    @property
    def current(self) -> BuilderScope:
        return self._current

    def validate(self, expected: BuilderScope) -> None:
        if self._current is not expected:
            raise ScopeViolationError(expected, self._current)

    @contextlib.contextmanager
    def enter(self, from_: BuilderScope, to: BuilderScope) -> Iterator[None]:
        """Switch ``from_`` → ``to`` for the duration of the block.

        The previous scope is restored even when the block raises; the error
        itself propagates untouched.
        """
        if (from_, to) not in _TRANSITIONS:
            raise ValueError(f"Illegal scope transition {from_.value} -> {to.value}")
        self.validate(from_)
        self._current = to
        try:
            yield
        finally:
            self._current = from_

    def run(
        self,
        from_: BuilderScope,
        to: BuilderScope,
        body: Callable[..., R],
        *args: Any,
    ) -> R:
        with self.enter(from_, to):
            return body(*args)
