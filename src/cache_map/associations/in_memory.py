"""Associations – InMemoryAssociationProvider."""
from __future__ import annotations

from typing import Any

from cache_map.associations.ports import Association, Cardinality


class InMemoryAssociationProvider:
    """Provider backed by explicitly defined relationships.

    Useful for plain classes and for tests::

        provider = InMemoryAssociationProvider()
        provider.define(Venue, "events", Event)
    """

    def __init__(self) -> None:
        self._associations: dict[tuple[Any, str], Association] = {}

    def define(
        self,
        model: Any,
        name: str,
        target: Any,
        cardinality: Cardinality = Cardinality.ONE_TO_MANY,
    ) -> Association:
        association = Association(
            source_model=model, name=name, target_model=target, cardinality=cardinality
        )
        self._associations[(model, name)] = association
        return association

    def resolve(self, model: Any, name: str) -> Association | None:
        return self._associations.get((model, name))


__all__ = ["InMemoryAssociationProvider"]
