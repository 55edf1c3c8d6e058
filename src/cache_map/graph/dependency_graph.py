"""Graph – DependencyGraph side-table keyed by model identity."""
from __future__ import annotations

import dataclasses
from collections.abc import Iterable, Iterator
from typing import Any

from cache_map.graph.models import DependencyRecord, ResourceEntry, model_name

__all__ = ["DependencyGraph"]


class DependencyGraph:
    """Resource entries and dependency records for every participant model.

    Mutators are called by the declaration engine only.  Every read returns an
    immutable value, so once declarations are finished the graph can be shared
    by request threads without locking.
    """

    def __init__(self) -> None:
        self._resources: dict[Any, ResourceEntry] = {}
        self._dependencies: dict[Any, tuple[DependencyRecord, ...]] = {}

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def resource(self, model: Any) -> ResourceEntry | None:
        return self._resources.get(model)

    def is_resource(self, model: Any) -> bool:
        return model in self._resources

    def dependencies_for(self, model: Any) -> tuple[DependencyRecord, ...]:
        """Dependency records held by *model* as a collection, in declaration order."""
        return self._dependencies.get(model, ())

    def resources(self) -> Iterator[ResourceEntry]:
        return iter(tuple(self._resources.values()))

    def collections(self) -> Iterator[Any]:
        """Models holding at least one dependency record."""
        return iter(tuple(self._dependencies))

    def records(self) -> Iterator[DependencyRecord]:
        for records in tuple(self._dependencies.values()):
            yield from records

    def to_dict(self) -> dict[str, Any]:
        return {
            "resources": [entry.to_dict() for entry in self.resources()],
            "dependencies": {
                model_name(model): [record.to_dict() for record in records]
                for model, records in tuple(self._dependencies.items())
            },
        }

    # ------------------------------------------------------------------
    # Mutators
    # ------------------------------------------------------------------

    def upsert_resource(
        self,
        model: Any,
        *,
        scopes: Iterable[str] = (),
        timestamp: bool = False,
    ) -> ResourceEntry:
        """Create or extend *model*'s entry; scopes union, timestamp is sticky."""
        entry = self._resources.get(model) or ResourceEntry(model=model)
        entry = dataclasses.replace(
            entry,
            scopes=entry.scopes | frozenset(scopes),
            timestamp_enabled=entry.timestamp_enabled or timestamp,
        )
        self._resources[model] = entry
        return entry

    def add_cached_collection(self, model: Any, association_name: str) -> ResourceEntry:
        entry = self._resources.get(model) or ResourceEntry(model=model)
        entry = dataclasses.replace(
            entry, cached_collections=entry.cached_collections | {association_name}
        )
        self._resources[model] = entry
        return entry

    def append_dependency(self, record: DependencyRecord) -> None:
        # never merged: repeated identical declarations yield duplicate records
        existing = self._dependencies.get(record.target_model, ())
        self._dependencies[record.target_model] = existing + (record,)

    def __repr__(self) -> str:
        return (
            f"DependencyGraph(resources={len(self._resources)}, "
            f"collections={len(self._dependencies)})"
        )
