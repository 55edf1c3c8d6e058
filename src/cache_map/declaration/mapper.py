"""Declaration – Mapper and the nested resource / collection builders.

A declaration run reads top-down::

    def declare(m: Mapper) -> None:
        m.resource(Venue, venue_collections, timestamp=False)
        m.resource(Event)

    def venue_collections(r: ResourceBuilder) -> None:
        r.collection("events", event_members, scopes="active", on="after_save")

    def event_members(c: CollectionBuilder) -> None:
        c.member("upcoming_events")
        c.members("similar_events", "festivals")

Each body receives the builder for its level explicitly.  The shared
:class:`ScopeStateMachine` rejects calls made at the wrong nesting level.
"""
from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from cache_map.associations.ports import AssociationMetadataProvider
from cache_map.capabilities import Capability, CapabilityRegistry, InMemoryCapabilityRegistry
from cache_map.config.settings import CacheMapSettings
from cache_map.config.validation import UnresolvedAssociationError
from cache_map.declaration.options import (
    UNSET,
    CollectionOptions,
    ResourceOptions,
    ScopesOption,
    UnsetType,
    normalize_names,
)
from cache_map.declaration.scope import BuilderScope, ScopeStateMachine
from cache_map.graph import DependencyGraph, DependencyRecord, ModelRegistry, ResourceEntry, TriggerEvent
from cache_map.graph.models import model_name
from cache_map.kernel.errors import ScopeViolationError

__all__ = ["CollectionBuilder", "Mapper", "ResourceBuilder"]

logger = logging.getLogger(__name__)

ResourceBody = Callable[["ResourceBuilder"], Any]
CollectionBody = Callable[["CollectionBuilder"], Any]


class _Builder:
    """Common guard: a builder only works while its body is running."""

    level: BuilderScope

    def __init__(self, scope: ScopeStateMachine) -> None:
        self._scope = scope
        self._open = True

    def _check_open(self) -> None:
        if not self._open:
            raise ScopeViolationError(
                self.level,
                self._scope.current,
                f"{type(self).__name__} used after its '{self.level.value}' body returned",
            )

    def _close(self) -> None:
        self._open = False


class CollectionBuilder(_Builder):
    """Collects member names for the collection being declared."""

    level = BuilderScope.COLLECTION

    def __init__(self, scope: ScopeStateMachine) -> None:
        super().__init__(scope)
        self._members: dict[str, None] = {}

    @property
    def pending_members(self) -> tuple[str, ...]:
        return tuple(self._members)

    def member(self, *names: str) -> None:
        """Add cached method name(s) that must be reset when the collection changes."""
        self._check_open()
        self._scope.run(BuilderScope.COLLECTION, BuilderScope.MEMBER, self._add_members, names)

    members = member

    def _add_members(self, names: tuple[str, ...]) -> None:
        for name in normalize_names("members", names):
            self._members.setdefault(name)


class ResourceBuilder(_Builder):
    """Declares the collections hooked on one resource model."""

    level = BuilderScope.RESOURCE

    def __init__(self, mapper: Mapper, model: Any) -> None:
        super().__init__(mapper._scope)
        self._mapper = mapper
        self.model = model

    def collection(
        self,
        association_name: str,
        body: CollectionBody | None = None,
        *,
        on: TriggerEvent | str | UnsetType = UNSET,
        scopes: ScopesOption | UnsetType = UNSET,
    ) -> DependencyRecord:
        """Hook the collection reached through *association_name* on this resource.

        Raises
        ------
        ScopeViolationError
            When called outside this resource's body.
        UnresolvedAssociationError
            When the resource model has no such association.  Nothing is
            registered in that case.
        """
        self._check_open()
        return self._mapper._declare_collection(self.model, association_name, body, on, scopes)


class Mapper:
    """Registration engine populating a :class:`DependencyGraph`.

    One mapper is one declaration run: it owns a fresh scope state machine.
    The graph, model registry and capability registry may be shared between
    runs by passing the same instances in.
    """

    def __init__(
        self,
        associations: AssociationMetadataProvider,
        *,
        capabilities: CapabilityRegistry | None = None,
        registry: ModelRegistry | None = None,
        graph: DependencyGraph | None = None,
        settings: CacheMapSettings | None = None,
    ) -> None:
        self.associations = associations
        self.capabilities = capabilities if capabilities is not None else InMemoryCapabilityRegistry()
        self.registry = registry if registry is not None else ModelRegistry()
        self.graph = graph if graph is not None else DependencyGraph()
        self.settings = settings if settings is not None else CacheMapSettings()
        self._scope = ScopeStateMachine()

    @property
    def scope(self) -> BuilderScope:
        return self._scope.current

    def resource(
        self,
        model: Any,
        body: ResourceBody | None = None,
        *,
        timestamp: bool | UnsetType = UNSET,
        scopes: ScopesOption | UnsetType = UNSET,
    ) -> ResourceEntry:
        """Declare *model* as a resource owning cached members.

        Omitted options fall back to the settings defaults (``timestamp=True``,
        ``scopes="scoped"``); anything passed explicitly, even ``False`` or an
        empty collection, is kept as given.  Scopes accumulate over repeated
        declarations of the same model.
        """
        with self._scope.enter(BuilderScope.ROOT, BuilderScope.RESOURCE):
            options = ResourceOptions.merge(self.settings, timestamp=timestamp, scopes=scopes)

            self.capabilities.attach(model, Capability.RESOURCE)
            self.graph.upsert_resource(model, scopes=options.scopes, timestamp=options.timestamp)
            if options.timestamp:
                self.capabilities.attach(model, Capability.CLASS_TIMESTAMP)

            if body is not None:
                builder = ResourceBuilder(self, model)
                try:
                    body(builder)
                finally:
                    builder._close()

            self.registry.add(model)

        entry = self.graph.resource(model)
        logger.info(
            "cache_map.resource_declared model=%s scopes=%s timestamp=%s",
            model_name(model),
            sorted(entry.scopes),
            entry.timestamp_enabled,
        )
        return entry

    def _declare_collection(
        self,
        owner: Any,
        association_name: str,
        body: CollectionBody | None,
        on: Any,
        scopes: Any,
    ) -> DependencyRecord:
        self._scope.validate(BuilderScope.RESOURCE)

        association = self.associations.resolve(owner, association_name)
        if association is None:
            raise UnresolvedAssociationError(owner, association_name)
        target = association.target_model
        options = CollectionOptions.merge(self.settings, on=on, scopes=scopes)

        with self._scope.enter(BuilderScope.RESOURCE, BuilderScope.COLLECTION):
            builder = CollectionBuilder(self._scope)
            if body is not None:
                try:
                    body(builder)
                finally:
                    builder._close()

            self.capabilities.attach(target, Capability.COLLECTION)
            record = DependencyRecord(
                target_model=target,
                owner_resource=owner,
                association_name=association_name,
                scopes=options.scopes,
                trigger=options.on,
                members=builder.pending_members,
            )
            self.graph.append_dependency(record)
            self.graph.add_cached_collection(owner, association_name)

        logger.debug(
            "cache_map.collection_declared resource=%s association=%s target=%s on=%s members=%s",
            model_name(owner),
            association_name,
            model_name(target),
            record.trigger.value,
            list(record.members),
        )
        return record
