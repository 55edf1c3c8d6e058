"""Unit tests for the registration engine – resource / collection / member."""
from __future__ import annotations

import pytest

from cache_map.associations import InMemoryAssociationProvider
from cache_map.capabilities import Capability, InMemoryCapabilityRegistry
from cache_map.config import CacheMapSettings, ConfigurationError, UnresolvedAssociationError
from cache_map.declaration import BuilderScope, Mapper, draw
from cache_map.graph import DependencyGraph, ModelRegistry, TriggerEvent
from cache_map.kernel.errors import InvalidOptionError, ScopeViolationError


class Venue:
    pass


class Event:
    pass


class Artist:
    pass


@pytest.fixture()
def associations() -> InMemoryAssociationProvider:
    provider = InMemoryAssociationProvider()
    provider.define(Venue, "events", Event)
    provider.define(Artist, "events", Event)
    provider.define(Event, "artists", Artist)
    return provider


@pytest.fixture()
def mapper(associations: InMemoryAssociationProvider) -> Mapper:
    return Mapper(associations)


# ---------------------------------------------------------------------------
# Nesting enforcement
# ---------------------------------------------------------------------------


class TestNesting:
    def test_collection_outside_resource_body_raises(self, mapper: Mapper) -> None:
        captured = []
        mapper.resource(Venue, captured.append)
        with pytest.raises(ScopeViolationError):
            captured[0].collection("events")

    def test_member_outside_collection_body_raises(self, mapper: Mapper) -> None:
        captured = []
        mapper.resource(Venue, lambda r: r.collection("events", captured.append))
        with pytest.raises(ScopeViolationError):
            captured[0].member("upcoming_events")

    def test_resource_inside_resource_body_raises(self, mapper: Mapper) -> None:
        with pytest.raises(ScopeViolationError) as exc_info:
            mapper.resource(Venue, lambda r: mapper.resource(Event))
        assert exc_info.value.expected is BuilderScope.ROOT
        assert exc_info.value.actual is BuilderScope.RESOURCE

    def test_resource_inside_collection_body_raises(self, mapper: Mapper) -> None:
        with pytest.raises(ScopeViolationError):
            mapper.resource(Venue, lambda r: r.collection("events", lambda c: mapper.resource(Event)))

    def test_collection_inside_collection_body_raises(self, mapper: Mapper) -> None:
        def venue(r):
            r.collection("events", lambda c: r.collection("events"))

        with pytest.raises(ScopeViolationError) as exc_info:
            mapper.resource(Venue, venue)
        assert exc_info.value.expected is BuilderScope.RESOURCE
        assert exc_info.value.actual is BuilderScope.COLLECTION

    def test_stale_builder_in_other_resource_body_raises(self, mapper: Mapper) -> None:
        captured = []
        mapper.resource(Venue, captured.append)
        with pytest.raises(ScopeViolationError, match="after its 'resource' body returned"):
            mapper.resource(Artist, lambda r: captured[0].collection("events"))

    def test_scope_returns_to_root_after_error(self, mapper: Mapper) -> None:
        with pytest.raises(UnresolvedAssociationError):
            mapper.resource(Venue, lambda r: r.collection("missing"))
        assert mapper.scope is BuilderScope.ROOT
        mapper.resource(Event)

    def test_scope_is_resource_inside_body(self, mapper: Mapper) -> None:
        seen = []
        mapper.resource(
            Venue,
            lambda r: (seen.append(mapper.scope), r.collection("events", lambda c: seen.append(mapper.scope))),
        )
        assert seen == [BuilderScope.RESOURCE, BuilderScope.COLLECTION]


# ---------------------------------------------------------------------------
# resource
# ---------------------------------------------------------------------------


class TestResource:
    def test_defaults(self, mapper: Mapper) -> None:
        entry = mapper.resource(Venue)
        assert entry.scopes == {"scoped"}
        assert entry.timestamp_enabled is True
        assert entry.cached_collections == frozenset()

    def test_timestamp_false_keeps_default_scopes(self, mapper: Mapper) -> None:
        entry = mapper.resource(Venue, timestamp=False)
        assert entry.timestamp_enabled is False
        assert entry.scopes == {"scoped"}
        assert not mapper.capabilities.has(Venue, Capability.CLASS_TIMESTAMP)

    def test_explicit_empty_scopes_win_over_default(self, mapper: Mapper) -> None:
        assert mapper.resource(Venue, scopes=()).scopes == frozenset()
        assert mapper.resource(Event, scopes=None).scopes == frozenset()

    def test_scopes_accumulate_across_declarations(self, mapper: Mapper) -> None:
        mapper.resource(Venue, scopes="active")
        entry = mapper.resource(Venue, scopes="featured")
        assert entry.scopes == {"active", "featured"}

    def test_scopes_accept_iterables(self, mapper: Mapper) -> None:
        entry = mapper.resource(Venue, scopes=["active", "featured", "active"])
        assert entry.scopes == {"active", "featured"}

    def test_invalid_scope_name_raises(self, mapper: Mapper) -> None:
        with pytest.raises(InvalidOptionError):
            mapper.resource(Venue, scopes=[""])
        assert mapper.graph.resource(Venue) is None

    def test_timestamp_is_sticky(self, mapper: Mapper) -> None:
        mapper.resource(Venue)
        assert mapper.resource(Venue, timestamp=False).timestamp_enabled is True

    def test_attaches_capabilities(self, mapper: Mapper) -> None:
        mapper.resource(Venue)
        assert mapper.capabilities.has(Venue, Capability.RESOURCE)
        assert mapper.capabilities.has(Venue, Capability.CLASS_TIMESTAMP)
        assert not mapper.capabilities.has(Venue, Capability.COLLECTION)

    def test_repeated_declaration_attaches_once(self, associations) -> None:
        attached = []

        class RecordingRegistry(InMemoryCapabilityRegistry):
            def attach(self, model, capability):
                newly = super().attach(model, capability)
                if newly:
                    attached.append((model, capability))
                return newly

        mapper = Mapper(associations, capabilities=RecordingRegistry())
        mapper.resource(Venue)
        mapper.resource(Venue)
        assert attached == [(Venue, Capability.RESOURCE), (Venue, Capability.CLASS_TIMESTAMP)]

    def test_registers_model(self, mapper: Mapper) -> None:
        mapper.resource(Venue)
        mapper.resource(Venue)
        assert list(mapper.registry) == [Venue]

    def test_failed_body_does_not_register_model(self, mapper: Mapper) -> None:
        with pytest.raises(UnresolvedAssociationError):
            mapper.resource(Venue, lambda r: r.collection("missing"))
        assert Venue not in mapper.registry
        # entry and capabilities committed before the body stay in place
        assert mapper.graph.resource(Venue).scopes == {"scoped"}
        assert mapper.capabilities.has(Venue, Capability.RESOURCE)

    def test_unknown_option_rejected(self, mapper: Mapper) -> None:
        with pytest.raises(TypeError):
            mapper.resource(Venue, expires_in=10)  # type: ignore[call-arg]

    def test_settings_defaults_used(self, associations) -> None:
        settings = CacheMapSettings(default_timestamp=False, default_scopes=["visible"])
        entry = Mapper(associations, settings=settings).resource(Venue)
        assert entry.timestamp_enabled is False
        assert entry.scopes == {"visible"}


# ---------------------------------------------------------------------------
# collection
# ---------------------------------------------------------------------------


class TestCollection:
    def test_record_defaults(self, mapper: Mapper) -> None:
        mapper.resource(Venue, lambda r: r.collection("events"))
        (record,) = mapper.graph.dependencies_for(Event)
        assert record.owner_resource is Venue
        assert record.target_model is Event
        assert record.association_name == "events"
        assert record.scopes == {"scoped"}
        assert record.trigger is TriggerEvent.AFTER_SAVE
        assert record.members == ()

    def test_options_override(self, mapper: Mapper) -> None:
        mapper.resource(Venue, lambda r: r.collection("events", on="after_destroy", scopes=["active", "public"]))
        (record,) = mapper.graph.dependencies_for(Event)
        assert record.trigger is TriggerEvent.AFTER_DESTROY
        assert record.scopes == {"active", "public"}

    def test_unknown_trigger_raises(self, mapper: Mapper) -> None:
        with pytest.raises(InvalidOptionError, match="'on'"):
            mapper.resource(Venue, lambda r: r.collection("events", on="before_lunch"))
        assert mapper.graph.dependencies_for(Event) == ()

    def test_unresolved_association_fails_fast(self, mapper: Mapper) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            mapper.resource(Venue, lambda r: r.collection("nonexistent_assoc"))
        err = exc_info.value
        assert isinstance(err, UnresolvedAssociationError)
        assert err.model is Venue
        assert err.association_name == "nonexistent_assoc"
        assert "nonexistent_assoc" in str(err) and "Venue" in str(err)
        assert list(mapper.graph.records()) == []
        assert mapper.graph.resource(Venue).cached_collections == frozenset()

    def test_attaches_collection_capability_to_target(self, mapper: Mapper) -> None:
        mapper.resource(Venue, lambda r: r.collection("events"))
        assert mapper.capabilities.has(Event, Capability.COLLECTION)
        assert not mapper.capabilities.has(Venue, Capability.COLLECTION)

    def test_cached_collections_on_owner(self, mapper: Mapper) -> None:
        mapper.resource(Venue, lambda r: r.collection("events"))
        assert mapper.graph.resource(Venue).cached_collections == {"events"}

    def test_repeated_collection_produces_duplicate_records(self, mapper: Mapper) -> None:
        def venue(r):
            r.collection("events")
            r.collection("events")

        mapper.resource(Venue, venue)
        records = mapper.graph.dependencies_for(Event)
        assert len(records) == 2
        assert records[0] == records[1]
        assert mapper.graph.resource(Venue).cached_collections == {"events"}

    def test_target_holds_records_from_several_resources(self, mapper: Mapper) -> None:
        mapper.resource(Venue, lambda r: r.collection("events", scopes="active"))
        mapper.resource(Artist, lambda r: r.collection("events", on="after_commit"))
        owners = [record.owner_resource for record in mapper.graph.dependencies_for(Event)]
        assert owners == [Venue, Artist]

    def test_second_collection_failure_keeps_first(self, mapper: Mapper) -> None:
        def venue(r):
            r.collection("events")
            r.collection("missing")

        with pytest.raises(UnresolvedAssociationError):
            mapper.resource(Venue, venue)
        assert len(mapper.graph.dependencies_for(Event)) == 1
        assert mapper.capabilities.has(Event, Capability.COLLECTION)

    def test_collection_returns_record(self, mapper: Mapper) -> None:
        records = []
        mapper.resource(Venue, lambda r: records.append(r.collection("events")))
        assert records[0] is mapper.graph.dependencies_for(Event)[0]


# ---------------------------------------------------------------------------
# member / members
# ---------------------------------------------------------------------------


class TestMembers:
    def test_member_accumulation(self, mapper: Mapper) -> None:
        def events(c):
            c.member("upcoming_events")
            c.members("similar_events", "festivals")

        mapper.resource(Venue, lambda r: r.collection("events", events))
        (record,) = mapper.graph.dependencies_for(Event)
        assert set(record.members) == {"upcoming_events", "similar_events", "festivals"}

    def test_duplicates_collapse_keeping_first_order(self, mapper: Mapper) -> None:
        def events(c):
            c.members("b", "a")
            c.member("b")
            c.members("c", "a")

        mapper.resource(Venue, lambda r: r.collection("events", events))
        assert mapper.graph.dependencies_for(Event)[0].members == ("b", "a", "c")

    def test_members_are_per_collection(self, mapper: Mapper) -> None:
        def venue(r):
            r.collection("events", lambda c: c.member("upcoming_events"))
            r.collection("events", lambda c: c.member("past_events"))

        mapper.resource(Venue, venue)
        first, second = mapper.graph.dependencies_for(Event)
        assert first.members == ("upcoming_events",)
        assert second.members == ("past_events",)

    def test_empty_member_call_is_noop(self, mapper: Mapper) -> None:
        mapper.resource(Venue, lambda r: r.collection("events", lambda c: c.member()))
        assert mapper.graph.dependencies_for(Event)[0].members == ()

    def test_non_string_member_rejected(self, mapper: Mapper) -> None:
        with pytest.raises(InvalidOptionError):
            mapper.resource(Venue, lambda r: r.collection("events", lambda c: c.member(42)))  # type: ignore[arg-type]
        assert mapper.graph.dependencies_for(Event) == ()
        assert mapper.scope is BuilderScope.ROOT

    def test_rejected_member_returns_to_collection_scope(self, mapper: Mapper) -> None:
        seen = []

        def events(c):
            with pytest.raises(InvalidOptionError):
                c.member("")
            seen.append(mapper.scope)
            c.member("upcoming_events")

        mapper.resource(Venue, lambda r: r.collection("events", events))
        assert seen == [BuilderScope.COLLECTION]
        assert mapper.graph.dependencies_for(Event)[0].members == ("upcoming_events",)


# ---------------------------------------------------------------------------
# draw
# ---------------------------------------------------------------------------


class TestDraw:
    def test_venue_event_scenario(self, associations) -> None:
        def declare(m):
            m.resource(Venue, lambda r: r.collection("events", lambda c: c.member("upcoming_events"), scopes="active"))
            m.resource(Event)

        graph = draw(declare, associations=associations)

        venue = graph.resource(Venue)
        assert venue.scopes == {"scoped"}
        assert venue.timestamp_enabled is True
        assert venue.cached_collections == {"events"}

        (record,) = graph.dependencies_for(Event)
        assert record.owner_resource is Venue
        assert record.association_name == "events"
        assert record.scopes == {"active"}
        assert record.trigger is TriggerEvent.AFTER_SAVE
        assert record.members == ("upcoming_events",)
        assert graph.resource(Event).timestamp_enabled is True

    def test_separate_runs_share_graph_and_registry(self, associations) -> None:
        graph = DependencyGraph()
        registry = ModelRegistry()
        capabilities = InMemoryCapabilityRegistry()
        shared = dict(associations=associations, graph=graph, registry=registry, capabilities=capabilities)

        draw(lambda m: m.resource(Venue, scopes="active"), **shared)
        draw(lambda m: m.resource(Venue, scopes="featured"), **shared)
        draw(lambda m: m.resource(Event), **shared)

        assert graph.resource(Venue).scopes == {"active", "featured"}
        assert list(registry) == [Venue, Event]

    def test_independent_runs_do_not_share_state(self, associations) -> None:
        first = draw(lambda m: m.resource(Venue), associations=associations)
        second = draw(lambda m: m.resource(Event), associations=associations)
        assert first is not second
        assert second.resource(Venue) is None

    def test_errors_propagate(self, associations) -> None:
        graph = DependencyGraph()

        def declare(m):
            m.resource(Event)
            m.resource(Venue, lambda r: r.collection("nonexistent_assoc"))

        with pytest.raises(UnresolvedAssociationError):
            draw(declare, associations=associations, graph=graph)
        assert graph.is_resource(Event)
