"""Declaration – ``draw`` entry point for one declaration run."""
from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from cache_map.associations.ports import AssociationMetadataProvider
from cache_map.capabilities import CapabilityRegistry
from cache_map.config.settings import CacheMapSettings
from cache_map.declaration.mapper import Mapper
from cache_map.graph import DependencyGraph, ModelRegistry

__all__ = ["draw"]

logger = logging.getLogger(__name__)


def draw(
    body: Callable[[Mapper], Any],
    *,
    associations: AssociationMetadataProvider,
    capabilities: CapabilityRegistry | None = None,
    registry: ModelRegistry | None = None,
    graph: DependencyGraph | None = None,
    settings: CacheMapSettings | None = None,
) -> DependencyGraph:
    """Run *body* against a fresh :class:`Mapper` and return the populated graph.

    Errors raised while declaring propagate to the caller.  Declarations that
    completed before the failure stay in *graph*, *registry* and
    *capabilities*; callers needing all-or-nothing behaviour should pass fresh
    instances and discard them on error.
    """
    mapper = Mapper(
        associations,
        capabilities=capabilities,
        registry=registry,
        graph=graph,
        settings=settings,
    )
    body(mapper)
    logger.info(
        "cache_map.drawn resources=%d collections=%d registered=%d",
        sum(1 for _ in mapper.graph.resources()),
        sum(1 for _ in mapper.graph.collections()),
        len(mapper.registry),
    )
    return mapper.graph
