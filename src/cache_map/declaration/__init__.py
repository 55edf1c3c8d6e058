"""Declaration – scope state machine, registration engine and ``draw``."""
from cache_map.declaration.draw import draw
from cache_map.declaration.mapper import CollectionBuilder, Mapper, ResourceBuilder
from cache_map.declaration.options import UNSET, CollectionOptions, ResourceOptions, UnsetType
from cache_map.declaration.scope import BuilderScope, ScopeStateMachine

__all__ = [
    "UNSET",
    "BuilderScope",
    "CollectionBuilder",
    "CollectionOptions",
    "Mapper",
    "ResourceBuilder",
    "ResourceOptions",
    "ScopeStateMachine",
    "UnsetType",
    "draw",
]
