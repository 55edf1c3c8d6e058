"""Graph – dependency records, resource entries and the model registry."""
from cache_map.graph.dependency_graph import DependencyGraph
from cache_map.graph.models import DependencyRecord, ResourceEntry, TriggerEvent
from cache_map.graph.registry import ModelRegistry

__all__ = [
    "DependencyGraph",
    "DependencyRecord",
    "ModelRegistry",
    "ResourceEntry",
    "TriggerEvent",
]
