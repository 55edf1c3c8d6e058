"""Associations – relationship metadata consumed by the declaration engine."""
from cache_map.associations.in_memory import InMemoryAssociationProvider
from cache_map.associations.ports import Association, AssociationMetadataProvider, Cardinality

__all__ = [
    "Association",
    "AssociationMetadataProvider",
    "Cardinality",
    "InMemoryAssociationProvider",
]
