"""
cache_map – declarative cache-dependency graph.

Import path convention::

    from cache_map.declaration import draw
    from cache_map.associations import InMemoryAssociationProvider
    from cache_map.graph import DependencyGraph, ModelRegistry
    from cache_map.kernel.errors import ScopeViolationError
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
