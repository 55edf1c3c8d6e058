"""SQLAlchemy adapter – ORM relationship metadata for cache-map declarations."""
from cache_map.adapters.sqlalchemy.associations import SqlAlchemyAssociationProvider

__all__ = ["SqlAlchemyAssociationProvider"]
