"""SQLAlchemy adapter – association metadata from ORM relationships."""
from __future__ import annotations

from typing import Any

from sqlalchemy import inspect
from sqlalchemy.orm import Mapper, RelationshipProperty
from sqlalchemy.orm.interfaces import MANYTOMANY, MANYTOONE, ONETOMANY

from cache_map.associations.ports import Association, Cardinality


class SqlAlchemyAssociationProvider:
    """Resolves associations through ``sqlalchemy.inspect(model).relationships``.

    Works with any class mapped by :class:`~sqlalchemy.orm.DeclarativeBase`::

        class Venue(Base):
            __tablename__ = "venues"
            id: Mapped[int] = mapped_column(primary_key=True)
            events: Mapped[list["Event"]] = relationship(back_populates="venue")

        SqlAlchemyAssociationProvider().resolve(Venue, "events").target_model  # Event

    Unmapped classes and unknown relationship names resolve to ``None``.
    """

    def resolve(self, model: Any, name: str) -> Association | None:
        mapper: Mapper[Any] | None = inspect(model, raiseerr=False)
        if mapper is None or not isinstance(mapper, Mapper):
            return None
        relationship = mapper.relationships.get(name)
        if relationship is None:
            return None
        return Association(
            source_model=model,
            name=name,
            target_model=relationship.mapper.class_,
            cardinality=self._cardinality(relationship),
        )

    @staticmethod
    def _cardinality(relationship: RelationshipProperty[Any]) -> Cardinality:
        if relationship.direction is MANYTOMANY:
            return Cardinality.MANY_TO_MANY
        if relationship.direction is MANYTOONE:
            return Cardinality.MANY_TO_ONE
        if relationship.direction is ONETOMANY and relationship.uselist:
            return Cardinality.ONE_TO_MANY
        return Cardinality.ONE_TO_ONE


__all__ = ["SqlAlchemyAssociationProvider"]
