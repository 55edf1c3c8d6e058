"""Associations – metadata port describing relationships between models."""
from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

__all__ = ["Association", "AssociationMetadataProvider", "Cardinality"]


class Cardinality(str, enum.Enum):
    ONE_TO_ONE = "one_to_one"
    ONE_TO_MANY = "one_to_many"
    MANY_TO_ONE = "many_to_one"
    MANY_TO_MANY = "many_to_many"

    @property
    def is_collection(self) -> bool:
        return self in (Cardinality.ONE_TO_MANY, Cardinality.MANY_TO_MANY)


@dataclass(frozen=True)
class Association:
    """A named relationship from *source_model* to *target_model*."""

    source_model: Any
    name: str
    target_model: Any
    cardinality: Cardinality = Cardinality.ONE_TO_MANY


@runtime_checkable
class AssociationMetadataProvider(Protocol):
    def resolve(self, model: Any, name: str) -> Association | None: ...  # None when not found
