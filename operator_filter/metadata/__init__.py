"""
Entity and relation metadata used by relationship filters.
"""

from .registry import EntityRegistry, entity_registry, get_entity
from .relations import (
    MANY_TO_MANY,
    MANY_TO_ONE,
    ONE_TO_MANY,
    ONE_TO_ONE,
    EntityRef,
    Relation,
    build_entity,
    build_relation_table,
)

__all__ = [
    "EntityRegistry",
    "entity_registry",
    "get_entity",
    "EntityRef",
    "Relation",
    "build_entity",
    "build_relation_table",
    "MANY_TO_ONE",
    "ONE_TO_ONE",
    "ONE_TO_MANY",
    "MANY_TO_MANY",
]
