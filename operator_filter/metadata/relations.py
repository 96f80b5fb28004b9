"""
Relation metadata captured from Django models.

Relations are read from ``Model._meta`` once, when an entity is registered,
and stored in a plain table keyed by accessor name. Relationship filters
look relations up by name in that table instead of probing the model at
request time.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Type

from django.db import models
from django.db.models import ForeignObjectRel

logger = logging.getLogger(__name__)

MANY_TO_ONE = "many_to_one"
ONE_TO_ONE = "one_to_one"
ONE_TO_MANY = "one_to_many"
MANY_TO_MANY = "many_to_many"


@dataclass(frozen=True)
class Relation:
    """
    A declared association from an owner model to a related model.

    ``join_key`` is the lookup on the related model and ``outer_key`` the
    attribute of the owner row it must equal, so that the correlated
    subquery reads ``related.filter(<join_key>=OuterRef(<outer_key>))``.
    """

    name: str
    related_model: Type[models.Model]
    storage_name: str
    join_key: str
    outer_key: str
    kind: str


@dataclass(frozen=True)
class EntityRef:
    """Owner entity of a filter together with its relation table."""

    model: Type[models.Model]
    label: str
    storage_name: str
    relations: Mapping[str, Relation] = field(default_factory=dict)

    def has_relation(self, name: str) -> bool:
        return name in self.relations

    def get_relation(self, name: str) -> Optional[Relation]:
        return self.relations.get(name)


def _relation_kind(field_obj: Any) -> str:
    if field_obj.many_to_many:
        return MANY_TO_MANY
    if field_obj.one_to_one:
        return ONE_TO_ONE
    if field_obj.one_to_many:
        return ONE_TO_MANY
    return MANY_TO_ONE


def _is_hidden_name(name: Optional[str]) -> bool:
    return name is not None and name.endswith("+")


def _build_reverse_relation(rel: ForeignObjectRel) -> Optional[Relation]:
    """Build a relation entry for a reverse accessor (``author.posts``)."""
    name = rel.get_accessor_name()
    if not name or _is_hidden_name(name):
        return None
    related_model = rel.related_model
    if rel.many_to_many:
        outer_key = "pk"
    else:
        outer_key = rel.field.target_field.attname
    return Relation(
        name=name,
        related_model=related_model,
        storage_name=related_model._meta.db_table,
        join_key=rel.field.name,
        outer_key=outer_key,
        kind=_relation_kind(rel),
    )


def _build_forward_relation(field_obj: models.Field) -> Optional[Relation]:
    """Build a relation entry for a forward field (``post.author``)."""
    related_model = field_obj.related_model
    if field_obj.many_to_many:
        if _is_hidden_name(field_obj.remote_field.related_name):
            # Hidden reverse side cannot be used as a subquery lookup.
            return None
        join_key = field_obj.related_query_name()
        outer_key = "pk"
    else:
        join_key = field_obj.target_field.name
        outer_key = field_obj.attname
    return Relation(
        name=field_obj.name,
        related_model=related_model,
        storage_name=related_model._meta.db_table,
        join_key=join_key,
        outer_key=outer_key,
        kind=_relation_kind(field_obj),
    )


def build_relation_table(model: Type[models.Model]) -> Mapping[str, Relation]:
    """
    Collect every relation declared on ``model`` keyed by accessor name.

    Forward and reverse foreign keys, one-to-one and many-to-many fields are
    included. Generic relations (no concrete ``related_model``) and hidden
    reverse accessors are skipped.
    """
    table: Dict[str, Relation] = {}
    for field_obj in model._meta.get_fields(include_hidden=False):
        if not field_obj.is_relation:
            continue
        related_model = getattr(field_obj, "related_model", None)
        if related_model is None or isinstance(related_model, str):
            logger.debug(
                f"Skipping relation {field_obj.name} on {model.__name__}: "
                "no concrete related model"
            )
            continue
        if isinstance(field_obj, ForeignObjectRel):
            relation = _build_reverse_relation(field_obj)
        elif isinstance(field_obj, (models.ForeignKey, models.ManyToManyField)):
            relation = _build_forward_relation(field_obj)
        else:
            logger.debug(
                f"Skipping relation {field_obj.name} on {model.__name__}: "
                f"unsupported field type {type(field_obj).__name__}"
            )
            continue
        if relation is None:
            continue
        table[relation.name] = relation
    return MappingProxyType(table)


def build_entity(model: Type[models.Model]) -> EntityRef:
    """Build the EntityRef for a Django model."""
    return EntityRef(
        model=model,
        label=model._meta.label_lower,
        storage_name=model._meta.db_table,
        relations=build_relation_table(model),
    )


__all__ = [
    "Relation",
    "EntityRef",
    "build_relation_table",
    "build_entity",
    "MANY_TO_ONE",
    "ONE_TO_ONE",
    "ONE_TO_MANY",
    "MANY_TO_MANY",
]
