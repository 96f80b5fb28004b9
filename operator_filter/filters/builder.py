"""
Query builder adapter over Django querysets.

OperatorFilter talks to the ORM only through this class. Every method
returns a new builder wrapping a filtered queryset, so builders chain the
same way querysets do and the caller's queryset is never mutated.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Sequence, Type, Union

from django.db import models
from django.db.models import Exists, OuterRef, Q

from ..exceptions import MalformedFilterError, UnknownRelationError, UnsupportedOperatorError
from ..metadata import Relation, entity_registry

logger = logging.getLogger(__name__)

# "like" is a substring match; Django adds the surrounding wildcards and
# escapes % and _ in the value.
WHERE_LOOKUPS = {
    "=": "exact",
    ">": "gt",
    "<": "lt",
    ">=": "gte",
    "<=": "lte",
    "like": "contains",
}


class QueryBuilder:
    """Builds predicates on a queryset one clause at a time."""

    def __init__(self, queryset: models.QuerySet):
        self._queryset = queryset

    @property
    def queryset(self) -> models.QuerySet:
        return self._queryset

    @property
    def model(self) -> Type[models.Model]:
        return self._queryset.model

    @property
    def storage_name(self) -> str:
        return self.model._meta.db_table

    def _field_path(self, column: str) -> str:
        """Strip a ``storage_name.`` qualifier naming this builder's table."""
        if "." not in column:
            return column
        storage_name, _, name = column.rpartition(".")
        if storage_name != self.storage_name or not name:
            raise MalformedFilterError(
                f"Column {column!r} does not belong to {self.storage_name!r}."
            )
        return name

    def _filter(self, q: Q) -> "QueryBuilder":
        return QueryBuilder(self._queryset.filter(q))

    def where(self, column: str, operator: str, value: Any) -> "QueryBuilder":
        """Add ``column <operator> value``."""
        path = self._field_path(column)
        if operator == "<>":
            return self._filter(~Q(**{f"{path}__exact": value}))
        lookup = WHERE_LOOKUPS.get(operator)
        if lookup is None:
            raise UnsupportedOperatorError(
                f"Query builder cannot compare with operator {operator!r}.",
                operator=operator,
                allowed_operators=tuple(WHERE_LOOKUPS) + ("<>",),
            )
        if value is None and operator != "=":
            # SQL "col > NULL" and "col LIKE NULL" are never true.
            return self._filter(Q(pk__in=[]))
        return self._filter(Q(**{f"{path}__{lookup}": value}))

    def where_in(self, column: str, values: Sequence[Any]) -> "QueryBuilder":
        return self._filter(Q(**{f"{self._field_path(column)}__in": list(values)}))

    def where_between(self, column: str, bounds: Sequence[Any]) -> "QueryBuilder":
        if len(bounds) != 2:
            raise MalformedFilterError(
                f"Between on {column!r} needs exactly two bounds, got {len(bounds)}."
            )
        lo, hi = bounds
        return self._filter(Q(**{f"{self._field_path(column)}__range": (lo, hi)}))

    def where_null(self, column: str) -> "QueryBuilder":
        return self._filter(Q(**{f"{self._field_path(column)}__isnull": True}))

    def where_not_null(self, column: str) -> "QueryBuilder":
        return self._filter(Q(**{f"{self._field_path(column)}__isnull": False}))

    def exists_related(
        self,
        relation: Union[Relation, str],
        build_inner: Callable[["QueryBuilder"], "QueryBuilder"],
    ) -> "QueryBuilder":
        """
        Keep rows having at least one related row matching ``build_inner``.

        The related rows are correlated to the outer row through the
        relation's join key and wrapped in a single ``EXISTS`` subquery.
        """
        if isinstance(relation, str):
            entity = entity_registry.resolve(self.model)
            resolved = entity.get_relation(relation)
            if resolved is None:
                raise UnknownRelationError(
                    f"{self.model.__name__} has no relationship {relation!r}.",
                    relation_name=relation,
                )
            relation = resolved

        related_rows = relation.related_model._default_manager.filter(
            **{relation.join_key: OuterRef(relation.outer_key)}
        )
        inner = build_inner(QueryBuilder(related_rows))
        logger.debug(
            f"Correlated EXISTS on {relation.storage_name} via "
            f"{relation.join_key}=OuterRef({relation.outer_key})"
        )
        return self._filter(Q(Exists(inner.queryset)))


__all__ = ["QueryBuilder", "WHERE_LOOKUPS"]
