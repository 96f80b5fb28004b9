"""
Operator filter.

A request supplies ``{"operator": ..., "value": ...}`` under the filter's key
and the filter turns it into one queryset clause. A column of the form
``relation.column`` filters through one relationship of the owner entity
with a single correlated EXISTS subquery.

Example:
    published = OperatorFilter.make("publishedAt")
    queryset = published.apply(Post.objects.all(), {"operator": ">=", "value": "2024-01-01"})

    by_country = OperatorFilter.make("author.country", owner_entity=Post)
    queryset = by_country.apply(queryset, {"operator": "in", "value": "US,CA"})
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Optional, Tuple

from django.db import models
from graphene.utils.str_converters import to_snake_case

from ..core.settings import FilterOperatorSettings
from ..exceptions import (
    MalformedFilterError,
    OperatorFilterError,
    UnknownRelationError,
    UnsupportedOperatorError,
    UnsupportedRelationDepthError,
)
from ..metadata import EntityRef, Relation, entity_registry
from ..metadata.registry import OwnerLike
from .builder import QueryBuilder
from .operators import (
    ALLOWED_OPERATORS,
    COMPARISON_OPERATORS,
    is_allowed_operator,
    split_values,
)

logger = logging.getLogger(__name__)

MAX_COLUMN_SEGMENTS = 2


class OperatorFilter:
    """Filter driven by an operator token and a raw string value."""

    allowed_operators = ALLOWED_OPERATORS

    def __init__(
        self,
        name: str,
        column: Optional[str] = None,
        owner_entity: OwnerLike = None,
    ):
        self._name = name
        self._column = column or to_snake_case(name)
        self._segments: Tuple[str, ...] = tuple(self._column.split("."))
        self._owner: Optional[EntityRef] = entity_registry.resolve(owner_entity)

    @classmethod
    def make(
        cls,
        name: str,
        column: Optional[str] = None,
        owner_entity: OwnerLike = None,
    ) -> "OperatorFilter":
        """Create a new filter."""
        return cls(name, column, owner_entity)

    @property
    def name(self) -> str:
        return self._name

    @property
    def column(self) -> str:
        return self._column

    @property
    def owner_entity(self) -> Optional[EntityRef]:
        return self._owner

    def key(self) -> str:
        """Get the key for the filter."""
        return self._name

    def is_singular(self) -> bool:
        return False

    def validate(self, value: Any) -> None:
        """
        Check the shape of a filter value without touching any query.

        Raises:
            MalformedFilterError: value is not a mapping, lacks ``operator``
                or ``value``, or carries the wrong number of tokens for
                ``between`` / ``in``.
            UnsupportedOperatorError: operator is not in the allow-list.
        """
        if not isinstance(value, Mapping):
            raise MalformedFilterError(
                f"Expecting filter {self._name} to be an object.", filter_key=self._name
            )
        if "operator" not in value:
            raise MalformedFilterError(
                f"Expecting filter {self._name} to have an operator.", filter_key=self._name
            )
        if "value" not in value:
            raise MalformedFilterError(
                f"Expecting filter {self._name} to have a value.", filter_key=self._name
            )

        operator = value["operator"]
        if not is_allowed_operator(operator):
            raise UnsupportedOperatorError(
                "Bad filter operator, operator can be one of "
                + ", ".join(self.allowed_operators),
                filter_key=self._name,
                operator=operator,
                allowed_operators=self.allowed_operators,
            )

        if operator == "between":
            bounds = split_values(value["value"])
            if len(bounds) != 2:
                raise MalformedFilterError(
                    f"Expecting filter {self._name} to have two comma separated bounds "
                    f"for between, got {len(bounds)}.",
                    filter_key=self._name,
                )
        elif operator == "in":
            max_values = FilterOperatorSettings.from_settings().max_in_values
            count = len(split_values(value["value"]))
            if max_values and count > max_values:
                raise MalformedFilterError(
                    f"Expecting filter {self._name} to have at most {max_values} values, "
                    f"got {count}.",
                    filter_key=self._name,
                )

    def apply(self, queryset: models.QuerySet, value: Any) -> models.QuerySet:
        """Apply the filter to the queryset and return the filtered queryset."""
        try:
            if len(self._segments) > MAX_COLUMN_SEGMENTS:
                raise UnsupportedRelationDepthError(
                    f"Operator filter {self._name} doesn't support relationships of relationships.",
                    filter_key=self._name,
                    depth=len(self._segments) - 1,
                )
            self.validate(value)

            builder = QueryBuilder(queryset)
            operator = value["operator"]
            raw_value = value["value"]

            if len(self._segments) == 1:
                builder = self.add_query_filters(builder, self._column, operator, raw_value)
            else:
                relation_name, relation_column = self._segments
                relation = self._resolve_relation(relation_name)
                qualified = f"{relation.storage_name}.{relation_column}"
                builder = builder.exists_related(
                    relation,
                    lambda inner: self.add_query_filters(inner, qualified, operator, raw_value),
                )
        except OperatorFilterError as e:
            self._log_rejection(e)
            raise

        logger.debug(f"Applied filter {self._name}: {self._column} {operator} {raw_value!r}")
        return builder.queryset

    def add_query_filters(
        self, builder: QueryBuilder, column: str, operator: str, value: Any
    ) -> QueryBuilder:
        """Add the clause selected by ``operator`` on ``column``."""
        if operator == "between":
            return builder.where_between(column, split_values(value))
        if operator == "in":
            return builder.where_in(column, split_values(value))
        if operator == "null":
            return builder.where_null(column)
        if operator == "not_null":
            return builder.where_not_null(column)
        if operator == "contains":
            return builder.where(column, "like", value)
        if operator in COMPARISON_OPERATORS:
            return builder.where(column, operator, value)
        raise UnsupportedOperatorError(
            "Bad filter operator, operator can be one of " + ", ".join(self.allowed_operators),
            filter_key=self._name,
            operator=operator,
            allowed_operators=self.allowed_operators,
        )

    def _resolve_relation(self, relation_name: str) -> Relation:
        if self._owner is None:
            raise UnknownRelationError(
                f"Operator filter {self._name} needs an owner entity to filter "
                f"through {relation_name!r}.",
                filter_key=self._name,
                relation_name=relation_name,
            )
        relation = self._owner.get_relation(relation_name)
        if relation is None:
            raise UnknownRelationError(
                f"Relationship {relation_name!r} is not declared on {self._owner.label}.",
                filter_key=self._name,
                relation_name=relation_name,
            )
        return relation

    def _log_rejection(self, error: OperatorFilterError) -> None:
        if FilterOperatorSettings.from_settings().log_rejected_filters:
            logger.warning(
                f"Rejected filter {self._name}: {error}",
                extra={"filter_key": self._name, "status_code": error.status_code},
            )

    def __repr__(self) -> str:
        owner = self._owner.label if self._owner else None
        return f"OperatorFilter(name={self._name!r}, column={self._column!r}, owner={owner!r})"


__all__ = ["OperatorFilter", "MAX_COLUMN_SEGMENTS"]
