"""
Operator filters.

Package Structure:
    - operators: operator allow-list and value splitting
    - builder: QueryBuilder, the queryset adapter filters write clauses to
    - operator_filter: OperatorFilter, the filter itself
    - registry: FilterRegistry, routes request filter values by key
    - django_filter: django-filter Filter/field/widget wrappers
"""

from .builder import WHERE_LOOKUPS, QueryBuilder
from .operator_filter import MAX_COLUMN_SEGMENTS, OperatorFilter
from .operators import (
    ALLOWED_OPERATORS,
    COMPARISON_OPERATORS,
    is_allowed_operator,
    split_values,
)
from .registry import FilterRegistry

__all__ = [
    "QueryBuilder",
    "WHERE_LOOKUPS",
    "OperatorFilter",
    "MAX_COLUMN_SEGMENTS",
    "FilterRegistry",
    "ALLOWED_OPERATORS",
    "COMPARISON_OPERATORS",
    "is_allowed_operator",
    "split_values",
]
