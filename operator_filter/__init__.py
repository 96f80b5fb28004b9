"""
django-operator-filter.

Operator-tagged query filters for Django querysets: a request value
``{"operator": ">=", "value": "18"}`` becomes ``queryset.filter(age__gte="18")``,
and ``relation.column`` filters become a single correlated EXISTS subquery.

Example Usage:
    from operator_filter import FilterRegistry, OperatorFilter
    from operator_filter.http import parse_filter_params

    post_filters = FilterRegistry([
        OperatorFilter.make("title"),
        OperatorFilter.make("publishedAt"),
        OperatorFilter.make("author.country", owner_entity=Post),
    ])
    queryset = post_filters.apply(Post.objects.all(), parse_filter_params(request.GET))
"""

from .defaults import LIBRARY_NAME, LIBRARY_VERSION
from .exceptions import (
    MalformedFilterError,
    OperatorFilterError,
    UnknownFilterError,
    UnknownRelationError,
    UnsupportedOperatorError,
    UnsupportedRelationDepthError,
)
from .filters import (
    ALLOWED_OPERATORS,
    FilterRegistry,
    OperatorFilter,
    QueryBuilder,
    split_values,
)
from .metadata import EntityRef, EntityRegistry, Relation, entity_registry

__version__ = LIBRARY_VERSION

__all__ = [
    "__version__",
    "LIBRARY_NAME",
    "OperatorFilter",
    "FilterRegistry",
    "QueryBuilder",
    "ALLOWED_OPERATORS",
    "split_values",
    "EntityRef",
    "EntityRegistry",
    "Relation",
    "entity_registry",
    "OperatorFilterError",
    "MalformedFilterError",
    "UnknownFilterError",
    "UnsupportedOperatorError",
    "UnknownRelationError",
    "UnsupportedRelationDepthError",
]
