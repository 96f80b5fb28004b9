"""
Filter registry.

Groups the filters declared for one resource and routes incoming filter
values to them by key. Filters are combined with AND: every applied filter
narrows the queryset further.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Dict, Iterable, Iterator, List, Optional

from django.db import models

from ..exceptions import MalformedFilterError, UnknownFilterError
from .operator_filter import OperatorFilter

logger = logging.getLogger(__name__)


class FilterRegistry:
    """
    Filters available on a resource, keyed by ``key()``.

    Example:
        filters = FilterRegistry([
            OperatorFilter.make("title"),
            OperatorFilter.make("author.country", owner_entity=Post),
        ])
        queryset = filters.apply(Post.objects.all(), {
            "title": {"operator": "contains", "value": "django"},
        })
    """

    def __init__(self, filters: Iterable[OperatorFilter] = ()):
        self._filters: Dict[str, OperatorFilter] = {}
        for filter_obj in filters:
            self.register(filter_obj)

    def register(self, filter_obj: OperatorFilter) -> OperatorFilter:
        key = filter_obj.key()
        if key in self._filters:
            raise ValueError(f"A filter is already registered for key {key!r}")
        self._filters[key] = filter_obj
        return filter_obj

    def get(self, key: str) -> Optional[OperatorFilter]:
        return self._filters.get(key)

    def keys(self) -> List[str]:
        return list(self._filters)

    def __contains__(self, key: str) -> bool:
        return key in self._filters

    def __iter__(self) -> Iterator[OperatorFilter]:
        return iter(self._filters.values())

    def __len__(self) -> int:
        return len(self._filters)

    def _get_or_raise(self, key: str) -> OperatorFilter:
        filter_obj = self._filters.get(key)
        if filter_obj is None:
            raise UnknownFilterError(
                f"Filter parameter {key} is not allowed.", filter_key=key
            )
        return filter_obj

    def apply(self, queryset: models.QuerySet, filters: Any) -> models.QuerySet:
        """
        Apply every incoming filter value to ``queryset``.

        ``filters`` maps filter keys to a filter value, or to a list of
        values when the same key is supplied more than once. Every value is
        validated before the next one is applied; the first failure raises.
        """
        if not filters:
            return queryset
        if not isinstance(filters, Mapping):
            raise MalformedFilterError("Expecting filters to be an object.")

        for key, raw in filters.items():
            filter_obj = self._get_or_raise(key)
            values = raw if isinstance(raw, (list, tuple)) else [raw]
            for value in values:
                queryset = filter_obj.apply(queryset, value)
        logger.debug(f"Applied filters: {', '.join(filters)}")
        return queryset

    def is_singular(self, filters: Any) -> bool:
        """Return True if any of the requested filters is singular."""
        if not isinstance(filters, Mapping):
            return False
        for key in filters:
            filter_obj = self._filters.get(key)
            if filter_obj is not None and filter_obj.is_singular():
                return True
        return False


__all__ = ["FilterRegistry"]
