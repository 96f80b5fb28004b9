"""
django-filter integration.

``OperatorFilterField`` lets a ``django_filters.FilterSet`` expose an
operator filter as a pair of query parameters::

    class PostFilterSet(django_filters.FilterSet):
        age = OperatorFilterField()
        author_country = OperatorFilterField(field_name="author__country")

        class Meta:
            model = Post
            fields = []

    # ?age_operator=>=&age_value=18&author_country_operator=in&author_country_value=US,CA
"""

from __future__ import annotations

from typing import Any, List, Optional

import django_filters
from django import forms
from django_filters.constants import EMPTY_VALUES
from django_filters.widgets import SuffixedMultiWidget

from ..metadata.registry import OwnerLike
from .operator_filter import OperatorFilter


class OperatorWidget(SuffixedMultiWidget):
    """Renders ``<name>_operator`` and ``<name>_value`` inputs."""

    suffixes = ["operator", "value"]

    def __init__(self, attrs=None):
        widgets = (forms.TextInput, forms.TextInput)
        super().__init__(widgets, attrs)

    def decompress(self, value: Any) -> List[Any]:
        if isinstance(value, dict):
            return [value.get("operator"), value.get("value")]
        return [None, None]


class OperatorField(forms.MultiValueField):
    """
    Form field producing an operator filter value.

    The operator is not checked here: OperatorFilter.validate is the single
    place operators are accepted or rejected. A blank value is submitted as
    ``None`` since query parameters cannot express null.
    """

    widget = OperatorWidget

    def __init__(self, *args, **kwargs):
        fields = (
            forms.CharField(required=False, strip=False),
            forms.CharField(required=False, strip=False),
        )
        kwargs.setdefault("require_all_fields", False)
        super().__init__(fields, *args, **kwargs)

    def compress(self, data_list: List[Any]) -> Optional[dict]:
        if not data_list:
            return None
        operator, value = data_list
        compressed = {"value": value if value != "" else None}
        if operator:
            compressed["operator"] = operator
        return compressed


class OperatorFilterField(django_filters.Filter):
    """django-filter ``Filter`` delegating to an OperatorFilter."""

    field_class = OperatorField

    def __init__(self, field_name=None, *, owner_entity: OwnerLike = None, **kwargs):
        super().__init__(field_name=field_name, **kwargs)
        self.owner_entity = owner_entity
        self._operator_filter: Optional[OperatorFilter] = None

    def get_operator_filter(self, model) -> OperatorFilter:
        if self._operator_filter is None:
            column = self.field_name.replace("__", ".")
            owner = self.owner_entity or model
            self._operator_filter = OperatorFilter.make(
                self.field_name, column=column, owner_entity=owner
            )
        return self._operator_filter

    def filter(self, qs, value):
        if value in EMPTY_VALUES:
            return qs
        operator_filter = self.get_operator_filter(qs.model)
        qs = operator_filter.apply(qs, value)
        if self.distinct:
            qs = qs.distinct()
        return qs


__all__ = ["OperatorWidget", "OperatorField", "OperatorFilterField"]
