"""
GraphQL input types for operator filters.

Lets a graphene schema accept the same ``{operator, value}`` pair that the
REST query string carries, e.g.::

    query {
      posts(filter: {age: {operator: GTE, value: "18"}}) { id }
    }
"""

from __future__ import annotations

from typing import Any, Dict

import graphene


class FilterOperatorEnum(graphene.Enum):
    """Operators accepted by operator filters."""

    EQ = "="
    GT = ">"
    LT = "<"
    GTE = ">="
    LTE = "<="
    NEQ = "<>"
    BETWEEN = "between"
    IN = "in"
    NULL = "null"
    NOT_NULL = "not_null"
    CONTAINS = "contains"


class OperatorFilterInput(graphene.InputObjectType):
    """
    Filter input carrying an operator and a raw value.

    ``between`` expects ``"lo,hi"`` and ``in`` a comma separated list.
    ``null`` and ``not_null`` ignore the value.
    """

    operator = FilterOperatorEnum(required=True, description="Comparison operator")
    value = graphene.String(description="Raw value; comma separated for between and in")


def filter_input_to_value(filter_input: Any) -> Any:
    """
    Convert an OperatorFilterInput into the mapping OperatorFilter.apply expects.

    Inputs that are not mappings are returned unchanged so the filter reports
    them as malformed.
    """
    if not isinstance(filter_input, dict):
        return filter_input
    converted: Dict[str, Any] = dict(filter_input)
    if "operator" in converted:
        operator = converted["operator"]
        converted["operator"] = getattr(operator, "value", operator)
    converted.setdefault("value", None)
    return converted


__all__ = ["FilterOperatorEnum", "OperatorFilterInput", "filter_input_to_value"]
