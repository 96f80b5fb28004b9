"""
Graphene types for exposing operator filters in a GraphQL schema.
"""

from .types import FilterOperatorEnum, OperatorFilterInput, filter_input_to_value

__all__ = ["FilterOperatorEnum", "OperatorFilterInput", "filter_input_to_value"]
