"""
Request and response helpers for operator filters.
"""

from .params import parse_filter_params
from .responses import filter_error_response, filter_errors_as_responses

__all__ = ["parse_filter_params", "filter_error_response", "filter_errors_as_responses"]
