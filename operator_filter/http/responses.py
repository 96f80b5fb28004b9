"""
HTTP responses for operator filter errors.
"""

from __future__ import annotations

import functools
import logging
from typing import Callable

from django.http import JsonResponse

from ..exceptions import OperatorFilterError

logger = logging.getLogger(__name__)


def filter_error_response(error: OperatorFilterError) -> JsonResponse:
    """Render a filter error as a JSON:API error document."""
    return JsonResponse({"errors": [error.to_dict()]}, status=error.status_code)


def filter_errors_as_responses(view_func: Callable) -> Callable:
    """
    Decorator turning OperatorFilterError raised by a view into a response.

    Usage:
        @filter_errors_as_responses
        def post_list(request):
            queryset = post_filters.apply(Post.objects.all(), parse_filter_params(request.GET))
            ...
    """

    @functools.wraps(view_func)
    def wrapper(request, *args, **kwargs):
        try:
            return view_func(request, *args, **kwargs)
        except OperatorFilterError as e:
            logger.info(
                f"Filter error on {request.path}: {e}",
                extra={"filter_key": e.filter_key, "status_code": e.status_code},
            )
            return filter_error_response(e)

    return wrapper


__all__ = ["filter_error_response", "filter_errors_as_responses"]
