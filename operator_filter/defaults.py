"""
Default configuration for the django-operator-filter library.

Projects override any of these keys through the ``OPERATOR_FILTER`` Django
setting. Only keys declared here are read; anything else is ignored.
"""

from __future__ import annotations

from typing import Any

LIBRARY_VERSION = "0.1.0"
LIBRARY_NAME = "django-operator-filter"


LIBRARY_DEFAULTS: dict[str, Any] = {
    # Upper bound on the number of comma separated tokens accepted by "in".
    "max_in_values": 500,
    # Log rejected filter values at WARNING level.
    "log_rejected_filters": True,
    # Query string parameter holding bracketed filters: filter[age][operator]=...
    "query_param": "filter",
}


def merge_settings(*dicts: dict[str, Any]) -> dict[str, Any]:
    """Merge settings dictionaries, later ones taking precedence."""
    result: dict[str, Any] = {}
    for d in dicts:
        if d:
            result.update(d)
    return result
