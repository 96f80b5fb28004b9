"""
FilterOperatorSettings implementation.
"""

from dataclasses import dataclass
from typing import Any, Dict

from django.conf import settings as django_settings

from ..defaults import LIBRARY_DEFAULTS, merge_settings


def _get_project_settings() -> Dict[str, Any]:
    """Get the OPERATOR_FILTER block from Django settings."""
    project = getattr(django_settings, "OPERATOR_FILTER", None)
    if not isinstance(project, dict):
        return {}
    return project


@dataclass(frozen=True)
class FilterOperatorSettings:
    """Settings consumed by operator filters."""

    max_in_values: int = 500
    log_rejected_filters: bool = True
    query_param: str = "filter"

    @classmethod
    def from_settings(cls) -> "FilterOperatorSettings":
        merged = merge_settings(LIBRARY_DEFAULTS, _get_project_settings())
        valid_fields = set(cls.__dataclass_fields__.keys())
        return cls(**{k: v for k, v in merged.items() if k in valid_fields})
