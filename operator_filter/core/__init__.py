"""
Core configuration for django-operator-filter.
"""

from .settings import FilterOperatorSettings

__all__ = ["FilterOperatorSettings"]
