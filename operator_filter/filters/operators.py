"""
Operator tokens accepted by operator filters.
"""

from __future__ import annotations

from typing import Any, List

# Order matters: it is the order listed in error messages.
ALLOWED_OPERATORS = (
    "=",
    ">",
    "<",
    ">=",
    "<=",
    "<>",
    "between",
    "in",
    "null",
    "not_null",
    "contains",
)

COMPARISON_OPERATORS = ("=", ">", "<", ">=", "<=", "<>")


def is_allowed_operator(token: Any) -> bool:
    """Return True if ``token`` is one of ALLOWED_OPERATORS."""
    return isinstance(token, str) and token in ALLOWED_OPERATORS


def split_values(value: Any) -> List[str]:
    """
    Split a comma separated filter value into tokens.

    Tokens are not trimmed. ``None`` yields an empty list and the empty
    string yields ``[""]``.

    Examples:
        >>> split_values("a,b, c")
        ['a', 'b', ' c']
        >>> split_values(None)
        []
    """
    if value is None:
        return []
    return str(value).split(",")


__all__ = [
    "ALLOWED_OPERATORS",
    "COMPARISON_OPERATORS",
    "is_allowed_operator",
    "split_values",
]
