"""
Exceptions raised by operator filters.

Each error carries the HTTP status class the caller should map it to and
enough context (filter key, relation, depth) to build a useful error
response. Nothing here is retried: every failure is a client input problem.
"""

from typing import Any, Dict, Iterable, Optional


class OperatorFilterError(Exception):
    """Base exception for operator filter errors."""

    status_code = 400
    title = "Invalid filter"

    def __init__(self, message: str, filter_key: Optional[str] = None):
        self.message = message
        self.filter_key = filter_key
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON:API style error object."""
        error: Dict[str, Any] = {
            "status": str(self.status_code),
            "title": self.title,
            "detail": self.message,
        }
        if self.filter_key:
            error["source"] = {"parameter": f"filter[{self.filter_key}]"}
        return error


class MalformedFilterError(OperatorFilterError):
    """Raised when a filter value does not have the expected shape."""

    title = "Malformed filter"


class UnknownFilterError(MalformedFilterError):
    """Raised when a request names a filter that is not registered."""

    title = "Unknown filter"


class UnsupportedOperatorError(OperatorFilterError):
    """Raised when the operator is outside the allow-list."""

    title = "Unsupported filter operator"

    def __init__(
        self,
        message: str,
        filter_key: Optional[str] = None,
        operator: Optional[Any] = None,
        allowed_operators: Iterable[str] = (),
    ):
        self.operator = operator
        self.allowed_operators = tuple(allowed_operators)
        super().__init__(message, filter_key)


class UnknownRelationError(OperatorFilterError):
    """Raised when a relationship filter cannot resolve its relation."""

    status_code = 422
    title = "Unknown filter relationship"

    def __init__(
        self,
        message: str,
        filter_key: Optional[str] = None,
        relation_name: Optional[str] = None,
    ):
        self.relation_name = relation_name
        super().__init__(message, filter_key)


class UnsupportedRelationDepthError(OperatorFilterError):
    """Raised when a column path goes through more than one relation."""

    title = "Unsupported filter relationship depth"

    def __init__(
        self,
        message: str,
        filter_key: Optional[str] = None,
        depth: Optional[int] = None,
    ):
        self.depth = depth
        super().__init__(message, filter_key)


__all__ = [
    "OperatorFilterError",
    "MalformedFilterError",
    "UnknownFilterError",
    "UnsupportedOperatorError",
    "UnknownRelationError",
    "UnsupportedRelationDepthError",
]
