"""
Query string decoding for operator filters.

Filters travel in bracket notation::

    ?filter[age][operator]=>=&filter[age][value]=18
    ?filter[tags][0][operator]=in&filter[tags][0][value]=a,b
    &filter[tags][1][operator]=not_null&filter[tags][1][value]=

which decodes to::

    {"age": {"operator": ">=", "value": "18"},
     "tags": [{"operator": "in", "value": "a,b"},
              {"operator": "not_null", "value": None}]}

Only the query string is read. Empty strings become ``None`` so that
``null``/``not_null`` filters can be sent without a value.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Dict, List, Mapping, Optional

from ..core.settings import FilterOperatorSettings

logger = logging.getLogger(__name__)

_PARAM_RE = re.compile(r"^(?P<param>[^\[\]]+)(?P<brackets>(?:\[[^\[\]]*\])+)$")
_BRACKET_RE = re.compile(r"\[([^\[\]]*)\]")


def _get_last(query_dict: Mapping[str, Any], key: str) -> Any:
    value = query_dict.get(key)
    if isinstance(value, (list, tuple)):
        value = value[-1] if value else None
    return None if value == "" else value


def parse_filter_params(
    query_dict: Mapping[str, Any], param: Optional[str] = None
) -> Dict[str, Any]:
    """
    Decode bracketed filter parameters from ``query_dict`` (usually ``request.GET``).

    Args:
        query_dict: QueryDict or plain mapping of query parameters.
        param: Top level parameter name. Defaults to the ``query_param`` setting.

    Returns:
        Mapping of filter key to a filter value, or to a list of values when
        the key was sent with numeric indexes.
    """
    param = param or FilterOperatorSettings.from_settings().query_param
    filters: Dict[str, Any] = {}
    indexed: Dict[str, Dict[int, Dict[str, Any]]] = {}

    for raw_key in query_dict.keys():
        match = _PARAM_RE.match(raw_key)
        if not match or match.group("param") != param:
            continue
        parts = _BRACKET_RE.findall(match.group("brackets"))
        name, rest = parts[0], parts[1:]
        if not name:
            continue
        value = _get_last(query_dict, raw_key)

        if not rest:
            filters[name] = value
        elif len(rest) == 1 and rest[0]:
            current = filters.get(name)
            if not isinstance(current, dict):
                current = filters[name] = {}
            current[rest[0]] = value
        elif len(rest) == 2 and rest[0].isdigit() and rest[1]:
            indexed.setdefault(name, {}).setdefault(int(rest[0]), {})[rest[1]] = value
        else:
            logger.debug(f"Ignoring unsupported filter parameter {raw_key!r}")

    for name, items in indexed.items():
        values: List[Any] = []
        if name in filters:
            values.append(filters[name])
        values.extend(items[index] for index in sorted(items))
        filters[name] = values

    return filters


__all__ = ["parse_filter_params"]
