"""
Query normalization and canonical serialization

Endpoint methods accept either a mapping of parameters or, where the endpoint
has a primary parameter, a bare string. Both are normalized here into a fresh
dict before anything else touches them.
"""

import time
from decimal import Decimal
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union
from urllib.parse import quote, urlencode

from binance_rest.endpoints import Endpoint
from binance_rest.exceptions import InvalidQueryError

QueryArg = Union[None, str, Mapping[str, Any]]


def normalize_query(endpoint: Endpoint, query: QueryArg) -> Dict[str, Any]:
    """
    Coerce a query argument into a new dict

    Args:
        endpoint: Endpoint the query is for
        query: None, a mapping, or a bare string for endpoints with a primary key

    Returns:
        A copy the caller's object never shares

    Raises:
        InvalidQueryError: query has a type the endpoint does not accept
    """
    if query is None:
        return {}

    if isinstance(query, str):
        if endpoint.primary_key is None:
            raise InvalidQueryError(f"{endpoint.name} does not accept a bare string query")
        return {endpoint.primary_key: query}

    if isinstance(query, Mapping):
        return dict(query)

    raise InvalidQueryError(f"query must be a mapping, got {type(query).__name__}")


def current_timestamp() -> int:
    """Current time in epoch milliseconds"""
    return int(time.time() * 1000)


def inject_timestamp(query: Dict[str, Any]) -> Dict[str, Any]:
    """Add ``timestamp`` unless the caller supplied one."""
    if query.get("timestamp") is None:
        query["timestamp"] = current_timestamp()
    return query


def _format_value(value: Any) -> Any:
    if isinstance(value, bool):
        return "true" if value else "false"
    # str() switches to exponent form below 1e-4, which the exchange rejects
    if isinstance(value, float):
        return format(Decimal(repr(value)), "f")
    if isinstance(value, Decimal):
        return format(value, "f")
    return value



def serialize_query(query: Mapping[str, Any]) -> str:
    """
    Serialize to ``key=value&key=value`` in insertion order.

    Booleans become ``true``/``false``, floats and Decimals are written in
    positional notation, ``None`` values are dropped and list or tuple values
    repeat their key.
    """
    pairs: List[Tuple[str, Any]] = []
    for key, value in query.items():
        if value is None:
            continue
        if isinstance(value, (list, tuple)):
            pairs.extend((key, _format_value(v)) for v in value)
        else:
            pairs.append((key, _format_value(value)))
    return urlencode(pairs, quote_via=quote)


def with_recv_window(query: Dict[str, Any], recv_window: Optional[int]) -> Dict[str, Any]:
    if recv_window and query.get("recvWindow") is None:
        query["recvWindow"] = recv_window
    return query
