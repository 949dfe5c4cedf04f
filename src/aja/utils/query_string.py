"""
Query-string helpers for building exchange request URLs.

These follow the header-bidding host conventions: parameters are appended
only when their value is truthy, values are URI-component encoded, and
every pair is terminated with '&'.
"""

from typing import Any
from urllib.parse import quote

# Characters left unescaped by encodeURIComponent
_URI_COMPONENT_SAFE = "-_.!~*'()"

# Characters left unescaped by encodeURI
_URI_SAFE = _URI_COMPONENT_SAFE + ";,/?:@&=+$#"


def encode_uri_component(value: Any) -> str:
    """Encode a single query value."""
    return quote(str(value), safe=_URI_COMPONENT_SAFE)


def encode_uri(url: str) -> str:
    """Encode a full URL, keeping its reserved characters intact."""
    return quote(url, safe=_URI_SAFE)


def get_bid_id_parameter(key: str, params: dict[str, Any] | None) -> Any:
    """
    Look up a bid parameter, returning '' when it is absent or falsy.

    Args:
        key: Parameter name
        params: Bid params mapping (may be None)

    Returns:
        The parameter value, or an empty string
    """
    if params and params.get(key):
        return params[key]
    return ""


def try_append_query_string(query: str, key: str, value: Any) -> str:
    """
    Append `key=value&` to a query string when value is truthy.

    Args:
        query: Query string built so far
        key: Parameter name
        value: Parameter value

    Returns:
        The extended query string, or the original when value is falsy
    """
    if value:
        return f"{query}{key}={encode_uri_component(value)}&"
    return query
