"""AJA Utilities."""

from .constants import BIDDER_CODE, DEFAULT_CURRENCY, DEFAULT_TTL, ENDPOINT_URL, SDK_TYPE
from .pixels import build_tracking_pixel, create_track_pixel_html
from .query_string import (
    encode_uri,
    encode_uri_component,
    get_bid_id_parameter,
    try_append_query_string,
)
from .result import Err, Ok, Result

__all__ = [
    'BIDDER_CODE',
    'DEFAULT_CURRENCY',
    'DEFAULT_TTL',
    'ENDPOINT_URL',
    'SDK_TYPE',
    'build_tracking_pixel',
    'create_track_pixel_html',
    'encode_uri',
    'encode_uri_component',
    'get_bid_id_parameter',
    'try_append_query_string',
    'Err',
    'Ok',
    'Result',
]
