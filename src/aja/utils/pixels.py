"""
Tracking pixel helpers.

Banner creatives carry impression beacon URLs that must fire when the
creative is painted. They are appended to the ad markup as a hidden 1x1
image.
"""

from typing import Any

from ..errors import TrackingPixelError
from .query_string import encode_uri
from .result import Err, Ok, Result


def create_track_pixel_html(url: str) -> str:
    """
    Build hidden image markup for a tracking URL.

    Args:
        url: Beacon URL

    Returns:
        HTML snippet, or '' when url is empty
    """
    if not url:
        return ""
    escaped_url = encode_uri(url)
    return (
        '<div style="position:absolute;left:0px;top:0px;visibility:hidden;">'
        f'<img src="{escaped_url}"></div>'
    )


def build_tracking_pixel(imps: Any) -> Result[str, TrackingPixelError]:
    """
    Build the tracking pixel for the first banner impression URL.

    Never raises; callers decide what to do with an Err.

    Args:
        imps: The `banner.imps` value from the exchange response

    Returns:
        Ok(html) on success, Err(TrackingPixelError) when imps is
        missing, empty, or its first entry is not a non-empty string
    """
    if not isinstance(imps, (list, tuple)):
        return Err(TrackingPixelError(f"imps must be a list, got {type(imps).__name__}"))
    if not imps:
        return Err(TrackingPixelError("imps is empty"))

    url = imps[0]
    if not isinstance(url, str) or not url:
        return Err(TrackingPixelError(f"invalid impression url: {url!r}"))

    return Ok(create_track_pixel_html(url))
