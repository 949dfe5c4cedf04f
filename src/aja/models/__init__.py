"""AJA Models and Data Types."""

from .bid_request import BidParams, BidRequest, OutboundRequest
from .exchange_response import (
    AdType,
    BannerCreative,
    ExchangeAd,
    ExchangeResponse,
    ServerResponse,
    VideoCreative,
)
from .normalized_bid import MediaType, NormalizedBid
from .user_sync import SyncOptions, SyncPixel

__all__ = [
    "AdType",
    "BannerCreative",
    "BidParams",
    "BidRequest",
    "ExchangeAd",
    "ExchangeResponse",
    "MediaType",
    "NormalizedBid",
    "OutboundRequest",
    "ServerResponse",
    "SyncOptions",
    "SyncPixel",
    "VideoCreative",
]
