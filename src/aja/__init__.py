"""
AJA bid adapter.

Connects the AJA real-time-bidding exchange to a header-bidding host:
bid validation, request building, response interpretation, outstream
video rendering and user syncs.
"""

__version__ = '1.0.0'

from .adapter import AjaBidAdapter, spec
from .config import AdapterConfig, get_adapter_config, load_adapter_config
from .models import (
    AdType,
    BidParams,
    BidRequest,
    ExchangeResponse,
    MediaType,
    NormalizedBid,
    OutboundRequest,
    ServerResponse,
    SyncOptions,
    SyncPixel,
)
from .registry import BidderRegistry, get_bidder_registry, register_bidder
from .renderer import Renderer, VastPlayer

__all__ = [
    'AjaBidAdapter',
    'spec',
    'AdapterConfig',
    'get_adapter_config',
    'load_adapter_config',
    'AdType',
    'BidParams',
    'BidRequest',
    'ExchangeResponse',
    'MediaType',
    'NormalizedBid',
    'OutboundRequest',
    'ServerResponse',
    'SyncOptions',
    'SyncPixel',
    'BidderRegistry',
    'get_bidder_registry',
    'register_bidder',
    'Renderer',
    'VastPlayer',
]
