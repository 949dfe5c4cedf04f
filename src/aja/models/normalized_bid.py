"""Normalized bid returned to the auction host."""

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Optional

from ..utils.constants import DEFAULT_CURRENCY, DEFAULT_TTL

if TYPE_CHECKING:
    from ..renderer import Renderer


class MediaType(str, Enum):
    """Host media type constants."""

    BANNER = "banner"
    VIDEO = "video"
    NATIVE = "native"


@dataclass
class NormalizedBid:
    """
    A bid in the host's normalized shape, used for auction ranking.

    Banner bids carry `ad`; video bids carry `vast_xml`, `renderer` and the
    full `ad_response` the renderer reads at paint time.
    """

    request_id: str
    cpm: float
    creative_id: Optional[str] = None
    deal_id: Optional[str] = None
    currency: str = DEFAULT_CURRENCY
    net_revenue: bool = True
    ttl: int = DEFAULT_TTL
    media_type: Optional[MediaType] = None

    # Media-specific fields
    width: Optional[int] = None
    height: Optional[int] = None
    ad: Optional[str] = None
    vast_xml: Optional[str] = None
    renderer: Optional["Renderer"] = None
    ad_response: Optional[dict[str, Any]] = None

    # Set by the host when the bid is placed in a slot
    ad_unit_code: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Convert to the host's camelCase bid object, omitting unset media fields."""
        result: dict[str, Any] = {
            "requestId": self.request_id,
            "cpm": self.cpm,
            "creativeId": self.creative_id,
            "dealId": self.deal_id,
            "currency": self.currency,
            "netRevenue": self.net_revenue,
            "ttl": self.ttl,
        }
        if self.media_type is not None:
            result["mediaType"] = self.media_type.value
        if self.width is not None:
            result["width"] = self.width
        if self.height is not None:
            result["height"] = self.height
        if self.ad is not None:
            result["ad"] = self.ad
        if self.vast_xml is not None:
            result["vastXml"] = self.vast_xml
        if self.renderer is not None:
            result["renderer"] = self.renderer
        if self.ad_response is not None:
            result["adResponse"] = self.ad_response
        return result
