"""Bid request models exchanged with the auction host."""

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass
class BidParams:
    """
    Bidder-specific params configured on an ad unit.

    Attributes:
        asi: Ad slot identifier issued by the exchange
    """

    asi: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {"asi": self.asi}

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "BidParams":
        """Create from dictionary."""
        data = data or {}
        return cls(asi=data.get("asi"))


@dataclass
class BidRequest:
    """
    A single ad slot bid request created by the host for one auction.

    Read-only to the adapter.
    """

    bid_id: str
    params: BidParams = field(default_factory=BidParams)
    ad_unit_code: str = ""
    bidder: str = "aja"
    auction_id: Optional[str] = None
    transaction_id: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to the host's camelCase dictionary."""
        return {
            "bidId": self.bid_id,
            "params": self.params.to_dict(),
            "adUnitCode": self.ad_unit_code,
            "bidder": self.bidder,
            "auctionId": self.auction_id,
            "transactionId": self.transaction_id,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "BidRequest":
        """Create from the host's camelCase dictionary."""
        return cls(
            bid_id=data.get("bidId", ""),
            params=BidParams.from_dict(data.get("params")),
            ad_unit_code=data.get("adUnitCode", ""),
            bidder=data.get("bidder", "aja"),
            auction_id=data.get("auctionId"),
            transaction_id=data.get("transactionId"),
        )

    @classmethod
    def coerce(cls, bid: "BidRequest | dict[str, Any]") -> "BidRequest":
        """Accept either a BidRequest or a host dictionary."""
        if isinstance(bid, cls):
            return bid
        return cls.from_dict(bid)


@dataclass
class OutboundRequest:
    """
    HTTP request for the host transport to send to the exchange.

    Attributes:
        method: Always GET for this exchange
        url: Exchange endpoint
        data: Encoded query string
        bid_request: The bid request this call was built from
    """

    url: str
    data: str
    method: str = "GET"
    bid_request: Optional[BidRequest] = None

    @property
    def full_url(self) -> str:
        """Endpoint URL with the query string attached."""
        if not self.data:
            return self.url
        return f"{self.url}?{self.data}"

    def to_dict(self) -> dict[str, Any]:
        """Convert to the host's request dictionary."""
        return {
            "method": self.method,
            "url": self.url,
            "data": self.data,
        }
