"""
Exchange response models.

The exchange answers each prebid call with a JSON body whose `ad` object
is a tagged union over `ad_type`. Bodies are decoded here, at the
boundary, so the interpreter never touches unchecked fields.

Example body:
    {
        "is_ad_return": true,
        "ad": {
            "ad_type": 1,
            "prebid_id": "51ef8751f9aead",
            "price": 12.34,
            "currency": "USD",
            "creative_id": "123abc",
            "deal_id": "",
            "banner": {"w": 300, "h": 250, "tag": "<div></div>", "imps": ["..."]}
        },
        "syncs": ["https://example.com/sync"]
    }
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Union

from ..errors import ResponseDecodeError
from ..logging import get_logger

logger = get_logger("aja.models")


class AdType(int, Enum):
    """Creative types returned by the exchange."""

    BANNER = 1
    NATIVE = 2
    VIDEO = 3


def _require_mapping(data: Any, name: str) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise ResponseDecodeError(f"{name} must be an object, got {type(data).__name__}")
    return data


def _optional_dimension(data: dict[str, Any], key: str) -> Union[int, float, None]:
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ResponseDecodeError(f"{key} must be a number, got {value!r}")
    # Whole-number floats become ints; fractional sizes are kept as sent
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


@dataclass
class BannerCreative:
    """Banner creative markup plus impression beacons."""

    tag: str
    w: Union[int, float, None] = None
    h: Union[int, float, None] = None
    # Left undecoded; the tracking pixel helper checks it
    imps: Any = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> "BannerCreative":
        """Create from dictionary."""
        data = _require_mapping(data, "ad.banner")
        tag = data.get("tag")
        if not isinstance(tag, str):
            raise ResponseDecodeError("ad.banner.tag must be a string")
        return cls(
            tag=tag,
            w=_optional_dimension(data, "w"),
            h=_optional_dimension(data, "h"),
            imps=data.get("imps"),
        )


@dataclass
class VideoCreative:
    """
    Outstream video creative.

    Attributes:
        vtag: VAST XML
        purl: Player script URL used by the renderer
        progress: Show the progress bar
        loop: Loop playback
        inread: Expand in-read when scrolled into view
    """

    vtag: str
    w: Union[int, float, None] = None
    h: Union[int, float, None] = None
    purl: str = ""
    progress: bool = False
    loop: bool = False
    inread: bool = False

    @classmethod
    def from_dict(cls, data: Any) -> "VideoCreative":
        """Create from dictionary."""
        data = _require_mapping(data, "ad.video")
        vtag = data.get("vtag")
        if not isinstance(vtag, str):
            raise ResponseDecodeError("ad.video.vtag must be a string")
        return cls(
            vtag=vtag,
            w=_optional_dimension(data, "w"),
            h=_optional_dimension(data, "h"),
            purl=data.get("purl") or "",
            progress=bool(data.get("progress", False)),
            loop=bool(data.get("loop", False)),
            inread=bool(data.get("inread", False)),
        )


Creative = Union[BannerCreative, VideoCreative, None]


@dataclass
class ExchangeAd:
    """
    A single ad returned by the exchange.

    `creative` holds the variant selected by `ad_type`; it is None for
    native ads and unknown types, which the adapter does not handle.
    """

    prebid_id: str
    price: float
    ad_type: Union[AdType, int]
    creative_id: Optional[str] = None
    deal_id: Optional[str] = None
    currency: Optional[str] = None
    creative: Creative = None

    @property
    def banner(self) -> Optional[BannerCreative]:
        return self.creative if isinstance(self.creative, BannerCreative) else None

    @property
    def video(self) -> Optional[VideoCreative]:
        return self.creative if isinstance(self.creative, VideoCreative) else None

    @classmethod
    def from_dict(cls, data: Any) -> "ExchangeAd":
        """Create from dictionary, decoding the creative for ad_type."""
        data = _require_mapping(data, "ad")

        prebid_id = data.get("prebid_id")
        if not prebid_id:
            raise ResponseDecodeError("ad.prebid_id is required")

        price = data.get("price")
        if isinstance(price, bool) or not isinstance(price, (int, float)):
            raise ResponseDecodeError(f"ad.price must be a number, got {price!r}")

        raw_type = data.get("ad_type")
        if isinstance(raw_type, bool) or not isinstance(raw_type, int):
            raise ResponseDecodeError(f"ad.ad_type must be an integer, got {raw_type!r}")
        try:
            ad_type: Union[AdType, int] = AdType(raw_type)
        except ValueError:
            ad_type = raw_type

        creative: Creative = None
        if ad_type is AdType.BANNER:
            creative = BannerCreative.from_dict(data.get("banner"))
        elif ad_type is AdType.VIDEO:
            creative = VideoCreative.from_dict(data.get("video"))

        return cls(
            prebid_id=str(prebid_id),
            price=float(price),
            ad_type=ad_type,
            creative_id=data.get("creative_id"),
            deal_id=data.get("deal_id"),
            currency=data.get("currency"),
            creative=creative,
        )


@dataclass
class ExchangeResponse:
    """Decoded exchange response body."""

    is_ad_return: bool
    ad: Optional[ExchangeAd] = None
    syncs: list[str] = field(default_factory=list)
    raw: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> "ExchangeResponse":
        """
        Decode a response body.

        The `ad` object is only decoded when `is_ad_return` is truthy, so
        no-fill bodies never fail validation.

        Raises:
            ResponseDecodeError: If the body does not match the expected shape
        """
        data = _require_mapping(data, "response body")

        is_ad_return = bool(data.get("is_ad_return"))
        ad = ExchangeAd.from_dict(data.get("ad")) if is_ad_return else None

        syncs = data.get("syncs") or []
        if not isinstance(syncs, list):
            logger.warning("Ignoring non-list syncs", syncs_type=type(syncs).__name__)
            syncs = []

        return cls(
            is_ad_return=is_ad_return,
            ad=ad,
            syncs=[str(s) for s in syncs],
            raw=data,
        )


@dataclass
class ServerResponse:
    """HTTP response handed back by the host transport."""

    body: Any = None
    headers: dict[str, str] = field(default_factory=dict)

    @classmethod
    def coerce(cls, response: "ServerResponse | dict[str, Any]") -> "ServerResponse":
        """Accept either a ServerResponse or a host `{body, headers}` dict."""
        if isinstance(response, cls):
            return response
        return cls(
            body=response.get("body"),
            headers=response.get("headers") or {},
        )
