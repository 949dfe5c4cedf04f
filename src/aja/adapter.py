"""
AJA Bid Adapter

Adapts the AJA exchange to the header-bidding host. The host calls the
entry points in a fixed order each auction round:

    1. is_bid_request_valid() for every ad slot configured for "aja"
    2. build_requests() with the valid ones
    3. interpret_response() once per HTTP response
    4. get_user_syncs() once all responses are in

Usage:
    from src.aja.adapter import AjaBidAdapter

    adapter = AjaBidAdapter(player=my_vast_player)
    requests = adapter.build_requests(
        [b for b in bids if adapter.is_bid_request_valid(b)]
    )

Importing this module registers a default adapter, `spec`, under "aja". It
is built without a video player; the host attaches its player SDK before
video bids are rendered:

    from src.aja.adapter import spec

    spec.player = my_vast_player

The player is bound into each renderer when a video bid is interpreted, so
attach it before the first auction.
"""

from typing import Any, Callable, Optional

from .config import AdapterConfig, get_adapter_config
from .errors import ResponseDecodeError
from .logging import auction_context, bidder_logger
from .models import (
    AdType,
    BidRequest,
    ExchangeResponse,
    MediaType,
    NormalizedBid,
    OutboundRequest,
    ServerResponse,
    SyncOptions,
    SyncPixel,
)
from .registry import register_bidder
from .renderer import Renderer, VastPlayer, new_renderer
from .utils.constants import (
    QUERY_PARAM_ASI,
    QUERY_PARAM_PREBID_ID,
    QUERY_PARAM_PREBID_VERSION,
    QUERY_PARAM_SDK_TYPE,
)
from .utils.pixels import build_tracking_pixel
from .utils.query_string import get_bid_id_parameter, try_append_query_string


class AjaBidAdapter:
    """
    Bidder adapter for the AJA exchange.

    Each valid bid becomes one GET request; each filled response becomes
    one banner or outstream video bid.
    """

    supported_media_types = [MediaType.VIDEO, MediaType.BANNER]

    def __init__(
        self,
        config: Optional[AdapterConfig] = None,
        player: Optional[VastPlayer] = None,
        renderer_installer: Callable[..., Renderer] = Renderer.install,
    ):
        """
        Initialize the adapter.

        Args:
            config: Adapter settings (uses global config if not provided)
            player: Video player SDK used by outstream renderers
            renderer_installer: Renderer install facility
        """
        self.config = config or get_adapter_config()
        self.player = player
        self.renderer_installer = renderer_installer
        self.logger = bidder_logger(self.config.bidder_code)

    @property
    def code(self) -> str:
        return self.config.bidder_code

    def is_bid_request_valid(self, bid: BidRequest | dict[str, Any]) -> bool:
        """A bid is valid when it carries a non-empty ad slot id."""
        return bool(BidRequest.coerce(bid).params.asi)

    def build_requests(
        self,
        valid_bid_requests: list[BidRequest | dict[str, Any]],
        bidder_request: Any = None,
    ) -> list[OutboundRequest]:
        """
        Build one GET request per bid, in input order.

        Args:
            valid_bid_requests: Bids that passed is_bid_request_valid()
            bidder_request: Host auction context (unused)

        Returns:
            Outbound requests for the host transport
        """
        requests = []
        for raw_bid in valid_bid_requests:
            bid = BidRequest.coerce(raw_bid)

            query = ""
            asi = get_bid_id_parameter("asi", bid.params.to_dict())
            query = try_append_query_string(query, QUERY_PARAM_ASI, asi)
            query = try_append_query_string(query, QUERY_PARAM_SDK_TYPE, self.config.sdk_type)
            query = try_append_query_string(query, QUERY_PARAM_PREBID_ID, bid.bid_id)
            query = try_append_query_string(query, QUERY_PARAM_PREBID_VERSION, self.config.prebid_version)

            requests.append(
                OutboundRequest(
                    url=self.config.endpoint_url,
                    data=query,
                    method="GET",
                    bid_request=bid,
                )
            )
            with auction_context(bid.auction_id, ad_unit_code=bid.ad_unit_code):
                self.logger.debug("Built bid request", bid_id=bid.bid_id, asi=asi)

        return requests

    def interpret_response(
        self,
        server_response: ServerResponse | dict[str, Any],
        request: Optional[OutboundRequest] = None,
    ) -> list[NormalizedBid]:
        """
        Turn an exchange response into host bids.

        No fill, an undecodable body, and unsupported ad types all yield an
        empty list; nothing is raised to the host.

        Args:
            server_response: Response from the host transport
            request: The outbound request that produced it

        Returns:
            Zero or one normalized bids
        """
        body = ServerResponse.coerce(server_response).body
        auction_id = prebid_id = None
        if request is not None and request.bid_request is not None:
            auction_id = request.bid_request.auction_id
            prebid_id = request.bid_request.bid_id

        with auction_context(auction_id, prebid_id=prebid_id):
            return self._interpret_body(body)

    def _interpret_body(self, body: Any) -> list[NormalizedBid]:
        if not isinstance(body, dict) or not body.get("is_ad_return"):
            self.logger.debug("No ad returned")
            return []

        try:
            response = ExchangeResponse.from_dict(body)
        except ResponseDecodeError as e:
            self.logger.error("Malformed exchange response", error=str(e))
            return []

        ad = response.ad
        bid = NormalizedBid(
            request_id=ad.prebid_id,
            cpm=ad.price,
            creative_id=ad.creative_id,
            deal_id=ad.deal_id,
            currency=ad.currency or self.config.default_currency,
            net_revenue=self.config.net_revenue,
            ttl=self.config.ttl,
        )

        if ad.ad_type is AdType.VIDEO:
            video = ad.video
            bid.vast_xml = video.vtag
            bid.width = video.w
            bid.height = video.h
            bid.renderer = new_renderer(response, self.player, self.renderer_installer)
            bid.ad_response = response.raw
            bid.media_type = MediaType.VIDEO
        elif ad.ad_type is AdType.BANNER:
            banner = ad.banner
            bid.width = banner.w
            bid.height = banner.h
            bid.ad = banner.tag
            bid.media_type = MediaType.BANNER

            pixel = build_tracking_pixel(banner.imps)
            if pixel.is_ok:
                bid.ad += pixel.value
            else:
                self.logger.error("Error appending tracking pixel", error=str(pixel.error))
        else:
            self.logger.warning("Unsupported ad type", ad_type=int(ad.ad_type), prebid_id=ad.prebid_id)
            return []

        return [bid]

    def get_user_syncs(
        self,
        sync_options: SyncOptions | dict[str, Any] | None,
        server_responses: list[ServerResponse | dict[str, Any]],
    ) -> list[SyncPixel]:
        """
        Report image sync pixels from the first server response.

        Sync lists on later responses are not read.
        """
        options = SyncOptions.coerce(sync_options)
        if not options.pixel_enabled or not server_responses:
            return []

        body = ServerResponse.coerce(server_responses[0]).body
        if not isinstance(body, dict):
            return []

        syncs = body.get("syncs")
        if not isinstance(syncs, list):
            return []

        pixels = [SyncPixel(url=sync) for sync in syncs]
        self.logger.debug("User syncs", count=len(pixels))
        return pixels


spec = AjaBidAdapter()

register_bidder(spec)
