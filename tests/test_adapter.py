"""
Tests for the AJA bid adapter entry points.

These tests verify:
- Bid validation on params.asi
- One GET request per bid with the expected query string
- Banner, video, no-fill and malformed response interpretation
- User sync reporting from the first response
"""

import pytest
import structlog
from unittest.mock import MagicMock

from src.aja.adapter import AjaBidAdapter, spec
from src.aja.config import AdapterConfig
from src.aja.errors import RendererError
from src.aja.models import (
    BidRequest,
    BidParams,
    MediaType,
    OutboundRequest,
    ServerResponse,
    SyncOptions,
)
from src.aja.registry import get_bidder_registry
from src.aja.renderer import Renderer


@pytest.fixture
def config():
    return AdapterConfig(prebid_version="1.2.3")


@pytest.fixture
def player():
    return MagicMock()


@pytest.fixture
def adapter(config, player):
    return AjaBidAdapter(config=config, player=player)


def banner_body(**overrides):
    banner = {
        "w": 300,
        "h": 250,
        "tag": "<div>ad</div>",
        "imps": ["http://t.example/px"],
    }
    banner.update(overrides.pop("banner", {}))
    ad = {
        "ad_type": 1,
        "prebid_id": "51ef8751f9aead",
        "price": 12.34,
        "currency": "USD",
        "creative_id": "123abc",
        "deal_id": "deal-1",
        "banner": banner,
    }
    ad.update(overrides)
    return {"is_ad_return": True, "ad": ad, "syncs": ["https://sync.example/a"]}


def video_body(**overrides):
    ad = {
        "ad_type": 3,
        "prebid_id": "51ef8751f9aead",
        "price": 12.34,
        "currency": "JPY",
        "creative_id": "123abc",
        "video": {
            "vtag": "<VAST></VAST>",
            "w": 300,
            "h": 250,
            "purl": "https://player.example/vast.js",
            "progress": True,
            "loop": False,
            "inread": False,
        },
    }
    ad.update(overrides)
    return {"is_ad_return": True, "ad": ad}


class TestIsBidRequestValid:
    """Test bid validation."""

    def test_valid_with_asi(self, adapter):
        """A bid with an ad slot id is valid."""
        bid = BidRequest(bid_id="30b31c1838de1e", params=BidParams(asi="123456"))
        assert adapter.is_bid_request_valid(bid) is True

    def test_invalid_without_asi(self, adapter):
        """A bid with no ad slot id is invalid."""
        bid = BidRequest(bid_id="30b31c1838de1e", params=BidParams())
        assert adapter.is_bid_request_valid(bid) is False

    def test_invalid_with_empty_asi(self, adapter):
        """An empty ad slot id is treated as missing."""
        bid = BidRequest(bid_id="30b31c1838de1e", params=BidParams(asi=""))
        assert adapter.is_bid_request_valid(bid) is False

    def test_accepts_host_dict(self, adapter):
        """Host dictionaries are accepted as well as BidRequest objects."""
        assert adapter.is_bid_request_valid({"bidId": "1", "params": {"asi": "abc"}}) is True
        assert adapter.is_bid_request_valid({"bidId": "1", "params": {}}) is False
        assert adapter.is_bid_request_valid({"bidId": "1"}) is False


class TestBuildRequests:
    """Test outbound request construction."""

    def test_one_request_per_bid_in_order(self, adapter, config):
        """Each bid yields one GET request, preserving input order."""
        bids = [
            BidRequest(bid_id=f"bid-{i}", params=BidParams(asi=f"asi-{i}"), ad_unit_code=f"slot-{i}")
            for i in range(3)
        ]

        requests = adapter.build_requests(bids)

        assert len(requests) == 3
        for i, request in enumerate(requests):
            assert isinstance(request, OutboundRequest)
            assert request.method == "GET"
            assert request.url == config.endpoint_url
            assert f"asi=asi-{i}&" in request.data
            assert "skt=5&" in request.data
            assert f"prebid_id=bid-{i}&" in request.data
            assert request.bid_request is bids[i]

    def test_query_string_format(self, adapter):
        """Parameters appear in order, each terminated by '&'."""
        bid = BidRequest(bid_id="30b31c1838de1e", params=BidParams(asi="123456"))

        request = adapter.build_requests([bid])[0]

        assert request.data == "asi=123456&skt=5&prebid_id=30b31c1838de1e&prebid_ver=1.2.3&"
        assert request.full_url == (
            "https://ad.as.amanad.adtdp.com/v1/prebid"
            "?asi=123456&skt=5&prebid_id=30b31c1838de1e&prebid_ver=1.2.3&"
        )

    def test_values_are_encoded(self, adapter):
        """Reserved characters in values are percent-encoded."""
        bid = BidRequest(bid_id="a b", params=BidParams(asi="x&y=z"))

        request = adapter.build_requests([bid])[0]

        assert "asi=x%26y%3Dz&" in request.data
        assert "prebid_id=a%20b&" in request.data

    def test_empty_input(self, adapter):
        """No bids, no requests."""
        assert adapter.build_requests([]) == []

    def test_host_dicts(self, adapter):
        """Host dictionaries are decoded before building."""
        requests = adapter.build_requests(
            [{"bidId": "abc", "params": {"asi": "123"}, "adUnitCode": "div-1"}]
        )

        assert requests[0].data.startswith("asi=123&skt=5&prebid_id=abc&")
        assert requests[0].bid_request.ad_unit_code == "div-1"

    def test_to_dict(self, adapter):
        """Requests serialize to the host's shape."""
        bid = BidRequest(bid_id="abc", params=BidParams(asi="123"))
        data = adapter.build_requests([bid])[0].to_dict()

        assert data["method"] == "GET"
        assert data["url"] == "https://ad.as.amanad.adtdp.com/v1/prebid"
        assert data["data"].startswith("asi=123&")


class TestInterpretResponse:
    """Test response interpretation."""

    def test_no_fill(self, adapter):
        """is_ad_return false means no bids."""
        assert adapter.interpret_response({"body": {"is_ad_return": False}}) == []

    def test_missing_body(self, adapter):
        """An empty response body means no bids."""
        assert adapter.interpret_response(ServerResponse(body=None)) == []
        assert adapter.interpret_response({"body": ""}) == []

    def test_banner(self, adapter):
        """Banner responses carry markup followed by the tracking pixel."""
        bids = adapter.interpret_response({"body": banner_body()})

        assert len(bids) == 1
        bid = bids[0]
        assert bid.request_id == "51ef8751f9aead"
        assert bid.cpm == 12.34
        assert bid.creative_id == "123abc"
        assert bid.deal_id == "deal-1"
        assert bid.currency == "USD"
        assert bid.net_revenue is True
        assert bid.ttl == 300
        assert bid.media_type == MediaType.BANNER
        assert bid.width == 300
        assert bid.height == 250
        assert bid.ad.startswith("<div>ad</div>")
        assert bid.ad == (
            "<div>ad</div>"
            '<div style="position:absolute;left:0px;top:0px;visibility:hidden;">'
            '<img src="http://t.example/px"></div>'
        )
        assert bid.vast_xml is None
        assert bid.renderer is None

    def test_banner_without_imps(self, adapter):
        """An empty imps list keeps the original markup."""
        bids = adapter.interpret_response({"body": banner_body(banner={"imps": []})})

        assert len(bids) == 1
        assert bids[0].ad == "<div>ad</div>"

    def test_banner_with_malformed_imps(self, adapter):
        """Non-list or non-string imps keep the original markup."""
        for imps in (None, "http://t.example/px", [None], [42]):
            bids = adapter.interpret_response({"body": banner_body(banner={"imps": imps})})
            assert bids[0].ad == "<div>ad</div>"

    def test_banner_with_malformed_syncs(self, adapter):
        """A non-list syncs value does not cost the bid."""
        body = banner_body()
        body["syncs"] = "https://sync.example/a"

        bids = adapter.interpret_response({"body": body})

        assert len(bids) == 1
        assert bids[0].ad.startswith("<div>ad</div>")

    def test_default_currency(self, adapter):
        """Absent currency defaults to JPY."""
        body = banner_body()
        del body["ad"]["currency"]

        bids = adapter.interpret_response({"body": body})

        assert bids[0].currency == "JPY"

    def test_video(self, adapter):
        """Video responses carry VAST, a renderer and the full response."""
        body = video_body()

        bids = adapter.interpret_response({"body": body})

        assert len(bids) == 1
        bid = bids[0]
        assert bid.media_type == MediaType.VIDEO
        assert bid.vast_xml == "<VAST></VAST>"
        assert bid.width == 300
        assert bid.height == 250
        assert bid.ad is None
        assert bid.ad_response == body
        assert isinstance(bid.renderer, Renderer)
        assert bid.renderer.id == "51ef8751f9aead"
        assert bid.renderer.url == "https://player.example/vast.js"
        assert bid.renderer.loaded is False

    def test_video_render_calls_player(self, adapter, player):
        """The render callback initializes the injected player."""
        bid = adapter.interpret_response({"body": video_body()})[0]
        bid.ad_unit_code = "div-gpt-ad-1"

        bid.renderer.render(bid)
        player.init.assert_not_called()

        bid.renderer.mark_loaded()
        player.init.assert_called_once_with({
            "vast_tag": "<VAST></VAST>",
            "ad_unit_code": "div-gpt-ad-1",
            "progress": True,
            "loop": False,
            "inread": False,
        })

    def test_video_renderer_install_failure(self, config, player):
        """A failing renderer install still returns the bid."""
        installer = MagicMock(side_effect=RendererError("script unavailable"))
        adapter = AjaBidAdapter(config=config, player=player, renderer_installer=installer)

        bids = adapter.interpret_response({"body": video_body()})

        assert len(bids) == 1
        assert bids[0].renderer is None
        assert bids[0].vast_xml == "<VAST></VAST>"

    def test_video_without_player_url(self, adapter):
        """A missing player URL is an install failure, not an error."""
        body = video_body()
        del body["ad"]["video"]["purl"]

        bids = adapter.interpret_response({"body": body})

        assert len(bids) == 1
        assert bids[0].renderer is None

    def test_native_is_not_handled(self, adapter):
        """Native ads yield no bid."""
        body = {"is_ad_return": True, "ad": {"ad_type": 2, "prebid_id": "x", "price": 1.0}}
        assert adapter.interpret_response({"body": body}) == []

    def test_unknown_ad_type(self, adapter):
        """Unknown ad types yield no bid."""
        body = {"is_ad_return": True, "ad": {"ad_type": 9, "prebid_id": "x", "price": 1.0}}
        assert adapter.interpret_response({"body": body}) == []

    def test_malformed_ad(self, adapter):
        """An undecodable ad yields no bid and raises nothing."""
        assert adapter.interpret_response({"body": {"is_ad_return": True}}) == []
        assert adapter.interpret_response(
            {"body": {"is_ad_return": True, "ad": {"ad_type": 1, "prebid_id": "x", "price": "free"}}}
        ) == []
        assert adapter.interpret_response(
            {"body": {"is_ad_return": True, "ad": {"ad_type": 1, "prebid_id": "x", "price": 1}}}
        ) == []

    def test_config_ttl(self, player):
        """TTL and currency defaults come from config."""
        adapter = AjaBidAdapter(
            config=AdapterConfig(ttl=60, default_currency="USD"), player=player
        )
        body = banner_body()
        del body["ad"]["currency"]

        bid = adapter.interpret_response({"body": body})[0]

        assert bid.ttl == 60
        assert bid.currency == "USD"

    def test_bid_to_dict(self, adapter):
        """Bids serialize to the host's camelCase shape."""
        data = adapter.interpret_response({"body": banner_body()})[0].to_dict()

        assert data["requestId"] == "51ef8751f9aead"
        assert data["creativeId"] == "123abc"
        assert data["netRevenue"] is True
        assert data["mediaType"] == "banner"
        assert "vastXml" not in data
        assert "renderer" not in data


class TestGetUserSyncs:
    """Test user sync reporting."""

    def test_pixel_syncs(self, adapter):
        """Each sync URL becomes an image pixel, in order."""
        syncs = adapter.get_user_syncs(
            {"pixelEnabled": True}, [{"body": {"syncs": ["a", "b"]}}]
        )

        assert [s.to_dict() for s in syncs] == [
            {"type": "image", "url": "a"},
            {"type": "image", "url": "b"},
        ]

    def test_pixel_disabled(self, adapter):
        """No syncs when pixel syncing is off."""
        syncs = adapter.get_user_syncs(
            SyncOptions(pixel_enabled=False, iframe_enabled=True),
            [{"body": {"syncs": ["a"]}}],
        )
        assert syncs == []

    def test_no_syncs_in_response(self, adapter):
        """No syncs when the response carries none."""
        assert adapter.get_user_syncs({"pixelEnabled": True}, [{"body": {"is_ad_return": False}}]) == []

    def test_only_first_response_is_read(self, adapter):
        """Sync lists on later responses are ignored."""
        syncs = adapter.get_user_syncs(
            {"pixelEnabled": True},
            [{"body": {"syncs": ["a"]}}, {"body": {"syncs": ["b", "c"]}}],
        )
        assert [s.url for s in syncs] == ["a"]

    def test_no_responses(self, adapter):
        """No responses, no syncs."""
        assert adapter.get_user_syncs({"pixelEnabled": True}, []) == []


class TestRegistration:
    """Test module-level registration."""

    def test_default_adapter_registered(self):
        """Importing the adapter registers it under 'aja'."""
        assert get_bidder_registry().get_bidder("aja") is spec

    def test_adapter_metadata(self):
        """The adapter advertises its code and media types."""
        assert spec.code == "aja"
        assert spec.supported_media_types == [MediaType.VIDEO, MediaType.BANNER]

    def test_default_adapter_uses_attached_player(self, monkeypatch):
        """A player attached to the default adapter renders its video bids."""
        player = MagicMock()
        monkeypatch.setattr(spec, "player", player)

        bid = spec.interpret_response({"body": video_body()})[0]
        bid.ad_unit_code = "div-1"
        bid.renderer.render(bid)
        bid.renderer.mark_loaded()

        player.init.assert_called_once()
        assert player.init.call_args[0][0]["ad_unit_code"] == "div-1"


class TestAuctionLogging:
    """Test that entry points log inside the bid's auction context."""

    @staticmethod
    def record_context(adapter, method):
        seen = []
        adapter.logger = MagicMock()
        getattr(adapter.logger, method).side_effect = (
            lambda *args, **kwargs: seen.append(structlog.contextvars.get_contextvars())
        )
        return seen

    def test_build_requests_binds_auction_id(self, adapter):
        """Request build logs carry the host's auction id and ad unit."""
        seen = self.record_context(adapter, "debug")
        bid = BidRequest(
            bid_id="b1", params=BidParams(asi="123"), ad_unit_code="div-1", auction_id="auc-1"
        )

        adapter.build_requests([bid])

        assert seen == [{"auction_id": "auc-1", "ad_unit_code": "div-1"}]
        assert structlog.contextvars.get_contextvars() == {}

    def test_interpret_response_binds_auction_id(self, adapter):
        """Response logs carry the auction id of the originating request."""
        seen = self.record_context(adapter, "error")
        bid = BidRequest(bid_id="b1", params=BidParams(asi="123"), auction_id="auc-2")
        request = adapter.build_requests([bid])[0]

        adapter.interpret_response({"body": banner_body(banner={"imps": []})}, request)

        assert seen == [{"auction_id": "auc-2", "prebid_id": "b1"}]

    def test_no_auction_id(self, adapter):
        """Bids without an auction id log without one."""
        seen = self.record_context(adapter, "debug")

        adapter.build_requests([BidRequest(bid_id="b1", params=BidParams(asi="123"))])

        assert seen == [{}]
