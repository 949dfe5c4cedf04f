"""
Outstream video renderer.

Video bids from the exchange are rendered outside any native player by the
exchange's VAST player SDK. The renderer is installed when the bid is
interpreted and invoked later by the host when the ad slot paints. Until
the player script is loaded, commands pushed to the renderer are queued
and replayed in order once `mark_loaded()` is called.
"""

from functools import partial
from typing import TYPE_CHECKING, Any, Callable, Optional, Protocol

from .errors import RendererError
from .logging import renderer_logger

if TYPE_CHECKING:
    from .models.exchange_response import ExchangeResponse
    from .models.normalized_bid import NormalizedBid

logger = renderer_logger()


class VastPlayer(Protocol):
    """Capability exposed by the exchange's video player SDK."""

    def init(self, options: dict[str, Any]) -> None:
        ...


RenderFn = Callable[["NormalizedBid"], None]


class Renderer:
    """
    Renderer for a single outstream bid.

    Attributes:
        id: Renderer id (the exchange's prebid_id)
        url: Player script URL
        loaded: Whether the player script is available
        cmd: Commands waiting for the player to load
    """

    def __init__(
        self,
        id: str,
        url: str,
        loaded: bool = False,
        config: Optional[dict[str, Any]] = None,
    ):
        self.id = id
        self.url = url
        self.loaded = loaded
        self.config = config or {}
        self.cmd: list[Callable[[], None]] = []
        self._render_fn: Optional[RenderFn] = None
        self._rendered: set[str] = set()

    @classmethod
    def install(
        cls,
        id: str,
        url: str,
        loaded: bool = False,
        config: Optional[dict[str, Any]] = None,
    ) -> "Renderer":
        """
        Create a renderer for a player script.

        Raises:
            RendererError: If the player script URL is missing
        """
        if not url:
            raise RendererError(f"Player script unavailable for renderer {id}")
        return cls(id=id, url=url, loaded=loaded, config=config)

    def set_render(self, fn: RenderFn) -> None:
        """Set the callback the host invokes to paint the bid."""
        if not callable(fn):
            raise RendererError("Render function must be callable")
        self._render_fn = fn

    def render(self, bid: "NormalizedBid") -> None:
        """
        Paint a bid. Runs once per ad unit code; repeats are ignored.
        """
        if self._render_fn is None:
            logger.warning("Render called before a render function was set", renderer_id=self.id)
            return
        if bid.ad_unit_code in self._rendered:
            logger.debug("Ad unit already rendered", renderer_id=self.id, ad_unit_code=bid.ad_unit_code)
            return
        self._rendered.add(bid.ad_unit_code)
        self._render_fn(bid)

    def push(self, command: Callable[[], None]) -> None:
        """Run a command now if the player is loaded, otherwise queue it."""
        if self.loaded:
            command()
        else:
            self.cmd.append(command)

    def mark_loaded(self) -> None:
        """Flag the player script as loaded and drain queued commands."""
        self.loaded = True
        while self.cmd:
            self.cmd.pop(0)()


def outstream_render(bid: "NormalizedBid", player: Optional[VastPlayer] = None) -> None:
    """
    Render callback: queue a player init for the bid's VAST tag.

    Args:
        bid: The winning bid, carrying its renderer and ad_response
        player: Video player SDK capability
    """
    if player is None:
        logger.error("No video player available for outstream render", request_id=bid.request_id)
        return
    if bid.renderer is None:
        logger.error("Bid has no renderer", request_id=bid.request_id)
        return

    video = ((bid.ad_response or {}).get("ad") or {}).get("video") or {}
    options = {
        "vast_tag": video.get("vtag"),
        "ad_unit_code": bid.ad_unit_code,  # target element id
        "progress": video.get("progress"),
        "loop": video.get("loop"),
        "inread": video.get("inread"),
    }
    bid.renderer.push(lambda: player.init(options))


def new_renderer(
    response: "ExchangeResponse",
    player: Optional[VastPlayer] = None,
    installer: Callable[..., Renderer] = Renderer.install,
) -> Optional[Renderer]:
    """
    Install an outstream renderer for a video response.

    Installation failures are logged and absorbed; the bid can still win
    the auction without a working renderer.

    Args:
        response: Decoded video response
        player: Video player SDK capability bound into the render callback
        installer: Renderer install facility

    Returns:
        The installed renderer, or None if installation failed
    """
    ad = response.ad
    video = ad.video if ad else None
    if ad is None or video is None:
        logger.warning("Response has no video creative, renderer not installed")
        return None

    renderer = None
    try:
        renderer = installer(id=ad.prebid_id, url=video.purl, loaded=False)
        renderer.set_render(partial(outstream_render, player=player))
    except RendererError as e:
        logger.warning(
            "Error installing outstream renderer",
            prebid_id=ad.prebid_id,
            error=str(e),
        )
    return renderer
