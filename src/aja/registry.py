"""
Bidder Registry

In-process registry of bidder adapters keyed by bidder code, playing the
part of the host's `registerBidder` hook.
"""

from typing import Any, Optional, Protocol

from .errors import BidderAlreadyRegisteredError, BidderNotFoundError
from .logging import get_logger

logger = get_logger("aja.registry")


class BidderSpec(Protocol):
    """Entry points the host expects from a bidder adapter."""

    code: str
    supported_media_types: list[Any]

    def is_bid_request_valid(self, bid: Any) -> bool:
        ...

    def build_requests(self, valid_bid_requests: list[Any], bidder_request: Any = None) -> list[Any]:
        ...

    def interpret_response(self, server_response: Any, request: Any = None) -> list[Any]:
        ...

    def get_user_syncs(self, sync_options: Any, server_responses: list[Any]) -> list[Any]:
        ...


class BidderRegistry:
    """Registry of bidder adapters."""

    def __init__(self):
        self._bidders: dict[str, BidderSpec] = {}

    def register_bidder(self, spec: BidderSpec, replace: bool = False) -> BidderSpec:
        """
        Register an adapter under its code.

        Args:
            spec: The adapter
            replace: Overwrite an existing registration

        Raises:
            BidderAlreadyRegisteredError: If the code is taken and replace is False
        """
        if spec.code in self._bidders and not replace:
            raise BidderAlreadyRegisteredError(f"Bidder already registered: {spec.code}")
        self._bidders[spec.code] = spec
        logger.debug("Registered bidder", bidder=spec.code)
        return spec

    def get_bidder(self, code: str) -> BidderSpec:
        """
        Look up an adapter.

        Raises:
            BidderNotFoundError: If no adapter is registered for code
        """
        try:
            return self._bidders[code]
        except KeyError:
            raise BidderNotFoundError(f"Bidder not found: {code}") from None

    def unregister_bidder(self, code: str) -> bool:
        """Remove an adapter. Returns False if it was not registered."""
        return self._bidders.pop(code, None) is not None

    def list_bidders(self) -> list[str]:
        """Registered bidder codes, in registration order."""
        return list(self._bidders)

    def __contains__(self, code: str) -> bool:
        return code in self._bidders


# Global instance for easy access
_registry: Optional[BidderRegistry] = None


def get_bidder_registry() -> BidderRegistry:
    """Get the global bidder registry."""
    global _registry
    if _registry is None:
        _registry = BidderRegistry()
    return _registry


def register_bidder(spec: BidderSpec) -> BidderSpec:
    """Register an adapter with the global registry, replacing any previous one."""
    return get_bidder_registry().register_bidder(spec, replace=True)
