"""Exception types raised inside the AJA bid adapter."""


class AjaAdapterError(Exception):
    """Base exception for adapter errors."""
    pass


class ResponseDecodeError(AjaAdapterError):
    """Raised when an exchange response body does not match the expected shape."""
    pass


class TrackingPixelError(AjaAdapterError):
    """Raised when a banner impression pixel cannot be built."""
    pass


class RendererError(AjaAdapterError):
    """Raised when an outstream renderer cannot be installed."""
    pass


class ConfigError(AjaAdapterError):
    """Raised when adapter configuration is unreadable or invalid."""
    pass


class BidderRegistryError(AjaAdapterError):
    """Base exception for bidder registry errors."""
    pass


class BidderNotFoundError(BidderRegistryError):
    """Raised when a bidder is not registered."""
    pass


class BidderAlreadyRegisteredError(BidderRegistryError):
    """Raised when registering a bidder code that is already taken."""
    pass
