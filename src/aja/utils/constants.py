"""AJA Constants and Protocol Values."""

BIDDER_CODE: str = "aja"

# Exchange endpoint for prebid traffic
ENDPOINT_URL: str = "https://ad.as.amanad.adtdp.com/v1/prebid"

# SDK type reported to the exchange in the `skt` query parameter
SDK_TYPE: int = 5

# Bid validity window in seconds (5 minutes)
DEFAULT_TTL: int = 300

DEFAULT_CURRENCY: str = "JPY"

# Query parameter names, in the order the exchange expects them
QUERY_PARAM_ASI: str = "asi"
QUERY_PARAM_SDK_TYPE: str = "skt"
QUERY_PARAM_PREBID_ID: str = "prebid_id"
QUERY_PARAM_PREBID_VERSION: str = "prebid_ver"

# Sync descriptor type for image pixels
SYNC_TYPE_IMAGE: str = "image"
