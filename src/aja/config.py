"""
Adapter Configuration

Loads the AJA adapter settings from built-in defaults, an optional YAML
file, and environment variable overrides (in that order of precedence,
lowest first).

Example YAML:
    endpoint_url: https://ad.as.amanad.adtdp.com/v1/prebid
    prebid_version: 1.0.0
    ttl: 300
    default_currency: JPY
"""

import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

import yaml

from . import __version__
from .errors import ConfigError
from .logging import config_logger
from .utils.constants import (
    BIDDER_CODE,
    DEFAULT_CURRENCY,
    DEFAULT_TTL,
    ENDPOINT_URL,
    SDK_TYPE,
)

logger = config_logger()

# Environment variable -> (field name, type)
ENV_OVERRIDES: dict[str, tuple[str, type]] = {
    "AJA_ENDPOINT_URL": ("endpoint_url", str),
    "AJA_PREBID_VERSION": ("prebid_version", str),
    "AJA_TTL": ("ttl", int),
    "AJA_DEFAULT_CURRENCY": ("default_currency", str),
}


@dataclass
class AdapterConfig:
    """
    Settings for the AJA adapter.

    Attributes:
        bidder_code: Code the adapter registers under
        endpoint_url: Exchange prebid endpoint
        sdk_type: Value sent as `skt`
        prebid_version: Value sent as `prebid_ver`
        ttl: Bid time-to-live in seconds
        default_currency: Currency used when the exchange omits one
        net_revenue: Whether exchange prices are net
    """

    bidder_code: str = BIDDER_CODE
    endpoint_url: str = ENDPOINT_URL
    sdk_type: int = SDK_TYPE
    prebid_version: str = __version__
    ttl: int = DEFAULT_TTL
    default_currency: str = DEFAULT_CURRENCY
    net_revenue: bool = True

    def __post_init__(self):
        """Validate values after initialization."""
        # YAML reads an unquoted version like 9.1 as a float
        if isinstance(self.prebid_version, (int, float)) and not isinstance(self.prebid_version, bool):
            self.prebid_version = str(self.prebid_version)

        for f in fields(self):
            value = getattr(self, f.name)
            # bool is an int subclass, so reject it explicitly for int fields
            if not isinstance(value, f.type) or (isinstance(value, bool) and f.type is not bool):
                raise ConfigError(f"{f.name} must be {f.type.__name__}, got {value!r}")

        if not self.endpoint_url:
            raise ConfigError("endpoint_url must not be empty")
        if self.ttl <= 0:
            raise ConfigError(f"ttl must be positive, got {self.ttl}")
        if not self.default_currency:
            raise ConfigError("default_currency must not be empty")

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AdapterConfig":
        """Create from dictionary, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            logger.warning("Ignoring unknown config keys", keys=sorted(unknown))
        return cls(**{k: v for k, v in data.items() if k in known})


def _load_yaml(path: Path) -> dict[str, Any]:
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"YAML error in {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"{path} must contain a mapping")
    return data


def _apply_env_overrides(data: dict[str, Any]) -> dict[str, Any]:
    for env_name, (key, cast) in ENV_OVERRIDES.items():
        value = os.environ.get(env_name)
        if value is None:
            continue
        try:
            data[key] = cast(value)
        except ValueError as e:
            raise ConfigError(f"Invalid value for {env_name}: {value!r}") from e
    return data


def load_adapter_config(path: str | None = None) -> AdapterConfig:
    """
    Load adapter configuration.

    Args:
        path: YAML file to read. Defaults to $AJA_CONFIG_FILE; when neither
              is set, or the file does not exist, built-in defaults are used.

    Returns:
        The resolved AdapterConfig

    Raises:
        ConfigError: If the file is invalid or a value fails validation
    """
    path = path or os.environ.get("AJA_CONFIG_FILE")

    data: dict[str, Any] = {}
    if path:
        config_file = Path(path)
        if config_file.exists():
            data = _load_yaml(config_file)
            logger.debug("Loaded adapter config", path=str(config_file))
        else:
            logger.info("Adapter config file not found, using defaults", path=str(config_file))

    return AdapterConfig.from_dict(_apply_env_overrides(data))


# Global instance for easy access
_config: AdapterConfig | None = None


def get_adapter_config() -> AdapterConfig:
    """Get the global adapter configuration, loading it on first use."""
    global _config
    if _config is None:
        _config = load_adapter_config()
    return _config


def reset_adapter_config() -> None:
    """Drop the cached global configuration."""
    global _config
    _config = None
