"""User sync models."""

from dataclasses import dataclass
from typing import Any

from ..utils.constants import SYNC_TYPE_IMAGE


@dataclass
class SyncOptions:
    """Sync types the publisher allows this round."""

    pixel_enabled: bool = False
    iframe_enabled: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "SyncOptions":
        """Create from the host's camelCase dictionary."""
        data = data or {}
        return cls(
            pixel_enabled=bool(data.get("pixelEnabled", False)),
            iframe_enabled=bool(data.get("iframeEnabled", False)),
        )

    @classmethod
    def coerce(cls, options: "SyncOptions | dict[str, Any] | None") -> "SyncOptions":
        if isinstance(options, cls):
            return options
        return cls.from_dict(options)


@dataclass
class SyncPixel:
    """A user sync the host should fire."""

    url: str
    type: str = SYNC_TYPE_IMAGE

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "url": self.url}
