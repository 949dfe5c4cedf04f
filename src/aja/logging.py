"""
Structured logging for the AJA bid adapter.

Log lines are JSON by default (LOG_FORMAT=console for development) and carry
the bidder code plus, while a bid is being processed, the host's auction id.
"""

import logging
import os
import sys
from contextlib import contextmanager
from typing import Any, Iterator, Optional

import structlog


def add_service_info(
    logger: structlog.typing.WrappedLogger,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Processor to tag every entry with the adapter's service name."""
    event_dict["service"] = "aja"
    return event_dict


def configure_logging(
    level: str = "INFO",
    format: str = "json",
    show_timestamps: bool = True,
) -> None:
    """
    Configure structlog on top of the standard library.

    Args:
        level: Log level, overridden by $LOG_LEVEL
        format: 'json' or 'console', overridden by $LOG_FORMAT
        show_timestamps: Prefix entries with an ISO timestamp
    """
    level = os.getenv("LOG_LEVEL", level).upper()
    format = os.getenv("LOG_FORMAT", format).lower()

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level, logging.INFO),
    )

    processors: list[structlog.typing.Processor] = [
        structlog.contextvars.merge_contextvars,
        add_service_info,
        structlog.stdlib.add_log_level,
        structlog.processors.format_exc_info,
    ]
    if show_timestamps:
        processors.insert(0, structlog.processors.TimeStamper(fmt="iso"))

    if format == "console":
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()))
    else:
        processors.append(structlog.processors.JSONRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str = __name__) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def bidder_logger(bidder_code: str) -> structlog.stdlib.BoundLogger:
    """Logger for adapter entry points, bound to the bidder code."""
    return get_logger("aja.bidder").bind(bidder=bidder_code)


def renderer_logger() -> structlog.stdlib.BoundLogger:
    return get_logger("aja.renderer")


def config_logger() -> structlog.stdlib.BoundLogger:
    return get_logger("aja.config")


@contextmanager
def auction_context(auction_id: Optional[str], **fields: Any) -> Iterator[None]:
    """
    Bind the host's auction id (and any extra fields) to every log entry
    emitted inside the block. Nothing is bound when auction_id is empty.
    """
    if not auction_id:
        yield
        return
    with structlog.contextvars.bound_contextvars(auction_id=auction_id, **fields):
        yield


configure_logging()
