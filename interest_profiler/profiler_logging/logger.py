"""
Structured logging for profile runs.

Each record is one JSON line on stderr with timestamp, log_level, event_type,
logger and the event's own keys. Profile events carry wallet (a shortened
address from short_address), stage names on failures and metric names on
degraded runs. RPC URLs go through mask_api_key before they are logged.

Imports nothing from interest_profiler so every module can use it.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Any

import structlog

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_LEVEL_VALUE = getattr(logging, LOG_LEVEL, logging.INFO)

# json (default) or console
LOG_FORMAT = os.getenv("LOG_FORMAT", "json").strip().lower()


def _event_type(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """The event name is logged as event_type, e.g. profile_history_rate_limited."""
    if "event" in event_dict and "event_type" not in event_dict:
        event_dict["event_type"] = event_dict.pop("event")
    return event_dict


def configure_structlog() -> None:
    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.TimeStamper(fmt="iso", utc=True, key="timestamp"),
        _event_type,
    ]
    if LOG_FORMAT == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(LOG_LEVEL_VALUE),
        context_class=dict,
        # stdout is reserved for CLI output (--json)
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


if not structlog.is_configured():
    configure_structlog()


def get_logger(name: str) -> structlog.BoundLogger:
    """
    Module logger bound with logger=name.

        logger = get_logger(__name__)
        logger.info("profile_built", wallet=short_address(addr), tier="GOLD_TIER")
    """
    return structlog.get_logger(name).bind(logger=name)


def short_address(address: str) -> str:
    """First 16 characters of an address, for the wallet key."""
    address = address or ""
    return address[:16] + "..." if len(address) > 16 else address


def mask_api_key(url: str) -> str:
    """Replace the api-key query value of an RPC URL with ***."""
    if "api-key=" not in url:
        return url
    head, _, tail = url.partition("api-key=")
    _, amp, rest = tail.partition("&")
    return head + "api-key=***" + (amp + rest if amp else "")
