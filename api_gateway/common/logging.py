"""
Logging configuration helpers.
The gateway logs through the standard library; this module applies the level from settings once per process.
"""

from __future__ import annotations

import logging

_LOGGING_CONFIGURED = False

_LEVEL_ALIASES = {
    "warn": "WARNING",
    "fatal": "CRITICAL",
}


def resolve_log_level(level_name: str) -> int:
    """Map a settings level name such as `debug` or `warn` onto a logging level."""

    normalized = level_name.strip().lower()
    resolved = _LEVEL_ALIASES.get(normalized, normalized.upper())
    level = logging.getLevelName(resolved)
    return level if isinstance(level, int) else logging.INFO


def configure_logging(level_name: str) -> None:
    """Configure process-wide logging from the configured level name."""

    global _LOGGING_CONFIGURED
    if _LOGGING_CONFIGURED:
        return

    logging.basicConfig(
        level=resolve_log_level(level_name),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    _LOGGING_CONFIGURED = True
