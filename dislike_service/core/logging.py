"""
Logging utilities for the API process.

Provides a consistent logging format and configuration.
"""

import logging
import sys

# httpx logs full request URLs at INFO; provider revoke URLs embed access tokens.
_QUIET_LOGGERS = ("httpx", "httpcore")


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging with a sensible default format."""
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        stream=sys.stdout,
    )
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


__all__ = ["configure_logging"]
