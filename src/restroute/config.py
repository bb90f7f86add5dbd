"""Dispatcher configuration.

DispatcherConfig is a frozen dataclass, immutable after creation. The
ASGI adapter reads its limits from the same object.
"""

import logging
from dataclasses import dataclass

# Headers a browser-facing API typically sends with every response:
# no caching, and cross-origin access for any caller.
CORS_HEADERS: tuple[tuple[str, str], ...] = (
    ("Cache-Control", "no-cache"),
    ("Access-Control-Allow-Origin", "*"),
    ("Access-Control-Allow-Methods", "GET, POST, PUT, DELETE, OPTIONS"),
    ("Access-Control-Allow-Credentials", "true"),
)


@dataclass(frozen=True, slots=True)
class DispatcherConfig:
    """Dispatcher configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = DispatcherConfig(default_headers=CORS_HEADERS, max_body_size=1024)
    """

    # Added to every response; headers set by a service win
    default_headers: tuple[tuple[str, str], ...] = ()

    # Request decoding
    charset: str = "utf-8"

    # Limits (ASGI adapter)
    max_body_size: int = 16 * 1024 * 1024  # 16 MB

    # Logging
    log_level: str = "info"


def configure_logging(level: str = "info") -> None:
    """Send restroute log records to stderr at *level*.

    Libraries should not configure logging; this is for the CLI and for
    quick scripts.
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
