"""Connection handling for the target MySQL server."""

from .connection import (
    LOOPBACK_ADDRESS,
    ConnectionManager,
    build_connection_url,
    resolve_host,
)

__all__ = [
    "LOOPBACK_ADDRESS",
    "ConnectionManager",
    "build_connection_url",
    "resolve_host",
]
