"""
Shared MongoDB connection: lazily opened, reused, health-checked, closed on demand.

pymongo does the pooling (maxPoolSize); this package only decides when a
client is opened and which one callers get.
"""

from .connect import (
    DatabaseConnectionError,
    DisconnectError,
    ProbeError,
    connection_options,
    open_client,
)
from .manager import ConnectionManager, ConnectionState, get_connection_manager

__all__ = [
    "ConnectionManager",
    "ConnectionState",
    "DatabaseConnectionError",
    "DisconnectError",
    "ProbeError",
    "connection_options",
    "get_connection_manager",
    "open_client",
]
