"""
Driver helpers for the MongoDB connection.

Every call into pymongo goes through this module: building the client
options, opening a verified client, pinging it and closing it. Driver
errors are wrapped in the exceptions below so callers never see
pymongo types.
"""

from typing import Any

from pymongo import AsyncMongoClient
from pymongo.errors import PyMongoError

from mongolink.core.config import Settings, settings


class DatabaseConnectionError(ConnectionError):
    """Opening the connection failed (network, auth, server selection timeout)."""


class ProbeError(RuntimeError):
    """The admin ping against an open connection failed."""


class DisconnectError(RuntimeError):
    """Closing the connection failed."""


def connection_options(config: Settings | None = None) -> dict[str, Any]:
    """
    Fixed client options.

    pymongo never queues commands while no server is selectable; they fail
    after serverSelectionTimeoutMS instead, so there is no buffering flag
    to turn off. pymongo has no address-family option either: hosts resolve
    to IPv4 and IPv6 addresses alike and IPv4-only is not enforced.
    """
    cfg = config or settings
    return {
        "maxPoolSize": cfg.MONGODB_MAX_POOL_SIZE,
        "serverSelectionTimeoutMS": cfg.MONGODB_SERVER_SELECTION_TIMEOUT_MS,
        "socketTimeoutMS": cfg.MONGODB_SOCKET_TIMEOUT_MS,
    }


async def open_client(uri: str, options: dict[str, Any] | None = None) -> AsyncMongoClient:
    """
    Create a client for *uri* and wait until a server answers a ping.

    The client is closed again if the first ping fails.
    """
    opts = options if options is not None else connection_options()
    try:
        client: AsyncMongoClient = AsyncMongoClient(uri, **opts)
    except (PyMongoError, ValueError) as e:
        raise DatabaseConnectionError(f"Invalid MongoDB URI or options: {e}") from e
    try:
        await client.admin.command("ping")
    except PyMongoError as e:
        await _close_quiet(client)
        raise DatabaseConnectionError(f"MongoDB connection failed: {e}") from e
    return client


async def ping(client: Any) -> None:
    """Run the admin ping; raise ProbeError on failure."""
    try:
        await client.admin.command("ping")
    except Exception as e:
        raise ProbeError(f"MongoDB ping failed: {e}") from e


async def close_client(client: Any) -> None:
    """Close *client*; raise DisconnectError on failure."""
    try:
        await client.close()
    except Exception as e:
        raise DisconnectError(f"MongoDB close failed: {e}") from e


async def _close_quiet(client: Any) -> None:
    try:
        await client.close()
    except Exception:
        pass
