"""
Lazily-opened, shared MongoDB connection.

One ConnectionManager holds at most one client. Concurrent callers that
arrive while the client is being opened wait on the same attempt instead
of opening their own. A failed attempt is forgotten so the next call
starts over; disconnect() drops the client so the next call reconnects.
"""

import asyncio
import enum
import logging
import threading
from typing import Any

from mongolink.core.config import ConfigurationError, Settings, settings

from .connect import (
    DisconnectError,
    close_client,
    connection_options,
    open_client,
    ping,
)

_log = logging.getLogger(__name__)


class ConnectionState(str, enum.Enum):
    EMPTY = "empty"
    CONNECTING = "connecting"
    CONNECTED = "connected"


class ConnectionManager:
    """Single cached connection with a shared in-flight attempt."""

    def __init__(
        self,
        uri: str | None,
        *,
        options: dict[str, Any] | None = None,
        database: str | None = None,
    ) -> None:
        self._uri = uri
        self._options = options if options is not None else connection_options()
        self._database = database or settings.MONGODB_DB
        self._conn: Any = None
        self._pending: asyncio.Task | None = None
        self._connects = 0

    @classmethod
    def from_settings(cls, config: Settings | None = None) -> "ConnectionManager":
        """Build a manager from *config*; ``MONGODB_URI`` must be set."""
        cfg = config or settings
        if not cfg.MONGODB_URI:
            raise ConfigurationError(
                "MONGODB_URI is not set; define it in the environment or .env.local"
            )
        return cls(
            cfg.MONGODB_URI,
            options=connection_options(cfg),
            database=cfg.MONGODB_DB,
        )

    @property
    def state(self) -> ConnectionState:
        if self._conn is not None:
            return ConnectionState.CONNECTED
        if self._pending is not None:
            return ConnectionState.CONNECTING
        return ConnectionState.EMPTY

    async def acquire_connection(self) -> Any:
        """Return the shared client, opening it on first use."""
        if self._conn is not None:
            _log.info("Using existing MongoDB connection")
            return self._conn

        attempt = self._pending
        if attempt is not None:
            _log.info("Waiting for pending MongoDB connection attempt")
        else:
            if not self._uri:
                raise ConfigurationError("MONGODB_URI is not set")
            _log.info("Creating new MongoDB connection")
            # stored before the first await: later callers must find it
            attempt = asyncio.ensure_future(self._open())
            attempt.add_done_callback(self._settle)
            self._pending = attempt

        # shield: a cancelled caller must not cancel the attempt shared with others
        return await asyncio.shield(attempt)

    async def check_health(self) -> bool:
        """True if a connection can be obtained and answers a ping. Never raises."""
        try:
            conn = await self.acquire_connection()
            await ping(conn)
        except Exception as e:
            _log.error("Database health check failed: %s", e)
            return False
        _log.info("Database health check passed")
        return True

    async def disconnect(self) -> None:
        """Close the cached client, if any, and reset to EMPTY. Never raises."""
        conn = self._conn
        if conn is None:
            return
        try:
            await close_client(conn)
            _log.info("Disconnected from MongoDB")
        except DisconnectError:
            _log.exception("Error disconnecting from MongoDB")
        finally:
            self._conn = None
            self._pending = None

    async def get_database(self, name: str | None = None) -> Any:
        """Database handle for *name* (default ``MONGODB_DB``) on the shared client."""
        conn = await self.acquire_connection()
        return conn[name or self._database]

    def stats(self) -> dict[str, Any]:
        """Return connection statistics for monitoring."""
        return {"state": self.state.value, "connects": self._connects}

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    async def _open(self) -> Any:
        self._connects += 1
        try:
            conn = await open_client(self._uri, self._options)
        except Exception as e:
            _log.error("MongoDB connection failed: %s", e)
            raise
        _log.info("MongoDB connected successfully")
        return conn

    def _settle(self, attempt: asyncio.Task) -> None:
        # runs before any awaiter resumes, and even when every awaiter was cancelled
        failed = attempt.cancelled() or attempt.exception() is not None
        if self._pending is not attempt:
            return
        self._pending = None
        if not failed:
            self._conn = attempt.result()


_manager: ConnectionManager | None = None
_manager_lock = threading.Lock()


def get_connection_manager() -> ConnectionManager:
    """Return the default ConnectionManager (thread-safe double-checked locking)."""
    global _manager
    if _manager is None:
        with _manager_lock:
            if _manager is None:
                _manager = ConnectionManager.from_settings()
    return _manager
