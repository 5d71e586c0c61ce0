import asyncio
from typing import Any
from unittest.mock import AsyncMock, MagicMock


def make_fake_client() -> MagicMock:
    """Stand-in for AsyncMongoClient: awaitable admin ping and close, subscriptable."""
    client = MagicMock(name="AsyncMongoClient")
    client.admin.command = AsyncMock(return_value={"ok": 1.0})
    client.close = AsyncMock(return_value=None)
    return client


class FakeOpener:
    """
    Replacement for ``open_client``: records every call and hands out a new
    fake client each time, or raises the queued errors first.
    """

    def __init__(self, *errors: Exception, delay_ticks: int = 1) -> None:
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self.clients: list[MagicMock] = []
        self._errors = list(errors)
        self._delay_ticks = delay_ticks

    async def __call__(self, uri: str, options: dict[str, Any] | None = None) -> MagicMock:
        self.calls.append((uri, dict(options or {})))
        # yield to the loop so concurrent callers can pile up on the attempt
        for _ in range(self._delay_ticks):
            await asyncio.sleep(0)
        if self._errors:
            raise self._errors.pop(0)
        fake = make_fake_client()
        self.clients.append(fake)
        return fake
