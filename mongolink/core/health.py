"""
Health-check helpers for liveness and readiness probes.

Liveness:  is the process alive and not deadlocked?  (cheap, no I/O)
Readiness: can it serve traffic?  (MongoDB reachable and answering ping)
"""

import logging

from mongolink.core.connection import ConnectionManager

logger = logging.getLogger(__name__)


async def check_mongodb(manager: ConnectionManager) -> bool:
    """Check MongoDB via the shared connection. Returns True if ok."""
    return await manager.check_health()


def liveness_check() -> tuple[bool, list[str]]:
    """
    Lightweight liveness probe, just confirms the Python process is responsive.
    No I/O, no DB calls.  Return format matches readiness_check for consistency.
    """
    return (True, [])


async def readiness_check(manager: ConnectionManager) -> tuple[bool, list[str]]:
    """
    Run the MongoDB check.
    Returns (ok, list of failure messages).
    """
    failures: list[str] = []

    if not await check_mongodb(manager):
        failures.append("mongodb")

    if failures:
        logger.warning("Readiness check failed: %s", ", ".join(failures))
    return (len(failures) == 0, failures)
