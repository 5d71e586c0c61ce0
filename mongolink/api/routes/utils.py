from typing import Any

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from mongolink.api.deps import ConnectionManagerDep
from mongolink.core.health import liveness_check, readiness_check

router = APIRouter(prefix="/utils", tags=["utils"])


@router.get("/liveness/", response_model=None)
async def liveness() -> bool | JSONResponse:
    """
    Liveness probe: is the process alive and responsive?

    Lightweight: no MongoDB I/O.  If this fails the container should be
    restarted by the orchestrator.
    """
    ok, failures = liveness_check()
    if not ok:
        return JSONResponse(
            status_code=503,
            content={"success": False, "message": "Process unhealthy", "data": failures},
        )
    return True


@router.get("/health-check/", response_model=None)
async def health_check(manager: ConnectionManagerDep) -> bool | JSONResponse:
    """
    Readiness probe: can the service handle traffic?

    Opens the shared MongoDB connection if needed and pings it.
    Returns 200 with true if MongoDB answers; 503 otherwise.
    """
    ok, failures = await readiness_check(manager)
    if not ok:
        return JSONResponse(
            status_code=503,
            content={
                "success": False,
                "message": "Service Unavailable",
                "data": failures,
            },
        )
    return True


@router.get("/connection/")
async def connection_stats(manager: ConnectionManagerDep) -> dict[str, Any]:
    """Current state of the shared MongoDB connection (no I/O)."""
    return manager.stats()
