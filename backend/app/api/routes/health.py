"""Health Checks — liveness for the process, readiness for its dependencies.

Invariants:
    - GET /api/v1/health/ answers 200 whenever the process serves requests
    - GET /api/v1/health/ready answers 503 until the lifespan has created the
      database manager and the payment gateway, and while storage is unreachable
"""

import logging

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])

SERVICE_NAME = "bloodbond-api"


@router.get("/")
async def liveness():
    return {"status": "healthy", "service": SERVICE_NAME}


@router.get("/ready")
async def readiness(request: Request):
    state = request.app.state
    db_manager = getattr(state, "db_manager", None)
    checks = {
        "database": (
            "healthy" if db_manager and await db_manager.health_check()
            else "unavailable"
        ),
        "payment_gateway": (
            "configured" if getattr(state, "payment_gateway", None)
            else "missing"
        ),
    }
    ready = checks["database"] == "healthy" and checks["payment_gateway"] == "configured"
    if not ready:
        logger.warning(f"Readiness check failed: {checks}")
    return JSONResponse(
        status_code=status.HTTP_200_OK if ready else status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"status": "ready" if ready else "not_ready", "checks": checks},
    )
