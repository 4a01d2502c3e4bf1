"""Health check routes

GET /health: liveness, always 200.
GET /ready: readiness, probes the record store and disk space.
"""

import shutil

import structlog
from fastapi import APIRouter, Request
from starlette.responses import JSONResponse

log = structlog.get_logger()

router = APIRouter()


@router.get("/health")
async def health():
    """Liveness -- always 200"""
    return {"status": "ok"}


@router.get("/ready")
async def ready(request: Request):
    """Readiness -- verify the record store answers

    Checks:
    1. store: backing store connectivity
    2. disk_space_mb: free disk space
    """
    checks = {}
    all_ok = True

    try:
        await request.app.state.record_store.ping()
        checks["store"] = "ok"
    except Exception as e:
        log.warning("readiness_store_unavailable", error=str(e))
        checks["store"] = "unavailable"
        all_ok = False

    try:
        disk_usage = shutil.disk_usage("/")
        checks["disk_space_mb"] = disk_usage.free // (1024 * 1024)
    except OSError:
        checks["disk_space_mb"] = 0
        all_ok = False

    return JSONResponse(
        status_code=200 if all_ok else 503,
        content={
            "status": "ready" if all_ok else "not_ready",
            "checks": checks,
        },
    )
