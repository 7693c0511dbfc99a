import time
from datetime import datetime, timezone

from fastapi import APIRouter, Request

router = APIRouter(tags=["internal"])


@router.get("/health")
async def health(request: Request) -> dict:
    """Liveness probe: process uptime in seconds and the API version."""
    started_at = getattr(request.app.state, "started_at", time.monotonic())
    return {
        "status": "OK",
        "uptime": time.monotonic() - started_at,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": request.app.version,
    }
