import time
from fastapi import APIRouter, Request

from config import settings

router = APIRouter()

_start_time = time.time()


@router.get("/health")
async def health_check(request: Request):
    controller = getattr(request.app.state, "controller", None)
    return {
        "status": "ok",
        "uptime_seconds": round(time.time() - _start_time),
        "version": "0.1.0",
        "catalog": settings.catalog_base_url,
        "mode": controller.mode.mode.value if controller else None,
        "directory_phase": controller.directory.phase.value if controller else None,
    }
