from __future__ import annotations

from fastapi import APIRouter, HTTPException

from devops_helper.signals import get_signal_source

router = APIRouter(prefix="/health", tags=["health"])


@router.get("/live")
async def live() -> str:
    return "Alive"


@router.get("/ready")
async def ready() -> str:
    # Re-read on every probe so an operator can flip APP_READY on a running pod.
    if get_signal_source().get("APP_READY") == "false":
        raise HTTPException(status_code=503, detail="Not ready")
    return "Ready"
