from __future__ import annotations

import asyncio

import structlog
from fastapi import APIRouter, HTTPException, Query, Response

from devops_helper.config import get_settings
from devops_helper.services.fatal import abort_process

router = APIRouter(prefix="/chaos", tags=["chaos"])
log = structlog.get_logger("chaos")


@router.get("/error")
async def induced_error(code: int = Query(...)) -> Response:
    # No range check: whatever the caller asks for goes to the transport as-is.
    log.warning("chaos_error", code=code)
    return Response(status_code=code)


@router.get("/timeout")
async def induced_timeout(seconds: int = Query(..., ge=0)) -> str:
    settings = get_settings()
    if seconds > settings.chaos_max_timeout_seconds:
        raise HTTPException(
            status_code=400,
            detail=f"seconds must be <= {settings.chaos_max_timeout_seconds}",
        )

    log.warning("chaos_timeout", seconds=seconds)
    await asyncio.sleep(seconds)
    return f"Waited {seconds}s"


@router.get("/crash")
async def induced_crash() -> None:
    abort_process("Chaos crash triggered")
    # Only reachable when an abort handler other than os.abort() is installed.
    raise RuntimeError("process abort returned control to the handler")
