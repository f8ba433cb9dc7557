from __future__ import annotations

import structlog
from fastapi import APIRouter, HTTPException, Query
from fastapi.concurrency import run_in_threadpool

from devops_helper.config import get_settings
from devops_helper.services.load import MIB, allocate_memory, burn_cpu

router = APIRouter(prefix="/load", tags=["load"])
log = structlog.get_logger("load")


@router.get("/cpu")
async def cpu_load(seconds: int = Query(..., ge=0)) -> str:
    settings = get_settings()
    if seconds > settings.load_max_cpu_seconds:
        raise HTTPException(status_code=400, detail=f"seconds must be <= {settings.load_max_cpu_seconds}")

    log.warning("cpu_load_start", seconds=seconds)
    # The burn holds one worker thread; the event loop keeps serving probes.
    iterations = await run_in_threadpool(burn_cpu, seconds)
    log.info("cpu_load_done", seconds=seconds, iterations=iterations)
    return f"CPU load for {seconds}s"


@router.get("/memory")
async def memory_load(mb: int = Query(..., ge=0)) -> str:
    settings = get_settings()
    if mb > settings.load_max_memory_mb:
        raise HTTPException(status_code=400, detail=f"mb must be <= {settings.load_max_memory_mb}")

    log.warning("memory_load_start", mb=mb)
    block = await run_in_threadpool(allocate_memory, mb)
    # The block is only dropped after the response body exists; GC decides when RSS shrinks.
    message = f"Allocated {len(block) // MIB}MB"
    log.info("memory_load_done", mb=mb, bytes=len(block))
    return message
