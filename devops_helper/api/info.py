from __future__ import annotations

from fastapi import APIRouter

from devops_helper.config import APP_NAME, get_settings
from devops_helper.models.schemas import InfoResponse
from devops_helper.signals import get_signal_source

router = APIRouter(tags=["info"])


@router.get("/info", response_model=InfoResponse)
async def info() -> InfoResponse:
    settings = get_settings()
    signals = get_signal_source()
    version = signals.get("APP_VERSION")
    return InfoResponse(
        application=APP_NAME,
        # Only an unset variable falls back; an empty string is reported as-is.
        version="local" if version is None else version,
        environment=signals.get(settings.environment_variable),
        pod=signals.get("HOSTNAME"),
        node=signals.get("NODE_NAME"),
    )
