from __future__ import annotations

from typing import Mapping

from fastapi import APIRouter

from devops_helper.config import get_settings
from devops_helper.signals import get_signal_source

router = APIRouter(tags=["config"])

REDACTED_MARKER = "SECRET"


def redact_environment(env: Mapping[str, str], ignore_case: bool = False) -> dict[str, str]:
    """Drop every entry whose key contains ``SECRET``.

    Case-sensitive unless ``ignore_case``: ``db_secret`` survives the default filter.
    """

    if ignore_case:
        return {k: v for k, v in env.items() if REDACTED_MARKER not in k.upper()}
    return {k: v for k, v in env.items() if REDACTED_MARKER not in k}


@router.get("/config")
async def config() -> dict[str, str]:
    settings = get_settings()
    return redact_environment(get_signal_source().snapshot(), ignore_case=settings.config_redact_ignore_case)
