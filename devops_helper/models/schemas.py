from __future__ import annotations

from pydantic import BaseModel


class InfoResponse(BaseModel):
    application: str
    version: str
    environment: str | None = None
    pod: str | None = None
    node: str | None = None
