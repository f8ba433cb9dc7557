from __future__ import annotations

from collections.abc import AsyncIterator

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from devops_helper.config import get_settings
from devops_helper.main import create_app
from devops_helper.services.fatal import set_abort_handler
from devops_helper.signals import StaticSignalSource, set_signal_source


class RecordingAbort:
    def __init__(self) -> None:
        self.reasons: list[str] = []

    def __call__(self, reason: str) -> None:
        self.reasons.append(reason)


@pytest.fixture(autouse=True)
def test_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("METRICS_SERVER_ENABLED", "false")
    monkeypatch.setenv("LOG_LEVEL", "WARNING")
    monkeypatch.delenv("CONFIG_REDACT_IGNORE_CASE", raising=False)
    get_settings.cache_clear()

    yield

    set_signal_source(None)
    set_abort_handler(None)
    get_settings.cache_clear()


@pytest.fixture
def signals() -> StaticSignalSource:
    source = StaticSignalSource()
    set_signal_source(source)
    return source


@pytest.fixture
def abort_recorder() -> RecordingAbort:
    recorder = RecordingAbort()
    set_abort_handler(recorder)
    return recorder


@pytest.fixture
def app() -> FastAPI:
    # Fresh app per test so each one starts with an empty metrics registry.
    return create_app()


@pytest.fixture
async def api_client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
