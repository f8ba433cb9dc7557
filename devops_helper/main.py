from __future__ import annotations

import structlog
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from devops_helper import __version__
from devops_helper.api.chaos import router as chaos_router
from devops_helper.api.environment import router as environment_router
from devops_helper.api.health import router as health_router
from devops_helper.api.info import router as info_router
from devops_helper.api.load import router as load_router
from devops_helper.api.metrics import router as metrics_router
from devops_helper.config import APP_NAME, get_settings
from devops_helper.observability.exporter import MetricsServer
from devops_helper.observability.logging import configure_logging
from devops_helper.observability.metrics import init_metrics
from devops_helper.observability.middleware import RequestContextMiddleware


async def _validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Malformed query parameters are the caller's fault: 400, not FastAPI's default 422.
    _ = request
    return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging(settings.log_level_value)

    app = FastAPI(title=APP_NAME, version=__version__)
    app.state.metrics = init_metrics()
    app.state.metrics_server = None

    app.add_middleware(RequestContextMiddleware, metrics=app.state.metrics)
    app.add_exception_handler(RequestValidationError, _validation_error)

    app.include_router(health_router)
    app.include_router(info_router)
    app.include_router(environment_router)
    app.include_router(chaos_router)
    app.include_router(load_router)
    app.include_router(metrics_router)

    @app.on_event("startup")
    def _startup() -> None:
        settings = get_settings()
        if settings.metrics_server_enabled:
            server = MetricsServer(app.state.metrics, port=settings.metrics_port, addr=settings.host)
            server.start()
            app.state.metrics_server = server
        structlog.get_logger("app").info(
            "startup",
            port=settings.port,
            metrics_port=settings.metrics_port if settings.metrics_server_enabled else None,
        )

    @app.on_event("shutdown")
    def _shutdown() -> None:
        server = app.state.metrics_server
        if server is not None:
            server.stop()
            app.state.metrics_server = None

    return app


app = create_app()
