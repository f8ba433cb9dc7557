from __future__ import annotations

from typing import Any

import structlog
from prometheus_client import start_http_server

from devops_helper.observability.metrics import RequestMetrics


class MetricsServer:
    """Serves the registry on a dedicated port, next to the main HTTP listener."""

    def __init__(self, metrics: RequestMetrics, port: int, addr: str = "0.0.0.0") -> None:
        self.metrics = metrics
        self.port = port
        self.addr = addr
        self._server: Any | None = None
        self._thread: Any | None = None

    @property
    def running(self) -> bool:
        return self._server is not None

    @property
    def bound_port(self) -> int | None:
        # Differs from ``port`` when 0 was requested and the OS picked one.
        if self._server is None:
            return None
        return self._server.server_port

    def start(self) -> None:
        if self._server is not None:
            return
        self._server, self._thread = start_http_server(self.port, addr=self.addr, registry=self.metrics.registry)
        structlog.get_logger("metrics").info("metrics_server_started", addr=self.addr, port=self.bound_port)

    def stop(self) -> None:
        if self._server is None:
            return
        self._server.shutdown()
        self._server.server_close()
        if self._thread is not None:
            self._thread.join(timeout=5)
        self._server = None
        self._thread = None
        structlog.get_logger("metrics").info("metrics_server_stopped", port=self.port)
