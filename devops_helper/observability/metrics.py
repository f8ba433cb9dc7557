from __future__ import annotations

import structlog
from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    PlatformCollector,
    ProcessCollector,
    generate_latest,
)


REQUESTS_TOTAL = "devops_helper_requests_total"


class RequestMetrics:
    """Process-wide metrics registry (resets on restart).

    Owns its own ``CollectorRegistry`` rather than the prometheus_client default, so
    each app instance (and each test) starts from zero.
    """

    def __init__(self, *, process_collectors: bool = True) -> None:
        self.registry = CollectorRegistry()
        self.requests_total = Counter(
            REQUESTS_TOTAL,
            "Total HTTP requests",
            ["method", "endpoint", "status"],
            registry=self.registry,
        )
        if process_collectors:
            # ProcessCollector silently yields nothing where /proc is missing.
            ProcessCollector(registry=self.registry)
            PlatformCollector(registry=self.registry)

    def observe_http_request(self, method: str, path: str, status_code: int) -> None:
        # Counter.inc() takes a lock internally, so concurrent requests never lose updates.
        self.requests_total.labels(method=method, endpoint=path, status=str(status_code)).inc()

    def request_count(self, method: str, path: str, status_code: int) -> float:
        value = self.registry.get_sample_value(
            REQUESTS_TOTAL,
            {"method": method, "endpoint": path, "status": str(status_code)},
        )
        return value or 0.0

    def exposition(self) -> bytes:
        return generate_latest(self.registry)

    @property
    def content_type(self) -> str:
        return CONTENT_TYPE_LATEST


def init_metrics(*, process_collectors: bool = True) -> RequestMetrics:
    metrics = RequestMetrics(process_collectors=process_collectors)
    structlog.get_logger("metrics").debug("metrics_registry_initialised", counter=REQUESTS_TOTAL)
    return metrics
