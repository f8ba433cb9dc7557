from __future__ import annotations

import argparse
import os

import uvicorn

from devops_helper.config import get_settings


def main() -> None:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="devops-helper diagnostic HTTP service")
    parser.add_argument("--host", default=settings.host, help="Interface to bind the main listener to")
    parser.add_argument("--port", type=int, default=settings.port, help="Main HTTP port")
    parser.add_argument("--log-level", default=settings.log_level, help="Log level (DEBUG, INFO, ...)")
    args = parser.parse_args()

    # The app module reads settings at import time; the metrics port binds to HOST too.
    os.environ["HOST"] = args.host
    os.environ["LOG_LEVEL"] = args.log_level
    get_settings.cache_clear()

    uvicorn.run(
        "devops_helper.main:app",
        host=args.host,
        port=args.port,
        log_level=args.log_level.lower(),
        # Keep our structlog handlers instead of uvicorn's default dictConfig.
        log_config=None,
    )


if __name__ == "__main__":
    main()
