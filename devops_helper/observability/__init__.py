"""Observability helpers.

Request IDs + structlog contextvars, and a Prometheus registry exposed both on the
main app (/metrics) and on a secondary scrape port.
"""
