"""Runtime signals read by handlers at request time.

Readiness, identity and the /config snapshot all come from the process environment,
but handlers go through a signal source so tests (and operators embedding the app)
can substitute their own values without touching ``os.environ``.
"""

from __future__ import annotations

import os
from typing import Mapping, Protocol


class SignalSource(Protocol):
    def get(self, name: str) -> str | None: ...

    def snapshot(self) -> Mapping[str, str]: ...


class EnvironmentSignalSource:
    """Reads live from ``os.environ``; nothing is cached."""

    def get(self, name: str) -> str | None:
        return os.environ.get(name)

    def snapshot(self) -> Mapping[str, str]:
        return dict(os.environ)


class StaticSignalSource:
    def __init__(self, values: Mapping[str, str] | None = None) -> None:
        self.values: dict[str, str] = dict(values or {})

    def get(self, name: str) -> str | None:
        return self.values.get(name)

    def snapshot(self) -> Mapping[str, str]:
        return dict(self.values)


_source: SignalSource | None = None


def set_signal_source(source: SignalSource | None) -> None:
    global _source
    _source = source


def get_signal_source() -> SignalSource:
    global _source
    if _source is None:
        _source = EnvironmentSignalSource()
    return _source
