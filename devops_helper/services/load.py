from __future__ import annotations

import math
import random
from time import monotonic


MIB = 1024 * 1024
PAGE_SIZE = 4096


def burn_cpu(seconds: float) -> int:
    """Spin on floating-point work for ``seconds`` of wall-clock time.

    Blocks the calling thread; run it off the event loop. Returns the iteration count.
    """

    deadline = monotonic() + seconds
    iterations = 0
    while monotonic() < deadline:
        _ = math.sqrt(random.random())
        iterations += 1
    return iterations


def allocate_memory(mb: int) -> bytearray:
    """Allocate ``mb`` MiB and touch every page so it is actually resident."""

    block = bytearray(mb * MIB)
    for offset in range(0, len(block), PAGE_SIZE):
        block[offset] = 0xFF
    return block
