"""Clock protocol for swappable time sources.

Usage:
    generator = Generator(config)                      # wall clock
    generator = Generator(config, clock=FixedClock())  # tests
"""

from __future__ import annotations

import time
from typing import Protocol


class Clock(Protocol):
    """Source of the current time in whole milliseconds since the Unix epoch."""

    def now_ms(self) -> int:
        """Current time in milliseconds."""
        ...


class SystemClock:
    """Wall clock backed by ``time.time_ns``. Not monotonic."""

    def now_ms(self) -> int:
        return time.time_ns() // 1_000_000
