"""Per-generator sequence counter."""

from __future__ import annotations

import threading


class SequenceCounter:
    """Thread-safe counter that wraps modulo 2**bits.

    One instance is owned by one Generator and shared by every thread calling
    it. The counter never resets on millisecond boundaries, so more than
    2**bits mints in one millisecond on one node can repeat a (time, sequence)
    pair.

    Args:
        bits: Width of the sequence field.
        start: Initial value, masked to ``bits``.
    """

    def __init__(self, bits: int = 10, start: int = 0):
        self._mask = (1 << bits) - 1
        self._value = start & self._mask
        self._lock = threading.Lock()

    @property
    def bits(self) -> int:
        return self._mask.bit_length()

    def next(self) -> int:
        """Return the current value and advance by one, wrapping silently."""
        with self._lock:
            value = self._value
            self._value = (value + 1) & self._mask
        return value

    def peek(self) -> int:
        """Value the next call to ``next()`` will return."""
        with self._lock:
            return self._value
