"""Accumulating wall-clock timers addressed by slot number."""

from __future__ import annotations

import time


class TimerSet:
    """A fixed number of timers that accumulate elapsed seconds and stop counts."""

    def __init__(self, size: int = 64) -> None:
        if size < 1:
            raise ValueError("a timer set needs at least one slot")
        self._size = size
        self._started: list[float | None] = [None] * size
        self._elapsed = [0.0] * size
        self._count = [0] * size

    def _slot(self, n: int) -> int:
        if not 0 <= n < self._size:
            raise IndexError(f"timer {n} out of range 0..{self._size - 1}")
        return n

    def clear(self, n: int) -> None:
        """Reset the accumulated time and count of timer ``n``."""
        n = self._slot(n)
        self._elapsed[n] = 0.0
        self._count[n] = 0

    def start(self, n: int) -> None:
        """Record the current time as the start of timer ``n``."""
        self._started[self._slot(n)] = time.perf_counter()

    def stop(self, n: int) -> None:
        """Add the time since the last start to timer ``n``."""
        n = self._slot(n)
        started = self._started[n]
        if started is None:
            raise RuntimeError(f"timer {n} stopped before it was started")
        self._elapsed[n] += time.perf_counter() - started
        self._count[n] += 1

    def read(self, n: int) -> float:
        """Return the seconds accumulated by timer ``n``."""
        return self._elapsed[self._slot(n)]

    def count(self, n: int) -> int:
        """Return how many times timer ``n`` has been stopped."""
        return self._count[self._slot(n)]