"""Delannoy numbers by plain recursion, sequentially and with parallel tasks."""

from __future__ import annotations

import re
import sys
import time
from concurrent.futures import ThreadPoolExecutor

DEFAULT_N = 12


def _check(m: int, n: int) -> None:
    if m < 0 or n < 0:
        raise ValueError("Delannoy arguments must be non-negative")


def delannoy_seq(m: int, n: int) -> int:
    """Return D(m, n) by direct recursion."""
    _check(m, n)
    if m == 0 or n == 0:
        return 1
    return delannoy_seq(m - 1, n) + delannoy_seq(m - 1, n - 1) + delannoy_seq(m, n - 1)


def delannoy_parallel(m: int, n: int) -> int:
    """Return D(m, n), evaluating the three sub-problems as concurrent tasks."""
    _check(m, n)
    if m == 0 or n == 0:
        return 1
    with ThreadPoolExecutor(max_workers=3) as pool:
        tasks = [
            pool.submit(delannoy_seq, m - 1, n),
            pool.submit(delannoy_seq, m - 1, n - 1),
            pool.submit(delannoy_seq, m, n - 1),
        ]
        return sum(task.result() for task in tasks)


def _atoi(text: str) -> int:
    match = re.match(r"\s*([+-]?\d+)", text)
    return int(match.group(1)) if match else 0


def main(argv: list[str] | None = None) -> int:
    """Compute D(N, N) both ways and print the value and the time taken."""
    args = sys.argv[1:] if argv is None else argv
    n = _atoi(args[0]) if args else DEFAULT_N

    t1 = time.perf_counter()
    seq = delannoy_seq(n, n)
    t2 = time.perf_counter()
    print(f"Sequential: D({n}, {n}) = {seq}, time = {t2 - t1:.3f} seconds")

    t3 = time.perf_counter()
    par = delannoy_parallel(n, n)
    t4 = time.perf_counter()
    print(f"Parallel:   D({n}, {n}) = {par}, time = {t4 - t3:.3f} seconds")
    return 0


if __name__ == "__main__":
    sys.exit(main())