"""Repeated single-precision multiply-add over three vectors, timed."""

from __future__ import annotations

import argparse
import sys
import time

import numpy as np

SIZE = 2048
REPS = 1_000_000


def triad(size: int, reps: int) -> tuple[float, float]:
    """Run ``a += b * c`` ``reps`` times on float32 vectors of length ``size``.

    ``a``, ``b`` and ``c`` start at 1, 2 and 3.  Returns ``(a[0], cpu_seconds)``.
    """
    if size < 1:
        raise ValueError("size must be at least 1")
    if reps < 0:
        raise ValueError("reps must be non-negative")
    a = np.full(size, 1.0, dtype=np.float32)
    b = np.full(size, 2.0, dtype=np.float32)
    c = np.full(size, 3.0, dtype=np.float32)
    product = np.empty(size, dtype=np.float32)

    start = time.process_time()
    for _ in range(reps):
        np.multiply(b, c, out=product)
        a += product
    elapsed = time.process_time() - start
    return float(a[0]), elapsed


def main(argv: list[str] | None = None) -> int:
    """Run the multiply-add loop and print the first element and the time."""
    parser = argparse.ArgumentParser(description="Time a repeated vector multiply-add.")
    parser.add_argument("--size", type=int, default=SIZE)
    parser.add_argument("--reps", type=int, default=REPS)
    args = parser.parse_args(argv)
    first, elapsed = triad(args.size, args.reps)
    print(f"a[0] = {first:f}")
    print(f"Elapsed time: {elapsed:.3f} seconds")
    return 0


if __name__ == "__main__":
    sys.exit(main())