"""A shared counter incremented concurrently under a lock, timed."""

from __future__ import annotations

import argparse
import os
import sys
import threading
import time

N_ITERATIONS = 500_000_000


def atomic_count(iterations: int, threads: int) -> tuple[int, float]:
    """Increment a shared counter ``iterations`` times spread over ``threads``.

    Returns ``(final_count, elapsed_seconds)``.
    """
    if iterations < 0:
        raise ValueError("iterations must be non-negative")
    if threads < 1:
        raise ValueError("at least one thread is required")

    counter = 0
    lock = threading.Lock()

    def work(share: int) -> None:
        nonlocal counter
        for _ in range(share):
            with lock:
                counter += 1

    base, extra = divmod(iterations, threads)
    shares = [base + (1 if i < extra else 0) for i in range(threads)]
    workers = [threading.Thread(target=work, args=(share,)) for share in shares]

    start = time.perf_counter()
    for worker in workers:
        worker.start()
    for worker in workers:
        worker.join()
    elapsed = time.perf_counter() - start
    return counter, elapsed


def main(argv: list[str] | None = None) -> int:
    """Run the counter and print the elapsed time."""
    parser = argparse.ArgumentParser(description="Time concurrent locked increments.")
    parser.add_argument("--iterations", type=int, default=N_ITERATIONS)
    parser.add_argument("--threads", type=int, default=os.cpu_count() or 1)
    args = parser.parse_args(argv)
    _, elapsed = atomic_count(args.iterations, args.threads)
    print(f"time: {elapsed:.6f}")
    return 0


if __name__ == "__main__":
    sys.exit(main())