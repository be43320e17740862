"""The multigrid benchmark: a V-cycle solver for a 3-D Poisson problem."""

from __future__ import annotations

import argparse
import re
import sys
from contextlib import contextmanager
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Iterator

import numpy as np

from .grid import comm3, interp, norm2u3, psinv, resid, rprj3, showall
from .params import (
    DEBUG_DEFAULT,
    LT_DEFAULT,
    NIT_DEFAULT,
    NPB_VERSION,
    NX_DEFAULT,
    NY_DEFAULT,
    NZ_DEFAULT,
    RESID_COEFFICIENTS,
    TIMER_COUNT,
    Timer,
    classify,
    smoother_coefficients,
    verify_value,
)
from .randdp import randlc, vranlc
from .report import format_results
from .timers import TimerSet

_MULTIPLIER = 5.0**13
_SEED = 314159265.0
_CHARGES = 10
_EPSILON = 1.0e-8


def power(a: float, n: int) -> float:
    """Raise the integer ``a`` (held in a float) to the power ``n`` modulo 2**46."""
    if n < 0:
        raise ValueError("the exponent must be non-negative")
    result = 1.0
    aj = a
    nj = n
    while nj != 0:
        if nj % 2 == 1:
            _, result = randlc(result, aj)
        _, aj = randlc(aj, aj)
        nj //= 2
    return result


def zran3(n1: int, n2: int, n3: int, nx: int, ny: int) -> np.ndarray:
    """Return a grid of shape (n3, n2, n1) holding +1 at the ten largest and -1
    at the ten smallest of a field of random numbers, zero elsewhere.

    The ghost faces are filled periodically.
    """
    if min(n1, n2, n3) < 3:
        raise ValueError("the grid needs at least one interior point along every axis")
    a1 = power(_MULTIPLIER, nx)
    a2 = power(_MULTIPLIER, nx * ny)

    field = np.zeros((n3, n2, n1), dtype=float)
    # The first interior point sits at offset zero of the global grid.
    _, x0 = randlc(_SEED, power(_MULTIPLIER, 0))
    d1 = n1 - 2
    for i3 in range(1, n3 - 1):
        x1 = x0
        for i2 in range(1, n2 - 1):
            values, _ = vranlc(d1, x1, _MULTIPLIER)
            field[i3, i2, 1 : n1 - 1] = values
            _, x1 = randlc(x1, a1)
        _, x0 = randlc(x0, a2)

    interior = field[1:-1, 1:-1, 1:-1]
    flat = interior.ravel()
    count = min(_CHARGES, flat.size)
    order = np.argsort(flat, kind="stable")
    smallest = np.unravel_index(order[:count], interior.shape)
    largest = np.unravel_index(order[flat.size - count :], interior.shape)

    z = np.zeros((n3, n2, n1), dtype=float)
    z[tuple(axis + 1 for axis in smallest)] = -1.0
    z[tuple(axis + 1 for axis in largest)] = 1.0
    return comm3(z)


@dataclass(frozen=True)
class BenchmarkConfig:
    """Problem size, iteration count and diagnostics of one benchmark run."""

    lt: int = LT_DEFAULT
    nx: int = NX_DEFAULT
    ny: int = NY_DEFAULT
    nz: int = NZ_DEFAULT
    nit: int = NIT_DEFAULT
    debug_vec: tuple[int, ...] = (DEBUG_DEFAULT,) * 8
    timeron: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "debug_vec", tuple(self.debug_vec))
        if len(self.debug_vec) != 8:
            raise ValueError("debug_vec must hold eight entries")
        if self.lt < 2:
            raise ValueError("at least two grid levels are required")
        if self.nit < 0:
            raise ValueError("the iteration count must be non-negative")
        for name, size in (("nx", self.nx), ("ny", self.ny), ("nz", self.nz)):
            if size < 1 or size >> (self.lt - 1) < 1:
                raise ValueError(f"{name}={size} is too small for {self.lt} levels")

    @property
    def class_name(self) -> str:
        """The class letter of this problem size, 'U' if it is not a standard one."""
        return classify(self.nx, self.ny, self.nz, self.nit)


def _leading_ints(text: str) -> list[int]:
    values = []
    for token in text.split():
        match = re.match(r"[+-]?\d+", token)
        if not match:
            break
        values.append(int(match.group()))
        if match.end() != len(token):
            break
    return values


def read_input(path) -> BenchmarkConfig:
    """Read a configuration: top level, grid size, iterations and debug flags.

    Each of the first three lines starts with its numbers and may carry a
    trailing remark; the eight debug flags follow, missing ones read as zero.
    """
    lines = Path(path).read_text().splitlines()
    if len(lines) < 3:
        raise ValueError(f"{path}: expected at least three lines")
    top = _leading_ints(lines[0])
    size = _leading_ints(lines[1])
    iterations = _leading_ints(lines[2])
    if len(top) < 1 or len(size) < 3 or len(iterations) < 1:
        raise ValueError(f"{path}: malformed input")
    debug = _leading_ints("\n".join(lines[3:]))[:8]
    debug += [0] * (8 - len(debug))
    return BenchmarkConfig(
        lt=top[0],
        nx=size[0],
        ny=size[1],
        nz=size[2],
        nit=iterations[0],
        debug_vec=tuple(debug),
    )


class Multigrid:
    """State and driver of the benchmark: grids on every level and the V-cycle."""

    def __init__(self, config: BenchmarkConfig, timers: TimerSet | None = None) -> None:
        self.config = config
        self.timers = timers if timers is not None else TimerSet(TIMER_COUNT)
        self.class_name = config.class_name
        self.a = RESID_COEFFICIENTS
        self.c = smoother_coefficients(self.class_name)
        self.lt = config.lt
        self.lb = 1
        self.sizes: dict[int, tuple[int, int, int]] = {}
        self.u: dict[int, np.ndarray] = {}
        self.r: dict[int, np.ndarray] = {}
        self.v = np.zeros((0, 0, 0))
        self.rnm2 = 0.0
        self.rnmu = 0.0
        self.verified = False
        self.verify_value: float | None = None
        self.error: float | None = None
        self.seconds = 0.0
        self.init_seconds = 0.0
        self.mflops = 0.0

    @contextmanager
    def _timed(self, timer: Timer) -> Iterator[None]:
        if not self.config.timeron:
            yield
            return
        self.timers.start(timer)
        try:
            yield
        finally:
            self.timers.stop(timer)

    def _shape(self, k: int) -> tuple[int, int, int]:
        nx, ny, nz = self.sizes[k]
        return nz + 2, ny + 2, nx + 2

    def setup(self) -> tuple[int, int, int]:
        """Lay out the grids of every level; return the top grid's (n1, n2, n3)."""
        cfg = self.config
        nx, ny, nz = cfg.nx, cfg.ny, cfg.nz
        self.sizes = {}
        for k in range(self.lt, 0, -1):
            self.sizes[k] = (nx, ny, nz)
            nx, ny, nz = nx // 2, ny // 2, nz // 2
        self.u = {k: np.zeros(self._shape(k)) for k in self.sizes}
        self.r = {k: np.zeros(self._shape(k)) for k in self.sizes}
        self.v = np.zeros(self._shape(self.lt))

        n3, n2, n1 = self._shape(self.lt)
        if cfg.debug_vec[1] >= 1:
            gx, gy, gz = self.sizes[self.lt]
            print(" in setup, ")
            print(" k  lt  nx  ny  nz  n1  n2  n3 is1 is2 is3 ie1 ie2 ie3")
            fields = (self.lt, self.lt, gx, gy, gz, n1, n2, n3, 2, 2, 2, 1 + gx, 1 + gy, 1 + gz)
            print("".join(f"{value:4d}" for value in fields))
        return n1, n2, n3

    def _norm(self, grid: np.ndarray, k: int) -> tuple[float, float]:
        nx, ny, nz = self.sizes[k]
        with self._timed(Timer.NORM2):
            return norm2u3(grid, nx, ny, nz)

    def _rep_nrm(self, grid: np.ndarray, title: str, k: int) -> None:
        rnm2, rnmu = self._norm(grid, k)
        print(f" Level{k:2d} in {title:>8}: norms ={rnm2:21.14E}{rnmu:21.14E}")

    def _psinv(self, k: int) -> None:
        with self._timed(Timer.PSINV):
            psinv(self.r[k], self.u[k], self.c)
        if self.config.debug_vec[0] >= 1:
            self._rep_nrm(self.u[k], "   psinv", k)
        if self.config.debug_vec[3] >= k:
            print(showall(self.u[k]), end="")

    def _resid(self, k: int, v: np.ndarray) -> None:
        with self._timed(Timer.RESID):
            self.r[k] = resid(self.u[k], v, self.a)
        if self.config.debug_vec[0] >= 1:
            self._rep_nrm(self.r[k], "   resid", k)
        if self.config.debug_vec[2] >= k:
            print(showall(self.r[k]), end="")

    def _rprj3(self, k: int) -> None:
        j = k - 1
        m3j, m2j, m1j = self._shape(j)
        with self._timed(Timer.RPRJ3):
            self.r[j] = rprj3(self.r[k], m1j, m2j, m3j)
        if self.config.debug_vec[0] >= 1:
            self._rep_nrm(self.r[j], "   rprj3", j)
        if self.config.debug_vec[4] >= k:
            print(showall(self.r[j]), end="")

    def _interp(self, k: int) -> None:
        z, u = self.u[k - 1], self.u[k]
        with self._timed(Timer.INTERP):
            interp(z, u)
        if self.config.debug_vec[0] >= 1:
            self._rep_nrm(z, "z: inter", k - 1)
            self._rep_nrm(u, "u: inter", k)
        if self.config.debug_vec[5] >= k:
            print(showall(z), end="")
            print(showall(u), end="")

    def v_cycle(self) -> None:
        """Run one multigrid V-cycle, improving the top-level solution in place."""
        for k in range(self.lt, self.lb, -1):
            self._rprj3(k)

        self.u[self.lb][...] = 0.0
        self._psinv(self.lb)

        for k in range(self.lb + 1, self.lt):
            self.u[k][...] = 0.0
            self._interp(k)
            self._resid(k, self.r[k])
            self._psinv(k)

        self._interp(self.lt)
        self._resid(self.lt, self.v)
        self._psinv(self.lt)

    def residual_norm(self) -> tuple[float, float]:
        """Recompute the top residual r = v - A u; return its (L2, max) norms."""
        self._resid(self.lt, self.v)
        return self._norm(self.r[self.lt], self.lt)

    def _initialise(self) -> None:
        n1, n2, n3 = self.setup()
        self.u[self.lt][...] = 0.0
        self.v = zran3(n1, n2, n3, self.config.nx, self.config.ny)

    def run(self) -> float:
        """Run the whole benchmark, printing progress; return the final L2 norm."""
        cfg = self.config
        for timer in Timer:
            self.timers.clear(timer)
        self.timers.start(Timer.INIT)

        self._initialise()
        self._norm(self.v, self.lt)

        print(f" Size: {cfg.nx:4d}x{cfg.ny:4d}x{cfg.nz:4d}  (class {self.class_name})")
        print(f" Iterations:                  {cfg.nit:5d}")
        print()

        self.residual_norm()

        # One iteration for startup.
        self.v_cycle()
        self._resid(self.lt, self.v)
        self._initialise()

        self.timers.stop(Timer.INIT)
        self.init_seconds = self.timers.read(Timer.INIT)

        for timer in Timer:
            if timer >= Timer.BENCH:
                self.timers.clear(timer)
        self.timers.start(Timer.BENCH)

        with self._timed(Timer.RESID2):
            self._resid(self.lt, self.v)
        self._norm(self.r[self.lt], self.lt)

        for it in range(1, cfg.nit + 1):
            if it == 1 or it == cfg.nit or it % 5 == 0:
                print(f"  iter {it:3d}")
            with self._timed(Timer.MG3P):
                self.v_cycle()
            with self._timed(Timer.RESID2):
                self._resid(self.lt, self.v)

        self.rnm2, self.rnmu = self._norm(self.r[self.lt], self.lt)
        self.timers.stop(Timer.BENCH)
        self.seconds = self.timers.read(Timer.BENCH)

        print("\n Benchmark completed")
        self._verify()

        nn = 1.0 * cfg.nx * cfg.ny * cfg.nz
        self.mflops = 58.0 * cfg.nit * nn * 1.0e-6 / self.seconds if self.seconds != 0.0 else 0.0
        return self.rnm2

    def _verify(self) -> None:
        self.verified = False
        self.error = None
        self.verify_value = verify_value(self.class_name)
        if self.verify_value is None:
            print(" Problem size unknown")
            print(" NO VERIFICATION PERFORMED")
            print(f" L2 Norm is {self.rnm2:20.13E}")
            return
        self.error = abs(self.rnm2 - self.verify_value) / self.verify_value
        if self.error <= _EPSILON:
            self.verified = True
            print(" VERIFICATION SUCCESSFUL")
            print(f" L2 Norm is {self.rnm2:20.13E}")
            print(f" Error is   {self.error:20.13E}")
        else:
            print(" VERIFICATION FAILED")
            print(f" L2 Norm is             {self.rnm2:20.13E}")
            print(f" The correct L2 Norm is {self.verify_value:20.13E}")


def _print_timers(timers: TimerSet) -> None:
    tmax = timers.read(Timer.BENCH)
    if tmax == 0.0:
        tmax = 1.0
    print("  SECTION   Time (secs)")
    for timer in Timer:
        if timer < Timer.BENCH:
            continue
        t = timers.read(timer)
        if timer is Timer.RESID2:
            t = timers.read(Timer.RESID) - t
            print(f"    --> {'mg-resid':>8}:{t:9.3f}  ({t * 100.0 / tmax:6.2f}%)")
        else:
            print(f"  {timer.label:<8}:{t:9.3f}  ({t * 100.0 / tmax:6.2f}%)")


def main(argv: list[str] | None = None) -> int:
    """Run the benchmark configured by mg.input (or the defaults) in the working directory."""
    parser = argparse.ArgumentParser(
        description="Multigrid benchmark; reads mg.input and timer.flag from the working directory."
    )
    parser.parse_args(argv)

    timeron = Path("timer.flag").exists()
    print("\n\n Benchmark\n")
    input_path = Path("mg.input")
    if input_path.exists():
        print(" Reading from input file mg.input")
        config = replace(read_input(input_path), timeron=timeron)
    else:
        print(" No input file. Using compiled defaults ")
        config = BenchmarkConfig(timeron=timeron)

    bench = Multigrid(config)
    bench.run()
    print(
        format_results(
            bench.class_name,
            config.nx,
            config.ny,
            config.nz,
            config.nit,
            "          floating point",
            bench.verified,
            NPB_VERSION,
        ),
        end="",
    )
    if config.timeron:
        _print_timers(bench.timers)
    return 0


if __name__ == "__main__":
    sys.exit(main())