# mgbench

A multigrid benchmark. It solves a discrete Poisson problem on a periodic 3-D
grid by V-cycles, then checks the final residual L2 norm against the reference
value for the problem class (S, W, A, B, C, D, E). Three small timing programs
come with it.

## Installation

```
pip install .
```

numpy is the only runtime dependency.

## The multigrid benchmark

```
mgbench
```

The command takes no options. It looks in the current directory for two files:

- `mg.input`: if present, it gives the number of grid levels on the first line,
  the grid size `nx ny nz` on the second, the iteration count on the third, and
  up to eight debug flags after that (missing flags read as zero). Each of the
  first three lines may carry a trailing remark after its numbers. Without the
  file the defaults are used: 8 levels, a 256³ grid and 20 iterations, which is
  class B.
- `timer.flag`: if present, a per-section timing table is printed at the end
  (benchmk, mg3P, psinv, resid, mg-resid, rprj3, interp, norm2, comm3).

The output shows the grid size and class, the iteration numbers as they run
(the first, the last and every fifth), the verification result with the L2
norm, and a results summary. A grid size and iteration count that match no
standard class is reported as class U and is not verified.

The parts can also be used from Python:

```python
from mgbench.benchmark import BenchmarkConfig, Multigrid

config = BenchmarkConfig(lt=5, nx=32, ny=32, nz=32, nit=4)   # class S
bench = Multigrid(config)
l2_norm = bench.run()
print(bench.class_name, bench.verified, bench.seconds, bench.mflops)
```

`mgbench.benchmark.read_input(path)` reads a configuration file as described
above and returns a `BenchmarkConfig`. `Multigrid` also offers `setup()`,
`v_cycle()` and `residual_norm()` for stepping through a run by hand, and
`mgbench.benchmark.zran3` and `power` build the random right-hand side.

Other modules:

- `mgbench.grid`: the stencil operators on numpy arrays of shape `(n3, n2, n1)`
  with one layer of periodic ghost cells: `resid`, `psinv`, `rprj3`, `interp`,
  `comm3`, `norm2u3`, and `showall` for a text dump.
- `mgbench.randdp`: the linear congruential generator `randlc` / `vranlc`
  (modulus 2⁴⁶); each returns the value(s) together with the new seed.
- `mgbench.params`: `classify`, `verify_value`, `smoother_coefficients`, the
  default sizes and the `Timer` slots.
- `mgbench.timers`: `TimerSet`, accumulating wall-clock timers by slot number.
- `mgbench.report`: `format_results`, the summary block as a string.

### What it does not do

The benchmark runs in a single process; the stencil operators are vectorised
with numpy but not spread over threads or processes. The summary block does not
print the run time or Mflop/s; they are available as `Multigrid.seconds` and
`Multigrid.mflops`. The default class B problem takes a long time in Python;
use a `mg.input` with a smaller size to try it out.

## Other programs

```
mgbench-delannoy [N]
```

Computes the Delannoy number D(N, N), N defaulting to 12, once by plain
recursion and once with its three sub-problems run as concurrent tasks, and
prints the value and the time each took.

```
mgbench-counter [--iterations N] [--threads T]
```

Has T threads (default: the CPU count) increment a shared counter under a lock,
N times in total (default 500,000,000), and prints the elapsed time.

```
mgbench-triad [--size N] [--reps R]
```

Times `a += b * c` on float32 vectors of N elements (default 2048) starting at
1, 2 and 3, repeated R times (default 1,000,000), then prints `a[0]` and the
CPU time.

## Tests

```
pip install .[test]
pytest
```