"""Linear congruential generator x_{k+1} = a * x_k (mod 2**46) in double precision.

Seeds and multipliers are odd integers held in floats, in the range
(1, 2**46).  Every value returned is normalised into (0, 1) as 2**-46 * x.
"""

from __future__ import annotations

R23 = 0.5**23
R46 = R23 * R23
T23 = 2.0**23
T46 = T23 * T23


def _split(a: float) -> tuple[float, float]:
    """Break ``a`` into ``a1`` and ``a2`` with a == 2**23 * a1 + a2."""
    a1 = float(int(R23 * a))
    return a1, a - T23 * a1


def _next_seed(x: float, a1: float, a2: float) -> float:
    x1 = float(int(R23 * x))
    x2 = x - T23 * x1
    t1 = a1 * x2 + a2 * x1
    t2 = float(int(R23 * t1))
    z = t1 - T23 * t2
    t3 = T23 * z + a2 * x2
    t4 = float(int(R46 * t3))
    return t3 - T46 * t4


def randlc(x: float, a: float) -> tuple[float, float]:
    """Advance the seed ``x`` once by multiplier ``a``.

    Returns ``(value, new_seed)`` where ``value`` lies in (0, 1).
    """
    a1, a2 = _split(a)
    seed = _next_seed(x, a1, a2)
    return R46 * seed, seed


def vranlc(n: int, x: float, a: float) -> tuple[list[float], float]:
    """Generate ``n`` successive values from seed ``x``.

    Returns ``(values, new_seed)``; with ``n`` of zero or less the list is
    empty and the seed comes back unchanged.
    """
    a1, a2 = _split(a)
    values = []
    seed = x
    for _ in range(n):
        seed = _next_seed(seed, a1, a2)
        values.append(R46 * seed)
    return values, seed