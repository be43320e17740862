"""Stencil operators of the multigrid V-cycle on periodic 3-D grids.

Every grid is a numpy array of shape ``(n3, n2, n1)`` and carries one layer
of ghost cells on each face.  The ghost cells hold periodic copies of the
opposite interior faces, and :func:`comm3` keeps them that way.
"""

from __future__ import annotations

import math

import numpy as np


def _check_grid(name: str, array: np.ndarray) -> None:
    if array.ndim != 3:
        raise ValueError(f"{name} must be a three-dimensional array")
    if min(array.shape) < 2:
        raise ValueError(f"{name} needs at least two points along every axis")


def comm3(u: np.ndarray) -> np.ndarray:
    """Fill the ghost faces of ``u`` periodically from its interior, in place."""
    _check_grid("u", u)
    u[1:-1, 1:-1, 0] = u[1:-1, 1:-1, -2]
    u[1:-1, 1:-1, -1] = u[1:-1, 1:-1, 1]
    u[1:-1, 0, :] = u[1:-1, -2, :]
    u[1:-1, -1, :] = u[1:-1, 1, :]
    u[0, :, :] = u[-2, :, :]
    u[-1, :, :] = u[1, :, :]
    return u


def psinv(r: np.ndarray, u: np.ndarray, c) -> np.ndarray:
    """Apply the smoother ``u = u + C r`` in place and refresh the ghost faces.

    The fourth coefficient is taken to be zero, as the benchmark assumes.
    """
    _check_grid("r", r)
    _check_grid("u", u)
    if r.shape != u.shape:
        raise ValueError("r and u must have the same shape")
    c0, c1, c2 = c[0], c[1], c[2]

    r1 = r[1:-1, :-2, :] + r[1:-1, 2:, :] + r[:-2, 1:-1, :] + r[2:, 1:-1, :]
    r2 = r[:-2, :-2, :] + r[:-2, 2:, :] + r[2:, :-2, :] + r[2:, 2:, :]
    centre = r[1:-1, 1:-1, :]

    updated = u[1:-1, 1:-1, 1:-1] + c0 * centre[:, :, 1:-1]
    updated = updated + c1 * (centre[:, :, :-2] + centre[:, :, 2:] + r1[:, :, 1:-1])
    updated = updated + c2 * (r2[:, :, 1:-1] + r1[:, :, :-2] + r1[:, :, 2:])
    u[1:-1, 1:-1, 1:-1] = updated
    return comm3(u)


def resid(u: np.ndarray, v: np.ndarray, a) -> np.ndarray:
    """Return the residual ``r = v - A u`` with its ghost faces filled.

    The second coefficient is taken to be zero, as the benchmark assumes.
    """
    _check_grid("u", u)
    _check_grid("v", v)
    if u.shape != v.shape:
        raise ValueError("u and v must have the same shape")
    a0, a2, a3 = a[0], a[2], a[3]

    u1 = u[1:-1, :-2, :] + u[1:-1, 2:, :] + u[:-2, 1:-1, :] + u[2:, 1:-1, :]
    u2 = u[:-2, :-2, :] + u[:-2, 2:, :] + u[2:, :-2, :] + u[2:, 2:, :]

    r = np.zeros(u.shape, dtype=float)
    interior = v[1:-1, 1:-1, 1:-1] - a0 * u[1:-1, 1:-1, 1:-1]
    interior = interior - a2 * (u2[:, :, 1:-1] + u1[:, :, :-2] + u1[:, :, 2:])
    interior = interior - a3 * (u2[:, :, :-2] + u2[:, :, 2:])
    r[1:-1, 1:-1, 1:-1] = interior
    return comm3(r)


def rprj3(r: np.ndarray, m1j: int, m2j: int, m3j: int) -> np.ndarray:
    """Project ``r`` onto a coarser grid of shape ``(m3j, m2j, m1j)``.

    Uses the trilinear finite-element restriction; the coarse grid is
    returned with its ghost faces filled.
    """
    _check_grid("r", r)
    m3k, m2k, m1k = r.shape
    d1 = 2 if m1k == 3 else 1
    d2 = 2 if m2k == 3 else 1
    d3 = 2 if m3k == 3 else 1
    for mj, mk, d in ((m1j, m1k, d1), (m2j, m2k, d2), (m3j, m3k, d3)):
        if mj < 2:
            raise ValueError("coarse grid needs at least two points along every axis")
        if 2 * mj - 2 - d > mk - 1:
            raise ValueError("fine grid is too small for the requested coarse grid")

    i3 = 2 * np.arange(1, m3j - 1) - d3
    i2 = 2 * np.arange(1, m2j - 1) - d2
    i1 = 2 * np.arange(1, m1j - 1) - d1

    def at(o3: int, o2: int, o1: int) -> np.ndarray:
        return r[np.ix_(i3 + o3, i2 + o2, i1 + o1)]

    x1a = at(1, 0, 0) + at(1, 2, 0) + at(0, 1, 0) + at(2, 1, 0)
    x1b = at(1, 0, 2) + at(1, 2, 2) + at(0, 1, 2) + at(2, 1, 2)
    y1a = at(0, 0, 0) + at(2, 0, 0) + at(0, 2, 0) + at(2, 2, 0)
    y1b = at(0, 0, 2) + at(2, 0, 2) + at(0, 2, 2) + at(2, 2, 2)
    y2 = at(0, 0, 1) + at(2, 0, 1) + at(0, 2, 1) + at(2, 2, 1)
    x2 = at(1, 0, 1) + at(1, 2, 1) + at(0, 1, 1) + at(2, 1, 1)

    s = np.zeros((m3j, m2j, m1j), dtype=float)
    s[1:-1, 1:-1, 1:-1] = (
        0.5 * at(1, 1, 1)
        + 0.25 * (at(1, 1, 0) + at(1, 1, 2) + x2)
        + 0.125 * (x1a + x1b + y2)
        + 0.0625 * (y1a + y1b)
    )
    return comm3(s)


def interp(z: np.ndarray, u: np.ndarray) -> np.ndarray:
    """Add the trilinear interpolation of the coarse grid ``z`` to ``u`` in place."""
    _check_grid("z", z)
    _check_grid("u", u)
    mm3, mm2, mm1 = z.shape
    n3, n2, n1 = u.shape

    if n1 != 3 and n2 != 3 and n3 != 3:
        if any(2 * (mm - 1) > n for mm, n in ((mm1, n1), (mm2, n2), (mm3, n3))):
            raise ValueError("fine grid is too small for the coarse grid")
        z1 = z[:-1, 1:, :] + z[:-1, :-1, :]
        z2 = z[1:, :-1, :] + z[:-1, :-1, :]
        z3 = z[1:, 1:, :] + z[1:, :-1, :] + z1

        e3, o3 = slice(0, 2 * (mm3 - 1), 2), slice(1, 2 * (mm3 - 1), 2)
        e2, o2 = slice(0, 2 * (mm2 - 1), 2), slice(1, 2 * (mm2 - 1), 2)
        e1, o1 = slice(0, 2 * (mm1 - 1), 2), slice(1, 2 * (mm1 - 1), 2)

        u[e3, e2, e1] += z[:-1, :-1, :-1]
        u[e3, e2, o1] += 0.5 * (z[:-1, :-1, 1:] + z[:-1, :-1, :-1])
        u[e3, o2, e1] += 0.5 * z1[:, :, :-1]
        u[e3, o2, o1] += 0.25 * (z1[:, :, :-1] + z1[:, :, 1:])
        u[o3, e2, e1] += 0.5 * z2[:, :, :-1]
        u[o3, e2, o1] += 0.25 * (z2[:, :, :-1] + z2[:, :, 1:])
        u[o3, o2, e1] += 0.25 * z3[:, :, :-1]
        u[o3, o2, o1] += 0.125 * (z3[:, :, :-1] + z3[:, :, 1:])
        return u

    d1, t1 = (2, 1) if n1 == 3 else (1, 0)
    d2, t2 = (2, 1) if n2 == 3 else (1, 0)
    d3, t3 = (2, 1) if n3 == 3 else (1, 0)

    dr3, tr3 = np.arange(d3, mm3), np.arange(1, mm3)
    dr2, tr2 = np.arange(d2, mm2), np.arange(1, mm2)
    dr1, tr1 = np.arange(d1, mm1), np.arange(1, mm1)

    dt3, tt3 = 2 * dr3 - d3 - 1, 2 * tr3 - t3 - 1
    dt2, tt2 = 2 * dr2 - d2 - 1, 2 * tr2 - t2 - 1
    dt1, tt1 = 2 * dr1 - d1 - 1, 2 * tr1 - t1 - 1

    def zz(i3, i2, i1, o3, o2, o1):
        return z[np.ix_(i3 - o3, i2 - o2, i1 - o1)]

    u[np.ix_(dt3, dt2, dt1)] += zz(dr3, dr2, dr1, 1, 1, 1)
    u[np.ix_(dt3, dt2, tt1)] += 0.5 * (
        zz(dr3, dr2, tr1, 1, 1, 0) + zz(dr3, dr2, tr1, 1, 1, 1)
    )
    u[np.ix_(tt3, dt2, dt1)] += 0.5 * (
        zz(tr3, dr2, dr1, 0, 1, 1) + zz(tr3, dr2, dr1, 1, 1, 1)
    )
    u[np.ix_(tt3, dt2, tt1)] += 0.25 * (
        zz(tr3, dr2, tr1, 0, 1, 0)
        + zz(tr3, dr2, tr1, 0, 1, 1)
        + zz(tr3, dr2, tr1, 1, 1, 0)
        + zz(tr3, dr2, tr1, 1, 1, 1)
    )
    u[np.ix_(tt3, tt2, dt1)] += 0.25 * (
        zz(tr3, tr2, dr1, 0, 0, 1)
        + zz(tr3, tr2, dr1, 0, 1, 1)
        + zz(tr3, tr2, dr1, 1, 0, 1)
        + zz(tr3, tr2, dr1, 1, 1, 1)
    )
    u[np.ix_(tt3, tt2, tt1)] += 0.125 * (
        zz(tr3, tr2, tr1, 0, 0, 0)
        + zz(tr3, tr2, tr1, 0, 1, 0)
        + zz(tr3, tr2, tr1, 0, 0, 1)
        + zz(tr3, tr2, tr1, 0, 1, 1)
        + zz(tr3, tr2, tr1, 1, 0, 0)
        + zz(tr3, tr2, tr1, 1, 1, 0)
        + zz(tr3, tr2, tr1, 1, 0, 1)
        + zz(tr3, tr2, tr1, 1, 1, 1)
    )
    return u


def norm2u3(r: np.ndarray, nx: int, ny: int, nz: int) -> tuple[float, float]:
    """Return ``(l2_norm, max_norm)`` of the interior of ``r``.

    The L2 norm is ``sqrt(sum(r**2) / (nx * ny * nz))``.
    """
    _check_grid("r", r)
    dn = 1.0 * nx * ny * nz
    if dn == 0.0:
        raise ValueError("nx, ny and nz must be non-zero")
    interior = r[1:-1, 1:-1, 1:-1]
    s = float(np.sum(interior * interior))
    rnmu = float(np.max(np.abs(interior), initial=0.0))
    return math.sqrt(s / dn), rnmu


def showall(z: np.ndarray) -> str:
    """Return a text dump of at most the first 18 x 14 x 18 points of ``z``."""
    if z.ndim != 3:
        raise ValueError("z must be a three-dimensional array")
    n3, n2, n1 = z.shape
    m1, m2, m3 = min(n1, 18), min(n2, 14), min(n3, 18)
    lines = ["   "]
    for i3 in range(m3):
        for i1 in range(m1):
            lines.append("".join(f"{z[i3, i2, i1]:6.3f}" for i2 in range(m2)))
        lines.append("  - - - - - - - ")
    lines.append("   ")
    return "\n".join(lines) + "\n"