"""Problem parameters, problem classes and timer slots of the multigrid benchmark."""

from __future__ import annotations

from enum import IntEnum

NX_DEFAULT = 256
NY_DEFAULT = 256
NZ_DEFAULT = 256
NIT_DEFAULT = 20
LM = 8
LT_DEFAULT = 8
DEBUG_DEFAULT = 0
NDIM1 = 8
NDIM2 = 8
NDIM3 = 8
ONE = 1

NPB_VERSION = "3.3.1"
COMPILE_TIME = "11 Nov 2013"

# Edge length including the ghost cells used for communication.
NM = 2 + (1 << LM)
# Size of the right-hand-side array.
NV = ONE * (2 + (1 << NDIM1)) * (2 + (1 << NDIM2)) * (2 + (1 << NDIM3))
# Size of the residual array, holding every level.
NR = ((NV + NM * NM + 5 * NM + 7 * LM + 6) // 7) * 8
MAXLEVEL = LT_DEFAULT + 1
M = NM + 1

RESID_COEFFICIENTS = (-8.0 / 3.0, 0.0, 1.0 / 6.0, 1.0 / 12.0)

_SMOOTHER_A = (-3.0 / 8.0, 1.0 / 32.0, -1.0 / 64.0, 0.0)
_SMOOTHER_B = (-3.0 / 17.0, 1.0 / 33.0, -1.0 / 61.0, 0.0)

_CLASSES = {
    (32, 4): "S",
    (128, 4): "W",
    (256, 4): "A",
    (256, 20): "B",
    (512, 20): "C",
    (1024, 50): "D",
    (2048, 50): "E",
}

_VERIFY_VALUES = {
    "S": 0.5307707005734e-04,
    "W": 0.6467329375339e-05,
    "A": 0.2433365309069e-05,
    "B": 0.1800564401355e-05,
    "C": 0.5706732285740e-06,
    "D": 0.1583275060440e-09,
    "E": 0.5630442584711e-10,
}


class Timer(IntEnum):
    """Timer slots used by the benchmark."""

    INIT = 0
    BENCH = 1
    MG3P = 2
    PSINV = 3
    RESID = 4
    RESID2 = 5
    RPRJ3 = 6
    INTERP = 7
    NORM2 = 8
    COMM3 = 9

    @property
    def label(self) -> str:
        return _TIMER_LABELS[self]


_TIMER_LABELS = {
    Timer.INIT: "init",
    Timer.BENCH: "benchmk",
    Timer.MG3P: "mg3P",
    Timer.PSINV: "psinv",
    Timer.RESID: "resid",
    Timer.RESID2: "mg-resid",
    Timer.RPRJ3: "rprj3",
    Timer.INTERP: "interp",
    Timer.NORM2: "norm2",
    Timer.COMM3: "comm3",
}

TIMER_COUNT = len(Timer)


def classify(nx: int, ny: int, nz: int, nit: int) -> str:
    """Return the class letter of a problem size, or 'U' when it is unknown."""
    if nx != ny or nx != nz:
        return "U"
    return _CLASSES.get((nx, nit), "U")


def verify_value(class_name: str) -> float | None:
    """Return the reference L2 norm for a class; None for the unknown class 'U'."""
    if class_name == "U":
        return None
    try:
        return _VERIFY_VALUES[class_name]
    except KeyError:
        raise ValueError(f"unknown problem class {class_name!r}") from None


def smoother_coefficients(class_name: str) -> tuple[float, float, float, float]:
    """Return the smoother coefficients: S(a) for classes S, W and A, else S(b)."""
    if class_name in ("A", "S", "W"):
        return _SMOOTHER_A
    return _SMOOTHER_B