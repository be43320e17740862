"""Multigrid V-cycle benchmark on a periodic 3-D grid, with small timing programs."""

__version__ = "0.1.0"