"""Summary block printed at the end of a benchmark run."""

from __future__ import annotations


def format_results(
    class_name: str,
    n1: int,
    n2: int,
    n3: int,
    niter: int,
    optype: str,
    verified: bool,
    version: str,
) -> str:
    """Return the results block; a problem with n2 and n3 both zero shows only n1."""
    lines = [
        "",
        "",
        " Benchmark Completed.",
        f" Class           =             {class_name:>12}",
    ]
    if n2 == 0 and n3 == 0:
        lines.append(f" Size            =             {n1:12d}")
    else:
        lines.append(f" Size            =           {n1:4d}x{n2:4d}x{n3:4d}")
    lines.append(f" Iterations      =             {niter:12d}")
    lines.append(f" Operation type  = {optype:>24}")
    status = "SUCCESSFUL" if verified else "UNSUCCESSFUL"
    lines.append(f" Verification    =             {status:>12}")
    lines.append(f" Version         =             {version:>12}")
    return "\n".join(lines) + "\n"