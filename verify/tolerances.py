"""
Pass/fail thresholds for the error scalar produced by the correctness check.

The policy is the one the solver test suite has always used: a run passes when

    error <= n * eps(T)

where eps is the machine epsilon of the (real part of the) element type and n
is the problem size. This does not model reproducibility issues between the
device and host orderings of floating point operations; it is kept as-is
rather than tightened.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

import numpy as np

from kernels.solver.dtypes import np_dtype


class ToleranceExceeded(AssertionError):
    def __init__(self, max_error: float, bound: float, *, n: int, dtype: str) -> None:
        super().__init__(f"error {max_error:.6e} exceeds tolerance {bound:.6e} (n={n}, dtype={dtype})")
        self.max_error = float(max_error)
        self.bound = float(bound)
        self.n = int(n)
        self.dtype = str(dtype)


@dataclass(frozen=True)
class Tolerance:
    scale: float
    eps: float

    @property
    def bound(self) -> float:
        return float(self.scale) * float(self.eps)

    def to_dict(self) -> Dict[str, float]:
        return {"scale": float(self.scale), "eps": float(self.eps), "bound": self.bound}


def machine_epsilon(dtype: str) -> float:
    real = np.empty((0,), dtype=np_dtype(dtype)).real.dtype
    return float(np.finfo(real).eps)


def infer_tolerance(dtype: str, n: int) -> Tolerance:
    # Degenerate sizes still get a one-eps budget.
    return Tolerance(scale=float(max(1, int(n))), eps=machine_epsilon(dtype))


def check_error(dtype: str, max_error: float, n: int) -> None:
    tol = infer_tolerance(dtype, n)
    if not (float(max_error) <= tol.bound):
        raise ToleranceExceeded(float(max_error), tol.bound, n=int(n), dtype=str(dtype))


__all__ = ["Tolerance", "ToleranceExceeded", "machine_epsilon", "infer_tolerance", "check_error"]
