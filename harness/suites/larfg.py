"""
xLARFG: alpha (scalar), x (n-1 elements at incx), tau (scalar).

Only x is compared; the error is the one-norm of the 1 x (n-1) strided view
of the difference, relative to the reference.
"""

from __future__ import annotations

from typing import Any, List, Mapping

import numpy as np

from harness.interfaces import BufferSpec
from harness.registry import register
from kernels.solver.larfg import larfg
from kernels.solver.status import Status
from verify.norms import norm_error
from verify.reference import LarfgReference


class LarfgSuite:
    name = "larfg"
    pointer_args = ("alpha", "x", "tau")
    inputs = ("alpha", "x")
    compared = ("x",)
    reference = LarfgReference()

    def buffer_specs(self, n: int, incx: int) -> List[BufferSpec]:
        # minimum footprint of one element
        size_x = n - 1 if n > 1 else 1
        return [
            BufferSpec("alpha", 1),
            BufferSpec("x", size_x, incx),
            BufferSpec("tau", 1),
        ]

    def call(self, handle: Any, n: int, incx: int, ptrs: Mapping[str, Any], dtype: str) -> Status:
        return larfg(handle, n, ptrs.get("alpha"), ptrs.get("x"), incx, ptrs.get("tau"), dtype=dtype)

    def error(self, n: int, incx: int, host: Mapping[str, np.ndarray], result: Mapping[str, np.ndarray]) -> float:
        return norm_error("O", 1, n - 1, incx, host["x"], result["x"])


SUITE = LarfgSuite()
register(SUITE)

__all__ = ["LarfgSuite", "SUITE"]
