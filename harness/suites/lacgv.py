from __future__ import annotations

from typing import Any, List, Mapping

import numpy as np

from harness.interfaces import BufferSpec
from harness.registry import register
from kernels.solver.lacgv import lacgv
from kernels.solver.status import Status
from verify.norms import norm_error
from verify.reference import LacgvReference


class LacgvSuite:
    """xLACGV: conjugate x (n elements at incx) in place."""

    name = "lacgv"
    pointer_args = ("x",)
    inputs = ("x",)
    compared = ("x",)
    reference = LacgvReference()

    def buffer_specs(self, n: int, incx: int) -> List[BufferSpec]:
        return [BufferSpec("x", max(1, n), incx)]

    def call(self, handle: Any, n: int, incx: int, ptrs: Mapping[str, Any], dtype: str) -> Status:
        return lacgv(handle, n, ptrs.get("x"), incx, dtype=dtype)

    def error(self, n: int, incx: int, host: Mapping[str, np.ndarray], result: Mapping[str, np.ndarray]) -> float:
        return norm_error("F", 1, n, incx, host["x"], result["x"])


SUITE = LacgvSuite()
register(SUITE)

__all__ = ["LacgvSuite", "SUITE"]
