"""
Conjugate a strided vector in place (xLACGV). A no-op for real types.
"""

from __future__ import annotations

from typing import Any, Optional

from kernels.solver.dtypes import canonical_dtype, is_complex, torch_dtype
from kernels.solver.handle import Handle
from kernels.solver.status import Status


def lacgv_memory_size(n: int, dtype: str) -> int:
    return 0


def lacgv(handle: Optional[Handle], n: int, x: Any, incx: int, *, dtype: str = "c64") -> Status:
    if handle is None:
        return Status.INVALID_HANDLE
    n = int(n)
    incx = int(incx)
    with handle.log.scope("lacgv", n=n, incx=incx):
        if n < 0 or incx < 1:
            return Status.INVALID_SIZE
        dt = canonical_dtype(dtype)
        if handle.is_device_memory_size_query():
            return handle.set_optimal_device_memory_size(lacgv_memory_size(n, dt))
        if n > 0 and x is None:
            return Status.INVALID_POINTER

        if n == 0:
            return Status.SUCCESS

        if x.dtype != torch_dtype(dt) or int(x.numel()) < (n - 1) * incx + 1:
            return Status.INVALID_VALUE
        if not is_complex(dt):
            return Status.SUCCESS
        with handle.log.scope("lacgv_conj", kernel=True):
            xv = x[: (n - 1) * incx + 1 : incx]
            xv.imag.neg_()
        return Status.SUCCESS


__all__ = ["lacgv", "lacgv_memory_size"]
