"""
Strided vector containers on the host (numpy) and on the device (torch).

A vector of `n` logical elements at increment `inc` owns `n * inc` elements of
storage; element i lives at storage index i * inc. Host and device vectors are
created in pairs with the same shape so `transfer_from` is a flat copy.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import numpy as np

from harness.errors import AllocationError, TransferError
from harness.interfaces import KernelSuite
from kernels.solver.dtypes import canonical_dtype, np_dtype, torch_dtype


def _torch() -> Any:
    import torch  # noqa: PLC0415

    return torch


class HostStridedVector:
    def __init__(self, n: int, inc: int, dtype: str) -> None:
        if int(n) < 0 or int(inc) < 1:
            raise ValueError(f"bad strided vector shape: n={n}, inc={inc}")
        self.n = int(n)
        self.inc = int(inc)
        self.dtype = canonical_dtype(dtype)
        self.data = np.zeros((self.n * self.inc,), dtype=np_dtype(self.dtype))

    def __repr__(self) -> str:
        return f"HostStridedVector(n={self.n}, inc={self.inc}, dtype={self.dtype})"

    @property
    def nmemb(self) -> int:
        return int(self.data.size)

    def values(self) -> np.ndarray:
        """Writable view of the n logical elements."""
        return self.data[:: self.inc]

    def transfer_from(self, src: "DeviceStridedVector") -> None:
        if src.nmemb != self.nmemb:
            raise TransferError(f"device->host size mismatch: {src.nmemb} vs {self.nmemb}")
        if self.nmemb == 0:
            return
        try:
            self.data[...] = src.tensor.detach().cpu().numpy()
        except (RuntimeError, ValueError) as e:
            raise TransferError(f"device->host copy failed: {e}") from e


class DeviceStridedVector:
    def __init__(self, n: int, inc: int, dtype: str, device: Any) -> None:
        if int(n) < 0 or int(inc) < 1:
            raise ValueError(f"bad strided vector shape: n={n}, inc={inc}")
        torch = _torch()
        self.n = int(n)
        self.inc = int(inc)
        self.dtype = canonical_dtype(dtype)
        self.device = torch.device(device)
        self.tensor = None
        self._alloc_error: Optional[str] = None
        try:
            self.tensor = torch.zeros((self.n * self.inc,), dtype=torch_dtype(self.dtype), device=self.device)
        except RuntimeError as e:
            self._alloc_error = str(e)

    def __repr__(self) -> str:
        return f"DeviceStridedVector(n={self.n}, inc={self.inc}, dtype={self.dtype}, device={self.device})"

    @property
    def nmemb(self) -> int:
        return self.n * self.inc

    def data(self) -> Any:
        """The device storage, or None (null pointer) for a zero-length vector."""
        if self.tensor is None or self.nmemb == 0:
            return None
        return self.tensor

    def memcheck(self) -> None:
        if self._alloc_error is not None:
            raise AllocationError(f"device allocation of {self.nmemb} x {self.dtype} on {self.device} failed: {self._alloc_error}")

    def transfer_from(self, src: HostStridedVector) -> None:
        if src.nmemb != self.nmemb:
            raise TransferError(f"host->device size mismatch: {src.nmemb} vs {self.nmemb}")
        if self.nmemb == 0:
            return
        self.memcheck()
        torch = _torch()
        try:
            self.tensor.copy_(torch.from_numpy(src.data))
        except RuntimeError as e:
            raise TransferError(f"host->device copy failed: {e}") from e


@dataclass
class SuiteBuffers:
    host: Dict[str, HostStridedVector] = field(default_factory=dict)
    device: Dict[str, DeviceStridedVector] = field(default_factory=dict)
    # Copies of compared device outputs; only present when checking.
    result: Dict[str, HostStridedVector] = field(default_factory=dict)

    def ptrs(self) -> Dict[str, Any]:
        return {k: v.data() for k, v in self.device.items()}

    def host_arrays(self) -> Dict[str, np.ndarray]:
        return {k: v.data for k, v in self.host.items()}

    def result_arrays(self) -> Dict[str, np.ndarray]:
        return {k: v.data for k, v in self.result.items()}


def null_pointers(suite: KernelSuite) -> Dict[str, Any]:
    return {name: None for name in suite.pointer_args}


def allocate_buffers(
    suite: KernelSuite,
    handle: Any,
    n: int,
    incx: int,
    dtype: str,
    *,
    with_result: bool,
) -> SuiteBuffers:
    bufs = SuiteBuffers()
    for spec in suite.buffer_specs(int(n), int(incx)):
        bufs.host[spec.name] = HostStridedVector(spec.size, spec.inc, dtype)
        dev = DeviceStridedVector(spec.size, spec.inc, dtype, handle.device)
        dev.memcheck()
        bufs.device[spec.name] = dev
        if with_result and spec.name in suite.compared:
            bufs.result[spec.name] = HostStridedVector(spec.size, spec.inc, dtype)
    return bufs


__all__ = [
    "HostStridedVector",
    "DeviceStridedVector",
    "SuiteBuffers",
    "null_pointers",
    "allocate_buffers",
]
