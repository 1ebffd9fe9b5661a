"""
Execution context shared by all solver entry points.

A handle owns:
  - the device (and, on CUDA/ROCm, the stream work is issued on)
  - the scratch workspace kernels draw their device memory from
  - the memory-size query state used to negotiate that workspace up front
  - the logging layer (trace/profile) configuration

Workspace sizes are accounted in 64-byte chunks.
"""

from __future__ import annotations

from typing import Any, Optional, Tuple

from kernels.solver.layer_log import LayerLog
from kernels.solver.status import Status


MIN_CHUNK_SIZE = 64


def _torch() -> Any:
    import torch  # noqa: PLC0415

    return torch


def roundup_device_memory_size(nbytes: int) -> int:
    n = max(0, int(nbytes))
    return ((n + MIN_CHUNK_SIZE - 1) // MIN_CHUNK_SIZE) * MIN_CHUNK_SIZE


def default_device() -> str:
    torch = _torch()
    try:
        return "cuda" if torch.cuda.is_available() else "cpu"
    except Exception:
        return "cpu"


class Handle:
    def __init__(self, device: Any = None, *, realloc_on_demand: bool = True, use_triton: bool = True) -> None:
        torch = _torch()
        self.device = torch.device(device if device is not None else default_device())
        self.realloc_on_demand = bool(realloc_on_demand)
        # Real-typed kernels dispatch to Triton on CUDA/ROCm devices unless disabled.
        self.use_triton = bool(use_triton)
        self.log = LayerLog()
        self._workspace = None
        self._workspace_size = 0
        self._querying = False
        self._query_size = 0

    def __repr__(self) -> str:
        return f"Handle(device={self.device}, workspace={self._workspace_size}B, realloc_on_demand={self.realloc_on_demand})"

    @property
    def is_cuda(self) -> bool:
        return self.device.type == "cuda"

    @property
    def stream(self) -> Any:
        if not self.is_cuda:
            return None
        return _torch().cuda.current_stream(self.device)

    def synchronize(self) -> None:
        """Block until all work issued on the handle's stream has finished."""
        stream = self.stream
        if stream is not None:
            stream.synchronize()

    # -- memory-size query -------------------------------------------------

    def start_device_memory_size_query(self) -> Status:
        if self._querying:
            return Status.SIZE_QUERY_MISMATCH
        self._querying = True
        self._query_size = 0
        return Status.SUCCESS

    def is_device_memory_size_query(self) -> bool:
        return self._querying

    def set_optimal_device_memory_size(self, *sizes: int) -> Status:
        if not self._querying:
            return Status.SIZE_QUERY_MISMATCH
        total = sum(roundup_device_memory_size(s) for s in sizes)
        if total > self._query_size:
            self._query_size = total
            return Status.SIZE_INCREASED
        return Status.SIZE_UNCHANGED

    def stop_device_memory_size_query(self) -> Tuple[Status, int]:
        if not self._querying:
            return Status.SIZE_QUERY_MISMATCH, 0
        self._querying = False
        return Status.SUCCESS, int(self._query_size)

    # -- workspace -----------------------------------------------------------

    def get_device_memory_size(self) -> int:
        return int(self._workspace_size)

    def set_device_memory_size(self, nbytes: int) -> Status:
        """
        Commit a fixed-size workspace. Kernels needing more than this fail with
        MEMORY_ERROR. A size of 0 hands management back to the handle, which
        then grows the workspace on demand.
        """
        if self._querying:
            return Status.SIZE_QUERY_MISMATCH
        if int(nbytes) < 0:
            return Status.INVALID_SIZE
        if int(nbytes) == 0:
            self._workspace = None
            self._workspace_size = 0
            self.realloc_on_demand = True
            return Status.SUCCESS
        if not self._allocate(roundup_device_memory_size(nbytes)):
            return Status.MEMORY_ERROR
        self.realloc_on_demand = False
        return Status.SUCCESS

    def device_memory(self, nbytes: int) -> Optional[Any]:
        """
        Return a uint8 view of at least `nbytes` workspace bytes, or None when
        the workspace is fixed and too small (or growing it failed).
        """
        torch = _torch()
        n = int(nbytes)
        if n <= 0:
            return torch.empty((0,), dtype=torch.uint8, device=self.device)
        if n > self._workspace_size:
            if not self.realloc_on_demand:
                return None
            if not self._allocate(roundup_device_memory_size(n)):
                return None
        return self._workspace[:n]

    def _allocate(self, nbytes: int) -> bool:
        torch = _torch()
        # Drop the old block first so peak usage stays at one workspace.
        self._workspace = None
        self._workspace_size = 0
        try:
            self._workspace = torch.empty((int(nbytes),), dtype=torch.uint8, device=self.device)
        except RuntimeError:
            return False
        self._workspace_size = int(nbytes)
        return True


__all__ = ["Handle", "MIN_CHUNK_SIZE", "roundup_device_memory_size", "default_device"]
