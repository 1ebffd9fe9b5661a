"""
Workspace negotiation: ask the kernel how much device memory it wants for a
given shape, without touching any data.
"""

from __future__ import annotations

from typing import Optional

from harness.buffers import null_pointers
from harness.diagnostics import log
from harness.errors import check_alloc_query, check_status
from harness.interfaces import KernelSuite, RunConfig
from kernels.solver.handle import Handle


def query_workspace(suite: KernelSuite, handle: Handle, n: int, incx: int, dtype: str = "f32") -> int:
    """Bytes of workspace the kernel needs for (n, incx), rounded to 64-byte chunks."""
    check_status(handle.start_device_memory_size_query(), "start_device_memory_size_query")
    try:
        st = suite.call(handle, int(n), int(incx), null_pointers(suite), dtype)
    finally:
        stop_st, size = handle.stop_device_memory_size_query()
    check_alloc_query(st, f"{suite.name} size query")
    check_status(stop_st, "stop_device_memory_size_query")
    return int(size)


def negotiate_workspace(suite: KernelSuite, handle: Handle, cfg: RunConfig) -> Optional[int]:
    """
    Query the workspace when it is wanted (memory-query mode) or needed (the
    handle does not grow its workspace on demand). In the latter case the size
    is committed on the handle. Returns None when no query was made.
    """
    if not (cfg.mem_query or not handle.realloc_on_demand):
        return None
    size = query_workspace(suite, handle, cfg.n, cfg.incx, cfg.dtype)
    log(f"[{suite.name}] workspace: {size} bytes (n={cfg.n}, incx={cfg.incx})")
    if not cfg.mem_query:
        check_status(handle.set_device_memory_size(size), "set_device_memory_size")
    return size


__all__ = ["query_workspace", "negotiate_workspace"]
