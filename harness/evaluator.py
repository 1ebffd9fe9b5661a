"""
Correctness evaluation: run the device kernel and the host reference on the
same generated input and reduce their disagreement to one error scalar.
"""

from __future__ import annotations

from harness.buffers import SuiteBuffers
from harness.diagnostics import log
from harness.errors import check_status
from harness.init_data import init_data
from harness.interfaces import KernelSuite, RunConfig
from kernels.solver.handle import Handle


def get_error(suite: KernelSuite, handle: Handle, cfg: RunConfig, buffers: SuiteBuffers) -> float:
    init_data(suite, buffers, generate=True, transfer=True, seed=cfg.seed)

    check_status(suite.call(handle, cfg.n, cfg.incx, buffers.ptrs(), cfg.dtype), suite.name)
    handle.synchronize()
    for name in suite.compared:
        buffers.result[name].transfer_from(buffers.device[name])

    suite.reference(cfg.n, cfg.incx, buffers.host_arrays())
    err = float(suite.error(cfg.n, cfg.incx, buffers.host_arrays(), buffers.result_arrays()))
    log(f"[{suite.name}] error={err:.6e} (n={cfg.n}, incx={cfg.incx}, dtype={cfg.dtype})")
    return err


__all__ = ["get_error"]
