"""
Steady-state latency measurement.

Inputs are regenerated and re-transferred before every device call so each
call sees the same data the correctness check saw; that setup sits outside
the timed region. Two cold calls absorb one-time costs (JIT compilation and
workspace growth) before `iters` hot calls are timed. On CUDA/ROCm each hot
call sits between two events recorded on the handle's stream; elsewhere it
sits between two synchronizing host timestamps.
"""

from __future__ import annotations

import contextlib
import time
from dataclasses import dataclass
from typing import Any, Callable, Iterator, Optional, Tuple

from harness.buffers import SuiteBuffers
from harness.diagnostics import log
from harness.errors import check_status
from harness.init_data import init_data
from harness.interfaces import KernelSuite, RunConfig, TimingSample
from kernels.solver.handle import Handle
from kernels.solver.layer_log import LayerMode, ProfileLog


COLD_CALLS = 2


def time_us_no_sync() -> float:
    return time.perf_counter() * 1e6


def time_us_sync(handle: Handle) -> float:
    handle.synchronize()
    return time.perf_counter() * 1e6


def time_call_us(handle: Handle, fn: Callable[[], Any]) -> Tuple[Any, float]:
    """Run `fn` once on the handle; return its result and the device time in microseconds."""
    if handle.is_cuda:
        import torch  # noqa: PLC0415

        stream = handle.stream
        start = torch.cuda.Event(enable_timing=True)
        end = torch.cuda.Event(enable_timing=True)
        start.record(stream)
        out = fn()
        end.record(stream)
        end.synchronize()
        return out, float(start.elapsed_time(end)) * 1e3
    start_us = time_us_sync(handle)
    out = fn()
    return out, time_us_sync(handle) - start_us


@dataclass(frozen=True)
class ProfileConfig:
    """
    Logging-layer profiling for the hot calls. `depth` is the maximum call
    nesting recorded (0 disables profiling); `kernels` adds individual kernel
    launches to the recorded paths.
    """

    depth: int = 0
    kernels: bool = False

    @property
    def enabled(self) -> bool:
        return int(self.depth) > 0

    @contextlib.contextmanager
    def armed(self, handle: Handle) -> Iterator[ProfileLog]:
        layer = handle.log
        prev_mode, prev_levels, prev_profile = layer.mode, layer.max_levels, layer.profile
        collected = ProfileLog()
        if not self.enabled:
            yield collected
            return
        mode = LayerMode.LOG_PROFILE | (LayerMode.LOG_KERNEL if self.kernels else LayerMode.NONE)
        layer.profile = collected
        layer.set_layer_mode(mode)
        layer.set_max_levels(int(self.depth))
        try:
            yield collected
        finally:
            layer.set_layer_mode(prev_mode)
            layer.max_levels = prev_levels
            layer.profile = prev_profile


def get_perf_data(
    suite: KernelSuite,
    handle: Handle,
    cfg: RunConfig,
    buffers: SuiteBuffers,
    profiler: Optional[ProfileConfig] = None,
) -> Tuple[TimingSample, ProfileLog]:
    cpu_time_us = 0.0
    if not cfg.perf:
        init_data(suite, buffers, generate=True, transfer=False, seed=cfg.seed)
        start = time_us_no_sync()
        suite.reference(cfg.n, cfg.incx, buffers.host_arrays())
        cpu_time_us = time_us_no_sync() - start

    for i in range(COLD_CALLS):
        init_data(suite, buffers, generate=True, transfer=True, seed=cfg.seed)
        check_status(suite.call(handle, cfg.n, cfg.incx, buffers.ptrs(), cfg.dtype), f"{suite.name} (cold call {i})")

    prof = profiler if profiler is not None else ProfileConfig(cfg.profile, cfg.profile_kernels)
    gpu_time_us = 0.0
    with prof.armed(handle) as plog:
        for _ in range(cfg.iters):
            init_data(suite, buffers, generate=True, transfer=True, seed=cfg.seed)
            ptrs = buffers.ptrs()
            st, elapsed_us = time_call_us(handle, lambda: suite.call(handle, cfg.n, cfg.incx, ptrs, cfg.dtype))
            gpu_time_us += elapsed_us
            check_status(st, f"{suite.name} (hot call)")
    gpu_time_us /= cfg.iters

    log(f"[{suite.name}] cpu_time_us={cpu_time_us:.3f} gpu_time_us={gpu_time_us:.3f} (iters={cfg.iters})")
    return TimingSample(cpu_time_us=cpu_time_us, gpu_time_us=gpu_time_us), plog


__all__ = ["COLD_CALLS", "time_us_no_sync", "time_us_sync", "time_call_us", "ProfileConfig", "get_perf_data"]
