"""
One verification run of one kernel shape:

    setup -> rejected            (invalid size: argument checking only)
          -> size_reported       (memory query only)
          -> quick_return        (n == 0)
          -> run -> completed    (check and/or time, then report)

Nothing is retried: every failure raises out of `run_test`.
"""

from __future__ import annotations

from typing import Callable, Optional

from harness.buffers import allocate_buffers, null_pointers
from harness.config import make_handle
from harness.diagnostics import log
from harness.errors import expect_status
from harness.evaluator import get_error
from harness.interfaces import KernelSuite, Reporter, RunConfig, RunResult, RunState, TimingSample
from harness.profiler import ProfileConfig, get_perf_data
from harness.workspace import negotiate_workspace
from kernels.solver.handle import Handle
from kernels.solver.status import Status
from verify.tolerances import check_error


def _report(reporter: Reporter, cfg: RunConfig, error: float, timing: TimingSample, profile) -> None:
    if not cfg.perf:
        reporter.section("Arguments", {"n": cfg.n, "inc": cfg.incx})
        results = {"cpu_time_us": timing.cpu_time_us, "gpu_time_us": timing.gpu_time_us}
    else:
        results = {"gpu_time_us": timing.gpu_time_us}
    if cfg.norm_check:
        results["error"] = error
    # perf mode prints a bare row of values
    reporter.section("Results", results, header=not cfg.perf)
    if profile:
        reporter.section("Profile", profile)


def run_test(
    suite: KernelSuite,
    cfg: RunConfig,
    *,
    handle: Optional[Handle] = None,
    reporter: Optional[Reporter] = None,
    tolerance_check: Callable[[str, float, int], None] = check_error,
) -> RunResult:
    handle = handle if handle is not None else make_handle()
    what = f"{suite.name}(n={cfg.n}, incx={cfg.incx}, dtype={cfg.dtype})"
    log(f"[{suite.name}] run n={cfg.n} incx={cfg.incx} dtype={cfg.dtype} device={handle.device}")

    if cfg.invalid_size:
        st = suite.call(handle, cfg.n, cfg.incx, null_pointers(suite), cfg.dtype)
        expect_status(st, Status.INVALID_SIZE, what)
        if cfg.timing and reporter is not None:
            reporter.inform("invalid_size")
        return RunResult(RunState.REJECTED)

    size = negotiate_workspace(suite, handle, cfg)
    if cfg.mem_query:
        if reporter is not None:
            reporter.inform("mem_query", size=size)
        return RunResult(RunState.SIZE_REPORTED, workspace_size=size)

    buffers = allocate_buffers(suite, handle, cfg.n, cfg.incx, cfg.dtype, with_result=cfg.checking)

    if cfg.n == 0:
        st = suite.call(handle, cfg.n, cfg.incx, buffers.ptrs(), cfg.dtype)
        expect_status(st, Status.SUCCESS, what)
        if cfg.timing and reporter is not None:
            reporter.inform("quick_return")
        return RunResult(RunState.QUICK_RETURN, workspace_size=size)

    error = 0.0
    if cfg.checking:
        error = get_error(suite, handle, cfg, buffers)

    timing = TimingSample()
    profile = {}
    if cfg.timing:
        timing, plog = get_perf_data(suite, handle, cfg, buffers, ProfileConfig(cfg.profile, cfg.profile_kernels))
        profile = plog.to_json_dict()

    if cfg.unit_check:
        tolerance_check(cfg.dtype, error, cfg.n)

    if cfg.timing and reporter is not None:
        _report(reporter, cfg, error, timing, profile)

    return RunResult(RunState.COMPLETED, error=error, timing=timing, workspace_size=size, profile=profile)


__all__ = ["run_test"]
