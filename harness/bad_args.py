"""
Defensive argument checking.

Every pointer argument gets a one-element device dummy, then:
  - null handle                     -> invalid_handle
  - each pointer nulled in turn     -> invalid_pointer
  - n = 0 with every pointer null   -> success (quick return wins over pointer checks)
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from harness.buffers import DeviceStridedVector, null_pointers
from harness.diagnostics import Diagnostic, DiagnosticEngine, CheckLocation
from harness.errors import UnexpectedStatus
from harness.interfaces import KernelSuite
from kernels.solver.handle import Handle
from kernels.solver.status import Status


def _check_case(
    engine: DiagnosticEngine,
    suite: KernelSuite,
    handle: Optional[Handle],
    n: int,
    incx: int,
    ptrs: Dict[str, Any],
    dtype: str,
    *,
    expected: Status,
    what: str,
    argument: Optional[str] = None,
) -> None:
    got = suite.call(handle, n, incx, ptrs, dtype)
    loc = CheckLocation(suite.name, argument=argument, n=n, incx=incx)
    if got != expected:
        engine.emit(Diagnostic("error", f"{what}: expected {expected}, got {got}", location=loc))
        raise UnexpectedStatus(f"{suite.name} {what}", expected, got)
    engine.emit(Diagnostic("info", f"{what}: {got}", location=loc))


def check_bad_args(
    suite: KernelSuite,
    handle: Handle,
    *,
    n: int = 2,
    incx: int = 1,
    dtype: str = "f32",
    engine: Optional[DiagnosticEngine] = None,
) -> DiagnosticEngine:
    engine = engine if engine is not None else DiagnosticEngine()
    dummies = {name: DeviceStridedVector(1, 1, dtype, handle.device) for name in suite.pointer_args}
    for d in dummies.values():
        d.memcheck()
    ptrs = {name: d.data() for name, d in dummies.items()}

    _check_case(engine, suite, None, n, incx, ptrs, dtype, expected=Status.INVALID_HANDLE, what="null handle")
    for name in suite.pointer_args:
        nulled = dict(ptrs)
        nulled[name] = None
        _check_case(engine, suite, handle, n, incx, nulled, dtype, expected=Status.INVALID_POINTER, what=f"null {name}", argument=name)
    _check_case(engine, suite, handle, 0, incx, null_pointers(suite), dtype, expected=Status.SUCCESS, what="n=0 with null pointers")
    return engine


__all__ = ["check_bad_args"]
