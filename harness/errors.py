"""
Failure classes raised by the harness.

None of these are retried: an unexpected status from the library under test,
a failed transfer or allocation, or an error above tolerance ends the run.
"""

from __future__ import annotations

from typing import Iterable, Optional

from kernels.solver.status import QUERY_OK, Status
from verify.tolerances import ToleranceExceeded


class HarnessError(RuntimeError):
    pass


class KernelFailure(HarnessError):
    def __init__(self, what: str, status: Status) -> None:
        super().__init__(f"{what} failed with status {status}")
        self.what = str(what)
        self.status = status


class UnexpectedStatus(HarnessError, AssertionError):
    def __init__(self, what: str, expected: Status, got: Status) -> None:
        super().__init__(f"{what}: expected {expected}, got {got}")
        self.what = str(what)
        self.expected = expected
        self.got = got


class TransferError(HarnessError):
    pass


class AllocationError(HarnessError):
    pass


def check_status(st: Status, what: str) -> None:
    """Raise KernelFailure unless `st` is SUCCESS."""
    if st != Status.SUCCESS:
        raise KernelFailure(what, st)


def expect_status(st: Status, expected: Status, what: str) -> None:
    if st != expected:
        raise UnexpectedStatus(what, expected, st)


def check_alloc_query(st: Status, what: str, *, accepted: Optional[Iterable[Status]] = None) -> None:
    ok = frozenset(accepted) if accepted is not None else QUERY_OK
    if st not in ok:
        raise KernelFailure(what, st)


__all__ = [
    "HarnessError",
    "KernelFailure",
    "UnexpectedStatus",
    "TransferError",
    "AllocationError",
    "ToleranceExceeded",
    "check_status",
    "expect_status",
    "check_alloc_query",
]
