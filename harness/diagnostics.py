"""
Diagnostics for harness argument checks and run failures.

Lightweight (no color dependencies):
  - `log()` progress lines on stderr, gated by SOLVERCHECK_VERBOSE
  - structured diagnostics with an optional check location
  - rich multi-line formatting (Clang-like)
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from typing import List, Literal, Optional

from harness.config import load_env


Level = Literal["error", "warning", "info"]


def log(msg: str, *, level: int = 1) -> None:
    if load_env().verbose >= int(level):
        print(str(msg), file=sys.stderr, flush=True)


@dataclass(frozen=True)
class CheckLocation:
    kernel: str
    argument: Optional[str] = None
    n: Optional[int] = None
    incx: Optional[int] = None

    def format(self) -> str:
        parts = [self.kernel]
        if self.argument is not None:
            parts.append(f"arg={self.argument}")
        if self.n is not None:
            parts.append(f"n={self.n}")
        if self.incx is not None:
            parts.append(f"incx={self.incx}")
        return " ".join(parts)


@dataclass
class Diagnostic:
    level: Level
    message: str
    location: Optional[CheckLocation] = None
    suggestions: List[str] = field(default_factory=list)
    notes: List[str] = field(default_factory=list)
    related: List["Diagnostic"] = field(default_factory=list)


class DiagnosticEngine:
    def __init__(self) -> None:
        self.items: List[Diagnostic] = []

    def emit(self, diag: Diagnostic) -> None:
        self.items.append(diag)
        log(self.format_rich(diag), level=2 if diag.level == "info" else 1)

    @property
    def errors(self) -> List[Diagnostic]:
        return [d for d in self.items if d.level == "error"]

    def format_rich(self, diag: Diagnostic) -> str:
        lines: List[str] = [f"{diag.level.upper()}: {diag.message}"]
        if diag.location is not None:
            lines.append(f"  -> {diag.location.format()}")
        for n in diag.notes:
            lines.append(f"Note: {n}")
        for s in diag.suggestions:
            lines.append(f"Hint: {s}")
        for r in diag.related:
            lines.append("")
            lines.append(self.format_rich(r))
        return "\n".join(lines)


def diagnose_exception(exc: BaseException, *, location: Optional[CheckLocation] = None) -> Diagnostic:
    """Turn a run failure into a diagnostic with a hint where one is known."""
    from harness.errors import AllocationError, KernelFailure, TransferError, UnexpectedStatus  # noqa: PLC0415
    from kernels.solver.status import Status  # noqa: PLC0415
    from verify.tolerances import ToleranceExceeded  # noqa: PLC0415

    d = Diagnostic("error", f"{type(exc).__name__}: {exc}", location=location)
    if isinstance(exc, ToleranceExceeded):
        d.notes.append(f"bound = n * eps = {exc.bound:.6e}")
    elif isinstance(exc, UnexpectedStatus):
        d.notes.append(f"argument checking returned {exc.got} where {exc.expected} was required")
    elif isinstance(exc, KernelFailure):
        if exc.status == Status.MEMORY_ERROR:
            d.suggestions.append("set SOLVERCHECK_REALLOC_ON_DEMAND=1 or run with --mem_query first")
    elif isinstance(exc, (AllocationError, TransferError)):
        d.suggestions.append("check free device memory, or select another device with --device")
    if exc.__cause__ is not None:
        d.related.append(diagnose_exception(exc.__cause__))
    return d


__all__ = ["log", "CheckLocation", "Diagnostic", "DiagnosticEngine", "diagnose_exception"]
