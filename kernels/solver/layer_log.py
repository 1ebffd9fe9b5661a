"""
Per-handle logging layer.

Entry points open a `scope()` for themselves and for every device kernel they
launch. What gets recorded depends on the layer mode and the maximum nesting
level configured on the handle:

  - LOG_TRACE:   one line per call (name + arguments)
  - LOG_PROFILE: call counts per call path
  - LOG_KERNEL:  also open scopes for individual kernel launches

Profiled scopes are additionally wrapped in `torch.profiler.record_function`
so external tracers (torch profiler, nsys/rocprof via NVTX/roctx) see them.
"""

from __future__ import annotations

import contextlib
from dataclasses import dataclass, field
from enum import IntFlag
from typing import Any, Dict, Iterator, List, Tuple

from kernels.solver.status import Status


class LayerMode(IntFlag):
    NONE = 0
    LOG_TRACE = 1
    LOG_PROFILE = 4
    LOG_KERNEL = 8


@dataclass
class ProfileLog:
    calls: Dict[Tuple[str, ...], int] = field(default_factory=dict)

    def record(self, path: Tuple[str, ...]) -> None:
        self.calls[path] = self.calls.get(path, 0) + 1

    def count(self, *path: str) -> int:
        return int(self.calls.get(tuple(path), 0))

    def to_json_dict(self) -> Dict[str, int]:
        return {"/".join(k): int(v) for k, v in sorted(self.calls.items())}


class LayerLog:
    def __init__(self) -> None:
        self.mode = LayerMode.NONE
        self.max_levels = 1
        self.profile = ProfileLog()
        self.trace: List[str] = []
        self._stack: List[str] = []

    def set_layer_mode(self, mode: LayerMode) -> Status:
        self.mode = LayerMode(mode)
        return Status.SUCCESS

    def set_max_levels(self, levels: int) -> Status:
        if int(levels) < 1:
            return Status.INVALID_VALUE
        self.max_levels = int(levels)
        return Status.SUCCESS

    @property
    def depth(self) -> int:
        return len(self._stack)

    @contextlib.contextmanager
    def scope(self, name: str, *, kernel: bool = False, **args: Any) -> Iterator[None]:
        if self.mode == LayerMode.NONE or (kernel and not (self.mode & LayerMode.LOG_KERNEL)):
            yield
            return
        self._stack.append(str(name))
        try:
            if len(self._stack) > self.max_levels:
                yield
                return
            if self.mode & LayerMode.LOG_TRACE:
                arg_s = " ".join(f"{k}={v}" for k, v in args.items())
                self.trace.append(f"{'  ' * (len(self._stack) - 1)}{name} {arg_s}".rstrip())
            if self.mode & LayerMode.LOG_PROFILE:
                self.profile.record(tuple(self._stack))
                with _record_function(str(name)):
                    yield
            else:
                yield
        finally:
            self._stack.pop()


def _record_function(name: str):
    from torch.profiler import record_function  # noqa: PLC0415

    return record_function(name)


__all__ = ["LayerMode", "LayerLog", "ProfileLog"]
