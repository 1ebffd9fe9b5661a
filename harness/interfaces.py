"""
Types shared by the harness components and the kernel suites.

Keep this module dependency-light (no torch/triton) so suites and reporters can
import it without pulling the device runtime.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Protocol, Tuple

import numpy as np

from harness.config import parse_flag
from kernels.solver.dtypes import PRECISION_TO_DTYPE, canonical_dtype
from kernels.solver.status import Status
from verify.random_init import DEFAULT_SEED
from verify.reference import HostReference


@dataclass(frozen=True)
class RunConfig:
    """
    One invocation shape of a kernel plus what to do with it.

    `iters` is the number of hot (timed) calls. `perf` skips the host reference
    timing and the argument/results tables; `mem_query` only reports the
    workspace size.
    """

    n: int = 128
    incx: int = 1
    iters: int = 10
    unit_check: bool = False
    norm_check: bool = True
    timing: bool = True
    perf: bool = False
    mem_query: bool = False
    profile: int = 0
    profile_kernels: bool = False
    precision: str = "s"
    seed: int = DEFAULT_SEED

    def __post_init__(self) -> None:
        if int(self.iters) < 1:
            raise ValueError(f"iters must be >= 1, got {self.iters}")
        if int(self.profile) < 0:
            raise ValueError(f"profile depth must be >= 0, got {self.profile}")
        if str(self.precision) not in PRECISION_TO_DTYPE:
            raise ValueError(f"unknown precision {self.precision!r}; expected one of {sorted(PRECISION_TO_DTYPE)}")

    @property
    def dtype(self) -> str:
        return canonical_dtype(self.precision)

    @property
    def invalid_size(self) -> bool:
        return int(self.n) < 0 or int(self.incx) < 1

    @property
    def checking(self) -> bool:
        return bool(self.unit_check or self.norm_check)

    @classmethod
    def from_mapping(cls, m: Mapping[str, Any]) -> "RunConfig":
        """Build a config from loose values; every key must be consumed."""
        known = {f.name: f for f in fields(cls)}
        extra = sorted(k for k in m if k not in known)
        if extra:
            raise ValueError(f"unconsumed arguments: {', '.join(extra)}")
        kw: Dict[str, Any] = {}
        for k, v in m.items():
            default = known[k].default
            if isinstance(default, bool):
                kw[k] = parse_flag(v) if isinstance(v, str) else bool(v)
            elif isinstance(default, int):
                kw[k] = int(v)
            else:
                kw[k] = str(v)
        return cls(**kw)

    def to_json_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class TimingSample:
    cpu_time_us: float = 0.0
    gpu_time_us: float = 0.0


class RunState(Enum):
    REJECTED = "rejected"
    SIZE_REPORTED = "size_reported"
    QUICK_RETURN = "quick_return"
    COMPLETED = "completed"


@dataclass
class RunResult:
    state: RunState
    error: float = 0.0
    timing: TimingSample = field(default_factory=TimingSample)
    workspace_size: Optional[int] = None
    profile: Dict[str, int] = field(default_factory=dict)

    def to_json_dict(self) -> Dict[str, Any]:
        return {
            "state": self.state.value,
            "error": float(self.error),
            "cpu_time_us": float(self.timing.cpu_time_us),
            "gpu_time_us": float(self.timing.gpu_time_us),
            "workspace_size": self.workspace_size,
            "profile": dict(self.profile),
        }


@dataclass(frozen=True)
class BufferSpec:
    """A strided vector of `size` logical elements at increment `inc`."""

    name: str
    size: int
    inc: int = 1


class KernelSuite(Protocol):
    """
    Everything the harness needs to know about one kernel family.

    `pointer_args` are the device buffers the entry point takes (in order),
    `inputs` those filled by the initializer, `compared` those copied back and
    checked against the host reference.
    """

    name: str
    pointer_args: Tuple[str, ...]
    inputs: Tuple[str, ...]
    compared: Tuple[str, ...]
    reference: HostReference

    def buffer_specs(self, n: int, incx: int) -> List[BufferSpec]: ...

    def call(self, handle: Any, n: int, incx: int, ptrs: Mapping[str, Any], dtype: str) -> Status: ...

    def error(
        self,
        n: int,
        incx: int,
        host: Mapping[str, np.ndarray],
        result: Mapping[str, np.ndarray],
    ) -> float: ...


class Reporter(Protocol):
    def inform(self, event: str, **fields: Any) -> None: ...

    def section(self, title: str, values: Mapping[str, Any], *, header: bool = True) -> None: ...


__all__ = [
    "RunConfig",
    "TimingSample",
    "RunState",
    "RunResult",
    "BufferSpec",
    "KernelSuite",
    "Reporter",
]
