"""
Environment knobs for the harness. Command-line flags take precedence.

  SOLVERCHECK_DEVICE              torch device string (default: cuda if available, else cpu)
  SOLVERCHECK_SEED                random init seed (default: 69069)
  SOLVERCHECK_REALLOC_ON_DEMAND   1 = handle grows its workspace lazily (default: 1)
  SOLVERCHECK_USE_TRITON          1 = real-typed kernels use Triton on CUDA (default: 1)
  SOLVERCHECK_VERBOSE             >0 enables progress lines on stderr (default: 0)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from verify.random_init import DEFAULT_SEED


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not str(raw).strip():
        return int(default)
    try:
        return int(str(raw).strip())
    except Exception:
        return int(default)


FALSY = frozenset({"0", "false", "no", "off"})
TRUTHY = frozenset({"1", "true", "yes", "on"})


def parse_flag(raw: str) -> bool:
    s = str(raw).strip().lower()
    if s in TRUTHY:
        return True
    if s in FALSY:
        return False
    raise ValueError(f"not a boolean flag: {raw!r}")


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not str(raw).strip():
        return bool(default)
    return str(raw).strip().lower() not in FALSY


@dataclass(frozen=True)
class EnvConfig:
    device: Optional[str]
    seed: int
    realloc_on_demand: bool
    use_triton: bool
    verbose: int


def load_env() -> EnvConfig:
    device = os.getenv("SOLVERCHECK_DEVICE")
    return EnvConfig(
        device=(str(device).strip() or None) if device is not None else None,
        seed=_env_int("SOLVERCHECK_SEED", DEFAULT_SEED),
        realloc_on_demand=_env_flag("SOLVERCHECK_REALLOC_ON_DEMAND", True),
        use_triton=_env_flag("SOLVERCHECK_USE_TRITON", True),
        verbose=max(0, _env_int("SOLVERCHECK_VERBOSE", 0)),
    )


def make_handle(env: Optional[EnvConfig] = None, *, device: Optional[str] = None):
    from kernels.solver.handle import Handle  # noqa: PLC0415

    env = env or load_env()
    return Handle(
        device if device is not None else env.device,
        realloc_on_demand=env.realloc_on_demand,
        use_triton=env.use_triton,
    )


__all__ = ["FALSY", "TRUTHY", "parse_flag", "EnvConfig", "load_env", "make_handle"]
