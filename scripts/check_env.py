"""
Environment validation script.

Reports what is available in the current environment: Python, the numeric
stack, and the device the harness would run on. Triton is only required when
a CUDA/ROCm device is present.
"""

from __future__ import annotations

import argparse
import importlib
import os
import platform
import sys
from dataclasses import dataclass
from pathlib import Path


ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


@dataclass(frozen=True)
class CheckResult:
    name: str
    ok: bool
    detail: str = ""
    hint: str = ""


def _check_python() -> CheckResult:
    v = sys.version_info
    ok = (v.major, v.minor) >= (3, 10)
    return CheckResult("python", ok, detail=f"{v.major}.{v.minor}.{v.micro}", hint="need Python>=3.10" if not ok else "")


def _check_import(mod: str, *, required: bool, hint: str) -> CheckResult:
    try:
        m = importlib.import_module(mod)
        ver = getattr(m, "__version__", None)
        detail = f"ok{(' ' + str(ver)) if ver else ''}"
        return CheckResult(mod, True, detail=detail)
    except Exception as e:
        return CheckResult(mod, not required, detail=f"{type(e).__name__}: {e}", hint=(hint if required else f"optional: {hint}"))


def _check_device() -> CheckResult:
    try:
        from harness.config import load_env, make_handle  # noqa: PLC0415

        handle = make_handle(load_env())
    except Exception as e:
        return CheckResult("device", False, detail=f"{type(e).__name__}: {e}", hint="set SOLVERCHECK_DEVICE to a valid torch device")
    detail = str(handle.device)
    if handle.is_cuda:
        import torch  # noqa: PLC0415

        detail += f" ({torch.cuda.get_device_name(handle.device)})"
    return CheckResult("device", True, detail=detail)


def main() -> None:
    ap = argparse.ArgumentParser()
    ap.add_argument("--strict", action="store_true", help="treat optional components as required (fail if missing)")
    args = ap.parse_args()

    print(f"platform: {platform.platform()}")
    print(f"cwd: {os.getcwd()}")

    checks: list[CheckResult] = []
    checks.append(_check_python())
    checks.append(_check_import("numpy", required=True, hint="pip install -e ."))
    checks.append(_check_import("torch", required=True, hint="pip install torch (CUDA/ROCm build for device runs)"))
    checks.append(_check_import("pytest", required=bool(args.strict), hint="pip install -e '.[test]'"))
    dev = _check_device()
    checks.append(dev)
    needs_triton = bool(args.strict) or (dev.ok and dev.detail.startswith("cuda"))
    checks.append(_check_import("triton", required=needs_triton, hint="pip install triton"))

    ok_all = True
    for c in checks:
        status = "OK" if c.ok else "FAIL"
        print(f"[{status}] {c.name}: {c.detail}")
        if c.hint and not c.detail.startswith("ok"):
            print(f"  hint: {c.hint}")
        ok_all = ok_all and bool(c.ok)

    raise SystemExit(0 if ok_all else 1)


if __name__ == "__main__":
    main()
