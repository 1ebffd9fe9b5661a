"""
Benchmark / test client for the solver kernels.

Runs one kernel shape through the verification protocol: argument checking,
workspace negotiation, correctness check against the host reference, and
steady-state timing.

Typical usage:
  PYTHONPATH=. python scripts/bench.py -f larfg -n 50 --incx 2 --iters 10 --precision d --unit_check
  PYTHONPATH=. python scripts/bench.py -f larfg -n 4096 --perf --profile 2 --profile_kernels
  PYTHONPATH=. python scripts/bench.py -f larfg -n 1000 --mem_query
  PYTHONPATH=. python scripts/bench.py -f lacgv --bad_arg --precision c
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional


ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from harness import registry  # noqa: E402
from harness.bad_args import check_bad_args  # noqa: E402
from harness.config import load_env, make_handle  # noqa: E402
from harness.diagnostics import DiagnosticEngine, CheckLocation, diagnose_exception  # noqa: E402
from harness.errors import HarnessError  # noqa: E402
from harness.interfaces import RunConfig  # noqa: E402
from harness.orchestrator import run_test  # noqa: E402
from harness.report import JsonReporter, MultiReporter, TextReporter  # noqa: E402


def _log(msg: str) -> None:
    print(str(msg), file=sys.stderr, flush=True)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="solver kernel benchmark/test client")
    ap.add_argument("-f", "--function", default="larfg", help=f"kernel suite ({', '.join(registry.names())})")
    ap.add_argument("-n", "--n", type=int, default=128)
    ap.add_argument("--incx", type=int, default=1)
    ap.add_argument("--iters", type=int, default=10, help="hot calls to time")
    ap.add_argument("-r", "--precision", choices=["s", "d", "c", "z"], default="s")
    ap.add_argument("--perf", action="store_true", help="only report device time")
    ap.add_argument("--mem_query", action="store_true", help="only report the workspace size")
    ap.add_argument("--unit_check", action="store_true", help="fail when error > n * eps")
    ap.add_argument("--norm_check", type=int, choices=[0, 1], default=1)
    ap.add_argument("--timing", type=int, choices=[0, 1], default=1)
    ap.add_argument("--profile", type=int, default=0, help="profiling depth (0 disables)")
    ap.add_argument("--profile_kernels", action="store_true")
    ap.add_argument("--bad_arg", action="store_true", help="only run argument checking")
    ap.add_argument("--seed", type=int, default=None)
    ap.add_argument("--device", default=None)
    ap.add_argument("--json", default=None, help="also write the report as JSON to this path")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    env = load_env()
    engine = DiagnosticEngine()
    loc = CheckLocation(str(args.function), n=int(args.n), incx=int(args.incx))

    try:
        suite = registry.get(str(args.function))
        handle = make_handle(env, device=args.device)
        if args.bad_arg:
            check_bad_args(suite, handle, dtype=RunConfig(precision=args.precision).dtype, engine=engine)
            _log(f"[{suite.name}] argument checks passed ({len(engine.items)} cases)")
            return 0

        cfg = RunConfig.from_mapping(
            {
                "n": args.n,
                "incx": args.incx,
                "iters": args.iters,
                "unit_check": args.unit_check,
                "norm_check": args.norm_check,
                "timing": args.timing,
                "perf": args.perf,
                "mem_query": args.mem_query,
                "profile": args.profile,
                "profile_kernels": args.profile_kernels,
                "precision": args.precision,
                "seed": env.seed if args.seed is None else args.seed,
            }
        )
        json_rep = JsonReporter() if args.json else None
        reporter = MultiReporter(TextReporter(), json_rep) if json_rep is not None else TextReporter()
        result = run_test(suite, cfg, handle=handle, reporter=reporter)
    except (HarnessError, AssertionError, KeyError, ValueError) as e:
        diag = diagnose_exception(e, location=loc)
        engine.items.append(diag)
        _log(engine.format_rich(diag))
        return 1

    if json_rep is not None:
        json_rep.write(Path(args.json), extra={"config": cfg.to_json_dict(), "result": result.to_json_dict()})
        _log(f"[{suite.name}] wrote {args.json}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
