import io
import json

import pytest

from harness import registry
from harness.config import load_env, make_handle
from harness.diagnostics import DiagnosticEngine, diagnose_exception
from harness.errors import KernelFailure, TransferError
from harness.interfaces import RunConfig
from harness.report import JsonReporter, MultiReporter, TextReporter
from kernels.solver import Status
from verify.tolerances import ToleranceExceeded


def test_registry_lazy_builtins_and_unknown():
    assert registry.get("larfg").name == "larfg"
    assert registry.get("lacgv").pointer_args == ("x",)
    assert {"larfg", "lacgv"} <= set(registry.names())
    with pytest.raises(KeyError):
        registry.get("nope")


def test_registry_accepts_custom_suite():
    class Custom:
        name = "custom_suite"

    registry.register(Custom())
    assert registry.get("custom_suite").name == "custom_suite"


def test_run_config_from_mapping():
    cfg = RunConfig.from_mapping({"n": "50", "incx": 2, "unit_check": "1", "norm_check": 0, "precision": "z"})
    assert cfg.n == 50 and cfg.unit_check and not cfg.norm_check
    assert cfg.dtype == "c128"
    assert not cfg.invalid_size
    assert RunConfig(n=-1).invalid_size and RunConfig(incx=0).invalid_size


def test_run_config_from_mapping_parses_flag_words():
    cfg = RunConfig.from_mapping({"unit_check": "false", "timing": "no", "norm_check": "OFF", "perf": " on "})
    assert not cfg.unit_check and not cfg.timing and not cfg.norm_check
    assert cfg.perf
    assert RunConfig.from_mapping({"mem_query": "yes"}).mem_query
    with pytest.raises(ValueError, match="boolean"):
        RunConfig.from_mapping({"unit_check": "maybe"})


def test_run_config_rejects_unconsumed_and_bad_values():
    with pytest.raises(ValueError, match="unconsumed"):
        RunConfig.from_mapping({"n": 1, "lda": 4})
    with pytest.raises(ValueError):
        RunConfig(iters=0)
    with pytest.raises(ValueError):
        RunConfig(precision="h")


def test_text_reporter_tables():
    out = io.StringIO()
    rep = TextReporter(out)
    rep.inform("mem_query", size=128)
    rep.section("Arguments", {"n": 50, "inc": 2})
    lines = out.getvalue().splitlines()
    assert lines[0] == "Calculated dynamic memory size: 128 bytes"
    assert lines[2] == "Arguments:"
    assert lines[3].split() == ["n", "inc"]
    assert lines[4].split() == ["50", "2"]
    with pytest.raises(KeyError):
        rep.inform("bogus")


def test_json_reporter_write(tmp_path):
    rep = JsonReporter()
    MultiReporter(rep, TextReporter(io.StringIO())).section("Results", {"gpu_time_us": 1.5})
    path = tmp_path / "out" / "r.json"
    rep.write(path, extra={"result": {"state": "completed"}})
    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["sections"]["Results"]["gpu_time_us"] == 1.5
    assert data["result"]["state"] == "completed"


def test_env_config(monkeypatch):
    monkeypatch.setenv("SOLVERCHECK_SEED", "123")
    monkeypatch.setenv("SOLVERCHECK_REALLOC_ON_DEMAND", "0")
    monkeypatch.setenv("SOLVERCHECK_VERBOSE", "not-a-number")
    monkeypatch.setenv("SOLVERCHECK_DEVICE", "cpu")
    env = load_env()
    assert env.seed == 123
    assert not env.realloc_on_demand
    assert env.verbose == 0
    h = make_handle(env)
    assert str(h.device) == "cpu"
    assert not h.realloc_on_demand


def test_diagnose_exception_hints():
    d = diagnose_exception(KernelFailure("larfg", Status.MEMORY_ERROR))
    assert d.level == "error" and d.suggestions
    d = diagnose_exception(ToleranceExceeded(1.0, 0.5, n=10, dtype="f32"))
    assert "bound" in d.notes[0]


def test_diagnose_exception_chains_the_cause():
    try:
        try:
            raise RuntimeError("CUDA error: out of memory")
        except RuntimeError as e:
            raise TransferError("host->device copy failed") from e
    except TransferError as exc:
        d = diagnose_exception(exc)
    assert len(d.related) == 1
    assert d.related[0].message.startswith("RuntimeError")
    text = DiagnosticEngine().format_rich(d)
    assert "ERROR: TransferError" in text and "ERROR: RuntimeError" in text
    assert diagnose_exception(KernelFailure("larfg", Status.MEMORY_ERROR)).related == []
