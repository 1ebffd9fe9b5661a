import importlib.util
import json
from pathlib import Path

import pytest


ROOT = Path(__file__).resolve().parents[1]


@pytest.fixture(scope="module")
def bench():
    spec = importlib.util.spec_from_file_location("solvercheck_bench", ROOT / "scripts" / "bench.py")
    mod = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(mod)
    return mod


def test_unit_check_run_writes_json(bench, tmp_path, capsys):
    out = tmp_path / "larfg.json"
    argv = ["-f", "larfg", "-n", "50", "--incx", "2", "--precision", "d", "--unit_check", "--iters", "2", "--device", "cpu", "--json", str(out)]
    assert bench.main(argv) == 0
    text = capsys.readouterr().out
    assert "Arguments:" in text and "Results:" in text
    data = json.loads(out.read_text(encoding="utf-8"))
    assert data["result"]["state"] == "completed"
    assert data["config"]["n"] == 50
    assert data["sections"]["Arguments"] == {"n": 50, "inc": 2}


def test_invalid_size_and_mem_query(bench, capsys):
    assert bench.main(["-n", "-1", "--device", "cpu"]) == 0
    assert "Invalid value in arguments" in capsys.readouterr().out
    assert bench.main(["-n", "3000", "--precision", "d", "--mem_query", "--device", "cpu"]) == 0
    assert "Calculated dynamic memory size: 64 bytes" in capsys.readouterr().out


def test_bad_arg_mode(bench):
    assert bench.main(["-f", "lacgv", "--bad_arg", "--precision", "c", "--device", "cpu"]) == 0


def test_failures_exit_nonzero_with_diagnostic(bench, capsys):
    assert bench.main(["-f", "nope", "--device", "cpu"]) == 1
    assert "ERROR: KeyError" in capsys.readouterr().err
    assert bench.main(["-n", "10", "--iters", "0", "--device", "cpu"]) == 1
