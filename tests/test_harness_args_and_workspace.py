import pytest

from harness.bad_args import check_bad_args
from harness.diagnostics import DiagnosticEngine
from harness.errors import KernelFailure, UnexpectedStatus
from harness.interfaces import RunConfig
from harness.registry import get
from harness.suites.larfg import LarfgSuite
from harness.workspace import negotiate_workspace, query_workspace
from kernels.solver import Handle, Status


@pytest.mark.parametrize("name,dtype,cases", [("larfg", "f32", 5), ("larfg", "c128", 5), ("lacgv", "c64", 3)])
def test_bad_args_pass_for_builtin_suites(name, dtype, cases):
    engine = check_bad_args(get(name), Handle("cpu"), dtype=dtype)
    assert len(engine.items) == cases
    assert engine.errors == []


class _IgnoresNullTau(LarfgSuite):
    def call(self, handle, n, incx, ptrs, dtype):
        import torch

        ptrs = dict(ptrs)
        if ptrs.get("tau") is None:
            ptrs["tau"] = torch.zeros((1,), dtype=torch.float32)
        return super().call(handle, n, incx, ptrs, dtype)


def test_bad_args_detects_missing_pointer_check():
    engine = DiagnosticEngine()
    with pytest.raises(UnexpectedStatus) as ei:
        check_bad_args(_IgnoresNullTau(), Handle("cpu"), engine=engine)
    assert ei.value.expected == Status.INVALID_POINTER
    assert len(engine.errors) == 1
    assert engine.errors[0].location.argument == "tau"


def test_repeated_query_is_stable():
    suite = get("larfg")
    h = Handle("cpu")
    sizes = {query_workspace(suite, h, 3000, 1, "f64") for _ in range(3)}
    assert sizes == {64}
    assert not h.is_device_memory_size_query()
    assert query_workspace(suite, h, 1, 1, "f32") == 0


class _IgnoresQuery(LarfgSuite):
    def call(self, handle, n, incx, ptrs, dtype):
        return Status.SUCCESS


def test_query_failure_leaves_handle_usable():
    h = Handle("cpu")
    with pytest.raises(KernelFailure):
        query_workspace(_IgnoresQuery(), h, 10, 1)
    assert not h.is_device_memory_size_query()


def test_negotiation_only_when_needed():
    suite = get("larfg")
    h = Handle("cpu")
    assert negotiate_workspace(suite, h, RunConfig(n=3000, precision="d")) is None

    assert negotiate_workspace(suite, h, RunConfig(n=3000, precision="d", mem_query=True)) == 64
    assert h.get_device_memory_size() == 0

    fixed = Handle("cpu", realloc_on_demand=False)
    assert negotiate_workspace(suite, fixed, RunConfig(n=3000, precision="d")) == 64
    assert fixed.get_device_memory_size() == 64
