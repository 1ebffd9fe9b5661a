import torch

from kernels.solver import Handle, LayerMode, Status, larfg
from kernels.solver.layer_log import LayerLog


def _run_larfg(h, n=50):
    alpha = torch.tensor([2.0])
    x = torch.ones((n - 1,))
    tau = torch.zeros((1,))
    assert larfg(h, n, alpha, x, 1, tau) == Status.SUCCESS


def test_nothing_recorded_by_default():
    h = Handle("cpu")
    _run_larfg(h)
    assert h.log.profile.calls == {}
    assert h.log.trace == []


def test_profile_top_level_only():
    h = Handle("cpu")
    h.log.set_layer_mode(LayerMode.LOG_PROFILE)
    _run_larfg(h)
    _run_larfg(h)
    assert h.log.profile.count("larfg") == 2
    assert h.log.profile.count("larfg", "larfg_sumsq") == 0


def test_kernel_scopes_need_kernel_mode_and_depth():
    h = Handle("cpu")
    h.log.set_layer_mode(LayerMode.LOG_PROFILE | LayerMode.LOG_KERNEL)
    _run_larfg(h)
    # max_levels defaults to 1: kernel launches sit one level deeper
    assert h.log.profile.count("larfg", "larfg_sumsq") == 0

    assert h.log.set_max_levels(2) == Status.SUCCESS
    _run_larfg(h)
    assert h.log.profile.count("larfg") == 2
    for k in ("larfg_sumsq", "larfg_tau", "larfg_scale"):
        assert h.log.profile.count("larfg", k) == 1
    assert h.log.profile.to_json_dict()["larfg/larfg_tau"] == 1


def test_trace_lines_carry_arguments():
    h = Handle("cpu")
    h.log.set_layer_mode(LayerMode.LOG_TRACE)
    _run_larfg(h, n=5)
    assert h.log.trace == ["larfg n=5 incx=1"]


def test_max_levels_must_be_positive():
    log = LayerLog()
    assert log.set_max_levels(0) == Status.INVALID_VALUE
    assert log.max_levels == 1
    assert log.depth == 0
