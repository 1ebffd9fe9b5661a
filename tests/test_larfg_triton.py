import pytest
import torch

from kernels.solver import Handle, LayerMode, Status, larfg
from verify.random_init import random_fill


pytestmark = pytest.mark.skipif(not torch.cuda.is_available(), reason="CUDA not available")


def _dev_inputs(n, incx, dtype):
    alpha = torch.empty((1,), dtype=dtype)
    x = torch.zeros(((n - 1) * incx,), dtype=dtype)
    random_fill(alpha.numpy(), seed=1)
    random_fill(x.numpy()[::incx], seed=2)
    return alpha.cuda(), x.cuda()


@pytest.mark.parametrize("dtype,rtol", [(torch.float32, 1e-5), (torch.float64, 1e-12)])
@pytest.mark.parametrize("n,incx", [(2, 1), (1025, 1), (5000, 3)])
def test_triton_matches_torch_path(dtype, rtol, n, incx):
    dt = "f32" if dtype == torch.float32 else "f64"
    results = []
    for use_triton in (True, False):
        alpha, x = _dev_inputs(n, incx, dtype)
        tau = torch.zeros((1,), dtype=dtype, device="cuda")
        h = Handle("cuda", use_triton=use_triton)
        assert larfg(h, n, alpha, x, incx, tau, dtype=dt) == Status.SUCCESS
        h.synchronize()
        results.append((alpha.cpu(), x.cpu(), tau.cpu()))
    for a, b in zip(*results):
        torch.testing.assert_close(a, b, rtol=rtol, atol=0.0)


def test_triton_kernel_scopes_are_profiled():
    alpha, x = _dev_inputs(3000, 1, torch.float32)
    tau = torch.zeros((1,), device="cuda")
    h = Handle("cuda")
    h.log.set_layer_mode(LayerMode.LOG_PROFILE | LayerMode.LOG_KERNEL)
    h.log.set_max_levels(2)
    assert larfg(h, 3000, alpha, x, 1, tau) == Status.SUCCESS
    assert h.log.profile.count("larfg", "larfg_sumsq") == 1
    assert h.log.profile.count("larfg", "larfg_scale") == 1


def test_hot_calls_are_timed_with_cuda_events():
    from harness.profiler import time_call_us

    alpha, x = _dev_inputs(3000, 1, torch.float32)
    tau = torch.zeros((1,), device="cuda")
    h = Handle("cuda")
    st, us = time_call_us(h, lambda: larfg(h, 3000, alpha, x, 1, tau))
    assert st == Status.SUCCESS
    assert us > 0.0
