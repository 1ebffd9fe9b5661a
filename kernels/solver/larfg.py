"""
Householder reflector generation (xLARFG).

Given a scalar alpha and an (n-1)-vector x, computes beta, tau and v with

    H^H * (alpha; x) = (beta; 0),    H = I - tau * (1; v) * (1; v)^H

overwriting alpha with beta and x with v. Three device phases:
  1. partial sums of squares of x (one per block) into the workspace
  2. reduce, compute beta/tau and the scale factor 1/(alpha - beta)
  3. scale x

Real types on CUDA/ROCm run the Triton kernels in
`kernels/triton/ops/larfg.py`; everything else runs the same phases as torch
ops on the handle's device.
"""

from __future__ import annotations

from typing import Any, Optional

from kernels.solver.dtypes import canonical_dtype, is_complex, itemsize, torch_dtype
from kernels.solver.handle import Handle
from kernels.solver.status import Status


LARFG_BLOCK = 1024


def _torch() -> Any:
    import torch  # noqa: PLC0415

    return torch


def larfg_nblocks(n: int) -> int:
    m = max(0, int(n) - 1)
    return (m + LARFG_BLOCK - 1) // LARFG_BLOCK


def larfg_memory_size(n: int, dtype: str) -> int:
    """Workspace bytes: one partial sum per block plus the scale factor."""
    if int(n) <= 0:
        return 0
    if int(n) == 1 and not is_complex(dtype):
        return 0
    return (larfg_nblocks(n) + 1) * itemsize(dtype)


def _arg_check(handle: Handle, n: int, incx: int, alpha: Any, x: Any, tau: Any) -> Status:
    # order matters: sizes, then (outside of size queries) pointers
    if n < 0 or incx < 1:
        return Status.INVALID_SIZE
    if handle.is_device_memory_size_query():
        return Status.CONTINUE
    if (n > 0 and alpha is None) or (n > 1 and x is None) or (n > 0 and tau is None):
        return Status.INVALID_POINTER
    return Status.CONTINUE


def _check_tensor(t: Any, handle: Handle, dtype: Any, min_numel: int) -> bool:
    if t is None:
        return True
    if t.dtype != dtype or t.device.type != handle.device.type:
        return False
    return int(t.numel()) >= int(min_numel)


def larfg(
    handle: Optional[Handle],
    n: int,
    alpha: Any,
    x: Any,
    incx: int,
    tau: Any,
    *,
    dtype: str = "f32",
) -> Status:
    """
    Device entry point. `alpha`, `x`, `tau` are device tensors (None = null
    pointer); x holds n-1 elements at increment incx.
    """
    if handle is None:
        return Status.INVALID_HANDLE
    n = int(n)
    incx = int(incx)
    with handle.log.scope("larfg", n=n, incx=incx):
        st = _arg_check(handle, n, incx, alpha, x, tau)
        if st != Status.CONTINUE:
            return st
        dt = canonical_dtype(dtype)
        size_work = larfg_memory_size(n, dt)
        if handle.is_device_memory_size_query():
            return handle.set_optimal_device_memory_size(size_work)

        # quick return
        if n == 0:
            return Status.SUCCESS

        tdt = torch_dtype(dt)
        x_len = (n - 2) * incx + 1 if n > 1 else 0
        if not (_check_tensor(alpha, handle, tdt, 1) and _check_tensor(tau, handle, tdt, 1) and _check_tensor(x, handle, tdt, x_len)):
            return Status.INVALID_VALUE

        if n == 1 and not is_complex(dt):
            tau[:1].zero_()
            return Status.SUCCESS

        raw = handle.device_memory(size_work)
        if raw is None:
            return Status.MEMORY_ERROR
        work = raw.view(tdt)

        if handle.is_cuda and handle.use_triton and not is_complex(dt):
            from kernels.triton.ops.larfg import larfg_triton  # noqa: PLC0415

            larfg_triton(n, alpha, x, incx, tau, work, block=LARFG_BLOCK, log=handle.log)
        else:
            _larfg_torch(handle, n, alpha, x, incx, tau, work)
        return Status.SUCCESS


def _larfg_torch(handle: Handle, n: int, alpha: Any, x: Any, incx: int, tau: Any, work: Any) -> None:
    torch = _torch()
    F = torch.nn.functional
    m = n - 1
    nblocks = larfg_nblocks(n)
    xv = x[: (m - 1) * incx + 1 : incx] if m > 0 else None
    complex_t = torch.is_complex(work)

    with handle.log.scope("larfg_sumsq", kernel=True):
        if m > 0:
            sq = xv.abs().square()
            sq = F.pad(sq, (0, nblocks * LARFG_BLOCK - m))
            work[:nblocks].copy_(sq.view(nblocks, LARFG_BLOCK).sum(dim=1))

    with handle.log.scope("larfg_tau", kernel=True):
        a = alpha[0]
        if nblocks:
            partial = work[:nblocks].real if complex_t else work[:nblocks]
            xnorm = torch.sqrt(partial.sum())
        else:
            xnorm = torch.zeros((), dtype=a.real.dtype if complex_t else a.dtype, device=a.device)
        if complex_t:
            ar, ai = a.real, a.imag
            zero = (xnorm == 0) & (ai == 0)
            beta = -torch.copysign(torch.sqrt(ar * ar + ai * ai + xnorm * xnorm), ar)
            one_r = torch.ones_like(beta)
            safe_beta = torch.where(zero, one_r, beta)
            tau_v = torch.complex((beta - ar) / safe_beta, -ai / safe_beta)
            tau_v = torch.where(zero, torch.zeros_like(tau_v), tau_v)
            beta_c = beta.to(a.dtype)
            one_c = torch.ones_like(a)
            scal = torch.where(zero, one_c, one_c / torch.where(zero, one_c, a - beta_c))
            new_alpha = torch.where(zero, a, beta_c)
        else:
            zero = xnorm == 0
            beta = -torch.copysign(torch.hypot(a, xnorm), a)
            one = torch.ones_like(a)
            tau_v = torch.where(zero, torch.zeros_like(a), (beta - a) / torch.where(zero, one, beta))
            scal = torch.where(zero, one, one / torch.where(zero, one, a - beta))
            new_alpha = torch.where(zero, a, beta)
        work[nblocks].copy_(scal)
        tau[0].copy_(tau_v)
        alpha[0].copy_(new_alpha)

    with handle.log.scope("larfg_scale", kernel=True):
        if m > 0:
            xv.mul_(work[nblocks])


__all__ = ["LARFG_BLOCK", "larfg", "larfg_memory_size", "larfg_nblocks"]
