import torch
import triton
import triton.language as tl


@triton.jit
def larfg_sumsq_kernel(
    x_ptr,
    work_ptr,
    M,
    incx,
    BLOCK: tl.constexpr,
):
    # One partial sum of squares per program; M = n - 1 strided elements.
    pid = tl.program_id(0)
    offs = pid * BLOCK + tl.arange(0, BLOCK)
    mask = offs < M
    v = tl.load(x_ptr + offs * incx, mask=mask, other=0.0)
    tl.store(work_ptr + pid, tl.sum(v * v, axis=0))


@triton.jit
def larfg_tau_kernel(
    alpha_ptr,
    tau_ptr,
    work_ptr,
    nblocks,
    BLOCK: tl.constexpr,
):
    offs = tl.arange(0, BLOCK)
    acc = tl.load(work_ptr + offs, mask=offs < nblocks, other=0.0)
    for start in range(BLOCK, nblocks, BLOCK):
        acc += tl.load(work_ptr + start + offs, mask=(start + offs) < nblocks, other=0.0)
    xnorm = tl.sqrt(tl.sum(acc, axis=0))
    alpha = tl.load(alpha_ptr)
    beta_abs = tl.sqrt(alpha * alpha + xnorm * xnorm)
    beta = tl.where(alpha >= 0, -beta_abs, beta_abs)
    zero = xnorm == 0
    # Guard the divisions so the unselected branch never produces inf/nan.
    safe_beta = tl.where(zero, 1.0, beta)
    safe_diff = tl.where(zero, 1.0, alpha - beta)
    tau = tl.where(zero, 0.0, (beta - alpha) / safe_beta)
    scal = tl.where(zero, 1.0, 1.0 / safe_diff)
    tl.store(tau_ptr, tau)
    tl.store(alpha_ptr, tl.where(zero, alpha, beta))
    # Scale factor handed to the scale kernel through the workspace tail.
    tl.store(work_ptr + nblocks, scal)


@triton.jit
def larfg_scale_kernel(
    x_ptr,
    work_ptr,
    M,
    incx,
    nblocks,
    BLOCK: tl.constexpr,
):
    pid = tl.program_id(0)
    offs = pid * BLOCK + tl.arange(0, BLOCK)
    mask = offs < M
    scal = tl.load(work_ptr + nblocks)
    v = tl.load(x_ptr + offs * incx, mask=mask, other=0.0)
    tl.store(x_ptr + offs * incx, v * scal, mask=mask)


def larfg_triton(
    n: int,
    alpha: torch.Tensor,
    x: torch.Tensor,
    incx: int,
    tau: torch.Tensor,
    work: torch.Tensor,
    *,
    block: int,
    log,
) -> None:
    """
    Launch the three larfg phases on the current CUDA stream.

    `work` must hold at least ceil((n - 1) / block) + 1 elements of x's dtype;
    `log` is the handle's LayerLog (kernel launches get their own scope).
    """
    if x.dtype not in (torch.float32, torch.float64):
        raise TypeError(f"larfg_triton expects float32/float64, got {x.dtype}")
    m = int(n) - 1
    nblocks = (m + int(block) - 1) // int(block)
    if int(work.numel()) < nblocks + 1:
        raise ValueError(f"larfg_triton workspace too small: {work.numel()} < {nblocks + 1}")
    with log.scope("larfg_sumsq", kernel=True):
        larfg_sumsq_kernel[(nblocks,)](x, work, m, int(incx), BLOCK=int(block))
    with log.scope("larfg_tau", kernel=True):
        larfg_tau_kernel[(1,)](alpha, tau, work, nblocks, BLOCK=int(block))
    with log.scope("larfg_scale", kernel=True):
        larfg_scale_kernel[(nblocks,)](x, work, m, int(incx), nblocks, BLOCK=int(block))


__all__ = ["larfg_sumsq_kernel", "larfg_tau_kernel", "larfg_scale_kernel", "larfg_triton"]
