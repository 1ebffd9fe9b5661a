from __future__ import annotations

from harness.buffers import SuiteBuffers
from harness.interfaces import KernelSuite
from verify.random_init import DEFAULT_SEED, random_fill


def init_data(
    suite: KernelSuite,
    buffers: SuiteBuffers,
    *,
    generate: bool,
    transfer: bool,
    seed: int = DEFAULT_SEED,
) -> None:
    """
    Fill the suite's input host vectors (generator reset to `seed` per vector)
    and/or copy them to their device counterparts. Outputs are left alone.
    """
    for name in suite.inputs:
        host = buffers.host[name]
        if generate:
            random_fill(host.values(), seed=seed)
        if transfer:
            buffers.device[name].transfer_from(host)


__all__ = ["init_data"]
