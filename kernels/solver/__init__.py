"""
Accelerated solver routines under test.

Every entry point takes a `Handle` first and reports a `Status` instead of
raising; device buffers are torch tensors and `None` plays the null pointer.
"""

from kernels.solver.dtypes import PRECISION_TO_DTYPE, canonical_dtype, is_complex, np_dtype, torch_dtype
from kernels.solver.handle import Handle, default_device, roundup_device_memory_size
from kernels.solver.lacgv import lacgv, lacgv_memory_size
from kernels.solver.larfg import LARFG_BLOCK, larfg, larfg_memory_size
from kernels.solver.layer_log import LayerLog, LayerMode, ProfileLog
from kernels.solver.status import QUERY_OK, Status

__all__ = [
    "PRECISION_TO_DTYPE",
    "canonical_dtype",
    "is_complex",
    "np_dtype",
    "torch_dtype",
    "Handle",
    "default_device",
    "roundup_device_memory_size",
    "lacgv",
    "lacgv_memory_size",
    "LARFG_BLOCK",
    "larfg",
    "larfg_memory_size",
    "LayerLog",
    "LayerMode",
    "ProfileLog",
    "QUERY_OK",
    "Status",
]
