"""
Element types supported by the solver entry points.

Dtypes are spelled the short way used across the repo ("f32", "c64", ...);
the benchmark client additionally accepts LAPACK precision letters.
"""

from __future__ import annotations

from typing import Any

import numpy as np


PRECISION_TO_DTYPE = {"s": "f32", "d": "f64", "c": "c64", "z": "c128"}

_NP = {
    "f32": np.float32,
    "f64": np.float64,
    "c64": np.complex64,
    "c128": np.complex128,
}


def _torch() -> Any:
    import torch  # noqa: PLC0415

    return torch


def canonical_dtype(dt: str) -> str:
    s = str(dt)
    if s in PRECISION_TO_DTYPE:
        return PRECISION_TO_DTYPE[s]
    if s not in _NP:
        raise ValueError(f"unsupported dtype: {dt}")
    return s


def np_dtype(dt: str) -> Any:
    return _NP[canonical_dtype(dt)]


def torch_dtype(dt: str):
    torch = _torch()
    s = canonical_dtype(dt)
    if s == "f32":
        return torch.float32
    if s == "f64":
        return torch.float64
    if s == "c64":
        return torch.complex64
    return torch.complex128


def is_complex(dt: str) -> bool:
    return canonical_dtype(dt) in {"c64", "c128"}


def itemsize(dt: str) -> int:
    return int(np.dtype(np_dtype(dt)).itemsize)


__all__ = ["PRECISION_TO_DTYPE", "canonical_dtype", "np_dtype", "torch_dtype", "is_complex", "itemsize"]
