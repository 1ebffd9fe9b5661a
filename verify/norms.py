"""
Matrix norms and the normalized error used to compare device results against
the host reference.

Buffers are flat storage holding an M x N column-major matrix with leading
dimension `lda` (element (i, j) at i + j*lda). A strided vector of n elements
at increment inc is the 1 x n matrix with lda = inc.
"""

from __future__ import annotations

from typing import Optional

import numpy as np


_NORM_TYPES = {"O", "1", "I", "F", "E", "M"}


def as_matrix(buf: np.ndarray, M: int, N: int, lda: int) -> np.ndarray:
    """Gather an M x N column-major view out of flat storage (returns a copy)."""
    M = int(M)
    N = int(N)
    lda = int(lda)
    if M < 0 or N < 0:
        raise ValueError(f"negative matrix dims: {M}x{N}")
    if lda < max(1, M):
        raise ValueError(f"leading dimension {lda} < max(1, M={M})")
    flat = np.asarray(buf).reshape(-1)
    if M == 0 or N == 0:
        return np.zeros((M, N), dtype=flat.dtype)
    need = (N - 1) * lda + M
    if flat.size < need:
        raise ValueError(f"buffer of {flat.size} elements too small for {M}x{N} with lda={lda}")
    idx = np.arange(M)[:, None] + lda * np.arange(N)[None, :]
    return flat[idx]


def matrix_norm(norm_type: str, a: np.ndarray) -> float:
    """
    'O'/'1': one norm (max column sum), 'I': infinity norm (max row sum),
    'F'/'E': Frobenius norm, 'M': max abs entry.
    """
    t = str(norm_type).upper()
    if t not in _NORM_TYPES:
        raise ValueError(f"unknown norm type: {norm_type}")
    a = np.abs(np.asarray(a))
    if a.size == 0:
        return 0.0
    if t in {"O", "1"}:
        return float(a.sum(axis=0).max())
    if t == "I":
        return float(a.sum(axis=1).max())
    if t == "M":
        return float(a.max())
    return float(np.sqrt(np.sum(a.astype(np.float64) ** 2)))


def norm_error(
    norm_type: str,
    M: int,
    N: int,
    lda: int,
    gold: np.ndarray,
    comp: np.ndarray,
    ldb: Optional[int] = None,
) -> float:
    """
    ||comp - gold|| / ||gold|| over the M x N region, computed in double
    precision. An empty region has zero error; a zero `gold` falls back to
    the absolute difference.
    """
    if int(M) == 0 or int(N) == 0:
        return 0.0
    g = as_matrix(gold, M, N, lda)
    c = as_matrix(comp, M, N, ldb if ldb else lda)
    wide = np.complex128 if (np.iscomplexobj(g) or np.iscomplexobj(c)) else np.float64
    g = g.astype(wide)
    c = c.astype(wide)
    gold_norm = matrix_norm(norm_type, g)
    diff_norm = matrix_norm(norm_type, c - g)
    if gold_norm == 0.0:
        return diff_norm
    return diff_norm / gold_norm


__all__ = ["as_matrix", "matrix_norm", "norm_error"]
