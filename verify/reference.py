"""
Host reference routines (numpy), used as the oracle for device results.

These follow the LAPACK reference implementations closely, including the
safe-minimum rescaling loop of xLARFG, and operate in place on flat host
storage with an increment, like the Fortran routines they mirror.

`HostReference` is the one capability interface the harness relies on: a
kernel family provides one implementation operating on its named host
buffers.
"""

from __future__ import annotations

from typing import Mapping, Protocol

import numpy as np


class HostReference(Protocol):
    name: str

    def __call__(self, n: int, incx: int, host: Mapping[str, np.ndarray]) -> None: ...


def _strided(x: np.ndarray, n: int, incx: int) -> np.ndarray:
    if n <= 0:
        return x[:0]
    return x[: (n - 1) * incx + 1 : incx]


def _sign(a: float, b: float) -> float:
    return abs(a) if b >= 0 else -abs(a)


def _lamch(real_dtype: np.dtype) -> tuple[float, float]:
    fi = np.finfo(real_dtype)
    # LAPACK's 'E' is the unit roundoff (eps / 2) when rounding.
    return float(fi.tiny), float(fi.eps) * 0.5


def _lapy3(a: float, b: float, c: float) -> float:
    # sqrt(a^2 + b^2 + c^2) without destructive overflow
    w = max(abs(a), abs(b), abs(c))
    if w == 0.0:
        return abs(a) + abs(b) + abs(c)
    return w * float(np.sqrt((a / w) ** 2 + (b / w) ** 2 + (c / w) ** 2))


def _nrm2(v: np.ndarray) -> float:
    if v.size == 0:
        return 0.0
    scale = float(np.max(np.abs(v)))
    if scale == 0.0:
        return 0.0
    return scale * float(np.sqrt(np.sum(np.abs(v / scale) ** 2)))


def larfg_host(n: int, alpha: np.ndarray, x: np.ndarray, incx: int, tau: np.ndarray) -> None:
    """
    In-place xLARFG. `alpha` and `tau` are 1-element (or larger) arrays, x is
    flat storage holding n-1 elements at increment incx.
    """
    complex_t = np.iscomplexobj(x) or np.iscomplexobj(alpha)
    if n <= 0 or (n == 1 and not complex_t):
        tau[0] = 0
        return
    real_dt = np.empty((0,), dtype=x.dtype).real.dtype
    v = _strided(x, n - 1, incx)
    xnorm = _nrm2(v)
    a = complex(alpha[0]) if complex_t else float(alpha[0])
    ar = a.real
    ai = a.imag if complex_t else 0.0
    if xnorm == 0.0 and ai == 0.0:
        tau[0] = 0
        return

    beta = -_sign(_lapy3(ar, ai, xnorm), ar)
    tiny, eps = _lamch(real_dt)
    safmin = tiny / eps
    knt = 0
    if abs(beta) < safmin:
        rsafmn = 1.0 / safmin
        while True:
            knt += 1
            v *= rsafmn
            beta *= rsafmn
            a *= rsafmn
            if not (abs(beta) < safmin and knt < 20):
                break
        xnorm = _nrm2(v)
        ar = a.real
        ai = a.imag if complex_t else 0.0
        beta = -_sign(_lapy3(ar, ai, xnorm), ar)

    if complex_t:
        tau[0] = complex((beta - ar) / beta, -ai / beta)
        v *= 1.0 / (a - beta)
    else:
        tau[0] = (beta - ar) / beta
        v *= 1.0 / (ar - beta)
    for _ in range(knt):
        beta *= safmin
    alpha[0] = beta


def lacgv_host(n: int, x: np.ndarray, incx: int) -> None:
    if n <= 0 or not np.iscomplexobj(x):
        return
    v = _strided(x, n, incx)
    np.conjugate(v, out=v)


class LarfgReference:
    name = "larfg"

    def __call__(self, n: int, incx: int, host: Mapping[str, np.ndarray]) -> None:
        larfg_host(n, host["alpha"], host["x"], incx, host["tau"])


class LacgvReference:
    name = "lacgv"

    def __call__(self, n: int, incx: int, host: Mapping[str, np.ndarray]) -> None:
        lacgv_host(n, host["x"], incx)


__all__ = ["HostReference", "larfg_host", "lacgv_host", "LarfgReference", "LacgvReference"]
