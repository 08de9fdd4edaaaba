"""
backend.py

Generic tensor primitive layer shared by every indicator kernel.

Kernels are written once against an array namespace `xp` (NumPy for host
memory, CuPy for accelerator memory). The namespace is resolved from the
arguments of each call, so residency is decided by the caller's data and
never by per-function branching. The only primitive with genuinely
different code per backend is the real-input FFT.

Accelerator work queued by CuPy becomes observable when results are read
back to the host (`to_host`, `float(...)`, printing).
"""

from __future__ import annotations

import logging
from types import ModuleType
from typing import Any

import numpy as np
import scipy.fft
import scipy.sparse

from .errors import BackendMismatchError, BackendUnavailableError

logger = logging.getLogger(__name__)

# Optional: CuPy for accelerator-resident arrays
try:
    import cupy as _cp  # type: ignore
    import cupyx.scipy.sparse as _cpsparse  # type: ignore

    _HAVE_CUPY = True
except Exception:  # pragma: no cover - optional dependency
    _cp = None
    _cpsparse = None
    _HAVE_CUPY = False


HOST = "numpy"
DEVICE = "cupy"


def have_cupy() -> bool:
    """Whether the accelerator backend is importable."""
    return _HAVE_CUPY


def _residency(x: Any) -> str | None:
    """
    Return HOST or DEVICE for array-like x, None for Python scalars.
    """
    if x is None or isinstance(x, (int, float, np.generic)):
        return None
    if _HAVE_CUPY and (isinstance(x, _cp.ndarray) or _cpsparse.issparse(x)):
        return DEVICE
    return HOST


def get_namespace(*arrays: Any) -> ModuleType:
    """
    Resolve the array namespace (numpy or cupy) for a set of arguments.

    Raises
    ------
    BackendMismatchError
        If host and device arrays are mixed.
    """
    found = {r for r in (_residency(a) for a in arrays) if r is not None}
    if len(found) > 1:
        raise BackendMismatchError(
            "Cannot combine host (NumPy) and device (CuPy) arrays in one call; "
            "move all inputs with to_host() or to_device() first."
        )
    if found == {DEVICE}:
        return _cp
    return np


def is_device_array(x: Any) -> bool:
    return _residency(x) == DEVICE


def to_host(x: Any) -> np.ndarray:
    """Copy a device array to host memory (no-op for host arrays)."""
    if is_device_array(x):
        if _cpsparse.issparse(x):
            return x.get()
        return _cp.asnumpy(x)
    return x


def to_device(x: Any) -> Any:
    """
    Copy a host array (dense or SciPy sparse) to accelerator memory.

    Raises
    ------
    BackendUnavailableError
        If CuPy is not installed.
    """
    if not _HAVE_CUPY:
        raise BackendUnavailableError(
            "CuPy is required for accelerator arrays. "
            "Install with: pip install ews-indicators[gpu]"
        )
    if is_device_array(x):
        return x
    if scipy.sparse.issparse(x):
        logger.debug("Transferring sparse matrix %s to device", x.shape)
        return _cpsparse.csc_matrix(scipy.sparse.csc_matrix(x))
    x = np.asarray(x)
    logger.debug("Transferring array %s (%s) to device", x.shape, x.dtype)
    return _cp.asarray(x)


def issparse(M: Any) -> bool:
    """Sparse matrix check for either backend."""
    if scipy.sparse.issparse(M):
        return True
    return _HAVE_CUPY and _cpsparse.issparse(M)


# ----------------------------------------------------------------------
# Backend-polymorphic primitives
# ----------------------------------------------------------------------


def _rfft_host(X: np.ndarray, axis: int) -> np.ndarray:
    return scipy.fft.rfft(X, axis=axis)


def _rfft_device(X: Any, axis: int) -> Any:
    return _cp.fft.rfft(X, axis=axis)


_RFFT = {
    HOST: _rfft_host,
    DEVICE: _rfft_device,
}


def rfft(X: Any, axis: int = -1) -> Any:
    """
    Real-input discrete Fourier transform along `axis`.

    Host arrays go through scipy.fft, device arrays through cupy.fft;
    both return the n // 2 + 1 non-negative frequency bins.
    """
    residency = _residency(X) or HOST
    return _RFFT[residency](X, axis)


def svdvals(C: Any) -> Any:
    """
    Singular values of a matrix, in descending order.
    """
    xp = get_namespace(C)
    return xp.linalg.svd(C, compute_uv=False)


def sparse_dot(M: Any, X: Any) -> Any:
    """
    Dense result of X @ M for a (dense or sparse) matrix M.

    Computed as (M.T @ X.T).T so that sparse @ dense dispatches to the
    sparse implementation on both backends.
    """
    out = (M.T @ X.T).T
    if issparse(out):
        out = out.toarray()
    return out
