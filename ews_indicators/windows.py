"""
Sliding windows expressed as mask matrices.

A mask M has shape (n_samples, n_windows) with entries in {0, 1}; column w
marks the samples that belong to window w. Sliding-window statistics then
become one matrix product X @ M, normalized by the column sums of M.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Sequence

import numpy as np
import pandas as pd
import scipy.sparse

from . import backend, config

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WindowingParams:
    """
    Trailing windows of fixed width.

    Window k covers samples [offset + k*stride, offset + k*stride + width).
    """

    width: int
    stride: int = 1
    offset: int = 0

    def __post_init__(self):
        if self.width < 1:
            raise ValueError(f"Window width must be >= 1, got {self.width}.")
        if self.stride < 1:
            raise ValueError(f"Window stride must be >= 1, got {self.stride}.")
        if self.offset < 0:
            raise ValueError(f"Window offset must be >= 0, got {self.offset}.")


def window_start_indices(n_samples: int, params: WindowingParams) -> np.ndarray:
    """First sample index of every window that fits into n_samples."""
    last_start = n_samples - params.width
    if last_start < params.offset:
        return np.zeros(0, dtype=int)
    return np.arange(params.offset, last_start + 1, params.stride)


def window_end_indices(n_samples: int, params: WindowingParams) -> np.ndarray:
    """Last sample index (inclusive) of every window that fits into n_samples."""
    return window_start_indices(n_samples, params) + params.width - 1


def window_bounds(t: Sequence | pd.Index, params: WindowingParams) -> pd.DataFrame:
    """
    Label every window by its first and last time stamp.

    Parameters
    ----------
    t : sequence or Index
        Time stamps of the samples (numbers or dates), length n_samples.
    params : WindowingParams

    Returns
    -------
    DataFrame with columns ['start', 'end'], one row per window, in the
    same order as the mask columns.
    """
    t = pd.Index(t)
    starts = window_start_indices(len(t), params)
    ends = starts + params.width - 1
    return pd.DataFrame(
        {
            "start": t[starts],
            "end": t[ends],
        }
    )


# ----------------------------------------------------------------------
# Mask interface
# ----------------------------------------------------------------------


class Mask:
    """
    Window-membership matrix of shape (n_samples, n_windows).

    Wraps a dense array or a sparse matrix on either backend; callers only
    use `apply` and `apply_and_normalize`. The {0,1} structure and the
    column sums are trusted, not validated.
    """

    def __init__(self, matrix: Any):
        if len(matrix.shape) != 2:
            raise ValueError(
                f"A mask must be a 2D matrix, got shape {tuple(matrix.shape)}."
            )
        self.matrix = matrix
        self._column_sums = None

    @property
    def is_sparse(self) -> bool:
        return backend.issparse(self.matrix)

    @property
    def n_samples(self) -> int:
        return self.matrix.shape[0]

    @property
    def n_windows(self) -> int:
        return self.matrix.shape[1]

    @property
    def column_sums(self) -> Any:
        """Window lengths, shape (n_windows,)."""
        if self._column_sums is None:
            xp = backend.get_namespace(self.matrix)
            sums = self.matrix.sum(axis=0)
            self._column_sums = xp.asarray(sums).reshape(-1)
        return self._column_sums

    def lagged(self) -> "Mask":
        """Mask restricted to samples 0..n-2, for products of lagged pairs."""
        return Mask(self.matrix[:-1, :])

    def apply(self, X: Any) -> Any:
        """Per-window sums X @ M, shape (..., n_windows)."""
        backend.get_namespace(X, self.matrix)
        return backend.sparse_dot(self.matrix, X)

    def apply_and_normalize(self, X: Any) -> Any:
        """Per-window means X @ M / colsum(M)."""
        with np.errstate(divide="ignore", invalid="ignore"):
            return self.apply(X) / self.column_sums

    def to_device(self) -> "Mask":
        return Mask(backend.to_device(self.matrix))

    def __repr__(self):
        kind = "sparse" if self.is_sparse else "dense"
        return f"Mask({self.n_samples} samples x {self.n_windows} windows, {kind})"


def as_mask(M: Any) -> Mask:
    """Wrap a raw matrix into a Mask (Mask instances pass through)."""
    if isinstance(M, Mask):
        return M
    return Mask(M)


def build_mask(
    n_samples: int,
    params: WindowingParams,
    sparse: bool | None = None,
    dtype: Any = np.float64,
    device: bool = False,
) -> Mask:
    """
    Build the mask of all windows of `params` fitting into n_samples.

    Parameters
    ----------
    n_samples : int
        Length of the time axis.
    params : WindowingParams
    sparse : bool, optional
        Store as CSC sparse matrix (default: config.DEFAULT_MASK_SPARSE).
    dtype : dtype
        Should match the dtype of the data the mask is applied to.
    device : bool
        Place the mask in accelerator memory (requires CuPy).

    Returns
    -------
    Mask
    """
    if sparse is None:
        sparse = config.DEFAULT_MASK_SPARSE

    starts = window_start_indices(n_samples, params)
    n_windows = starts.shape[0]
    rows = (starts[:, None] + np.arange(params.width)[None, :]).reshape(-1)
    cols = np.repeat(np.arange(n_windows), params.width)
    data = np.ones(rows.shape[0], dtype=dtype)

    M = scipy.sparse.csc_array(
        (data, (rows, cols)),
        shape=(n_samples, n_windows),
    )
    if not sparse:
        M = M.toarray()

    logger.debug(
        "Built %s mask: %d samples, %d windows (width=%d, stride=%d)",
        "sparse" if sparse else "dense",
        n_samples,
        n_windows,
        params.width,
        params.stride,
    )

    if device:
        M = backend.to_device(M)
    return Mask(M)
