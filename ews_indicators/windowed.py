"""
windowed.py

Sliding-window indicators computed with a mask matrix.

Instead of looping over windows, each statistic is one (sparse or dense)
matrix product of the data, shape (n_rows, n_samples), with the mask,
shape (n_samples, n_windows). The result has one column per window.

Columns of the mask may encode any subset of sample indices; no
structural validation is done beyond what the matrix product requires.
"""

from __future__ import annotations

from typing import Any

import numpy as np

from .utils import as_float_array
from .windows import Mask, as_mask


def masked_mean(X: Any, M: Mask | Any) -> Any:
    """
    Per-window mean of every row of X.

    Parameters
    ----------
    X : array of shape (n_rows, n_samples)
    M : Mask or matrix of shape (n_samples, n_windows)

    Returns
    -------
    array of shape (n_rows, n_windows)
    """
    X = as_float_array(X)
    return as_mask(M).apply_and_normalize(X)


def masked_meansquare(X: Any, M: Mask | Any) -> Any:
    """
    Per-window mean of squared values, (X^2) @ M / colsum(M).

    Neither centered nor Bessel-corrected: on detrended residuals this is
    a fast stand-in for the windowed variance, not an unbiased estimate.
    """
    X = as_float_array(X)
    return as_mask(M).apply_and_normalize(X ** 2)


def masked_ar1_whitenoise(X: Any, M: Mask | Any) -> Any:
    """
    Per-window AR1 coefficient under a white-noise assumption.

    For window w:

        theta_w = sum_t M[t, w] x_{t+1} x_t / sum_t M[t, w] x_t^2,

    with t running over 0..n-2, i.e. every lagged pair whose first sample
    lies in the window.

    Returns
    -------
    array of shape (n_rows, n_windows)
    """
    X = as_float_array(X)
    M_lag = as_mask(M).lagged()
    numerator = M_lag.apply(X[..., 1:] * X[..., :-1])
    denominator = M_lag.apply(X[..., :-1] * X[..., :-1])
    with np.errstate(divide="ignore", invalid="ignore"):
        return numerator / denominator
