"""
regression.py

Closed-form regression indicators along the time axis:

- AR1 coefficient under a white-noise assumption (single series or rows)
- AR(p) coefficients per row, by least squares on a lagged design matrix
- Hurst exponent from the scaling of lag-differenced standard deviations
- Rescaled range of the cumulative sum

plus the batched affine ridge regression used to fit the Hurst scaling law.

Regression models rely on a noise assumption. Only white noise is
implemented; correlated-noise and uneven-sampling estimators are declared
below and raise IndicatorNotImplementedError.

Degenerate inputs (constant rows, rows shorter than the largest lag) are
not filtered and yield NaN/Inf.
"""

from __future__ import annotations

import logging
from typing import Any, Sequence

import numpy as np

from . import backend, config
from .errors import IndicatorNotImplementedError
from .moments import std
from .utils import as_float_array

logger = logging.getLogger(__name__)


# ----------------------------------------------------------------------
# Least squares
# ----------------------------------------------------------------------


def ridge_regression(
    Y: Any,
    t: Sequence[float] | Any,
    lam: float | None = None,
) -> Any:
    """
    Fit y = a * t + b to every row of Y at once.

    Solves (A^T A + lam * I) w = A^T y with design A = [t, 1].

    Parameters
    ----------
    Y : array of shape (n_rows, n_samples) or (n_samples,)
    t : array-like of shape (n_samples,)
        Regressor shared by all rows.
    lam : float, optional
        Ridge penalty (default: config.RIDGE_LAMBDA; 0 is ordinary least squares).

    Returns
    -------
    W : array of shape (2, n_rows) (or (2,) for 1D Y)
        W[0] holds the slopes, W[1] the intercepts.
    """
    if lam is None:
        lam = config.RIDGE_LAMBDA
    Y = as_float_array(Y)
    xp = backend.get_namespace(Y)
    t = xp.asarray(t, dtype=Y.dtype)
    A = xp.stack([t, xp.ones_like(t)], axis=1)
    lhs = A.T @ A + lam * xp.eye(2, dtype=Y.dtype)
    rhs = A.T @ Y.T
    return xp.linalg.solve(lhs, rhs)


# ----------------------------------------------------------------------
# Autoregressive models
# ----------------------------------------------------------------------


def ar1_whitenoise(X: Any) -> Any:
    """
    AR1 coefficient along the last axis under a white-noise assumption.

    Least-squares solution of x_{t+1} = theta * x_t + eps_t without
    intercept:

        theta = sum(x_{t+1} x_t) / sum(x_t^2)

    Works for a single series (returns shape (1,)) and for stacked rows
    (returns shape (n_rows, 1)).
    """
    X = as_float_array(X)
    xp = backend.get_namespace(X)
    lagged = X[..., :-1]
    with np.errstate(divide="ignore", invalid="ignore"):
        return xp.sum(X[..., 1:] * lagged, axis=-1, keepdims=True) / xp.sum(
            lagged * lagged, axis=-1, keepdims=True
        )


def _lagged_design(x: Any, p: int) -> Any:
    """
    Design matrix of shape (n - p, p) whose column j holds lag j + 1 of
    the targets x[p:].
    """
    xp = backend.get_namespace(x)
    m = max(x.shape[0] - p, 0)
    return xp.stack([x[p - 1 - j : p - 1 - j + m] for j in range(p)], axis=1)


def arp_whitenoise(X: Any, p: int) -> Any:
    """
    AR(p) coefficients of every row under a white-noise assumption.

    For each row, regress the targets x_p..x_{n-1} on their p previous
    values by solving the normal equations with a pseudo-inverse.

    Rows with no target (n_samples <= p) give NaN. With p = 1 the result
    equals `ar1_whitenoise`, except on an all-zero row: the pseudo-inverse
    gives 0 there, `ar1_whitenoise` gives NaN.

    Parameters
    ----------
    X : array of shape (n_rows, n_samples)
    p : int
        Model order, >= 1.

    Returns
    -------
    Phi : array of shape (n_rows, p)
        Phi[i, j] is the coefficient of lag j + 1 for row i.
    """
    if p < 1:
        raise ValueError(f"AR order p must be >= 1, got {p}.")
    X = as_float_array(X)
    xp = backend.get_namespace(X)
    if X.ndim == 1:
        X = X[None, :]

    n_rows = X.shape[0]
    Phi = xp.empty((n_rows, p), dtype=X.dtype)
    for i in range(n_rows):
        x = X[i]
        if x.shape[0] <= p:
            Phi[i] = xp.nan
            continue
        A = _lagged_design(x, p)
        b = x[p:]
        Phi[i] = xp.linalg.pinv(A.T @ A) @ (A.T @ b)
    return Phi


# ----------------------------------------------------------------------
# Scaling exponents
# ----------------------------------------------------------------------


def lagged_std(X: Any, max_lag: int | None = None) -> Any:
    """
    Standard deviation of x_{t+lag} - x_t for lag = 1..max_lag.

    Returns
    -------
    tau : array of shape (..., max_lag)
    """
    if max_lag is None:
        max_lag = config.HURST_MAX_LAG
    X = as_float_array(X)
    xp = backend.get_namespace(X)
    tau = [std(X[..., lag:] - X[..., :-lag]) for lag in range(1, max_lag + 1)]
    return xp.concatenate(tau, axis=-1)


def hurst_exponent(X: Any, max_lag: int | None = None) -> Any:
    """
    Hurst exponent of every row along the last axis.

    Measures how much a time series deviates from a random walk:
    - H < 0.5: anti-persistent (high value followed by low value)
    - H = 0.5: random walk
    - H > 0.5: persistent (high value followed by high value)

    The std of lag-differenced series scales like lag^H, so H is the slope
    of log(std) against log(lag), fitted with `ridge_regression`.

    Parameters
    ----------
    X : array of shape (n_rows, n_samples) or (n_samples,)
    max_lag : int, optional
        Default: config.HURST_MAX_LAG.

    Returns
    -------
    H : array of shape (n_rows, 1) (or (1,) for a single series)
    """
    if max_lag is None:
        max_lag = config.HURST_MAX_LAG
    X = as_float_array(X)
    xp = backend.get_namespace(X)

    tau = lagged_std(X, max_lag=max_lag)
    lags = xp.arange(1, max_lag + 1, dtype=X.dtype)
    with np.errstate(divide="ignore", invalid="ignore"):
        log_tau = xp.log(tau)
    slopes = ridge_regression(log_tau, xp.log(lags))[0]
    return slopes[..., None]


def rescaled_range(X: Any) -> Any:
    """
    Range of the cumulative sum divided by the standard deviation, per row.

    Returns
    -------
    array with the last axis reduced to size 1.
    """
    X = as_float_array(X)
    xp = backend.get_namespace(X)
    Z = xp.cumsum(X, axis=-1)
    R = xp.max(Z, axis=-1, keepdims=True) - xp.min(Z, axis=-1, keepdims=True)
    with np.errstate(divide="ignore", invalid="ignore"):
        return R / std(X)


# ----------------------------------------------------------------------
# Declared, not implemented
# ----------------------------------------------------------------------


def ar1_ar1noise(*args, **kwargs):
    """AR1 coefficient under an AR1 noise assumption."""
    raise IndicatorNotImplementedError("ar1_ar1noise")


def ar1_uneven_tspacing(*args, **kwargs):
    """AR1 coefficient for unevenly sampled series."""
    raise IndicatorNotImplementedError("ar1_uneven_tspacing")


def restoring_rate(*args, **kwargs):
    """Restoring rate from a numerical regression."""
    raise IndicatorNotImplementedError("restoring_rate")


def restoring_rate_gls(*args, **kwargs):
    """Restoring rate from a generalized least-squares regression."""
    raise IndicatorNotImplementedError("restoring_rate_gls")
