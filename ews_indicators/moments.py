"""
moments.py

Statistical moments along one axis (by default the last, i.e. time).

All estimators are unbiased:
- variance: Bessel-corrected, divisor n - 1
- skewness: G1 = n^2 / ((n-1)(n-2)) * m3 / s^3
- kurtosis (excess): G2 = n(n+1) / ((n-1)(n-2)(n-3)) * sum((x - mean)^4) / s^4
                          - 3(n-1)^2 / ((n-2)(n-3))

Results keep the reduced axis with size 1, so they broadcast back against
the input. Every kernel is written against the array namespace of its
input and therefore runs unchanged on host (NumPy) or device (CuPy) arrays.

Samples that are too short (n < 2 for variance, n < 3 for skewness,
n < 4 for kurtosis) are not rejected: the degenerate denominators
propagate as NaN/Inf.

The `*_from_mean` / `*_from_moments` variants take caller-supplied
intermediates and trust them without recomputation.
"""

from __future__ import annotations

from typing import Any

import numpy as np

from . import backend, config
from .utils import as_float_array


def _axis_length(X: Any, axis: int) -> int:
    return X.shape[axis]


def _correction(numerator: float, denominator: float) -> float:
    """Scalar correction factor; a zero denominator gives inf or nan."""
    with np.errstate(divide="ignore", invalid="ignore"):
        return float(np.float64(numerator) / np.float64(denominator))


def _centered_power_sum(X: Any, X_mean: Any, power: int, axis: int) -> Any:
    xp = backend.get_namespace(X, X_mean)
    return xp.sum((X - X_mean) ** power, axis=axis, keepdims=True)


# ----------------------------------------------------------------------
# Mean / variance / standard deviation
# ----------------------------------------------------------------------


def mean(X: Any, axis: int | None = None) -> Any:
    """
    Arithmetic mean along `axis` (default: config.TIME_AXIS).

    Parameters
    ----------
    X : array
        Host or device array of real values.
    axis : int, optional

    Returns
    -------
    array with `axis` reduced to size 1.
    """
    if axis is None:
        axis = config.TIME_AXIS
    X = as_float_array(X)
    xp = backend.get_namespace(X)
    n = _axis_length(X, axis)
    with np.errstate(divide="ignore", invalid="ignore"):
        return xp.sum(X, axis=axis, keepdims=True) / X.dtype.type(n)


def variance_from_mean(X: Any, X_mean: Any, axis: int | None = None) -> Any:
    """
    Bessel-corrected variance given a precomputed mean.

    X_mean is used as given; a mean that does not belong to X silently
    produces a wrong variance.
    """
    if axis is None:
        axis = config.TIME_AXIS
    X = as_float_array(X)
    n = _axis_length(X, axis)
    with np.errstate(divide="ignore", invalid="ignore"):
        return _centered_power_sum(X, X_mean, 2, axis) / X.dtype.type(n - 1)


def variance(X: Any, axis: int | None = None) -> Any:
    """
    Bessel-corrected sample variance (divisor n - 1) along `axis`.
    """
    X = as_float_array(X)
    return variance_from_mean(X, mean(X, axis=axis), axis=axis)


def std(X: Any, axis: int | None = None) -> Any:
    """Square root of the Bessel-corrected variance."""
    X = as_float_array(X)
    xp = backend.get_namespace(X)
    return xp.sqrt(variance(X, axis=axis))


# ----------------------------------------------------------------------
# Higher moments
# ----------------------------------------------------------------------


def skewness_from_moments(
    X: Any,
    X_mean: Any,
    X_var: Any,
    axis: int | None = None,
) -> Any:
    """
    Bias-corrected skewness given precomputed mean and variance.

    Parameters
    ----------
    X : array
    X_mean : array
        Mean of X along `axis` (keepdims shape).
    X_var : array
        Bessel-corrected variance of X along `axis` (keepdims shape).
    axis : int, optional
    """
    if axis is None:
        axis = config.TIME_AXIS
    X = as_float_array(X)
    n = _axis_length(X, axis)
    cor = _correction(n ** 2, (n - 1) * (n - 2))
    with np.errstate(divide="ignore", invalid="ignore"):
        m3 = _centered_power_sum(X, X_mean, 3, axis) / X.dtype.type(n)
        return m3 / X_var ** 1.5 * cor


def skewness(X: Any, axis: int | None = None) -> Any:
    """
    Bias-corrected sample skewness along `axis`.
    """
    X = as_float_array(X)
    X_mean = mean(X, axis=axis)
    X_var = variance_from_mean(X, X_mean, axis=axis)
    return skewness_from_moments(X, X_mean, X_var, axis=axis)


def kurtosis_from_moments(
    X: Any,
    X_mean: Any,
    X_var: Any,
    axis: int | None = None,
) -> Any:
    """
    Bias-corrected excess kurtosis given precomputed mean and variance.
    """
    if axis is None:
        axis = config.TIME_AXIS
    X = as_float_array(X)
    n = _axis_length(X, axis)
    cor1 = _correction((n + 1) * n, (n - 1) * (n - 2) * (n - 3))
    cor2 = _correction(3 * (n - 1) ** 2, (n - 2) * (n - 3))
    with np.errstate(divide="ignore", invalid="ignore"):
        m4 = _centered_power_sum(X, X_mean, 4, axis)
        return m4 / X_var ** 2 * cor1 - cor2


def kurtosis(X: Any, axis: int | None = None) -> Any:
    """
    Bias-corrected excess kurtosis along `axis`.

    Equals -6/5 for a uniform distribution and 0 for a Gaussian one.
    """
    X = as_float_array(X)
    X_mean = mean(X, axis=axis)
    X_var = variance_from_mean(X, X_mean, axis=axis)
    return kurtosis_from_moments(X, X_mean, X_var, axis=axis)
