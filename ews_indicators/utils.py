"""
Small shared helpers: dimension checks and float coercion.
"""

from __future__ import annotations

from typing import Any

import numpy as np

from . import backend
from .errors import DimensionError


def check_ndim(X: Any, ndim: int, indicator: str) -> None:
    """
    Raise DimensionError if X does not have exactly `ndim` axes.

    Parameters
    ----------
    X : array
    ndim : int
        Required number of axes.
    indicator : str
        Name used in the error message (e.g. "Variance").
    """
    actual = len(X.shape)
    if actual != ndim:
        raise DimensionError(indicator, ndim, actual)


def as_float_array(X: Any) -> Any:
    """
    Return X as a floating-point array of its own backend.

    Floating inputs (float32 or float64) are returned as they are, other
    numeric inputs are cast to float64.
    """
    xp = backend.get_namespace(X)
    X = xp.asarray(X)
    if not np.issubdtype(X.dtype, np.floating):
        X = X.astype(np.float64)
    return X
