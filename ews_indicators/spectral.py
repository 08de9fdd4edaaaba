"""
spectral.py

Low-frequency power spectrum (LFPS) indicator.

Rising autocorrelation shifts spectral power towards low frequencies; the
indicator is the fraction of the (magnitude) spectrum held by the lowest
q_lowfreq share of the frequency bins.
"""

from __future__ import annotations

import logging
import math
from typing import Any

import numpy as np

from . import backend, config
from .utils import as_float_array

logger = logging.getLogger(__name__)


def n_lowfreq_bins(n_frequencies: int, q_lowfreq: float) -> int:
    """Number of bins summed: floor(q_lowfreq * n_frequencies)."""
    if not 0.0 < q_lowfreq <= 1.0:
        raise ValueError(f"q_lowfreq must lie in (0, 1], got {q_lowfreq}.")
    return int(math.floor(q_lowfreq * n_frequencies))


def normalized_spectrum(X: Any) -> Any:
    """
    Magnitude of the real FFT along the last axis, normalized to sum to 1
    per row.
    """
    X = as_float_array(X)
    xp = backend.get_namespace(X)
    P = xp.abs(backend.rfft(X, axis=-1))
    with np.errstate(divide="ignore", invalid="ignore"):
        return P / xp.sum(P, axis=-1, keepdims=True)


def lfps(X: Any, q_lowfreq: float | None = None) -> Any:
    """
    Low-frequency power spectrum of every row of X.

    Parameters
    ----------
    X : array of shape (n_rows, n_samples)
        Host or device array.
    q_lowfreq : float, optional
        Share of frequency bins counted as low frequency, in (0, 1]
        (default: config.Q_LOWFREQ).

    Returns
    -------
    array of shape (n_rows, 1)
        Zero everywhere if q_lowfreq selects no bin.
    """
    if q_lowfreq is None:
        q_lowfreq = config.Q_LOWFREQ
    xp = backend.get_namespace(X)
    Pnorm = normalized_spectrum(X)
    k = n_lowfreq_bins(Pnorm.shape[-1], q_lowfreq)
    logger.debug("LFPS: summing %d of %d frequency bins", k, Pnorm.shape[-1])
    return xp.sum(Pnorm[..., :k], axis=-1, keepdims=True)
