"""
spatial.py

Spatial early-warning indicators on snapshots of a field.

- spatial moments: flatten a 3D field (e.g. space x space x replicate)
  and reuse the temporal moment estimators
- eigen-covariance: singular values of the covariance between locations
  (columns of a 2D array), after Chen et al. 2019,
  https://www.nature.com/articles/s41598-019-38961-5
"""

from __future__ import annotations

import logging
from typing import Any

import numpy as np

from . import backend, config
from .errors import IndicatorNotImplementedError
from .moments import kurtosis, skewness, variance
from .utils import as_float_array, check_ndim

logger = logging.getLogger(__name__)

# Optional: LedoitWolf shrinkage of the spatial covariance
try:
    from sklearn.covariance import LedoitWolf as _LedoitWolf  # type: ignore

    _HAVE_SKLEARN = True
except Exception:  # pragma: no cover
    _HAVE_SKLEARN = False


# ----------------------------------------------------------------------
# Spatial moments
# ----------------------------------------------------------------------


def _flatten_row(X: Any) -> Any:
    return X.reshape(1, -1)


def spatial_variance(X: Any) -> float:
    """
    Variance over all entries of a 3D array.
    """
    check_ndim(X, 3, "Variance")
    return float(variance(_flatten_row(as_float_array(X)))[0, 0])


def spatial_skewness(X: Any) -> float:
    """
    Skewness over all entries of a 3D array.
    """
    check_ndim(X, 3, "Skewness")
    return float(skewness(_flatten_row(as_float_array(X)))[0, 0])


def spatial_kurtosis(X: Any) -> float:
    """
    Excess kurtosis over all entries of a 3D array.
    """
    check_ndim(X, 3, "Kurtosis")
    return float(kurtosis(_flatten_row(as_float_array(X)))[0, 0])


# ----------------------------------------------------------------------
# Covariance eigenvalues
# ----------------------------------------------------------------------


def spatial_covariance(X: Any, shrinkage: str | None = None) -> Any:
    """
    Covariance between the columns (locations) of a 2D array.

    Parameters
    ----------
    X : array of shape (n_observations, n_locations)
    shrinkage : {None, 'ledoit_wolf'}, optional
        Default: config.COVARIANCE_SHRINKAGE. 'ledoit_wolf' uses sklearn's
        LedoitWolf estimator, computed on the host.

    Returns
    -------
    C : array of shape (n_locations, n_locations)
    """
    if shrinkage is None:
        shrinkage = config.COVARIANCE_SHRINKAGE
    check_ndim(X, 2, "Covariance")
    X = as_float_array(X)
    xp = backend.get_namespace(X)

    if shrinkage is None:
        return xp.atleast_2d(xp.cov(X, rowvar=False))

    if shrinkage != "ledoit_wolf":
        raise ValueError(
            f"Unknown shrinkage target '{shrinkage}'; expected None or 'ledoit_wolf'."
        )
    if not _HAVE_SKLEARN:
        raise ImportError(
            "scikit-learn is required for Ledoit-Wolf shrinkage. "
            "Install with: pip install scikit-learn"
        )
    lw = _LedoitWolf()
    lw.fit(backend.to_host(X))
    logger.debug("Ledoit-Wolf shrinkage coefficient: %.4f", lw.shrinkage_)
    return xp.asarray(lw.covariance_, dtype=X.dtype)


def eigencovariance(X: Any, shrinkage: str | None = None) -> Any:
    """
    Singular values of the spatial covariance matrix, in descending order.

    Parameters
    ----------
    X : array of shape (n_observations, n_locations)
    shrinkage : {None, 'ledoit_wolf'}, optional

    Returns
    -------
    sigma : array of shape (n_locations,)
    """
    C = spatial_covariance(X, shrinkage=shrinkage)
    return backend.svdvals(C)


def eigencovariance_abs(X: Any, shrinkage: str | None = None) -> float:
    """
    Largest singular value of the spatial covariance matrix.
    """
    sigma = eigencovariance(X, shrinkage=shrinkage)
    return float(sigma[0])


def eigencovariance_rel(X: Any, shrinkage: str | None = None) -> float:
    """
    Largest singular value over the Euclidean norm of all singular values.

    Invariant under a uniform rescaling of X.
    """
    sigma = eigencovariance(X, shrinkage=shrinkage)
    xp = backend.get_namespace(sigma)
    with np.errstate(divide="ignore", invalid="ignore"):
        return float(sigma[0] / xp.linalg.norm(sigma))


# ----------------------------------------------------------------------
# Declared, not implemented
# ----------------------------------------------------------------------


def network_connectivity(*args, **kwargs):
    """Connectivity of the interaction network between locations."""
    raise IndicatorNotImplementedError("network_connectivity")


def recovery_length(*args, **kwargs):
    """Spatial recovery length after a local perturbation."""
    raise IndicatorNotImplementedError("recovery_length")


def density_ratio(*args, **kwargs):
    """Spatial density ratio."""
    raise IndicatorNotImplementedError("density_ratio")
