"""
Tests for the spatial indicators.
"""

import numpy as np
import pytest

from ews_indicators import moments, spatial
from ews_indicators.errors import DimensionError, IndicatorNotImplementedError


@pytest.fixture
def field():
    """3D field: 20 x 30 grid, 4 replicates."""
    np.random.seed(42)
    return np.random.gamma(2.0, size=(20, 30, 4))


@pytest.fixture
def snapshots():
    """200 observations of 6 correlated locations."""
    np.random.seed(0)
    common = np.random.randn(200, 1)
    return common + 0.5 * np.random.randn(200, 6)


class TestSpatialMoments:

    def test_variance_equals_flattened(self, field):
        expected = moments.variance(field.reshape(-1))[0]
        assert spatial.spatial_variance(field) == pytest.approx(expected, rel=1e-12)
        assert spatial.spatial_variance(field) == pytest.approx(np.var(field, ddof=1))

    def test_skewness_equals_flattened(self, field):
        expected = moments.skewness(field.reshape(-1))[0]
        assert spatial.spatial_skewness(field) == pytest.approx(expected, rel=1e-12)

    def test_kurtosis_equals_flattened(self, field):
        expected = moments.kurtosis(field.reshape(-1))[0]
        assert spatial.spatial_kurtosis(field) == pytest.approx(expected, rel=1e-12)

    def test_returns_python_float(self, field):
        assert isinstance(spatial.spatial_variance(field), float)

    @pytest.mark.parametrize("func", [
        spatial.spatial_variance,
        spatial.spatial_skewness,
        spatial.spatial_kurtosis,
    ])
    def test_rejects_wrong_rank(self, func):
        with pytest.raises(DimensionError) as excinfo:
            func(np.ones((4, 4)))
        assert excinfo.value.expected == 3
        assert excinfo.value.actual == 2


class TestEigenCovariance:

    def test_singular_values_descending(self, snapshots):
        sigma = spatial.eigencovariance(snapshots)
        assert sigma.shape == (6,)
        assert np.all(np.diff(sigma) <= 0)

    def test_matches_covariance_eigenvalues(self, snapshots):
        eig = np.sort(np.linalg.eigvalsh(np.cov(snapshots, rowvar=False)))[::-1]
        np.testing.assert_allclose(spatial.eigencovariance(snapshots), eig, rtol=1e-10)

    def test_relative_is_scale_invariant(self, snapshots):
        rel = spatial.eigencovariance_rel(snapshots)
        assert spatial.eigencovariance_rel(7.5 * snapshots) == pytest.approx(rel, rel=1e-10)
        assert 0 < rel <= 1

    def test_absolute_follows_covariance_scale(self, snapshots):
        c = 3.0
        ab = spatial.eigencovariance_abs(snapshots)
        assert spatial.eigencovariance_abs(c * snapshots) == pytest.approx(c ** 2 * ab, rel=1e-10)

    def test_coherent_field_is_dominated_by_one_mode(self, snapshots):
        np.random.seed(1)
        independent = np.random.randn(200, 6)
        assert spatial.eigencovariance_rel(snapshots) > spatial.eigencovariance_rel(independent)

    def test_ledoit_wolf_shrinkage(self, snapshots):
        plain = spatial.eigencovariance(snapshots)
        shrunk = spatial.eigencovariance(snapshots, shrinkage="ledoit_wolf")
        assert shrunk.shape == plain.shape
        # shrinkage pulls the spectrum towards its mean
        assert shrunk[0] / shrunk[-1] < plain[0] / plain[-1]

    def test_single_location(self):
        np.random.seed(0)
        X = np.random.randn(50, 1)
        sigma = spatial.eigencovariance(X)
        assert sigma.shape == (1,)
        assert sigma[0] == pytest.approx(np.var(X, ddof=1))
        assert spatial.eigencovariance_rel(X) == pytest.approx(1.0)
        assert spatial.eigencovariance_abs(X) == pytest.approx(sigma[0])

    def test_unknown_shrinkage(self, snapshots):
        with pytest.raises(ValueError):
            spatial.eigencovariance(snapshots, shrinkage="oas")

    def test_rejects_wrong_rank(self, field):
        with pytest.raises(DimensionError, match="Covariance"):
            spatial.eigencovariance_abs(field)


@pytest.mark.parametrize("func", [
    spatial.network_connectivity,
    spatial.recovery_length,
    spatial.density_ratio,
])
def test_placeholders_raise(func):
    with pytest.raises(IndicatorNotImplementedError, match=func.__name__):
        func(np.ones((3, 3)))
