"""
Tests for the low-frequency power spectrum indicator.
"""

import numpy as np
import pytest

from ews_indicators import spectral


@pytest.fixture
def white_noise():
    np.random.seed(42)
    return np.random.randn(5, 4096)


@pytest.fixture
def red_noise():
    """AR1 rows with theta = 0.95 (strong autocorrelation)."""
    np.random.seed(42)
    eps = np.random.randn(5, 4096)
    X = np.zeros_like(eps)
    for t in range(1, eps.shape[1]):
        X[:, t] = 0.95 * X[:, t - 1] + eps[:, t]
    return X


class TestLFPS:

    def test_shape_and_range(self, white_noise):
        P = spectral.lfps(white_noise)
        assert P.shape == (5, 1)
        assert np.all((P >= 0) & (P <= 1))

    def test_white_noise_is_flat(self, white_noise):
        P = spectral.lfps(white_noise, q_lowfreq=0.2)
        np.testing.assert_allclose(P[:, 0], 0.2, atol=0.03)

    def test_autocorrelation_raises_lfps(self, white_noise, red_noise):
        assert np.all(spectral.lfps(red_noise) > spectral.lfps(white_noise))

    def test_full_spectrum_sums_to_one(self, white_noise):
        np.testing.assert_allclose(spectral.lfps(white_noise, q_lowfreq=1.0), 1.0)

    def test_normalized_spectrum(self, white_noise):
        Pn = spectral.normalized_spectrum(white_noise)
        assert Pn.shape == (5, 4096 // 2 + 1)
        np.testing.assert_allclose(Pn.sum(axis=1), 1.0)

    def test_bin_count_uses_floor(self):
        assert spectral.n_lowfreq_bins(51, 0.1) == 5
        assert spectral.n_lowfreq_bins(59, 0.1) == 5

    def test_zero_selected_bins_gives_zero(self):
        X = np.random.randn(3, 16)
        np.testing.assert_array_equal(spectral.lfps(X, q_lowfreq=0.01), np.zeros((3, 1)))

    @pytest.mark.parametrize("q", [0.0, -0.1, 1.5])
    def test_invalid_q(self, white_noise, q):
        with pytest.raises(ValueError):
            spectral.lfps(white_noise, q_lowfreq=q)

    def test_rows_are_independent(self, red_noise):
        P = spectral.lfps(red_noise)
        np.testing.assert_allclose(P[2], spectral.lfps(red_noise[2]), rtol=1e-12)
