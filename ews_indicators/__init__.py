"""
ews_indicators: early-warning indicators of critical transitions.

This package contains the indicator kernels:
- config: default parameters and logging setup
- errors: exception hierarchy
- backend: array-namespace resolution for host (NumPy) and device (CuPy) arrays
- utils: dimension checks and float coercion
- moments: mean, variance, bias-corrected skewness and kurtosis
- windows: windowing parameters and mask matrices
- windowed: mask-based sliding-window mean, mean square and AR1
- regression: AR1 / AR(p) coefficients, Hurst exponent, rescaled range
- spectral: low-frequency power spectrum
- spatial: spatial moments and covariance eigenvalues

Every kernel is a pure function of its arguments and runs unchanged on
host or device arrays.
"""
