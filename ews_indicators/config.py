"""
Configuration and default parameters for the early-warning indicator kernels.
"""

import logging
import os


# Axis holding time for temporal indicators
TIME_AXIS = -1

# Hurst exponent: lags 1..HURST_MAX_LAG
HURST_MAX_LAG = 20

# Low-frequency power spectrum: fraction of frequency bins summed
Q_LOWFREQ = 0.1

# Ridge penalty of the least-squares collaborator (0.0 = ordinary least squares)
RIDGE_LAMBDA = 0.0

# Spatial covariance shrinkage target: None or "ledoit_wolf"
COVARIANCE_SHRINKAGE = None

# Host masks are stored sparse unless asked otherwise
DEFAULT_MASK_SPARSE = True

# Logging
LOG_LEVEL = (
    os.environ.get("EWS_INDICATORS_LOG_LEVEL")
    or os.environ.get("LOG_LEVEL")
    or "WARNING"
)
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(level: str | int | None = None) -> logging.Logger:
    """
    Attach a stream handler to the package logger exactly once.

    The library itself only creates module loggers; scripts call this.
    """
    logger = logging.getLogger("ews_indicators")
    if level is None:
        level = LOG_LEVEL
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.WARNING)
    logger.setLevel(level)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    return logger
