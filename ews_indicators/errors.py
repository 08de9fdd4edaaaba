"""
Exceptions raised by the indicator kernels.

Insufficient sample counts are not errors: they propagate as NaN/Inf.
"""

from __future__ import annotations


class EWSIndicatorError(Exception):
    """Base class for all errors raised by ews_indicators."""


class DimensionError(EWSIndicatorError, ValueError):
    """Input array rank does not match what an indicator requires."""

    def __init__(self, indicator: str, expected: int, actual: int):
        self.indicator = indicator
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"{indicator} requires an array with {expected} dimensions, "
            f"got {actual}."
        )


class BackendMismatchError(EWSIndicatorError, TypeError):
    """Host and device arrays were mixed within one call."""


class BackendUnavailableError(EWSIndicatorError, ImportError):
    """The accelerator backend (CuPy) is not installed."""


class IndicatorNotImplementedError(EWSIndicatorError, NotImplementedError):
    """Indicator is declared but deliberately not implemented yet."""

    def __init__(self, indicator: str):
        self.indicator = indicator
        super().__init__(f"Indicator '{indicator}' is not implemented.")
