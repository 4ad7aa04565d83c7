"""Errors raised by tierroute.

Routing itself never fails for string input. These cover bad
configuration only, and are raised at the offending call.
"""


class RouterConfigError(ValueError):
    """Raised for invalid router configuration or arguments."""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field


class CalibrationError(RouterConfigError):
    """Raised when calibration is asked to work on no data."""
