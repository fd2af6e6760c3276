"""
Calibration Map Errors

Closed set of failure kinds raised by the calibration map. Each exception
carries an ErrorKind tag so callers can branch on either the class or the kind.
"""

from enum import Enum
from typing import Optional


class ErrorKind(Enum):
    """Calibration map failure kinds."""
    INVALID_ARGUMENT = "invalid_argument"
    EMPTY_MAP = "empty_map"
    OUT_OF_RANGE = "out_of_range"


class CalibrationMapError(Exception):
    """Base class for all calibration map errors."""

    kind: ErrorKind

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidArgumentError(CalibrationMapError, ValueError):
    """Raised when bulk insertion receives sequences of different lengths."""

    kind = ErrorKind.INVALID_ARGUMENT


class EmptyCalibrationMapError(CalibrationMapError, RuntimeError):
    """Raised when a query is issued against a map with no entries."""

    kind = ErrorKind.EMPTY_MAP

    def __init__(self, message: str = "Calibration map is empty."):
        super().__init__(message)


class NominalOutOfRangeError(CalibrationMapError, ValueError):
    """Raised when a nominal value lies outside the calibrated range."""

    kind = ErrorKind.OUT_OF_RANGE

    def __init__(self,
                 nominal: float,
                 minimum: Optional[float] = None,
                 maximum: Optional[float] = None):
        self.nominal = nominal
        self.minimum = minimum
        self.maximum = maximum
        if minimum is None or maximum is None:
            message = f"Nominal value {nominal} outside of calibrated range."
        else:
            message = (f"Nominal value {nominal} outside of calibrated range "
                       f"[{minimum}, {maximum}].")
        super().__init__(message)
