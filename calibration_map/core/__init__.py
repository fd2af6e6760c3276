"""
Core package for the calibration lookup table and its error types.
"""

from .calibration_map import CalibrationMap
from .errors import (
    CalibrationMapError,
    EmptyCalibrationMapError,
    ErrorKind,
    InvalidArgumentError,
    NominalOutOfRangeError,
)

__all__ = [
    'CalibrationMap',
    'CalibrationMapError',
    'EmptyCalibrationMapError',
    'ErrorKind',
    'InvalidArgumentError',
    'NominalOutOfRangeError'
]
