"""
Calibration Map - Nominal/Calibrated Measurement Correction

A calibration lookup table for measurement and motion control applications.
Stores the error between nominal and calibrated measurements and corrects
nominal values by linear interpolation over the calibrated range.
"""

__version__ = "0.1.0"
__author__ = "Calibration Map Project"

# Core imports
from .core.calibration_map import CalibrationMap
from .core.errors import (
    CalibrationMapError,
    EmptyCalibrationMapError,
    ErrorKind,
    InvalidArgumentError,
    NominalOutOfRangeError,
)

# Configuration and utilities
from .config.settings import Settings
from .utils.logging_config import setup_logging

__all__ = [
    'CalibrationMap',
    'CalibrationMapError',
    'EmptyCalibrationMapError',
    'ErrorKind',
    'InvalidArgumentError',
    'NominalOutOfRangeError',
    'Settings',
    'setup_logging'
]
