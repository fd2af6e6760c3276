"""
Calibration Map for Nominal/Calibrated Measurement Correction

Stores (nominal, calibrated) measurement pairs as an ordered table of
nominal -> error values and answers error and corrected position queries,
interpolating linearly between the nearest calibrated points.
"""

import logging
import math
from bisect import bisect_right, insort
from typing import Dict, Iterable, List, Mapping, Sequence, Tuple

import numpy as np

from .errors import (
    EmptyCalibrationMapError,
    InvalidArgumentError,
    NominalOutOfRangeError,
)


class CalibrationMap:
    """
    Ordered nominal -> error lookup table with piecewise-linear interpolation.

    error = nominal - calibrated is derived when a point is added; only the
    error is stored. Queries between two stored nominals interpolate the error
    linearly, queries outside the stored range are rejected.

    Not thread safe. Callers sharing a map across threads must lock around it.
    """

    def __init__(self, summary_precision: int = 6):
        """
        Initialize an empty calibration map.

        Args:
            summary_precision: Significant digits used by get_map_summary()

        Raises:
            InvalidArgumentError: If summary_precision is less than 1
        """
        if isinstance(summary_precision, bool) or not isinstance(summary_precision, int) or summary_precision < 1:
            raise InvalidArgumentError(
                f"Summary precision must be a positive integer, got {summary_precision!r}."
            )

        self.summary_precision = summary_precision
        self.logger = logging.getLogger(__name__)

        # Error values keyed by nominal, plus the nominals in ascending order
        self._errors: Dict[float, float] = {}
        self._nominals: List[float] = []

    def __len__(self) -> int:
        return len(self._nominals)

    def __contains__(self, nominal: float) -> bool:
        return nominal in self._errors

    def __repr__(self) -> str:
        if not self._nominals:
            return "CalibrationMap(empty)"
        return (f"CalibrationMap({len(self._nominals)} points, "
                f"range=[{self._nominals[0]}, {self._nominals[-1]}])")

    def add_point(self, nominal: float, calibrated: float):
        """
        Add a calibration point, replacing any error already stored for nominal.

        Args:
            nominal: The nominal value
            calibrated: The corresponding calibrated value

        Raises:
            InvalidArgumentError: If nominal is NaN
        """
        nominal = self._key(nominal)
        self._store(nominal, nominal - float(calibrated))
        self.logger.debug(f"Calibration point added: {nominal} -> error {self._errors[nominal]}")

    def add_points(self, nominals: Sequence[float], calibrated: Sequence[float]):
        """
        Add a range of calibration points.

        Args:
            nominals: Nominal values
            calibrated: Calibrated values, element i corresponding to nominals[i]

        Raises:
            InvalidArgumentError: If the sequences differ in length or a nominal
                is NaN. Nothing is added in either case.
        """
        if len(nominals) != len(calibrated):
            raise InvalidArgumentError(
                f"Nominals and calibrated sequences must have the same size "
                f"({len(nominals)} != {len(calibrated)})."
            )
        keys = [self._key(nominal) for nominal in nominals]

        for nominal, value in zip(keys, calibrated):
            self.add_point(nominal, value)

        self.logger.info(f"Added {len(keys)} calibration points ({len(self)} total)")

    def set_map(self, mapping: Mapping[float, float]):
        """
        Replace the whole table with a nominal -> error mapping.

        Args:
            mapping: Error values keyed by nominal (errors, not calibrated values)

        Raises:
            InvalidArgumentError: If a nominal is NaN. The table is left unchanged.
        """
        errors = {self._key(k): float(v) for k, v in mapping.items()}
        self._errors = errors
        self._nominals = sorted(errors)
        self.logger.info(f"Calibration map replaced with {len(self)} points")

    def append_map(self, mapping: Mapping[float, float]):
        """
        Merge a nominal -> error mapping into the table.

        Nominals already present keep their stored error; only new nominals
        are inserted.

        Args:
            mapping: Error values keyed by nominal

        Raises:
            InvalidArgumentError: If a nominal is NaN. Nothing is merged.
        """
        entries = [(self._key(k), float(v)) for k, v in mapping.items()]

        added = 0
        for nominal, error in entries:
            if nominal in self._errors:
                continue
            self._store(nominal, error)
            added += 1

        skipped = len(entries) - added
        self.logger.info(f"Appended {added} calibration points, kept {skipped} existing")

    def error_value(self, nominal: float) -> float:
        """
        Get the error value for a nominal value.

        Args:
            nominal: The nominal value

        Returns:
            float: Stored error for a calibrated nominal, otherwise the error
                interpolated between the neighbouring calibrated nominals

        Raises:
            EmptyCalibrationMapError: If the map has no points
            NominalOutOfRangeError: If nominal is outside the calibrated range
        """
        if not self._nominals:
            self.logger.debug(f"Error lookup for {nominal} on empty calibration map")
            raise EmptyCalibrationMapError()

        if nominal in self._errors:
            return self._errors[nominal]

        upper = bisect_right(self._nominals, nominal)
        if upper == 0 or upper == len(self._nominals):
            self.logger.debug(f"Nominal {nominal} outside calibrated range")
            raise NominalOutOfRangeError(nominal, self._nominals[0], self._nominals[-1])

        x1 = self._nominals[upper - 1]
        x2 = self._nominals[upper]
        return self._interpolate(nominal, x1, self._errors[x1], x2, self._errors[x2])

    def corrected_position(self, nominal: float) -> float:
        """
        Get the corrected position for a nominal value.

        Raises the same errors as error_value().
        """
        return nominal - self.error_value(nominal)

    def error_values(self, nominals: Iterable[float]) -> np.ndarray:
        """
        Vectorized error_value().

        Every value is range checked before any result is computed.

        Args:
            nominals: Nominal values

        Returns:
            np.ndarray: Error values, same shape as the input
        """
        values = np.asarray(nominals, dtype=float)
        if not self._nominals:
            raise EmptyCalibrationMapError()

        minimum, maximum = self._nominals[0], self._nominals[-1]
        outside = ~((values >= minimum) & (values <= maximum))
        if outside.any():
            raise NominalOutOfRangeError(float(values[outside].flat[0]), minimum, maximum)

        keys = np.array(self._nominals)
        errors = np.array([self._errors[k] for k in self._nominals])
        return np.interp(values, keys, errors)

    def corrected_positions(self, nominals: Iterable[float]) -> np.ndarray:
        """Vectorized corrected_position()."""
        values = np.asarray(nominals, dtype=float)
        return values - self.error_values(values)

    @property
    def nominals(self) -> List[float]:
        """Calibrated nominal values in ascending order."""
        return self._nominals.copy()

    @property
    def nominal_range(self) -> Tuple[float, float]:
        """(minimum, maximum) calibrated nominal."""
        if not self._nominals:
            raise EmptyCalibrationMapError()
        return self._nominals[0], self._nominals[-1]

    def get_map(self) -> Dict[float, float]:
        """Get a copy of the nominal -> error table in ascending order."""
        return {nominal: self._errors[nominal] for nominal in self._nominals}

    def get_map_summary(self) -> str:
        """
        Get a summary of the calibration map.

        Returns:
            str: Tab separated table of nominal, calibrated, error and corrected
                values, one row per calibrated nominal. An empty map gives the
                header only.
        """
        fmt = f".{self.summary_precision}g"
        lines = ["Nominal\tCalibrated\tError\tCorrected"]
        for nominal in self._nominals:
            error = self.error_value(nominal)
            row = (nominal, nominal - error, error, self.corrected_position(nominal))
            lines.append("\t".join(format(value, fmt) for value in row))
        return "\n".join(lines) + "\n"

    @staticmethod
    def _key(nominal: float) -> float:
        """Normalize a nominal to a float table key. NaN cannot be ordered."""
        key = float(nominal)
        if math.isnan(key):
            raise InvalidArgumentError("Nominal value must not be NaN.")
        return key

    def _store(self, nominal: float, error: float):
        if nominal not in self._errors:
            insort(self._nominals, nominal)
        self._errors[nominal] = error

    @staticmethod
    def _interpolate(x: float, x1: float, y1: float, x2: float, y2: float) -> float:
        """Linear interpolation through (x1, y1) and (x2, y2). Requires x1 != x2."""
        if x1 == x2:
            raise ValueError("Interpolation anchors must have distinct x values")
        return y1 + (x - x1) * (y2 - y1) / (x2 - x1)
