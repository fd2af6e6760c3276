"""
Calibration Map - Demonstration

Demonstrates the calibration map with configuration and logging:
- Configuration loading with environment overrides
- Logging setup
- Calibration point insertion and merging
- Exact, interpolated and out-of-range queries
"""

import logging
import sys
from pathlib import Path

# Add the current directory to Python path for imports
sys.path.insert(0, str(Path(__file__).parent))

from calibration_map import CalibrationMap, CalibrationMapError, NominalOutOfRangeError, Settings
from calibration_map.utils.logging_config import setup_logging_from_config


class CalibrationMapDemo:
    """Wires settings, logging and a calibration map together."""

    def __init__(self, config_file: str = "config/default_config.yaml"):
        self.config_file = config_file
        self.logger = None
        self.settings = None
        self.calibration_map = None

    def initialize(self) -> bool:
        """Load configuration, set up logging and create the map."""
        print("📋 Loading configuration...")
        self.settings = Settings(self.config_file)
        if not self.settings.load_config():
            print("❌ Failed to load configuration")
            return False

        if not self.settings.load_environment_overrides():
            print("❌ Invalid environment configuration overrides")
            return False

        print("📝 Setting up logging...")
        if not setup_logging_from_config(self.settings.logging):
            print("❌ Failed to setup logging")
            return False

        self.logger = logging.getLogger(__name__)
        self.calibration_map = CalibrationMap(
            summary_precision=self.settings.calibration.summary_precision
        )
        self.logger.info("✅ Calibration map initialized")
        return True

    def run_demo(self):
        """Populate the map and run a few queries."""
        cmap = self.calibration_map

        # Measured axis positions against commanded positions (mm)
        cmap.add_points([0.0, 10.0, 20.0], [0.0, 9.0, 21.0])
        cmap.append_map({30.0: -0.5, 20.0: 99.0})  # 20.0 keeps its measured error

        for nominal in (0.0, 5.0, 15.0, 25.0, 30.0):
            self.logger.info(f"🎯 Nominal {nominal}: error={cmap.error_value(nominal):.3f}, "
                             f"corrected={cmap.corrected_position(nominal):.3f}")

        try:
            cmap.corrected_position(45.0)
        except NominalOutOfRangeError as e:
            # Clamp to the calibrated range
            clamped = min(max(e.nominal, e.minimum), e.maximum)
            self.logger.warning(f"⚠️ {e} - clamped to {clamped}: "
                                f"corrected={cmap.corrected_position(clamped):.3f}")

        self.logger.info("📊 Calibration map summary:\n" + cmap.get_map_summary())

    def run(self) -> bool:
        if not self.initialize():
            return False
        try:
            self.run_demo()
        except CalibrationMapError as e:
            self.logger.error(f"Demo failed: {e}")
            return False
        return True


def main():
    """Main entry point."""
    print("=" * 60)
    print("   Calibration Map - Demonstration")
    print("=" * 60)

    demo = CalibrationMapDemo()
    return 0 if demo.run() else 1


if __name__ == "__main__":
    sys.exit(main())
