"""
Configuration Management

Handles calibration map settings, configuration loading, validation,
and environment variable overrides.
"""

import os
import yaml
import json
import logging
from typing import Dict, Any
from dataclasses import dataclass, asdict, fields


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class CalibrationMapConfig:
    """Calibration map configuration."""
    summary_precision: int = 6  # significant digits in map summaries


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str = "INFO"
    log_file: str = "calibration_map.log"
    max_file_size_mb: float = 10.0
    backup_count: int = 5
    console_output: bool = True
    detailed_format: bool = False


class Settings:
    """
    Configuration management for the calibration map.

    Loads settings from YAML or JSON files, applies environment overrides
    and validates the result.
    """

    def __init__(self, config_file: str = "config/default_config.yaml"):
        """
        Initialize settings manager.

        Args:
            config_file: Path to configuration file
        """
        self.config_file = config_file
        self.logger = logging.getLogger(__name__)

        # Configuration sections
        self.calibration = CalibrationMapConfig()
        self.logging = LoggingConfig()

        # Custom settings
        self._custom_settings: Dict[str, Any] = {}

    def load_config(self, config_file: str = None) -> bool:
        """
        Load configuration from file.

        A missing file is created with the default settings.

        Args:
            config_file: Configuration file path (optional)

        Returns:
            bool: True if loaded successfully
        """
        if config_file:
            self.config_file = config_file

        try:
            if not os.path.exists(self.config_file):
                self.logger.warning(f"Config file {self.config_file} not found, using defaults")
                return self._create_default_config()

            if self.config_file.endswith('.yaml') or self.config_file.endswith('.yml'):
                with open(self.config_file, 'r') as f:
                    config_data = yaml.safe_load(f) or {}
            elif self.config_file.endswith('.json'):
                with open(self.config_file, 'r') as f:
                    config_data = json.load(f)
            else:
                self.logger.error(f"Unsupported config file format: {self.config_file}")
                return False

            self._load_section_config(config_data)

            if not self._validate_config():
                return False

            self.logger.info(f"Configuration loaded from {self.config_file}")
            return True

        except (OSError, ValueError, TypeError, yaml.YAMLError) as e:
            self.logger.error(f"Failed to load configuration: {e}")
            return False

    def save_config(self, config_file: str = None) -> bool:
        """
        Save current configuration to file.

        Args:
            config_file: Configuration file path (optional)

        Returns:
            bool: True if saved successfully
        """
        if config_file:
            self.config_file = config_file

        try:
            config_dir = os.path.dirname(self.config_file)
            if config_dir:
                os.makedirs(config_dir, exist_ok=True)

            config_data = self.to_dict()

            if self.config_file.endswith('.yaml') or self.config_file.endswith('.yml'):
                with open(self.config_file, 'w') as f:
                    yaml.dump(config_data, f, default_flow_style=False, indent=2)
            elif self.config_file.endswith('.json'):
                with open(self.config_file, 'w') as f:
                    json.dump(config_data, f, indent=2)
            else:
                self.logger.error(f"Unsupported config file format: {self.config_file}")
                return False

            self.logger.info(f"Configuration saved to {self.config_file}")
            return True

        except OSError as e:
            self.logger.error(f"Failed to save configuration: {e}")
            return False

    def get_custom_setting(self, key: str, default: Any = None) -> Any:
        """Get custom setting value."""
        return self._custom_settings.get(key, default)

    def set_custom_setting(self, key: str, value: Any):
        """Set custom setting value."""
        self._custom_settings[key] = value

    def update_from_dict(self, config_dict: Dict[str, Any]):
        """Update configuration from dictionary."""
        self._load_section_config(config_dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            'calibration': asdict(self.calibration),
            'logging': asdict(self.logging),
            'custom': self._custom_settings
        }

    def load_environment_overrides(self) -> bool:
        """
        Load configuration overrides from environment variables.

        Returns:
            bool: True if the overridden configuration is valid
        """
        if 'CALMAP_LOG_LEVEL' in os.environ:
            self.logging.level = os.environ['CALMAP_LOG_LEVEL'].upper()
        if 'CALMAP_LOG_FILE' in os.environ:
            self.logging.log_file = os.environ['CALMAP_LOG_FILE']

        if 'CALMAP_SUMMARY_PRECISION' in os.environ:
            value = os.environ['CALMAP_SUMMARY_PRECISION']
            try:
                self.calibration.summary_precision = int(value)
            except ValueError:
                self.logger.error(f"Invalid CALMAP_SUMMARY_PRECISION: {value!r}")
                return False

        if not self._validate_config():
            return False

        self.logger.info("Environment variable overrides applied")
        return True

    def _load_section_config(self, config_data: Dict[str, Any]):
        """Load configuration data into sections."""
        if not isinstance(config_data, dict):
            raise ValueError("Configuration must be a mapping of sections")

        for section_name in ('calibration', 'logging'):
            if section_name not in config_data:
                continue
            section_data = config_data[section_name]
            if not isinstance(section_data, dict):
                raise ValueError(f"Configuration section '{section_name}' must be a mapping")

            section = getattr(self, section_name)
            known = {f.name for f in fields(section)}
            for key, value in section_data.items():
                if key in known:
                    setattr(section, key, value)
                else:
                    self.logger.warning(f"Ignoring unknown {section_name} setting: {key}")

        # Custom settings
        if 'custom' in config_data:
            if not isinstance(config_data['custom'], dict):
                raise ValueError("Configuration section 'custom' must be a mapping")
            self._custom_settings.update(config_data['custom'])

    def _validate_config(self) -> bool:
        """Validate configuration values."""
        try:
            precision = self.calibration.summary_precision
            if isinstance(precision, bool) or not isinstance(precision, int) or precision <= 0:
                raise ValueError("Summary precision must be a positive integer")

            if str(self.logging.level).upper() not in LOG_LEVELS:
                raise ValueError(f"Unknown log level: {self.logging.level}")
            if self.logging.max_file_size_mb <= 0:
                raise ValueError("Max log file size must be positive")
            if self.logging.backup_count < 0:
                raise ValueError("Log backup count cannot be negative")

            return True

        except ValueError as e:
            self.logger.error(f"Configuration validation failed: {e}")
            return False

    def _create_default_config(self) -> bool:
        """Create default configuration file."""
        self.logger.info("Creating default configuration file")
        return self.save_config()
